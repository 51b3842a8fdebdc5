"""Tests for affilai/db/seed.py: products JSON validation and import."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from affilai.db.repositories.product_repo import ProductRepository
from affilai.db.seed import load_products_json, read_products_json

_EXAMPLE_FILE = Path(__file__).resolve().parents[2] / "config" / "products.example.json"


def _write(tmp_path: Path, payload) -> Path:
    path = tmp_path / "products.json"
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


def test_reads_valid_entries(tmp_path):
    path = _write(tmp_path, [
        {"name": "Serum", "category": "Beauty & Skincare", "trending_score": 80},
        {"name": "Ring", "category": "Wearable Health Technology", "product_id": 99},
    ])
    products = read_products_json(path)
    assert [p.name for p in products] == ["Serum", "Ring"]
    assert products[1].product_id is None


def test_non_array_rejected(tmp_path):
    path = _write(tmp_path, {"name": "Serum"})
    with pytest.raises(ValueError, match="JSON array"):
        read_products_json(path)


def test_non_object_entry_rejected(tmp_path):
    path = _write(tmp_path, [{"name": "A", "category": "B"}, "oops"])
    with pytest.raises(ValueError, match="entry 1"):
        read_products_json(path)


def test_invalid_entry_names_index(tmp_path):
    path = _write(tmp_path, [
        {"name": "A", "category": "B"},
        {"name": "C", "category": "D", "trending_score": 150},
    ])
    with pytest.raises(ValueError, match="entry 1 is invalid"):
        read_products_json(path)


def test_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        read_products_json(tmp_path / "nope.json")


def test_load_inserts_in_file_order(in_memory_db, tmp_path):
    path = _write(tmp_path, [
        {"name": "First", "category": "Home & Kitchen"},
        {"name": "Second", "category": "Fashion & Apparel"},
    ])
    ids = load_products_json(in_memory_db, path)
    assert len(ids) == 2
    names = [p.name for p in ProductRepository(in_memory_db).list_all()]
    assert names == ["First", "Second"]


def test_example_file_is_valid():
    products = read_products_json(_EXAMPLE_FILE)
    assert len(products) == 5
