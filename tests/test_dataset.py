"""Unit tests for the product dataset reader."""

import json
from decimal import Decimal

import pytest
from pydantic import ValidationError as PydanticValidationError

from seeder.core.config import settings
from seeder.core.errors import PreconditionError, ValidationError
from seeder.schemas.dataset import ProductRecord
from seeder.services.dataset import SourceDataset

RECORD = {
    "objectID": "42",
    "name": "Sony - Headphones",
    "description": "Closed-back headphones.",
    "brand": "Sony",
    "categories": ["Audio", "Headphones"],
    "hierarchicalCategories": {"lvl0": "Audio", "lvl1": "Audio > Headphones"},
    "type": "HardGood",
    "price": 49.99,
    "image": "https://example.com/42.jpg",
}


def write_json(path, data):
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


# ── Schema ─────────────────────────────────────────

def test_record_aliases():
    record = ProductRecord.model_validate(RECORD)
    assert record.object_id == "42"
    assert record.price == Decimal("49.99")
    assert record.category_path == "Audio > Headphones"


def test_category_path_uses_numeric_levels():
    record = ProductRecord(
        name="x",
        price=1,
        hierarchicalCategories={f"lvl{i}": f"level {i}" for i in range(12)},
    )
    assert record.category_path == "level 11"


def test_record_without_hierarchy():
    record = ProductRecord(name="x", price=1)
    assert record.category_path is None


def test_record_rejects_negative_price():
    with pytest.raises(PydanticValidationError):
        ProductRecord(name="x", price=-1)


# ── Reader ─────────────────────────────────────────

def test_load_limit(tmp_path):
    path = write_json(tmp_path / "products.json", [RECORD, {**RECORD, "objectID": "43"}])
    records = SourceDataset(path).load(1)
    assert [r.object_id for r in records] == ["42"]


def test_load_all(tmp_path):
    path = write_json(tmp_path / "products.json", [RECORD] * 3)
    assert len(SourceDataset(path).load()) == 3


def test_load_jsonl(tmp_path):
    path = tmp_path / "products.jsonl"
    path.write_text("\n".join(json.dumps({**RECORD, "objectID": str(i)}) for i in range(4)) + "\n")
    records = SourceDataset(path).load(3)
    assert [r.object_id for r in records] == ["0", "1", "2"]


def test_missing_file(tmp_path):
    with pytest.raises(PreconditionError):
        SourceDataset(tmp_path / "missing.json").load()


def test_not_an_array(tmp_path):
    path = write_json(tmp_path / "products.json", {"items": []})
    with pytest.raises(ValidationError):
        SourceDataset(path).load()


def test_invalid_json(tmp_path):
    path = tmp_path / "products.json"
    path.write_text("[{", encoding="utf-8")
    with pytest.raises(ValidationError):
        SourceDataset(path).load()


def test_invalid_record_reports_position(tmp_path):
    path = write_json(tmp_path / "products.json", [RECORD, {"name": "no price"}])
    with pytest.raises(ValidationError) as exc_info:
        SourceDataset(path).load()
    assert "Record #2" in str(exc_info.value)


def test_bad_record_beyond_limit_is_not_read(tmp_path):
    path = write_json(tmp_path / "products.json", [RECORD, {"name": "no price"}])
    assert len(SourceDataset(path).load(1)) == 1


def test_bundled_dataset_is_valid():
    records = SourceDataset(settings.DATASET_PATH).load()
    assert records
    assert all(r.category_path for r in records)
