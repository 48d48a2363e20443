"""Tests for the Reprocessor class."""

import json
import tempfile
from pathlib import Path

import pandas as pd
import pytest

from src.core.reprocessor import Reprocessor, _clean_raw_record, reprocess_listings

# =============================================================================
# _clean_raw_record Tests
# =============================================================================


class TestCleanRawRecord:
    def test_clean_nan_values(self):
        """NaN values should become None."""
        record = {"field1": float("nan"), "field2": "value"}
        result = _clean_raw_record(record)

        assert result["field1"] is None
        assert result["field2"] == "value"

    def test_clean_whole_floats_to_int_strings(self):
        """Ids read as floats should not gain a '.0' suffix."""
        result = _clean_raw_record({"id": 101.0, "ratio": 0.5})

        assert result["id"] == "101"
        assert result["ratio"] == "0.5"

    def test_clean_integers(self):
        result = _clean_raw_record({"id": 7})
        assert result["id"] == "7"

    def test_clean_preserves_strings_and_bools(self):
        result = _clean_raw_record({"status": "draft", "flag": True})

        assert result["status"] == "draft"
        assert result["flag"] is True

    def test_clean_empty_record(self):
        assert _clean_raw_record({}) == {}


# =============================================================================
# Reprocessor Tests
# =============================================================================


def _write_export(path: Path, rows: list[dict]) -> Path:
    pd.DataFrame(rows).to_csv(path, index=False)
    return path


@pytest.fixture
def export_rows():
    return [
        {
            "id": "p1",
            "owner_id": "o1",
            "status": "published",
            "created_at": "2025-05-20T08:00:00+00:00",
            "property_details": json.dumps(
                {
                    "flow": {"flowType": "commercial_rent"},
                    "rentAmount": 60000,
                    "city": "Chennai",
                }
            ),
        },
        {
            "id": "p2",
            "owner_id": "o2",
            "status": "draft",
            "created_at": "2025-05-21T08:00:00+00:00",
            "property_details": json.dumps(
                {"steps": {"land_sale_basic_details": {"landType": "Farm Land", "plotLength": 10, "plotWidth": 12}}}
            ),
        },
    ]


class TestNormalizeRow:
    def test_row_meta_fills_document_meta(self, export_rows):
        result = Reprocessor().normalize_row(export_rows[0])
        document = json.loads(result["property_details"])

        assert result["flow_type"] == "commercial_rent"
        assert result["status"] == "published"
        assert document["meta"]["id"] == "p1"
        assert document["meta"]["owner_id"] == "o1"
        assert document["meta"]["created_at"] == "2025-05-20T08:00:00+00:00"
        assert document["steps"]["com_rent_rental"]["preferredTenants"] == ["Company", "Startup"]
        assert document["steps"]["com_rent_location"]["city"] == "Chennai"

    def test_document_meta_is_kept(self):
        row = {"id": "p9", "status": "draft", "property_details": {"meta": {"status": "rejected"}}}
        result = Reprocessor().normalize_row(row)
        assert result["status"] == "rejected"

    def test_flow_inferred_from_steps(self, export_rows):
        result = Reprocessor().normalize_row(export_rows[1])
        document = json.loads(result["property_details"])

        assert result["flow_type"] == "land_sale"
        assert document["steps"]["land_sale_basic_details"]["builtUpArea"] == 120


class TestReprocessFile:
    def test_reprocess_file_overwrite(self, export_rows):
        with tempfile.TemporaryDirectory() as tmpdir:
            raw_file = _write_export(Path(tmpdir) / "properties.csv", export_rows)
            output_dir = Path(tmpdir) / "normalized"

            result = Reprocessor().reprocess_file(raw_file, output_dir)

            assert result == output_dir / "properties.csv"
            output_df = pd.read_csv(result)
            assert list(output_df["flow_type"]) == ["commercial_rent", "land_sale"]
            assert list(output_df.columns) == [
                "id",
                "owner_id",
                "status",
                "created_at",
                "flow_type",
                "property_details",
            ]

    def test_reprocess_file_new_mode(self, export_rows):
        with tempfile.TemporaryDirectory() as tmpdir:
            raw_file = _write_export(Path(tmpdir) / "properties.csv", export_rows)

            result = Reprocessor().reprocess_file(raw_file, output_mode="new")

            assert result.parent == Path(tmpdir)
            assert result.name.startswith("properties_reprocessed_")
            assert raw_file.exists()

    def test_reprocess_file_skips_failing_rows(self, export_rows, monkeypatch):
        original = Reprocessor.normalize_row

        def flaky(self, row):
            if row["id"] == "p1":
                raise ValueError("broken row")
            return original(self, row)

        monkeypatch.setattr(Reprocessor, "normalize_row", flaky)

        with tempfile.TemporaryDirectory() as tmpdir:
            raw_file = _write_export(Path(tmpdir) / "properties.csv", export_rows)
            result = Reprocessor().reprocess_file(raw_file, Path(tmpdir) / "out")

            output_df = pd.read_csv(result)
            assert list(output_df["id"]) == ["p2"]

    def test_reprocess_file_empty(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            raw_file = Path(tmpdir) / "empty.csv"
            raw_file.write_text("id,property_details\n")

            assert Reprocessor().reprocess_file(raw_file) is None


class TestReprocessListings:
    def test_invalid_output_mode(self):
        with pytest.raises(ValueError, match="Invalid output_mode"):
            reprocess_listings("exports", output_mode="append")

    def test_folder(self, export_rows):
        with tempfile.TemporaryDirectory() as tmpdir:
            _write_export(Path(tmpdir) / "a.csv", export_rows[:1])
            _write_export(Path(tmpdir) / "b.csv", export_rows[1:])
            output_dir = Path(tmpdir) / "out"

            results = reprocess_listings(tmpdir, output_dir=str(output_dir))

            assert sorted(path.name for path in results) == ["a.csv", "b.csv"]

    def test_missing_folder(self):
        assert reprocess_listings("/nonexistent/exports") == []
