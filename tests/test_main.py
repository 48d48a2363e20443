import json
from pathlib import Path

import pytest

from main import build_parser, describe_steps, main, normalize_file


@pytest.fixture
def form_file(tmp_path):
    def _write(form: dict) -> Path:
        path = tmp_path / "form.json"
        path.write_text(json.dumps(form), encoding="utf-8")
        return path

    return _write


class TestNormalizeFile:
    def test_detects_flow(self, form_file):
        path = form_file({"flow": {"category": "commercial", "listingType": "rent"}, "rentAmount": 50000})

        document = normalize_file(str(path))

        assert document["flow"]["flowType"] == "commercial_rent"
        assert document["steps"]["com_rent_rental"]["rentAmount"] == 50000

    def test_uses_url_path(self, form_file):
        path = form_file({"roomType": "Single"})

        document = normalize_file(str(path), url_path="/properties/list/residential/pghostel/room_details")

        assert document["steps"]["res_pg_basic_details"] == {"roomType": "Single"}

    def test_explicit_flow_type(self, form_file):
        path = form_file({"rentAmount": 1000})
        document = normalize_file(str(path), flow_type="residential_flatmates")
        assert document["flow"]["flowType"] == "residential_flatmates"


class TestDescribeSteps:
    def test_land_sale(self):
        steps = describe_steps("land")

        assert [step["id"] for step in steps] == [
            "land_details",
            "location",
            "sale",
            "land_features",
            "review",
            "photos",
        ]
        assert steps[0]["step_key"] == "land_sale_basic_details"
        assert steps[4]["step_key"] is None


class TestMain:
    def test_normalize_to_file(self, form_file, tmp_path):
        path = form_file({"flow": {"flowType": "residential_sale"}})
        output = tmp_path / "out.json"

        assert main(["normalize", str(path), "--output", str(output)]) == 0

        document = json.loads(output.read_text(encoding="utf-8"))
        assert document["steps"]["res_sale_sale_details"]["expectedPrice"] == 0

    def test_normalize_prints_document(self, form_file, capsys):
        path = form_file({"flow": {"flowType": "land_sale"}})

        assert main(["normalize", str(path)]) == 0

        assert '"land_sale_basic_details"' in capsys.readouterr().out

    def test_normalize_detection_failure(self, form_file):
        path = form_file({})
        assert main(["normalize", str(path)]) == 1

    def test_steps(self, capsys):
        assert main(["steps", "residential_pghostel"]) == 0
        assert "res_pg_pg_details" in capsys.readouterr().out

    def test_steps_unknown_flow(self):
        assert main(["steps", "villa_rent"]) == 1

    def test_reprocess_missing_path(self, tmp_path):
        assert main(["reprocess", str(tmp_path / "missing")]) == 1

    def test_reprocess_rejects_bad_mode(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["reprocess", "exports", "--output-mode", "append"])
