import json
from pathlib import Path

import pytest
from shapely.geometry import MultiPolygon, box, shape

from core.output_generator import build_feature, write_feature_document
from utils.errors import OutputError, SchemaError


def test_build_feature_shape():
    polygon = MultiPolygon([box(117.0, 30.0, 117.01, 30.01)])

    feature = build_feature(polygon, {"XB001": 10.0})

    assert feature["type"] == "Feature"
    assert feature["geometry"]["type"] == "MultiPolygon"
    assert feature["properties"] == {"XB001": 10.0}


def test_write_feature_document_names_file_by_identifier(tmp_path: Path):
    polygon = MultiPolygon([box(117.0, 30.0, 117.01, 30.01)])

    path = write_feature_document(polygon, {"XB001": 10.0}, "ZD01", tmp_path / "out")

    assert path == tmp_path / "out" / "ZD01.json"
    payload = json.loads(path.read_text(encoding="utf-8"))
    assert payload["properties"] == {"XB001": 10.0}
    assert shape(payload["geometry"]).equals(polygon)


def test_write_feature_document_with_empty_properties(tmp_path: Path):
    polygon = MultiPolygon([box(0, 0, 1, 1)])

    path = write_feature_document(polygon, {}, "ZD02", tmp_path)

    payload = json.loads(path.read_text(encoding="utf-8"))
    assert payload["properties"] == {}
    assert payload["geometry"]["type"] == "MultiPolygon"


def test_write_feature_document_overwrites_existing(tmp_path: Path):
    polygon = MultiPolygon([box(0, 0, 1, 1)])
    (tmp_path / "ZD01.geojson").write_text("stale", encoding="utf-8")

    path = write_feature_document(polygon, {"XB001": 1.5}, "ZD01", tmp_path, extension=".geojson")

    assert json.loads(path.read_text(encoding="utf-8"))["properties"] == {"XB001": 1.5}


def test_write_feature_document_keeps_non_ascii_identifiers(tmp_path: Path):
    polygon = MultiPolygon([box(0, 0, 1, 1)])

    path = write_feature_document(polygon, {"林班01": 2.0}, "宗地01", tmp_path)

    assert path.name == "宗地01.json"
    assert "林班01" in path.read_text(encoding="utf-8")


@pytest.mark.parametrize("identifier", ["ZD/01", "..\\ZD01", "..", ".", "ZD\x0001"])
def test_identifier_that_is_not_a_file_name_is_rejected(tmp_path: Path, identifier):
    polygon = MultiPolygon([box(0, 0, 1, 1)])

    with pytest.raises(SchemaError):
        write_feature_document(polygon, {}, identifier, tmp_path / "out")

    assert not (tmp_path / "out").exists()


def test_output_dir_that_is_a_file_raises_output_error(tmp_path: Path):
    polygon = MultiPolygon([box(0, 0, 1, 1)])
    blocker = tmp_path / "out"
    blocker.write_text("not a directory", encoding="utf-8")

    with pytest.raises(OutputError) as exc_info:
        write_feature_document(polygon, {}, "ZD01", blocker)

    assert isinstance(exc_info.value.__cause__, OSError)
    assert exc_info.value.error_code == "OUTPUT_ERROR"
