import pytest
from pyproj import Transformer
from shapely.geometry import LineString, MultiPolygon, Point, Polygon, box

from core.record_set import DecodedArchive, ShapeEntry, build_record_collection
from utils.errors import ReprojectionError, SchemaError
from utils.geometry_converters import classify_shape


def _entry(geom):
    return ShapeEntry(classify_shape(geom), geom)


def test_positional_pairing_survives_skipped_shapes():
    first = box(117.0, 30.0, 117.01, 30.01)
    third = box(117.02, 30.0, 117.03, 30.01)
    archive = DecodedArchive(
        name="mixed.zip",
        shapes=[_entry(first), _entry(Point(117.0, 30.0)), _entry(third)],
        rows=[{"XBNO": "R0"}, {"XBNO": "R1"}, {"XBNO": "R2"}],
        source_crs="EPSG:4326",
    )

    records = build_record_collection(archive, "EPSG:4326")

    assert [r.attributes["XBNO"] for r in records] == ["R0", "R2"]
    assert records[0].polygon.equals(MultiPolygon([first]))
    assert records[1].polygon.equals(MultiPolygon([third]))


def test_null_and_line_shapes_are_skipped_silently():
    archive = DecodedArchive(
        name="nulls.zip",
        shapes=[_entry(None), _entry(LineString([(0, 0), (1, 1)])), _entry(box(0, 0, 1, 1))],
        rows=[{"id": 0}, {"id": 1}, {"id": 2}],
        source_crs="EPSG:4326",
    )

    records = build_record_collection(archive, "EPSG:4326")

    assert len(records) == 1
    assert records[0].attributes == {"id": 2}


def test_polygon_with_elevation_is_kept_as_planar():
    polygon_z = Polygon([(117.0, 30.0, 1.0), (117.1, 30.0, 1.0), (117.1, 30.1, 1.0), (117.0, 30.0, 1.0)])
    entry = _entry(polygon_z)
    archive = DecodedArchive(name="z.zip", shapes=[entry], rows=[{"id": 0}], source_crs="EPSG:4326")

    records = build_record_collection(archive, "EPSG:4326")

    assert entry.shape_type == "polygonz"
    assert records[0].polygon.has_z is False


def test_polygons_are_reprojected_into_target_crs():
    to_gk = Transformer.from_crs("EPSG:4326", "EPSG:4527", always_xy=True)
    x, y = to_gk.transform(117.0, 30.0)
    archive = DecodedArchive(
        name="tenure.zip",
        shapes=[_entry(box(x, y, x + 50, y + 50))],
        rows=[{"XBNO": "XB001"}],
        source_crs="EPSG:4527",
    )

    records = build_record_collection(archive, "EPSG:4326")

    minx, miny, _, _ = records[0].polygon.bounds
    assert minx == pytest.approx(117.0, abs=1e-6)
    assert miny == pytest.approx(30.0, abs=1e-6)


def test_shape_row_count_mismatch_is_fatal():
    archive = DecodedArchive(
        name="broken.zip",
        shapes=[_entry(box(0, 0, 1, 1))],
        rows=[{"id": 0}, {"id": 1}],
        source_crs="EPSG:4326",
    )

    with pytest.raises(SchemaError):
        build_record_collection(archive, "EPSG:4326")


def test_bad_source_crs_aborts_the_archive():
    archive = DecodedArchive(
        name="bad_crs.zip",
        shapes=[_entry(box(0, 0, 1, 1))],
        rows=[{"id": 0}],
        source_crs="EPSG:0",
    )

    with pytest.raises(ReprojectionError):
        build_record_collection(archive, "EPSG:4326")
