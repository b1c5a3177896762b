from shapely.geometry import MultiPolygon, box

from core.record_set import DatasetRecord
from geometry_processing.intersection import find_intersecting


def _record(polygon, ident):
    if not isinstance(polygon, MultiPolygon):
        polygon = MultiPolygon([polygon])
    return DatasetRecord(polygon=polygon, attributes={"XBNO": ident})


def _ids(records):
    return [record.attributes["XBNO"] for record in records]


def test_overlap_touch_and_containment_all_match():
    target = box(0, 0, 10, 10)
    candidates = [
        _record(box(5, 5, 15, 15), "overlap"),
        _record(box(10, 0, 20, 10), "edge"),
        _record(box(10, 10, 12, 12), "corner"),
        _record(box(2, 2, 3, 3), "inside"),
        _record(box(-5, -5, 20, 20), "covers"),
        _record(box(11, 11, 12, 12), "disjoint"),
    ]

    matches = find_intersecting(target, candidates)

    assert _ids(matches) == ["overlap", "edge", "corner", "inside", "covers"]


def test_no_candidates_intersect():
    assert find_intersecting(box(0, 0, 1, 1), [_record(box(5, 5, 6, 6), "far")]) == []
    assert find_intersecting(box(0, 0, 1, 1), []) == []


def test_intersection_is_symmetric():
    a = box(0, 0, 2, 2)
    b = box(1, 1, 3, 3)
    c = box(2, 2, 4, 4)

    assert find_intersecting(a, [_record(b, "b")])
    assert find_intersecting(b, [_record(a, "a")])
    assert find_intersecting(a, [_record(c, "c")])
    assert find_intersecting(c, [_record(a, "a")])


def test_matches_follow_candidate_insertion_order():
    target = box(0, 0, 10, 10)
    candidates = [_record(box(i, i, i + 1, i + 1), f"XB{i:03d}") for i in (7, 2, 5)]

    assert _ids(find_intersecting(target, candidates)) == ["XB007", "XB002", "XB005"]
