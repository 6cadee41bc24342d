from models import Report
from services.report_store import ReportStore


def test_store_starts_empty():
    store = ReportStore()
    assert store.count() == 0
    assert store.list() == []


def test_add_keeps_submitted_id_and_extra_fields():
    store = ReportStore()
    report = Report(id=42, lat=30.615, lng=-96.34, type="smoothness", rating=4, description="Fresh asphalt")

    stored = store.add(report)

    assert stored.id == 42
    assert stored.model_dump()["description"] == "Fresh asphalt"
    assert store.list() == [stored]


def test_add_assigns_unique_ids():
    store = ReportStore()
    first = store.add(Report(lat=30.615, lng=-96.34, type="congestion", congestion=3))
    second = store.add(Report(lat=30.616, lng=-96.34, type="congestion", congestion=4))

    assert first.id is not None
    assert second.id is not None
    assert first.id != second.id


def test_duplicate_id_gets_reassigned():
    store = ReportStore()
    store.add(Report(id=7, lat=30.615, lng=-96.34, type="blocked"))
    duplicate = store.add(Report(id=7, lat=30.616, lng=-96.34, type="construction"))

    assert duplicate.id != 7
    assert store.count() == 2


def test_list_preserves_insertion_order():
    store = ReportStore()
    ids = [store.add(Report(lat=30.6 + i / 1000, lng=-96.34, type="smoothness", rating=3)).id for i in range(4)]

    assert [r.id for r in store.list()] == ids


def test_remove_by_id():
    store = ReportStore()
    kept = store.add(Report(id=1, lat=30.615, lng=-96.34, type="blocked"))
    store.add(Report(id=2, lat=30.616, lng=-96.34, type="construction"))

    removed = store.remove(2)

    assert removed.type == "construction"
    assert store.list() == [kept]
    assert store.remove(2) is None
    assert store.remove(999) is None
