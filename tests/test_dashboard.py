from fieldsurvey.dashboard import (
    Dashboard,
    chart_slices,
    compute_stats,
    legend_text,
    percentage,
    table_rows,
)
from fieldsurvey.models import RecordDraft, Stats, ValidationStatus

E = ValidationStatus.ELIGIBLE
I = ValidationStatus.INELIGIBLE


def test_empty_collection_stats():
    assert compute_stats([]) == Stats(total=0, eligible=0, ineligible=0)


def test_stats_counts(record_factory):
    records = [record_factory(status=s) for s in (E, I, E, E, I)]
    stats = compute_stats(records)
    assert stats == Stats(total=5, eligible=3, ineligible=2)
    assert stats.total == stats.eligible + stats.ineligible == len(records)


def test_percentage_guards_zero_total():
    assert percentage(0, 0) == 0


def test_percentage_rounds_halves_up():
    assert percentage(1, 8) == 13  # 12.5
    assert percentage(1, 3) == 33
    assert percentage(2, 3) == 67
    assert percentage(3, 3) == 100


def test_chart_slices_empty_state():
    assert chart_slices(Stats()) == []
    assert legend_text(Stats()) == ["Eligible (0%)", "Ineligible (0%)"]


def test_chart_slices():
    stats = Stats(total=4, eligible=3, ineligible=1)
    assert chart_slices(stats) == [("Eligible", 3, 75), ("Ineligible", 1, 25)]
    assert legend_text(stats) == ["Eligible (75%)", "Ineligible (25%)"]


def test_table_rows_keep_store_order(record_factory):
    records = [
        record_factory(serial_number="003", status=I),
        record_factory(serial_number="002"),
        record_factory(serial_number="001"),
    ]
    rows = table_rows(records)
    assert [r[0] for r in rows] == ["003", "002", "001"]
    assert rows[0][3] == "Gokulnagar, Haripur"
    assert rows[0][4] == "Ineligible"


def test_presenter_recomputes_on_publication(store):
    updates = []
    presenter = Dashboard(store, on_update=lambda: updates.append(len(store)))
    assert presenter.stats == Stats(total=1, eligible=1, ineligible=0)

    store.append(
        RecordDraft(
            serial_number="002",
            block_name="B",
            gp_name="G",
            village="V",
            beneficiary_id="X",
            beneficiary_name="N",
            status=I,
            remarks="moved",
            superior_name="S",
            superior_designation="D",
            superior_id_srh="SRH",
        )
    )

    assert presenter.stats == Stats(total=2, eligible=1, ineligible=1)
    assert presenter.slices == [("Eligible", 1, 50), ("Ineligible", 1, 50)]
    assert presenter.rows[0][0] == "002"
    assert updates == [1, 2]

    presenter.close()
