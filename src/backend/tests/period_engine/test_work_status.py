from datetime import datetime

from common.period_engine.sections.work_status import TOTAL_ROW


def test_status_matrix_counts_every_site_regardless_of_window(make_report, make_file, make_site):
    report = make_report(
        make_file(
            file_no="F-1",
            sites=[
                make_site(name="A", purpose="BWC", work_status="Work in Progress"),
                make_site(name="B", purpose="TWC", work_status="Work Completed", completion_date=datetime(2019, 1, 1)),
                make_site(name="C", purpose="ARS", work_status="Work in Progress"),
                make_site(name="D", purpose="BWC", work_status="Inspection"),
            ],
            remitted_at=datetime(2018, 6, 1),
        ),
        make_file(file_no="F-2", sites=[make_site(name="A", purpose="FPW", work_status="Work in Progress")]),
    )

    table = report.table("work_status")
    assert report.drilldown("work_status", "Work in Progress", "BWC").count == 1
    assert report.drilldown("work_status", "Work in Progress", "FPW").count == 1
    assert report.drilldown("work_status", "Work in Progress", "Total").count == 2
    assert report.drilldown("work_status", "Work Completed", "TWC").count == 1
    assert report.drilldown("work_status", "Under Process", "Total").count == 0

    totals = table.buckets[TOTAL_ROW]
    assert totals.cells["BWC"].count == 1
    assert totals.cells["TWC"].count == 1
    assert totals.total.count == 3
    assert "ARS" not in totals.cells


def test_status_matrix_has_a_row_per_configured_status(make_report, policy):
    table = make_report().table("work_status")
    assert list(table.buckets) == [*policy.work_statuses, TOTAL_ROW]
