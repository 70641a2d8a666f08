from datetime import datetime
from decimal import Decimal


def test_file_with_two_purposes_is_attributed_to_both(make_report, make_file, make_site):
    report = make_report(
        make_file(
            sites=[make_site(name="A", purpose="BWC"), make_site(name="B", purpose="FPW", diameter=None)],
            remitted_at=datetime(2024, 4, 5),
            remitted_amount=10000,
        )
    )

    bwc = report.drilldown("finance_private", "BWC", "applications")
    fpw = report.drilldown("finance_private", "FPW", "applications")
    total = report.drilldown("finance_private", "Total", "applications")

    assert (bwc.count, bwc.amount) == (1, Decimal("10000"))
    assert (fpw.count, fpw.amount) == (1, Decimal("10000"))
    # The same remittance is counted once per purpose, so the total carries it twice.
    assert (total.count, total.amount) == (2, Decimal("20000"))


def test_same_purpose_twice_in_one_file_counts_once(make_report, make_file, make_site):
    report = make_report(
        make_file(
            sites=[make_site(name="A"), make_site(name="B")],
            remitted_at=datetime(2024, 4, 5),
            remitted_amount=1500,
        )
    )

    metric = report.drilldown("finance_private", "BWC", "applications")
    assert (metric.count, metric.amount) == (1, Decimal("1500"))
    assert metric.records[0].purpose == "BWC"


def test_government_files_use_the_government_table(make_report, make_file):
    report = make_report(make_file(application_type="LSGD", remitted_at=datetime(2024, 4, 5), remitted_amount=200))

    assert report.drilldown("finance_government", "BWC", "applications").amount == Decimal("200")
    assert report.drilldown("finance_private", "BWC", "applications").count == 0


def test_completed_sites_report_their_expenditure(make_report, make_file, make_site):
    report = make_report(
        make_file(
            sites=[
                make_site(name="A", completion_date=datetime(2024, 5, 1), total_expenditure="4500.50"),
                make_site(name="B", completion_date=datetime(2024, 6, 1)),
                make_site(name="C", completion_date=datetime(2024, 7, 1), total_expenditure=999),
            ],
            remitted_at=datetime(2023, 11, 1),
            remitted_amount=9000,
        )
    )

    completed = report.drilldown("finance_private", "BWC", "completed")
    assert completed.count == 2
    assert completed.amount == Decimal("4500.50")
    assert report.drilldown("finance_private", "BWC", "applications").count == 0


def test_missing_amount_counts_as_zero(make_report, make_file):
    report = make_report(make_file(remitted_at=datetime(2024, 4, 5)))

    metric = report.drilldown("finance_private", "BWC", "applications")
    assert metric.count == 1
    assert metric.amount == Decimal("0")


def test_untyped_files_are_left_out(make_report, make_file, make_site):
    report = make_report(
        make_file(
            application_type=None,
            sites=[make_site(completion_date=datetime(2024, 5, 1), total_expenditure=10)],
            remitted_at=datetime(2024, 4, 5),
            remitted_amount=100,
        )
    )

    for sector_table in ("finance_private", "finance_government"):
        for _, _, metric in report.table(sector_table).iter_metrics():
            assert metric.count == 0
