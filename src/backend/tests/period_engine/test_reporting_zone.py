from datetime import datetime, timezone
from decimal import Decimal

from common.period_engine import FileSnapshot, build_period_report
from common.period_engine.config import ReportPolicy
from common.period_engine.context import ReportContext


def _applications(report):
    return report.drilldown("finance_private", "BWC", "applications")


def test_aware_remittance_dates_are_reported(make_report, make_file):
    report = make_report(make_file(remitted_at=datetime(2024, 4, 5, tzinfo=timezone.utc), remitted_amount=700))

    metric = _applications(report)
    assert (metric.count, metric.amount) == (1, Decimal("700"))
    assert metric.records[0].date == datetime(2024, 4, 5, 5, 30)


def test_aware_dates_fall_on_the_local_day(make_report, make_file, make_site):
    report = make_report(
        # 00:30 on April 1st in Asia/Kolkata, still March 31st in UTC.
        make_file(file_no="early", remitted_at=datetime(2024, 3, 31, 19, 0, tzinfo=timezone.utc), remitted_amount=100),
        # 00:30 on July 1st locally, after the window ends.
        make_file(file_no="late", remitted_at=datetime(2024, 6, 30, 19, 0, tzinfo=timezone.utc), remitted_amount=200),
    )

    metric = _applications(report)
    assert [r.file_no for r in metric.records] == ["early"]
    assert report.drilldown("service_summary", "BWC", "current_applications").count == 1


def test_aware_completion_dates_use_the_reporting_zone(make_report, make_file, make_site):
    # 01:30 on April 1st locally.
    completed_at = datetime(2024, 3, 31, 20, 0, tzinfo=timezone.utc)
    report = make_report(
        make_file(
            sites=[make_site(completion_date=completed_at, total_expenditure=1200)],
            remitted_at=datetime(2024, 4, 2),
            remitted_amount=300,
        )
    )

    assert report.drilldown("finance_private", "BWC", "completed").amount == Decimal("1200")


def test_policy_timezone_moves_the_day_boundary(window, make_file):
    snapshot = FileSnapshot(
        files=(make_file(remitted_at=datetime(2024, 3, 31, 19, 0, tzinfo=timezone.utc), remitted_amount=100),)
    )

    local = build_period_report(snapshot, window, ReportPolicy(refund_statuses=[]))
    utc = build_period_report(snapshot, window, ReportPolicy(refund_statuses=[], timezone="UTC"))

    assert _applications(local).count == 1
    assert _applications(utc).count == 0


def test_naive_snapshots_are_used_as_is(window, policy, make_file, make_snapshot):
    snapshot = make_snapshot(make_file(remitted_at=datetime(2024, 4, 5), remitted_amount=10))

    ctx = ReportContext(window=window, snapshot=snapshot, policy=policy)

    assert ctx.snapshot is snapshot


def test_aware_snapshot_is_localized_without_mutating_the_input(window, policy, make_file, make_snapshot):
    snapshot = make_snapshot(make_file(remitted_at=datetime(2024, 4, 5, tzinfo=timezone.utc), remitted_amount=10))

    ctx = ReportContext(window=window, snapshot=snapshot, policy=policy)

    assert ctx.snapshot.files[0].remittances[0].date == datetime(2024, 4, 5, 5, 30)
    assert snapshot.files[0].remittances[0].date.tzinfo is timezone.utc
