from datetime import datetime
from decimal import Decimal

from common.period_engine.models import LedgerSource
from common.period_engine.sections.revenue_head import scan_revenue_head


def test_revenue_head_sums_tagged_remittances(make_report, make_file, remittance):
    report = make_report(
        make_file(
            remittances=[
                remittance(5000, datetime(2024, 4, 10), "RevenueHead"),
                remittance(3000, datetime(2024, 6, 30, 18), "RevenueHead"),
                remittance(2000, datetime(2024, 5, 1), "SBI"),
            ]
        )
    )

    credit = report.drilldown("revenue_head", "Revenue Head", "credit")
    assert credit.amount == Decimal("8000")
    assert credit.count == 2
    assert {r.source for r in credit.records} == {LedgerSource.DIRECT_REMITTANCE}


def test_revenue_head_includes_positive_payment_amounts(make_ctx, make_snapshot, make_file, remittance, payment):
    entry = make_file(
        sites=[],
        remittances=[remittance(700, datetime(2024, 3, 31), "RevenueHead")],
        payments=[
            payment(datetime(2024, 5, 5), revenue_head=1500),
            payment(datetime(2024, 5, 6), revenue_head=0, gst=20),
            payment(datetime(2024, 7, 2), revenue_head=900),
            payment(None, revenue_head=400),
        ],
    )

    credit = scan_revenue_head(make_ctx(make_snapshot(entry)))

    assert credit.amount == Decimal("1500")
    assert [(r.source, r.amount) for r in credit.records] == [(LedgerSource.FROM_PAYMENT, Decimal("1500"))]


def test_account_ledger_balances_and_grand_total(make_report, make_file, make_site, remittance, payment):
    report = make_report(
        make_file(
            file_no="F-1",
            sites=[make_site(name="North")],
            remittances=[
                remittance(10000, datetime(2024, 4, 2), "SBI"),
                remittance(500, datetime(2024, 4, 3), "RevenueHead"),
            ],
            payments=[
                payment(datetime(2024, 5, 1), account="SBI", contractors_payment=3000, gst=540),
                payment(datetime(2024, 5, 2), account="SBI"),
                payment(datetime(2024, 8, 2), account="SBI", contractors_payment=100),
            ],
        ),
        make_file(file_no="F-2", remittances=[remittance(4000, datetime(2024, 6, 1), "STSB")]),
    )

    ledger = report.table("account_ledger")
    sbi = ledger.buckets["SBI"]
    assert sbi.credit.amount == Decimal("10000")
    assert sbi.debit.amount == Decimal("3540")
    assert sbi.debit.count == 1
    assert sbi.balance == Decimal("6460")
    assert ledger.buckets["STSB"].balance == Decimal("4000")
    assert ledger.buckets["RevenueHead"].balance == Decimal("500")
    assert report.grand_total == Decimal("10960")

    entry = sbi.debit.records[0]
    assert entry.source == LedgerSource.FROM_PAYMENT
    assert entry.site_names == ["North"]
    assert entry.purposes == ["BWC"]


def test_account_ledger_ignores_unknown_accounts(make_report, make_file, remittance):
    report = make_report(make_file(remittances=[remittance(250, datetime(2024, 4, 2), "Cash")]))

    assert report.grand_total == Decimal("0")
    assert report.table("account_ledger").buckets["SBI"].credit.count == 0


def test_balances_are_derived_from_credit_and_debit(make_report, make_file, remittance, payment):
    report = make_report(
        make_file(
            remittances=[remittance(800, datetime(2024, 4, 2), "SBI"), remittance(300, datetime(2024, 4, 2), "STSB")],
            payments=[payment(datetime(2024, 5, 1), account="STSB", contractors_payment=450)],
        )
    )

    ledger = report.table("account_ledger")
    for stats in ledger.buckets.values():
        assert stats.balance == stats.credit.amount - stats.debit.amount
    assert ledger.buckets["STSB"].balance == Decimal("-150")
    assert report.grand_total == sum(s.balance for s in ledger.buckets.values())
