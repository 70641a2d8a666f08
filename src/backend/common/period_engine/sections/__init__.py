from .progress import SITE_PROGRESS
from .financial_summary import FINANCIAL_SUMMARY
from .revenue_head import REVENUE_HEAD
from .account_ledger import ACCOUNT_LEDGER
from .work_status import WORK_STATUS_BY_SERVICE

__all__ = [
    "SITE_PROGRESS",
    "FINANCIAL_SUMMARY",
    "REVENUE_HEAD",
    "ACCOUNT_LEDGER",
    "WORK_STATUS_BY_SERVICE",
]
