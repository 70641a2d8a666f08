"""Period reconciliation engine for well-construction files.

This package contains only reporting logic:
- Inputs are an already-normalized file snapshot, a report window and a policy.
- No database, HTTP or document-parsing code lives here.
"""

from .config import ReportPolicy, WellTablePolicy, load_report_policy
from .context import ReportContext
from .models import (
    FileRecord,
    FileSnapshot,
    PaymentRecord,
    RemittanceRecord,
    ReportWindow,
    SiteOccurrence,
    SiteRecord,
)
from .results import Metric, PeriodReport
from .runner import PeriodReportRunner, build_period_report

# Import built-in sections so they self-register with the global registry.
from . import sections as _builtin_sections  # noqa: F401
