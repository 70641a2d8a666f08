from __future__ import annotations

from typing import Iterable, List

from .models import FileRecord, SiteOccurrence


def flatten_file(entry: FileRecord) -> List[SiteOccurrence]:
    first = entry.first_remittance
    return [
        SiteOccurrence(
            site=site,
            file_no=entry.file_no,
            applicant_name=entry.applicant_name,
            application_type=entry.application_type,
            first_remittance_date=first.date if first else None,
            first_remittance_amount=first.amount if first else None,
        )
        for site in entry.sites
    ]


def flatten_sites(files: Iterable[FileRecord]) -> List[SiteOccurrence]:
    out: List[SiteOccurrence] = []
    for entry in files:
        out.extend(flatten_file(entry))
    return out
