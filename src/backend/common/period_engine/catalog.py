from __future__ import annotations

import argparse
import json
from typing import Any, Dict, List

import yaml
from pydantic import BaseModel

from .config import ReportPolicy
from .registry import registry

# Ensure built-in sections are imported/registered when generating a catalog.
from . import sections as _builtin_sections  # noqa: F401


class SectionCatalogEntry(BaseModel):
    section_id: str
    section_title: str
    table_ids: List[str]
    module: str
    class_name: str


class ReportCatalog(BaseModel):
    sections: List[SectionCatalogEntry]
    policy_schema: Dict[str, Any]


def build_catalog() -> ReportCatalog:
    entries: List[SectionCatalogEntry] = []
    for section_id in registry.ids():
        section_cls = registry.get(section_id)
        entries.append(
            SectionCatalogEntry(
                section_id=section_id,
                section_title=getattr(section_cls, "section_title", ""),
                table_ids=list(getattr(section_cls, "table_ids", ())),
                module=getattr(section_cls, "__module__", ""),
                class_name=getattr(section_cls, "__name__", ""),
            )
        )
    entries.sort(key=lambda e: e.section_id)
    return ReportCatalog(sections=entries, policy_schema=ReportPolicy.model_json_schema())


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="List the report sections and the policy schema.")
    parser.add_argument(
        "--format",
        choices=("yaml", "json"),
        default="yaml",
        help="Output format (default: yaml).",
    )
    args = parser.parse_args(argv)

    catalog = build_catalog().model_dump()
    if args.format == "json":
        print(json.dumps(catalog, indent=2, sort_keys=True))
    else:
        print(yaml.safe_dump(catalog, sort_keys=True, allow_unicode=True))


if __name__ == "__main__":
    main()
