from __future__ import annotations

import argparse
import csv
import json
import logging
import sys
from datetime import date
from pathlib import Path


def _ensure_backend_on_path() -> None:
    backend_dir = Path(__file__).resolve().parents[1]
    if str(backend_dir) not in sys.path:
        sys.path.insert(0, str(backend_dir))


def _parse_date(value: str, flag: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError as exc:
        raise SystemExit(f"{flag} must be a date in YYYY-MM-DD form, got {value!r}.") from exc


def _write_markdown(report, out_path: Path) -> None:
    lines = [
        f"# Period Report {report.window.start.isoformat()} to {report.window.end.isoformat()}",
        "",
        f"- Files scanned: {report.files_scanned}",
        f"- Sites scanned: {report.sites_scanned}",
        f"- Grand total: {report.grand_total}",
    ]
    for table_id, table in report.tables.items():
        lines.append("")
        lines.append(f"## {table.title or table_id}")
        for bucket, group in table.buckets.items():
            values = [f"{name}={metric.count}" for name, metric in group.metrics() if metric.count]
            if not values:
                continue
            amount = getattr(group, "balance", None)
            suffix = f" (balance {amount})" if amount is not None and table.kind == "ledger" else ""
            lines.append(f"- {bucket}: {', '.join(values)}{suffix}")
    out_path.write_text("\n".join(lines) + "\n", encoding="utf-8")


def _write_csv(report, out_path: Path) -> None:
    with out_path.open("w", newline="", encoding="utf-8") as handle:
        writer = csv.writer(handle)
        writer.writerow(["table_id", "bucket", "metric", "count", "amount"])
        for table_id, bucket, name, metric in report.iter_metrics():
            writer.writerow([table_id, bucket, name, metric.count, str(metric.amount)])


def main(argv: list[str] | None = None) -> int:
    _ensure_backend_on_path()

    from common.period_engine import ReportWindow, build_period_report, load_report_policy
    from pipelines.config import get_report_settings
    from pipelines.data_source import get_data_source

    settings = get_report_settings()
    parser = argparse.ArgumentParser(
        description="Build the period progress and finance report from a file snapshot and write JSON/MD/CSV outputs."
    )
    parser.add_argument("--start", required=True, help="Window start date (YYYY-MM-DD).")
    parser.add_argument("--end", required=True, help="Window end date (YYYY-MM-DD).")
    parser.add_argument(
        "--snapshot",
        default=None,
        help="Path to a JSON export of file documents (defaults to REPORT_SNAPSHOT_PATH).",
    )
    parser.add_argument(
        "--policy",
        default=None,
        help="Path to a YAML/JSON report policy (defaults to REPORT_POLICY_PATH or config/report_policy.yaml).",
    )
    parser.add_argument(
        "--output-dir",
        default=None,
        help="Output directory for report files (defaults to REPORT_OUTPUT_DIR or the current directory).",
    )
    args = parser.parse_args(argv)

    level = logging.getLevelName(settings.log_level)
    if not isinstance(level, int):
        raise SystemExit(f"Invalid LOG_LEVEL {settings.log_level!r}.")
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    start = _parse_date(args.start, "--start")
    end = _parse_date(args.end, "--end")
    if end < start:
        raise SystemExit(f"--end ({end}) must not precede --start ({start}).")

    snapshot_path = Path(args.snapshot) if args.snapshot else settings.snapshot_path
    if snapshot_path is None:
        raise SystemExit("A snapshot is required: pass --snapshot or set REPORT_SNAPSHOT_PATH.")
    policy_path = Path(args.policy) if args.policy else settings.policy_path
    output_dir = Path(args.output_dir).resolve() if args.output_dir else settings.output_dir.resolve()

    try:
        policy = load_report_policy(policy_path)
    except (OSError, ValueError) as exc:
        raise SystemExit(f"Could not load report policy {policy_path}: {exc}") from exc
    try:
        source = get_data_source(settings.data_source, snapshot_path=snapshot_path, tz=policy.zone())
        snapshot = source.load_snapshot()
    except (OSError, ValueError) as exc:
        raise SystemExit(f"Could not load snapshot {snapshot_path}: {exc}") from exc

    output_dir.mkdir(parents=True, exist_ok=True)
    report = build_period_report(snapshot, ReportWindow(start=start, end=end), policy)

    base_name = f"period_report_{report.window.label()}"
    out_json = output_dir / f"{base_name}.json"
    out_md = output_dir / f"{base_name}.md"
    out_csv = output_dir / f"{base_name}.csv"

    out_json.write_text(json.dumps(report.model_dump(mode="json"), indent=2), encoding="utf-8")
    _write_markdown(report, out_md)
    _write_csv(report, out_csv)

    print(f"Wrote {out_json}")
    print(f"Wrote {out_md}")
    print(f"Wrote {out_csv}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
