from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional


def _ensure_backend_on_path() -> None:
    backend_dir = Path(__file__).resolve().parents[1]
    if str(backend_dir) not in sys.path:
        sys.path.insert(0, str(backend_dir))


def load_fleet(
    source: str,
    *,
    input_path: Optional[Path] = None,
    count: int = 25,
    seed: Optional[int] = None,
):
    _ensure_backend_on_path()
    from pipelines.data_source import get_fleet_source

    return get_fleet_source(source, path=input_path, count=count, seed=seed).load_merchants()


def run_fleet_scan(merchants, *, advance: int = 0, top_n: Optional[int] = None):
    _ensure_backend_on_path()
    from merchant_twin.rules_engine.fleet import FleetScanner
    from merchant_twin.twin.mutations import advance_days

    if advance < 0:
        raise ValueError(f"advance must be >= 0, got {advance}")
    if advance:
        merchants = [advance_days(m, advance) for m in merchants]
    return FleetScanner().scan(merchants, top_n=top_n)


def _write_json(batch, out_path: Path) -> None:
    out_path.write_text(json.dumps(batch.model_dump(mode="json"), indent=2), encoding="utf-8")


def _write_markdown(batch, out_path: Path) -> None:
    _ensure_backend_on_path()
    from merchant_twin.twin.health import risk_tier

    fleet = batch.fleet
    lines = [
        "# Fleet Scan",
        "",
        "## Totals",
        f"- Merchants: {fleet.total_merchants}",
        f"- Healthy: {fleet.healthy_merchants}",
        f"- With failures: {fleet.merchants_with_any_failure}",
        f"- With critical failures: {fleet.merchants_with_critical}",
        f"- Calls at risk: {fleet.total_calls_at_risk}",
        "",
        "## Top failure codes",
    ]
    if not fleet.top_failures:
        lines.append("- None")
    for top in fleet.top_failures:
        lines.append(f"- {top.code}: {top.count} occurrence(s), {top.merchants} merchant(s) ({top.pct}%)")

    lines.append("")
    lines.append("## Action risk")
    lines.append("| Rank | Action | Calls | Failing | Fail rate | Risk |")
    lines.append("| --- | --- | --- | --- | --- | --- |")
    for row in fleet.action_risk:
        lines.append(
            f"| {row.demand_rank} | {row.label} | {row.demand_total} | {row.failing_merchants} "
            f"| {row.fail_rate}% | {row.risk_score} |"
        )

    lines.append("")
    lines.append("## Merchants")
    for scan in batch.merchant_results:
        m = scan.merchant
        summary = scan.summary
        lines.append("")
        lines.append(f"### {m.id}: {m.business_name or m.display_name} ({risk_tier(m).value})")
        lines.append(
            f"- Passing {summary.passing}/{summary.total}, failing {summary.failing}, "
            f"warnings {summary.warnings}, calls at risk {summary.calls_at_risk}"
        )
        for failure in scan.failures:
            severity = failure.severity.value if failure.severity is not None else "-"
            lines.append(f"  - [{severity}] {failure.action_label}: {failure.code}: {failure.inline}")
    out_path.write_text("\n".join(lines) + "\n", encoding="utf-8")


def main(argv: List[str] | None = None) -> int:
    _ensure_backend_on_path()
    from merchant_twin.logging_utils import configure_logging
    from pipelines.config import DATA_SOURCES, get_fleet_settings

    settings = get_fleet_settings()
    parser = argparse.ArgumentParser(
        description="Scan a merchant fleet against the self-service action catalog and write JSON/MD outputs."
    )
    parser.add_argument(
        "--source",
        choices=DATA_SOURCES,
        default=settings.data_source,
        help="Fleet source (default: TWIN_DATA_SOURCE or curated).",
    )
    parser.add_argument(
        "--input",
        default=None,
        help="Path to a JSON array of merchant records (file source only).",
    )
    parser.add_argument(
        "--count",
        type=int,
        default=settings.fleet_size,
        help="Number of merchants to generate (generated source only).",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=settings.seed,
        help="Seed for the generated source.",
    )
    parser.add_argument(
        "--advance-days",
        type=int,
        default=0,
        help="Age every merchant by N days (applying time cascades) before scanning.",
    )
    parser.add_argument(
        "--top",
        type=int,
        default=settings.top_failures,
        help="Number of top failure codes to report.",
    )
    parser.add_argument(
        "--output-dir",
        default=".",
        help="Output directory for fleet_scan.json / fleet_scan.md.",
    )
    parser.add_argument(
        "--format",
        choices=("json", "markdown", "both"),
        default="both",
        help="Output format(s) to write.",
    )
    args = parser.parse_args(argv)

    configure_logging(settings.log_level)

    if args.source == "file" and not args.input:
        raise SystemExit("File source requires --input.")
    if args.advance_days < 0:
        raise SystemExit("--advance-days must be >= 0.")
    if args.top < 0:
        raise SystemExit("--top must be >= 0.")

    merchants = load_fleet(
        args.source,
        input_path=Path(args.input) if args.input else None,
        count=args.count,
        seed=args.seed,
    )
    batch = run_fleet_scan(merchants, advance=args.advance_days, top_n=args.top)

    fleet = batch.fleet
    print(
        f"Scanned {fleet.total_merchants} merchants: {fleet.healthy_merchants} healthy, "
        f"{fleet.merchants_with_any_failure} with failures, {fleet.merchants_with_critical} critical, "
        f"{fleet.total_calls_at_risk} calls at risk"
    )

    output_dir = Path(args.output_dir).resolve()
    output_dir.mkdir(parents=True, exist_ok=True)
    if args.format in ("json", "both"):
        out_json = output_dir / "fleet_scan.json"
        _write_json(batch, out_json)
        print(f"Wrote {out_json}")
    if args.format in ("markdown", "both"):
        out_md = output_dir / "fleet_scan.md"
        _write_markdown(batch, out_md)
        print(f"Wrote {out_md}")

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
