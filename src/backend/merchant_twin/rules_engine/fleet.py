"""Fleet batch scan: a per-merchant map followed by an order-independent reduce."""

from __future__ import annotations

import logging
from collections import Counter
from concurrent.futures import Executor
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Dict, Iterable, List, Mapping, Optional, Set, Union

from ..twin.schema import Merchant, ensure_valid
from .config import EngineConfig
from .models import ActionRisk, BatchResult, FleetStats, MerchantScan, RuleStatus, Severity, TopFailure
from .runner import RulesRunner

logger = logging.getLogger(__name__)

_PCT = Decimal("1")
_CENTS = Decimal("0.01")


def _percent(part: int, whole: int) -> Decimal:
    if whole == 0:
        return Decimal("0")
    return Decimal(part) * 100 / Decimal(whole)


class FleetScanner:
    def __init__(self, runner: Optional[RulesRunner] = None, config: Optional[EngineConfig] = None):
        if runner is not None and config is not None:
            raise ValueError("Pass either a runner or a config, not both; the runner carries its own config")
        self._runner = runner if runner is not None else RulesRunner(config=config)
        self._config = self._runner.config

    def scan(
        self,
        merchants: Iterable[Union[Merchant, Mapping[str, Any]]],
        *,
        top_n: Optional[int] = None,
        executor: Optional[Executor] = None,
    ) -> BatchResult:
        """Scan every merchant and aggregate fleet statistics.

        Supplying an `executor` parallelizes the per-merchant map only; the
        reduce always runs in the caller's thread.
        """
        snapshots = [ensure_valid(m) for m in merchants]
        if executor is not None:
            scans = list(executor.map(self._runner.scan, snapshots))
        else:
            scans = [self._runner.scan(m) for m in snapshots]

        scans.sort(key=lambda s: s.merchant.id)
        limit = self._config.top_failures_limit if top_n is None else top_n
        if limit < 0:
            raise ValueError(f"top_n must be >= 0, got {limit}")

        fleet = self.reduce(scans, top_n=limit)
        logger.info(
            "Fleet scan: %d merchants, %d healthy, %d with critical failures, %d calls at risk",
            fleet.total_merchants,
            fleet.healthy_merchants,
            fleet.merchants_with_critical,
            fleet.total_calls_at_risk,
        )
        return BatchResult(merchant_results=scans, fleet=fleet)

    def reduce(self, scans: List[MerchantScan], *, top_n: int) -> FleetStats:
        total = len(scans)
        occurrences: Counter[str] = Counter()
        merchants_by_code: Dict[str, Set[str]] = {}
        failing_by_action: Counter[str] = Counter()

        stats = FleetStats(total_merchants=total)
        for scan in scans:
            summary = scan.summary
            stats.total_calls_at_risk += summary.calls_at_risk
            if summary.failing == 0:
                stats.healthy_merchants += 1
            else:
                stats.merchants_with_any_failure += 1
            if any(f.status == RuleStatus.FAIL and f.severity == Severity.CRITICAL for f in scan.failures):
                stats.merchants_with_critical += 1

            for failure in scan.failures:
                occurrences[failure.code] += 1
                merchants_by_code.setdefault(failure.code, set()).add(scan.merchant.id)
                if failure.status == RuleStatus.FAIL:
                    failing_by_action[failure.action_key] += 1

        ranked = sorted(occurrences.items(), key=lambda item: (-item[1], item[0]))[:top_n]
        stats.top_failures = [
            TopFailure(
                code=code,
                count=count,
                merchants=len(merchants_by_code[code]),
                pct=int(_percent(len(merchants_by_code[code]), total).quantize(_PCT, rounding=ROUND_HALF_UP)),
            )
            for code, count in ranked
        ]
        stats.action_risk = self._action_risk(failing_by_action, total)
        return stats

    def _action_risk(self, failing_by_action: Counter[str], total: int) -> List[ActionRisk]:
        catalog = self._runner.catalog
        max_demand = catalog.max_demand_total
        rows: List[ActionRisk] = []
        for rule in catalog:
            failing = failing_by_action.get(rule.action_key, 0)
            fail_rate = _percent(failing, total)
            weight = Decimal(rule.demand_total) / Decimal(max_demand) if max_demand else Decimal("0")
            rows.append(
                ActionRisk(
                    action_key=rule.action_key,
                    label=rule.label,
                    demand_rank=rule.demand_rank,
                    demand_total=rule.demand_total,
                    failing_merchants=failing,
                    fail_rate=fail_rate.quantize(_CENTS, rounding=ROUND_HALF_UP),
                    risk_score=(weight * fail_rate).quantize(_CENTS, rounding=ROUND_HALF_UP),
                )
            )
        rows.sort(key=lambda r: (-r.risk_score, r.demand_rank))
        return rows
