from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional, Union

from ..twin.schema import Merchant, ensure_valid
from .config import EngineConfig
from .models import (
    EvaluationResult,
    Failure,
    MerchantScan,
    MerchantSummary,
    RuleStatus,
    SeverityOrdering,
)
from .registry import RuleCatalog, registry
from .rule import Rule

MerchantInput = Union[Merchant, Mapping[str, Any]]


class RulesRunner:
    """Evaluates one merchant snapshot against the action catalog.

    The runner holds no per-merchant state, so one instance can be shared
    across threads scanning different merchants.
    """

    def __init__(self, catalog: Optional[RuleCatalog] = None, config: Optional[EngineConfig] = None):
        self._catalog = catalog if catalog is not None else registry.create_catalog()
        self._config = config or EngineConfig()
        self._ordering = SeverityOrdering.default()

    @property
    def catalog(self) -> RuleCatalog:
        return self._catalog

    @property
    def config(self) -> EngineConfig:
        return self._config

    def evaluate(self, merchant: MerchantInput, action_key: str) -> EvaluationResult:
        snapshot = ensure_valid(merchant)
        return self._catalog[action_key].evaluate(snapshot, config=self._config)

    def evaluate_all(self, merchant: MerchantInput) -> Dict[str, EvaluationResult]:
        snapshot = ensure_valid(merchant)
        return {rule.action_key: rule.evaluate(snapshot, config=self._config) for rule in self._catalog}

    def scan_all(self, merchant: MerchantInput) -> List[Failure]:
        return self._failures(self.evaluate_all(merchant))

    def summarize(self, merchant: MerchantInput) -> MerchantSummary:
        snapshot = ensure_valid(merchant)
        return self._summary(snapshot, self.evaluate_all(snapshot))

    def scan(self, merchant: MerchantInput) -> MerchantScan:
        snapshot = ensure_valid(merchant)
        results = self.evaluate_all(snapshot)
        return MerchantScan(
            merchant=snapshot,
            summary=self._summary(snapshot, results),
            failures=self._failures(results),
        )

    def _failures(self, results: Dict[str, EvaluationResult]) -> List[Failure]:
        failures = [
            _annotate(self._catalog[action_key], res)
            for action_key, res in results.items()
            if res.status != RuleStatus.PASS
        ]
        failures.sort(key=lambda f: (-self._ordering.rank(f.severity), -f.demand_total, f.demand_rank))
        return failures

    def _summary(self, merchant: Merchant, results: Dict[str, EvaluationResult]) -> MerchantSummary:
        summary = MerchantSummary(merchant_id=merchant.id, total=len(results))
        for action_key, res in results.items():
            if res.status == RuleStatus.PASS:
                summary.passing += 1
                continue
            if res.status == RuleStatus.WARN:
                summary.warnings += 1
            else:
                summary.failing += 1
            if res.severity is not None:
                summary.by_severity[res.severity] += 1
            summary.calls_at_risk += self._catalog[action_key].demand_total
        return summary


def _annotate(rule: Rule, res: EvaluationResult) -> Failure:
    data = res.model_dump(exclude={"success", "demand_rank"})
    return Failure(
        **data,
        action_key=rule.action_key,
        action_label=rule.label,
        menu_path=rule.menu_path,
        ussd_path=rule.ussd_path,
        demand_rank=rule.demand_rank,
        demand_total=rule.demand_total,
    )
