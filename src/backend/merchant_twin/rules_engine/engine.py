"""Module-level entry points backed by a shared default runner."""

from __future__ import annotations

from concurrent.futures import Executor
from functools import lru_cache
from typing import Any, Iterable, List, Mapping, Optional, Union

from ..twin.schema import Merchant
from .fleet import FleetScanner
from .models import BatchResult, EvaluationResult, Failure, MerchantSummary, RuleDefinition
from .runner import RulesRunner

MerchantInput = Union[Merchant, Mapping[str, Any]]


@lru_cache(maxsize=1)
def default_runner() -> RulesRunner:
    return RulesRunner()


def evaluate(merchant: MerchantInput, action_key: str) -> EvaluationResult:
    return default_runner().evaluate(merchant, action_key)


def scan_all(merchant: MerchantInput) -> List[Failure]:
    return default_runner().scan_all(merchant)


def summarize(merchant: MerchantInput) -> MerchantSummary:
    return default_runner().summarize(merchant)


def scan_batch(
    merchants: Iterable[MerchantInput],
    *,
    top_n: Optional[int] = None,
    executor: Optional[Executor] = None,
) -> BatchResult:
    return FleetScanner(default_runner()).scan(merchants, top_n=top_n, executor=executor)


def rule_catalog() -> List[RuleDefinition]:
    return default_runner().catalog.definitions()
