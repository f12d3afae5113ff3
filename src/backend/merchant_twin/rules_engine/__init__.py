"""Diagnostic rules engine for merchant self-service actions.

This package contains only domain logic:
- Rule inputs are immutable merchant snapshots.
- No network, storage, or reasoning-model calls live here.
"""

from .config import EngineConfig, EscalationConfig
from .engine import default_runner, evaluate, rule_catalog, scan_all, scan_batch, summarize
from .fleet import FleetScanner
from .models import (
    ActionRisk,
    BatchResult,
    EvaluationResult,
    Failure,
    FleetStats,
    MerchantScan,
    MerchantSummary,
    RuleDefinition,
    RuleStatus,
    Severity,
    TopFailure,
)
from .registry import RuleCatalog, RuleRegistry, register_rule, registry
from .runner import RulesRunner

# Import built-in rules so they self-register with the global registry.
from . import rules as _builtin_rules  # noqa: F401
