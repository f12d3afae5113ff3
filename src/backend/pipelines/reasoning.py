"""Data hand-off to an external reasoning collaborator.

The collaborator (a language model, an analyst tool, ...) receives the shapes
built here and returns free-form text. Nothing in the diagnostic core reads
its output back.
"""

from __future__ import annotations

from typing import Any, List, Mapping, Optional, Protocol, Union

from pydantic import BaseModel, ConfigDict, Field

from merchant_twin.rules_engine.models import BatchResult, EvaluationResult, Failure, RuleDefinition
from merchant_twin.rules_engine.runner import RulesRunner
from merchant_twin.twin.health import (
    ContactPrediction,
    RiskTier,
    SensorHealth,
    contact_probability,
    risk_tier,
    sensor_health,
)
from merchant_twin.twin.schema import PIN_LOCK_THRESHOLD, Merchant, ensure_valid, format_kes


class ReasoningRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    merchant: Merchant
    health: SensorHealth
    tier: RiskTier
    contact: ContactPrediction
    failures: List[Failure] = Field(default_factory=list)
    action_key: Optional[str] = None
    rule: Optional[RuleDefinition] = None
    last_result: Optional[EvaluationResult] = None


def build_reasoning_request(
    merchant: Union[Merchant, Mapping[str, Any]],
    failures: Optional[List[Failure]] = None,
    action_key: Optional[str] = None,
    last_result: Optional[EvaluationResult] = None,
    runner: Optional[RulesRunner] = None,
) -> ReasoningRequest:
    """Assemble everything a collaborator needs about one merchant.

    `failures` defaults to a fresh `scan_all`. An `action_key` is checked
    against the catalog, so unknown keys raise `UnknownActionError` here
    rather than inside the collaborator.
    """
    snapshot = ensure_valid(merchant)
    runner = runner or RulesRunner()
    rule = runner.catalog.definition(action_key) if action_key is not None else None
    return ReasoningRequest(
        merchant=snapshot,
        health=sensor_health(snapshot),
        tier=risk_tier(snapshot),
        contact=contact_probability(snapshot),
        failures=list(failures) if failures is not None else runner.scan_all(snapshot),
        action_key=action_key,
        rule=rule,
        last_result=last_result,
    )


def render_merchant_context(request: ReasoningRequest) -> str:
    m = request.merchant
    health = request.health
    sim_line = m.sim_status.value
    if m.sim_swap_days_ago is not None:
        sim_line += f" (swapped {m.sim_swap_days_ago} days ago)"

    lines = [
        "MERCHANT PROFILE:",
        f"  Name: {m.display_name}",
        f"  Business: {m.business_name} ({m.business_category})",
        f"  Paybill: {m.paybill}",
        f"  Phone: {m.phone_number}",
        f"  County: {m.county}",
        f"  Bank: {m.bank}, {m.bank_account_name}",
        f"  Balance: {format_kes(m.balance)}",
        f"  Risk Tier: {request.tier.value}",
        f"  Contact Probability: {request.contact.score}% ({request.contact.tier})",
        "",
        "LIVE SENSOR STATE:",
        f"  account_status: {m.account_status.value}",
        f"  kyc_status: {m.kyc_status.value} (age: {m.kyc_age_days} days)",
        f"  sim_status: {sim_line}",
        f"  pin_attempts: {m.pin_attempts}/{PIN_LOCK_THRESHOLD} | pin_locked: {str(m.pin_locked).lower()}",
        f"  start_key_status: {m.start_key_status.value}",
        f"  dormant_days: {m.dormant_days}",
        f"  operator_dormant_days: {m.operator_dormant_days}",
        f"  notifications_enabled: {str(m.notifications_enabled).lower()}",
        f"  settlement_on_hold: {str(m.settlement_on_hold).lower()}",
        "",
        "SENSOR HEALTH:",
        f"  Red sensors: {', '.join(health.red) or 'none'}",
        f"  Amber sensors: {', '.join(health.amber) or 'none'}",
        f"  Green sensors: {len(health.green)} of {health.total}",
        "",
        f"DETECTED FAILURES ({len(request.failures)}):",
    ]
    if request.failures:
        for f in request.failures:
            severity = f.severity.value.upper() if f.severity is not None else "UNKNOWN"
            lines.append(f"  [{severity}] {f.action_label}: {f.code}: {f.inline}")
    else:
        lines.append("  None")

    if request.rule is not None:
        lines += ["", f"TRIGGERED ACTION: {request.rule.label} ({request.rule.action_key})"]
        lines.append(f"  Path: {request.rule.menu_path} | USSD: {request.rule.ussd_path}")
        if request.last_result is not None:
            lines.append(f"  Last result: {request.last_result.status.value} {request.last_result.code}")
    return "\n".join(lines)


class ReasoningCollaborator(Protocol):
    def analyze(self, request: ReasoningRequest) -> str:
        """Narrate the merchant's compound failures and likely root cause."""
        ...

    def fleet_insight(self, batch: BatchResult) -> str:
        """Summarize fleet health for an operations manager."""
        ...

    def intervention_sms(self, merchant: Merchant, failure: Failure) -> str:
        """Draft a proactive SMS for the merchant's top failure."""
        ...

    def agent_briefing(self, request: ReasoningRequest) -> str:
        """Prepare contact-centre briefing notes."""
        ...
