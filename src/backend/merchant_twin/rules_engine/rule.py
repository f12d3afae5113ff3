from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from ..twin.schema import Merchant
from .config import EngineConfig
from .context import MessageContext, sim_hold_remaining
from .models import EvaluationResult, RuleDefinition, RuleStatus, Severity
from .predicates import Predicate


@dataclass(frozen=True)
class Check:
    """One blocking condition in a rule's priority chain.

    Message fields are `str.format` templates rendered with `MessageContext`.
    When `hold_days` is set, ``{hold_remaining}`` holds the days left on the
    post-SIM-swap hold.
    """

    code: str
    severity: Severity
    when: Predicate
    inline: str
    reason: str
    fix: str
    status: RuleStatus = RuleStatus.FAIL
    hold_days: Optional[int] = None

    def verdict(self, merchant: Merchant, ctx: MessageContext, *, demand_rank: int, config: EngineConfig) -> EvaluationResult:
        extra = {}
        if self.hold_days is not None:
            extra["hold_remaining"] = sim_hold_remaining(merchant, self.hold_days)
        return EvaluationResult(
            status=self.status,
            code=self.code,
            severity=self.severity,
            inline=ctx.render(self.inline, **extra),
            reason=ctx.render(self.reason, **extra),
            fix=ctx.render(self.fix, **extra),
            escalation=config.escalation.for_outcome(self.status, self.severity),
            # Warnings complete the action, so they carry no call-centre rank.
            demand_rank=demand_rank if self.status == RuleStatus.FAIL else None,
        )


def warn(code: str, severity: Severity, when: Predicate, inline: str, reason: str, fix: str) -> Check:
    return Check(code, severity, when, inline, reason, fix, status=RuleStatus.WARN)


@dataclass(frozen=True)
class PassGate:
    """Short-circuits a rule to a pass before any blocking check runs."""

    when: Predicate
    message: str


class Rule:
    action_key: str
    label: str
    demand_rank: int
    demand_total: int
    menu_path: str = ""
    ussd_path: str = ""
    description: str = ""

    gate: Optional[PassGate] = None
    checks: Tuple[Check, ...] = ()
    success_message: str = ""

    def __init__(self):
        if not getattr(self, "action_key", None):
            raise ValueError("Rule must define action_key")

    @classmethod
    def definition(cls) -> RuleDefinition:
        return RuleDefinition(
            action_key=cls.action_key,
            label=cls.label,
            demand_rank=cls.demand_rank,
            demand_total=cls.demand_total,
            menu_path=cls.menu_path,
            ussd_path=cls.ussd_path,
            description=cls.description,
        )

    def evaluate(self, merchant: Merchant, *, config: Optional[EngineConfig] = None) -> EvaluationResult:
        """Return the first matching blocking check, or a pass."""
        config = config or EngineConfig()
        ctx = MessageContext.for_merchant(merchant)

        if self.gate is not None and self.gate.when(merchant):
            return EvaluationResult(status=RuleStatus.PASS, inline=ctx.render(self.gate.message))

        for check in self.checks:
            if check.when(merchant):
                return check.verdict(merchant, ctx, demand_rank=self.demand_rank, config=config)

        return EvaluationResult(status=RuleStatus.PASS, inline=ctx.render(self.success_message))
