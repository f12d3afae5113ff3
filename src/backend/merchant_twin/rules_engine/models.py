from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, computed_field

from ..twin.schema import Merchant


class RuleStatus(str, Enum):
    PASS = "PASS"
    WARN = "WARN"
    FAIL = "FAIL"


class Severity(str, Enum):
    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


@dataclass(frozen=True)
class SeverityOrdering:
    order: Dict[Severity, int]

    @classmethod
    def default(cls) -> "SeverityOrdering":
        # Higher wins.
        return cls(
            order={
                Severity.CRITICAL: 4,
                Severity.HIGH: 3,
                Severity.MEDIUM: 2,
                Severity.LOW: 1,
            }
        )

    def rank(self, severity: Optional[Severity]) -> int:
        if severity is None:
            return 0
        return self.order.get(severity, 0)


class RuleDefinition(BaseModel):
    model_config = ConfigDict(frozen=True)

    action_key: str
    label: str
    demand_rank: int = Field(ge=1)
    demand_total: int = Field(ge=0)
    menu_path: str = ""
    ussd_path: str = ""
    description: str = ""


class EvaluationResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: RuleStatus
    code: str = "OK"
    severity: Optional[Severity] = None
    inline: str = ""
    reason: Optional[str] = None
    fix: Optional[str] = None
    escalation: Optional[str] = None
    demand_rank: Optional[int] = None

    @computed_field  # type: ignore[prop-decorator]
    @property
    def success(self) -> Union[bool, Literal["warn"]]:
        if self.status == RuleStatus.PASS:
            return True
        if self.status == RuleStatus.WARN:
            return "warn"
        return False


class Failure(EvaluationResult):
    """A non-passing result annotated with the rule's display and demand metadata."""

    action_key: str
    action_label: str
    menu_path: str = ""
    ussd_path: str = ""
    demand_rank: int
    demand_total: int


def _zero_by_severity() -> Dict[Severity, int]:
    return {severity: 0 for severity in Severity}


class MerchantSummary(BaseModel):
    merchant_id: str
    total: int = 0
    passing: int = 0
    failing: int = 0
    warnings: int = 0
    by_severity: Dict[Severity, int] = Field(default_factory=_zero_by_severity)
    calls_at_risk: int = 0

    @computed_field  # type: ignore[prop-decorator]
    @property
    def non_passing(self) -> int:
        return self.failing + self.warnings


class MerchantScan(BaseModel):
    merchant: Merchant
    summary: MerchantSummary
    failures: List[Failure] = Field(default_factory=list)


class TopFailure(BaseModel):
    code: str
    count: int
    merchants: int
    pct: int


class ActionRisk(BaseModel):
    action_key: str
    label: str
    demand_rank: int
    demand_total: int
    failing_merchants: int
    fail_rate: Decimal
    risk_score: Decimal


class FleetStats(BaseModel):
    total_merchants: int = 0
    healthy_merchants: int = 0
    merchants_with_any_failure: int = 0
    merchants_with_critical: int = 0
    total_calls_at_risk: int = 0
    top_failures: List[TopFailure] = Field(default_factory=list)
    action_risk: List[ActionRisk] = Field(default_factory=list)


class BatchResult(BaseModel):
    merchant_results: List[MerchantScan] = Field(default_factory=list)
    fleet: FleetStats = Field(default_factory=FleetStats)
