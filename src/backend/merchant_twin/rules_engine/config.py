from __future__ import annotations

from typing import Any, Dict, Optional

from pydantic import BaseModel, Field

from .models import RuleStatus, Severity


class EscalationConfig(BaseModel):
    """Where a human agent sends the merchant for each outcome."""

    critical: str = "Call Safaricom Business: 0722 000 100, available 24/7 for urgent cases"
    high: str = "Call 100 (free) or visit your nearest Safaricom Shop with National ID"
    default: str = "Chat via My Safaricom App > Help, or SMS 'HELP' to 100"
    warning: str = "Chat via My Safaricom App > Help"

    def for_outcome(self, status: RuleStatus, severity: Optional[Severity]) -> Optional[str]:
        if status == RuleStatus.PASS:
            return None
        if status == RuleStatus.WARN:
            return self.warning
        if severity == Severity.CRITICAL:
            return self.critical
        if severity == Severity.HIGH:
            return self.high
        return self.default


class EngineConfig(BaseModel):
    escalation: EscalationConfig = Field(default_factory=EscalationConfig)
    # Number of failure codes reported in the fleet ranking.
    top_failures_limit: int = Field(default=5, ge=0)

    @classmethod
    def from_mapping(cls, raw: Optional[Dict[str, Any]] = None) -> "EngineConfig":
        return cls.model_validate(raw or {})
