from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping

from ..twin.schema import Merchant, format_kes

KYC_VALIDITY_DAYS = 365
OPERATOR_LOCK_DAYS = 90


@dataclass(frozen=True)
class MessageContext:
    """Template values available to rule messages.

    Templates use `str.format` fields: any merchant field by name plus the
    derived values computed here (e.g. ``{balance_kes}``, ``{kyc_overdue_days}``).
    """

    values: Mapping[str, Any] = field(default_factory=dict)

    @classmethod
    def for_merchant(cls, merchant: Merchant) -> "MessageContext":
        values: Dict[str, Any] = merchant.model_dump(mode="json")
        values.update(
            balance_kes=format_kes(merchant.balance),
            account_status_upper=str(values["account_status"]).upper(),
            kyc_status_upper=str(values["kyc_status"]).upper(),
            kyc_overdue_days=max(merchant.kyc_age_days - KYC_VALIDITY_DAYS, 0),
            op_days_to_lock=max(OPERATOR_LOCK_DAYS - merchant.operator_dormant_days, 0),
        )
        return cls(values=values)

    def render(self, template: str, **extra: Any) -> str:
        return template.format(**{**self.values, **extra})


def sim_hold_remaining(merchant: Merchant, hold_days: int) -> int:
    if merchant.sim_swap_days_ago is None:
        return 0
    return max(hold_days - merchant.sim_swap_days_ago, 0)
