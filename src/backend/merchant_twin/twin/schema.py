"""Merchant record schema.

Every field mirrors the Short Term Paybill application payload. Fields flagged
as sensors are the live values the twin monitors; rules read nothing else.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from ..errors import InvalidMerchantStateError


class AccountStatus(str, Enum):
    ACTIVE = "active"
    SUSPENDED = "suspended"
    FROZEN = "frozen"


class KycStatus(str, Enum):
    VERIFIED = "verified"
    PENDING = "pending"
    EXPIRED = "expired"


class SimStatus(str, Enum):
    ACTIVE = "active"
    SWAPPED = "swapped"
    UNREGISTERED = "unregistered"


class StartKeyStatus(str, Enum):
    VALID = "valid"
    INVALID = "invalid"
    EXPIRED = "expired"


PIN_LOCK_THRESHOLD = 3


@dataclass(frozen=True)
class FieldSpec:
    type: str
    description: str
    sensor: bool = False
    values: Tuple[str, ...] = ()
    nullable: bool = False


def _values(enum_cls) -> Tuple[str, ...]:
    return tuple(member.value for member in enum_cls)


MERCHANT_SCHEMA: Dict[str, FieldSpec] = {
    # Identity
    "id": FieldSpec("string", "Unique twin ID, e.g. M001"),
    "first_name": FieldSpec("string", "Applicant first name"),
    "middle_name": FieldSpec("string", "Applicant middle name"),
    "last_name": FieldSpec("string", "Applicant last name"),
    "date_of_birth": FieldSpec("string", "ISO date YYYY-MM-DD"),
    "gender": FieldSpec("string", "Male | Female"),
    "nationality": FieldSpec("string", "e.g. Kenyan"),
    "document_type": FieldSpec("string", "National ID | Passport"),
    "document_number": FieldSpec("string", "ID / passport number"),
    # Contact
    "phone_number": FieldSpec("string", "Primary phone, e.g. 0704737162"),
    "email": FieldSpec("string", "Email address"),
    "county": FieldSpec("string", "e.g. Nairobi"),
    "city": FieldSpec("string", "e.g. Nairobi"),
    "physical_address": FieldSpec("string", "e.g. Roysambu, Nairobi"),
    "postal_address": FieldSpec("string", "Box number"),
    "postal_code": FieldSpec("string", "e.g. 00100"),
    # Business
    "business_name": FieldSpec("string", "Registered business name"),
    "business_category": FieldSpec("string", "Retail | Hardware | Services | etc."),
    "business_region": FieldSpec("string", "e.g. Nairobi"),
    "paybill": FieldSpec("string", "M-PESA paybill number"),
    "kra_pin": FieldSpec("string", "KRA PIN e.g. A0098499583"),
    "certificate_number": FieldSpec("string", "Business cert number"),
    "product": FieldSpec("string", "Short Term Paybill | Long Term Paybill"),
    "duration": FieldSpec("string", "e.g. 6 months"),
    "application_status": FieldSpec("string", "approved | pending | suspended | frozen"),
    # Bank
    "bank": FieldSpec("string", "Bank name e.g. Equity Bank"),
    "bank_branch": FieldSpec("string", "Branch name e.g. Kasarani"),
    "bank_branch_code": FieldSpec("string", "Branch code"),
    "bank_account_name": FieldSpec("string", "Account name"),
    "bank_account": FieldSpec("string", "Account number"),
    "source_of_funds": FieldSpec("string", "Business income | Investments | etc."),
    "purpose_of_funds": FieldSpec("string", "Business operations | etc."),
    "expected_turnover": FieldSpec("string", "Monthly turnover estimate"),
    # Sensors
    "account_status": FieldSpec(
        "string", "Current account lifecycle state", sensor=True, values=_values(AccountStatus)
    ),
    "kyc_status": FieldSpec("string", "KYC verification status", sensor=True, values=_values(KycStatus)),
    "kyc_age_days": FieldSpec("integer", "Days since KYC was last verified", sensor=True),
    "sim_status": FieldSpec("string", "SIM card status", sensor=True, values=_values(SimStatus)),
    "sim_swap_days_ago": FieldSpec(
        "integer", "Days since last SIM swap (null = never)", sensor=True, nullable=True
    ),
    "pin_attempts": FieldSpec("integer", "Failed PIN attempts (0-3)", sensor=True),
    "pin_locked": FieldSpec("boolean", "True when PIN locked after 3 attempts", sensor=True),
    "start_key_status": FieldSpec(
        "string", "Merchant start key state", sensor=True, values=_values(StartKeyStatus)
    ),
    "balance": FieldSpec("decimal", "Available paybill balance in KES", sensor=True),
    "dormant_days": FieldSpec("integer", "Days since last transaction", sensor=True),
    "notifications_enabled": FieldSpec("boolean", "SMS/Push notifications active", sensor=True),
    "settlement_on_hold": FieldSpec("boolean", "Manual settlement hold applied", sensor=True),
    "operator_dormant_days": FieldSpec("integer", "Days since operator last used G2 system", sensor=True),
}

SENSOR_FIELDS: Tuple[str, ...] = tuple(name for name, spec in MERCHANT_SCHEMA.items() if spec.sensor)

_ENUM_SENSORS = {
    "account_status": AccountStatus,
    "kyc_status": KycStatus,
    "sim_status": SimStatus,
    "start_key_status": StartKeyStatus,
}
_DAY_COUNTERS = ("kyc_age_days", "dormant_days", "operator_dormant_days")


def _is_count(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value >= 0


def _invalid_record(record: Any, exc: ValidationError) -> InvalidMerchantStateError:
    merchant_id = record.get("id") if isinstance(record, Mapping) else None
    problems = [
        f"{'.'.join(str(part) for part in err['loc']) or 'merchant'}: {err['msg']}"
        for err in exc.errors()
    ]
    return InvalidMerchantStateError(
        f"Invalid merchant record {merchant_id!r}: {'; '.join(problems)}",
        merchant_id=merchant_id,
        problems=problems,
    )


class Merchant(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    first_name: str = ""
    middle_name: str = ""
    last_name: str = ""
    date_of_birth: str = ""
    gender: str = ""
    nationality: str = "Kenyan"
    document_type: str = "National ID"
    document_number: str = ""
    phone_number: str = ""
    email: str = ""
    county: str = ""
    city: str = ""
    physical_address: str = ""
    postal_address: str = ""
    postal_code: str = ""
    business_name: str = ""
    business_category: str = ""
    business_region: str = ""
    paybill: str = ""
    kra_pin: str = ""
    certificate_number: str = ""
    product: str = "Short Term Paybill"
    duration: str = ""
    application_status: str = ""
    bank: str = ""
    bank_branch: str = ""
    bank_branch_code: str = ""
    bank_account_name: str = ""
    bank_account: str = ""
    source_of_funds: str = ""
    purpose_of_funds: str = ""
    expected_turnover: str = ""

    account_status: AccountStatus
    kyc_status: KycStatus
    kyc_age_days: int = Field(ge=0)
    sim_status: SimStatus
    sim_swap_days_ago: Optional[int] = Field(default=None, ge=0)
    pin_attempts: int = Field(ge=0, le=PIN_LOCK_THRESHOLD)
    pin_locked: bool
    start_key_status: StartKeyStatus
    balance: Decimal = Field(ge=0)
    dormant_days: int = Field(ge=0)
    notifications_enabled: bool
    settlement_on_hold: bool
    operator_dormant_days: int = Field(ge=0)

    # Audit tags for diagnostic replay.
    generated: bool = False
    generated_at: Optional[datetime] = None
    last_mutation: Optional[str] = None
    mutated_at: Optional[datetime] = None
    suspend_reason: Optional[str] = None

    def __init__(self, **data: Any):
        try:
            super().__init__(**data)
        except ValidationError as exc:
            raise _invalid_record(data, exc) from exc

    @model_validator(mode="after")
    def _check_invariants(self) -> "Merchant":
        problems = self.invariant_violations()
        if problems:
            raise ValueError("; ".join(problems))
        return self

    def invariant_violations(self) -> List[str]:
        problems: List[str] = []
        for name, enum_cls in _ENUM_SENSORS.items():
            value = getattr(self, name)
            try:
                enum_cls(value)
            except ValueError:
                problems.append(f"{name}={value!r} is not one of {list(_values(enum_cls))}")

        for name in _DAY_COUNTERS:
            if not _is_count(getattr(self, name)):
                problems.append(f"{name} must be a non-negative integer")

        if not _is_count(self.pin_attempts) or self.pin_attempts > PIN_LOCK_THRESHOLD:
            problems.append(f"pin_attempts must be between 0 and {PIN_LOCK_THRESHOLD}")
        elif self.pin_locked != (self.pin_attempts >= PIN_LOCK_THRESHOLD):
            problems.append(
                f"pin_locked={self.pin_locked} disagrees with pin_attempts={self.pin_attempts}"
            )

        if not isinstance(self.balance, Decimal) or self.balance < 0:
            problems.append("balance must be a non-negative amount")

        swapped = self.sim_status == SimStatus.SWAPPED
        if swapped and self.sim_swap_days_ago is None:
            problems.append("sim_swap_days_ago is required when sim_status is 'swapped'")
        elif not swapped and self.sim_swap_days_ago is not None:
            problems.append("sim_swap_days_ago must be null unless sim_status is 'swapped'")
        elif swapped and not _is_count(self.sim_swap_days_ago):
            problems.append("sim_swap_days_ago must be a non-negative integer")
        return problems

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "Merchant":
        """Validate an externally supplied record (generator output, JSON load)."""
        try:
            return cls.model_validate(dict(record))
        except ValidationError as exc:
            raise _invalid_record(record, exc) from exc

    def sensors(self) -> Dict[str, Any]:
        return {name: getattr(self, name) for name in SENSOR_FIELDS}

    @property
    def display_name(self) -> str:
        name = f"{self.first_name} {self.last_name}".strip()
        return name or self.id


def ensure_valid(merchant: Union[Merchant, Mapping[str, Any]]) -> Merchant:
    """Return a validated snapshot or raise `InvalidMerchantStateError`.

    Snapshots built with `model_construct` skip pydantic validation, so the
    invariants are re-checked here before any rule reads them.
    """
    if isinstance(merchant, Merchant):
        problems = merchant.invariant_violations()
        if problems:
            raise InvalidMerchantStateError(
                f"Merchant {merchant.id!r} violates sensor invariants: {'; '.join(problems)}",
                merchant_id=merchant.id,
                problems=problems,
            )
        return merchant
    if isinstance(merchant, Mapping):
        return Merchant.from_record(merchant)
    raise TypeError(f"Expected Merchant or mapping, got {type(merchant).__name__}")


def format_kes(amount: Union[Decimal, int, float, str]) -> str:
    return f"KES {Decimal(str(amount)):,.2f}"
