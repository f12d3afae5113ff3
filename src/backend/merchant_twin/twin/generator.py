"""Weighted-random merchant generator for stress tests and demo fleets.

Distributions follow the Oct-Dec 2025 call-centre mix: most merchants are
active and healthy, a minority carry compounding failures. All randomness goes
through one `random.Random` so a seed reproduces the same fleet.
"""

from __future__ import annotations

import logging
import random
import string
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, TypeVar

from .schema import PIN_LOCK_THRESHOLD, Merchant, SimStatus

logger = logging.getLogger(__name__)

T = TypeVar("T")

FIRST_NAMES = (
    "Wanjiru", "Otieno", "Mwangi", "Achieng", "Kamau", "Njeri", "Omondi", "Mutua", "Chebet", "Wairimu",
    "Kiptoo", "Auma", "Karanja", "Adhiambo", "Ndung'u", "Moraa", "Kiprotich", "Nyambura", "Odhiambo", "Gathoni",
)
LAST_NAMES = (
    "Njoroge", "Kamau", "Odhiambo", "Rotich", "Waweru", "Kariuki", "Otieno", "Muthoni", "Koech", "Kimani",
    "Akinyi", "Wekesa", "Gichuki", "Simiyu", "Muigai", "Jeptoo", "Muriithi", "Onyango", "Barasa", "Kinyua",
)
BUSINESSES = (
    "Supermarket", "Hardware", "Pharmacy", "Electronics", "Salon", "Boutique", "Bookshop", "Restaurant",
    "Bakery", "Chemist", "Agrovet", "Butchery", "Cybercafe", "M-PESA Agent", "Stationery",
)
COUNTIES = ("Nairobi", "Mombasa", "Kisumu", "Nakuru", "Eldoret", "Thika", "Kiambu", "Machakos", "Nyeri", "Meru")
BANKS = (
    "Equity Bank", "KCB Bank", "Cooperative Bank", "NCBA Bank", "Absa Bank", "Standard Chartered",
    "DTB Bank", "Family Bank", "Prime Bank",
)

_APPLICATION_STATUS = {"active": "approved", "suspended": "suspended", "frozen": "frozen"}


class MerchantGenerator:
    def __init__(
        self,
        seed: Optional[int] = None,
        *,
        rng: Optional[random.Random] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        if rng is not None and seed is not None:
            raise ValueError("Pass either seed or rng, not both")
        self._rng = rng if rng is not None else random.Random(seed)
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    def _int(self, low: int, high: int) -> int:
        return self._rng.randint(low, high)

    def _choice(self, options: Sequence[T]) -> T:
        return options[self._rng.randrange(len(options))]

    def _weighted(self, options: Sequence[T], weights: Sequence[float]) -> T:
        return self._rng.choices(options, weights=weights, k=1)[0]

    def _weighted_range(self, ranges: Sequence[tuple[int, int]], weights: Sequence[float]) -> int:
        low, high = self._weighted(ranges, weights)
        return self._int(low, high)

    def _sensors(self) -> Dict[str, Any]:
        account_status = self._weighted(("active", "suspended", "frozen"), (0.65, 0.25, 0.10))

        kyc_status = self._weighted(("verified", "pending", "expired"), (0.60, 0.20, 0.20))
        if kyc_status == "expired":
            kyc_age_days = self._int(366, 500)
        elif kyc_status == "pending":
            kyc_age_days = self._int(1, 30)
        else:
            kyc_age_days = self._int(30, 364)

        sim_status = self._weighted(("active", "swapped", "unregistered"), (0.75, 0.20, 0.05))
        sim_swap_days_ago = self._int(1, 60) if sim_status == "swapped" else None

        pin_attempts = self._weighted((0, 1, 2, 3), (0.55, 0.20, 0.15, 0.10))
        start_key_status = self._weighted(("valid", "invalid", "expired"), (0.65, 0.20, 0.15))

        dormant_days = self._weighted_range(((0, 29), (30, 59), (60, 89), (90, 150)), (0.55, 0.20, 0.15, 0.10))
        operator_dormant_days = max(0, dormant_days + self._int(-10, 10))

        balance = self._weighted_range(((0, 0), (100, 5000), (5001, 50000), (50001, 500000)), (0.05, 0.30, 0.45, 0.20))

        notifications_enabled = self._rng.random() > 0.20
        hold_chance = 0.40 if account_status != "active" else 0.90
        settlement_on_hold = self._rng.random() > hold_chance

        return {
            "account_status": account_status,
            "kyc_status": kyc_status,
            "kyc_age_days": kyc_age_days,
            "sim_status": sim_status,
            "sim_swap_days_ago": sim_swap_days_ago,
            "pin_attempts": pin_attempts,
            "pin_locked": pin_attempts >= PIN_LOCK_THRESHOLD,
            "start_key_status": start_key_status,
            "balance": balance,
            "dormant_days": dormant_days,
            "operator_dormant_days": operator_dormant_days,
            "notifications_enabled": notifications_enabled,
            "settlement_on_hold": settlement_on_hold,
        }

    def _profile(self, account_status: str) -> Dict[str, Any]:
        first_name = self._choice(FIRST_NAMES)
        last_name = self._choice(LAST_NAMES)
        business = self._choice(BUSINESSES)
        county = self._choice(COUNTIES)
        suffix = "".join(self._choice(string.ascii_uppercase + string.digits) for _ in range(5))
        return {
            "id": f"GEN-{suffix}",
            "first_name": first_name,
            "middle_name": self._choice(FIRST_NAMES),
            "last_name": last_name,
            "date_of_birth": f"{self._int(1970, 2000)}-{self._int(1, 12):02d}-{self._int(1, 28):02d}",
            "gender": self._choice(("Male", "Female")),
            "document_number": str(self._int(10000000, 99999999)),
            "phone_number": f"07{self._int(10, 99)}{self._int(100000, 999999)}",
            "email": f"{first_name.lower()}.{last_name.lower()}@email.com".replace("'", ""),
            "county": county,
            "city": county,
            "physical_address": f"{county} Town, {county}",
            "postal_address": str(self._int(1, 999)),
            "postal_code": str(self._int(10000, 99999)),
            "business_name": f"{last_name} {business}",
            "business_category": business,
            "business_region": county,
            "paybill": str(self._int(100000, 999999)),
            "kra_pin": f"{self._choice('ABCDE')}{self._int(1000000000, 9999999999)}",
            "certificate_number": f"CRT{self._int(10000, 99999)}",
            "duration": self._weighted(("3 months", "6 months", "12 months"), (0.20, 0.60, 0.20)),
            "application_status": _APPLICATION_STATUS[account_status],
            "bank": self._choice(BANKS),
            "bank_branch": county,
            "bank_branch_code": str(self._int(10000, 99999)),
            "bank_account_name": f"{last_name} {business}",
            "bank_account": str(self._int(1000000000000, 9999999999999)),
            "source_of_funds": "Business income",
            "purpose_of_funds": "Business operations",
            "expected_turnover": f"KES {self._int(50, 2000) * 1000:,}",
        }

    def merchant(self, overrides: Optional[Mapping[str, Any]] = None) -> Merchant:
        overrides = dict(overrides or {})
        sensors = self._sensors()
        record = {**self._profile(sensors["account_status"]), **sensors}
        record.update({"generated": True, "generated_at": self._clock()})
        record.update(overrides)

        # Keep paired sensors consistent when only one half is overridden.
        if "pin_attempts" in overrides and "pin_locked" not in overrides:
            record["pin_locked"] = record["pin_attempts"] >= PIN_LOCK_THRESHOLD
        if "sim_status" in overrides and "sim_swap_days_ago" not in overrides:
            if record["sim_status"] == SimStatus.SWAPPED:
                record["sim_swap_days_ago"] = record["sim_swap_days_ago"] or self._int(1, 60)
            else:
                record["sim_swap_days_ago"] = None
        return Merchant.from_record(record)

    def batch(self, n: int = 10) -> List[Merchant]:
        if not isinstance(n, int) or isinstance(n, bool) or n < 0:
            raise ValueError(f"Batch size must be a non-negative integer, got {n!r}")
        merchants = [self.merchant() for _ in range(n)]
        logger.debug("Generated %d merchant(s)", n)
        return merchants


def generate_merchant(
    overrides: Optional[Mapping[str, Any]] = None,
    *,
    seed: Optional[int] = None,
    rng: Optional[random.Random] = None,
) -> Merchant:
    return MerchantGenerator(seed, rng=rng).merchant(overrides)


def generate_batch(n: int = 10, *, seed: Optional[int] = None) -> List[Merchant]:
    return MerchantGenerator(seed).batch(n)
