"""Curated merchant registry.

Five merchants, each representing a distinct failure profile:

- M001: healthy, every sensor green
- M002: multi-failure (suspended, expired KYC, swapped SIM, locked PIN)
- M003: partial, active but KYC pending and PIN near lock
- M004: frozen, dormant, expired start key
- M005: clean active reference merchant
"""

from __future__ import annotations

from typing import Any, Dict, List, Tuple

from .schema import Merchant


_CURATED_RECORDS: List[Dict[str, Any]] = [
    {
        "id": "M001",
        "first_name": "Kevin", "middle_name": "Kithinji", "last_name": "Njoroge",
        "date_of_birth": "1990-03-15", "gender": "Male",
        "document_number": "34521987",
        "phone_number": "0704737162", "email": "kevin.njoroge@email.com",
        "county": "Nairobi", "city": "Nairobi", "physical_address": "Roysambu, Nairobi",
        "postal_address": "110", "postal_code": "00100",
        "business_name": "Njoroge General Store", "business_category": "Retail",
        "business_region": "Nairobi", "paybill": "174379",
        "kra_pin": "A0098499583", "certificate_number": "CRT99593",
        "duration": "6 months", "application_status": "approved",
        "bank": "Equity Bank", "bank_branch": "Kasarani", "bank_branch_code": "93884",
        "bank_account_name": "Njoroge Store", "bank_account": "0110399405862",
        "source_of_funds": "Business income", "purpose_of_funds": "Business operations",
        "expected_turnover": "KES 500,000",
        "account_status": "active", "kyc_status": "verified", "kyc_age_days": 180,
        "sim_status": "active", "sim_swap_days_ago": None,
        "pin_attempts": 0, "pin_locked": False,
        "start_key_status": "valid", "balance": "87450.50",
        "dormant_days": 2, "notifications_enabled": True,
        "settlement_on_hold": False, "operator_dormant_days": 2,
    },
    {
        "id": "M002",
        "first_name": "Amara", "middle_name": "Wanjiku", "last_name": "Kamau",
        "date_of_birth": "1985-07-22", "gender": "Female",
        "document_number": "22145678",
        "phone_number": "0711234567", "email": "amara.kamau@email.com",
        "county": "Kiambu", "city": "Thika", "physical_address": "Thika Town, Kiambu",
        "postal_address": "45", "postal_code": "01000",
        "business_name": "Kamau Hardware & Supplies", "business_category": "Hardware",
        "business_region": "Central", "paybill": "522533",
        "kra_pin": "B0087654321", "certificate_number": "CRT44123",
        "duration": "6 months", "application_status": "suspended",
        "bank": "KCB Bank", "bank_branch": "Thika", "bank_branch_code": "12345",
        "bank_account_name": "Kamau Hardware", "bank_account": "1234567890123",
        "source_of_funds": "Business income", "purpose_of_funds": "Business operations",
        "expected_turnover": "KES 200,000",
        "account_status": "suspended", "kyc_status": "expired", "kyc_age_days": 420,
        "sim_status": "swapped", "sim_swap_days_ago": 5,
        "pin_attempts": 3, "pin_locked": True,
        "start_key_status": "invalid", "balance": "32100.00",
        "dormant_days": 60, "notifications_enabled": False,
        "settlement_on_hold": True, "operator_dormant_days": 62,
    },
    {
        "id": "M003",
        "first_name": "Fatuma", "middle_name": "Akinyi", "last_name": "Odhiambo",
        "date_of_birth": "1993-11-08", "gender": "Female",
        "document_number": "45678901",
        "phone_number": "0722345678", "email": "fatuma.odhiambo@email.com",
        "county": "Kisumu", "city": "Kisumu", "physical_address": "Milimani, Kisumu",
        "postal_address": "88", "postal_code": "40100",
        "business_name": "Fatuma Beauty & Salon", "business_category": "Services",
        "business_region": "Nyanza", "paybill": "700234",
        "kra_pin": "C0076543210", "certificate_number": "CRT77890",
        "duration": "6 months", "application_status": "pending",
        "bank": "Cooperative Bank", "bank_branch": "Kisumu", "bank_branch_code": "44455",
        "bank_account_name": "Fatuma Salon", "bank_account": "9876543210987",
        "source_of_funds": "Business income", "purpose_of_funds": "Salon operations",
        "expected_turnover": "KES 150,000",
        "account_status": "active", "kyc_status": "pending", "kyc_age_days": 15,
        "sim_status": "active", "sim_swap_days_ago": None,
        "pin_attempts": 2, "pin_locked": False,
        "start_key_status": "valid", "balance": "5600.25",
        "dormant_days": 0, "notifications_enabled": True,
        "settlement_on_hold": False, "operator_dormant_days": 0,
    },
    {
        "id": "M004",
        "first_name": "Brian", "middle_name": "Kipchoge", "last_name": "Rotich",
        "date_of_birth": "1988-05-30", "gender": "Male",
        "document_number": "56789012",
        "phone_number": "0733456789", "email": "brian.rotich@email.com",
        "county": "Uasin Gishu", "city": "Eldoret", "physical_address": "Huruma Estate, Eldoret",
        "postal_address": "200", "postal_code": "30100",
        "business_name": "Rotich Electronics Hub", "business_category": "Electronics",
        "business_region": "Rift Valley", "paybill": "303030",
        "kra_pin": "D0065432109", "certificate_number": "CRT55678",
        "duration": "6 months", "application_status": "frozen",
        "bank": "Absa Bank", "bank_branch": "Eldoret", "bank_branch_code": "77766",
        "bank_account_name": "Rotich Electronics", "bank_account": "0987654321098",
        "source_of_funds": "Business income", "purpose_of_funds": "Electronics retail",
        "expected_turnover": "KES 1,200,000",
        "account_status": "frozen", "kyc_status": "verified", "kyc_age_days": 390,
        "sim_status": "active", "sim_swap_days_ago": None,
        "pin_attempts": 0, "pin_locked": False,
        "start_key_status": "expired", "balance": "234500.00",
        "dormant_days": 95, "notifications_enabled": True,
        "settlement_on_hold": True, "operator_dormant_days": 95,
    },
    {
        "id": "M005",
        "first_name": "Grace", "middle_name": "Muthoni", "last_name": "Waweru",
        "date_of_birth": "1995-02-14", "gender": "Female",
        "document_number": "67890123",
        "phone_number": "0744567890", "email": "grace.waweru@email.com",
        "county": "Nakuru", "city": "Nakuru", "physical_address": "Section 58, Nakuru",
        "postal_address": "77", "postal_code": "20100",
        "business_name": "Waweru Fresh Groceries", "business_category": "Grocery",
        "business_region": "Rift Valley", "paybill": "899573",
        "kra_pin": "E0054321098", "certificate_number": "CRT33456",
        "duration": "6 months", "application_status": "approved",
        "bank": "NCBA Bank", "bank_branch": "Nakuru", "bank_branch_code": "55566",
        "bank_account_name": "Waweru Groceries", "bank_account": "1122334455667",
        "source_of_funds": "Business income", "purpose_of_funds": "Grocery operations",
        "expected_turnover": "KES 800,000",
        "account_status": "active", "kyc_status": "verified", "kyc_age_days": 90,
        "sim_status": "active", "sim_swap_days_ago": None,
        "pin_attempts": 0, "pin_locked": False,
        "start_key_status": "valid", "balance": "12300.75",
        "dormant_days": 0, "notifications_enabled": True,
        "settlement_on_hold": False, "operator_dormant_days": 0,
    },
]

_CURATED: Tuple[Merchant, ...] = tuple(Merchant.from_record(record) for record in _CURATED_RECORDS)


def curated_merchants() -> Tuple[Merchant, ...]:
    return _CURATED


def curated_merchant(merchant_id: str) -> Merchant:
    for merchant in _CURATED:
        if merchant.id == merchant_id:
            return merchant
    raise KeyError(f"No curated merchant with id {merchant_id!r}")
