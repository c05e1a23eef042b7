from __future__ import annotations

from decimal import Decimal
from typing import Final

D = Decimal

CASE_TYPE_FTPR: Final = "FTPR"

# First entry is the sentinel: no special notice required for that program.
SUBSIDY_TYPES: Final[tuple[str, ...]] = (
    "Housing Choice Voucher Program (Section 8)",
    "Housing Assistance Program (HAP)",
    "Project-Based Rental Assistance",
    "Section 202/162 Project Assistance Contract (PAC)",
    "Section 202 Project Rental Assistance Program (PRAC)",
    "Section 811 PRAC",
    "Section 811 Project Rental Assistance (PRA)",
    "Senior Preservation Rental Assistance Contracts (SPRAC)",
)
DEFAULT_SUBSIDY_TYPE: Final = SUBSIDY_TYPES[0]

# Flat discount for accounts carrying any referral code
REFERRAL_DISCOUNT: Final = D("5.00")

MIN_EVICTION_LEAD_DAYS: Final = 17
REDEMPTION_CAP_MONTHS: Final = 12

MONEY_QUANT: Final = D("0.01")

# Tenant/property/landlord ids are opaque catalog keys: trimmed, non-blank, bounded
ID_MAX_LENGTH: Final = 64

FLAG_TRUE_STRINGS: Final = frozenset({"true", "yes", "1"})
FLAG_FALSE_STRINGS: Final = frozenset({"false", "no", "0"})
