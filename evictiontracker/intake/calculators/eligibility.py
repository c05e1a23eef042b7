from __future__ import annotations

from decimal import ROUND_CEILING, Decimal
from typing import Iterable, Optional

from ..domain.models import ExistingCase, Property, PropertyType, Tenant

D = Decimal


def months_owed(amount_owed: D, monthly_rent: Optional[D]) -> Optional[int]:
    """ceil(amount / rent); None when rent is absent or not positive."""
    if monthly_rent is None:
        return None
    rent = D(str(monthly_rent))
    if rent <= 0:
        return None
    return int((D(str(amount_owed)) / rent).to_integral_value(rounding=ROUND_CEILING))


def notice_document_required(
    prop: Property,
    tenant: Tenant,
    *,
    default_subsidy_type: str,
    property_types: Iterable[PropertyType] = (PropertyType.RESIDENTIAL,),
) -> bool:
    return (
        prop.property_type in tuple(property_types)
        and tenant.is_subsidized
        and bool(tenant.subsidy_type)
        and tenant.subsidy_type != default_subsidy_type
    )


def find_open_request(
    cases: Iterable[ExistingCase], tenant_id: str
) -> Optional[ExistingCase]:
    """
    First ledger case that blocks a new request for this tenant:
    not paid, and neither complete nor still a draft.
    """
    for c in cases:
        if c.tenant_id != tenant_id:
            continue
        if not c.is_paid and not c.is_complete and not c.is_draft:
            return c
    return None
