from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Optional, Protocol

from evictiontracker.intake.domain.models import Property, Tenant


class Catalog(Protocol):
    """Read-only tenant/property lookup handed to the intake engine."""

    def get_tenant(self, tenant_id: str) -> Optional[Tenant]: ...
    def get_property(self, property_id: str) -> Optional[Property]: ...


@dataclass(frozen=True)
class InMemoryCatalog:
    tenants: Dict[str, Tenant] = field(default_factory=dict)
    properties: Dict[str, Property] = field(default_factory=dict)

    @classmethod
    def of(cls, tenants=(), properties=()) -> "InMemoryCatalog":
        return cls(
            tenants={t.tenant_id: t for t in tenants},
            properties={p.property_id: p for p in properties},
        )

    def get_tenant(self, tenant_id: str) -> Optional[Tenant]:
        return self.tenants.get(tenant_id)

    def get_property(self, property_id: str) -> Optional[Property]:
        return self.properties.get(property_id)
