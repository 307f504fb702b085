"""Abstract repository for suppliers."""

from __future__ import annotations

from ims.domain.model.supplier import Supplier
from ims.domain.repository.entity_store import EntityStore


class SupplierRepository(EntityStore[Supplier]):
    pass
