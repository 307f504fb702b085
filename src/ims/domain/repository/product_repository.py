"""Abstract repository for the Product aggregate."""

from __future__ import annotations

from ims.domain.model.product import Product
from ims.domain.repository.entity_store import EntityStore


class ProductRepository(EntityStore[Product]):
    """Products, with bundle components resolved to live product objects.

    Within one ``list_all()`` call every reference to the same product id
    is the same object, so stock changes made through a bundle are seen
    by every other holder of that component.
    """
