"""Supplier value object."""

from __future__ import annotations

from dataclasses import dataclass

from ims.domain.model.value_objects import require_text

PLACEHOLDER_TEXT = "N/A"


@dataclass(frozen=True)
class Supplier:
    """A supplier replenishment orders are sent to.  Immutable."""

    id: str
    name: str
    contact: str

    def __post_init__(self) -> None:
        object.__setattr__(self, "id", require_text(self.id, "Supplier id"))
        object.__setattr__(self, "name", require_text(self.name, "Supplier name"))
        object.__setattr__(self, "contact", require_text(self.contact, "Supplier contact"))

    @staticmethod
    def placeholder(supplier_id: str) -> Supplier:
        """Header-only stand-in until the live supplier is resolved."""
        return Supplier(supplier_id, PLACEHOLDER_TEXT, PLACEHOLDER_TEXT)

