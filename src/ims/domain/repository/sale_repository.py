"""Abstract repository for sales.

Sales are stored as independent header and line records.  The store
only hands back those raw records; rebuilding complete ``Sale`` objects
with live products is the job of ``SaleHydrator``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime

from ims.domain.model.sale import Sale
from ims.domain.model.value_objects import Money


@dataclass(frozen=True)
class SaleHeader:
    id: str
    timestamp: datetime


@dataclass(frozen=True)
class SaleLineRecord:
    sale_id: str
    product_id: str
    quantity: int
    unit_price: Money


class SaleRepository(ABC):
    """Append-only log of sales.

    ``save`` never deduplicates: saving the same sale twice records it
    twice, so callers only save freshly created sales.
    """

    @abstractmethod
    def list_headers(self) -> list[SaleHeader]:
        """Return every sale header in insertion order."""

    @abstractmethod
    def get_header(self, sale_id: str) -> SaleHeader | None:
        """Return one header, or None."""

    @abstractmethod
    def lines_for(self, sale_id: str) -> list[SaleLineRecord]:
        """Return the stored lines of one sale in insertion order."""

    @abstractmethod
    def list_lines(self) -> list[SaleLineRecord]:
        """Return every stored line of every sale."""

    @abstractmethod
    def save(self, sale: Sale) -> None:
        """Append the sale header and one line record per sale line."""

    @abstractmethod
    def delete(self, sale_id: str) -> None:
        """Always raises UnsupportedOperationError."""
