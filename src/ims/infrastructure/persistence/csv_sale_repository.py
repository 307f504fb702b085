"""Flat-file implementation of SaleRepository.

Two append-only files:
- ``sales.csv``     : headers (``id;timestamp``)
- ``sale_lines.csv``: lines (``sale_id;product_id;quantity;unit_price``)

There is no transaction across the two files: if the line append fails
the header is already written.  Readers skip headers without lines.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal, InvalidOperation
from pathlib import Path

from ims.domain.exceptions import DomainException, UnsupportedOperationError
from ims.domain.model.sale import Sale
from ims.domain.model.value_objects import Money, require_positive
from ims.domain.repository.sale_repository import (
    SaleHeader,
    SaleLineRecord,
    SaleRepository,
)
from ims.infrastructure.persistence.delimited_file import DelimitedFile

HEADER_COLUMNS = ("id", "timestamp")
LINE_COLUMNS = ("sale_id", "product_id", "quantity", "unit_price")


class CsvSaleRepository(SaleRepository):

    def __init__(self, data_dir: Path) -> None:
        self._headers = DelimitedFile(data_dir / "sales.csv", HEADER_COLUMNS)
        self._lines = DelimitedFile(data_dir / "sale_lines.csv", LINE_COLUMNS)
        self._headers.ensure()
        self._lines.ensure()

    # --- SaleRepository interface ---------------------------------------------

    def list_headers(self) -> list[SaleHeader]:
        headers = []
        for number, row in self._headers.read_rows():
            if len(row) < len(HEADER_COLUMNS):
                self._headers.skip(number, "expected id;timestamp")
                continue
            try:
                headers.append(SaleHeader(id=row[0], timestamp=datetime.fromisoformat(row[1])))
            except ValueError as exc:
                self._headers.skip(number, f"invalid timestamp {row[1]!r} ({exc})")
        return headers

    def get_header(self, sale_id: str) -> SaleHeader | None:
        for header in self.list_headers():
            if header.id == sale_id:
                return header
        return None

    def lines_for(self, sale_id: str) -> list[SaleLineRecord]:
        return [r for r in self.list_lines() if r.sale_id == sale_id]

    def list_lines(self) -> list[SaleLineRecord]:
        records = []
        for number, row in self._lines.read_rows():
            if len(row) < len(LINE_COLUMNS):
                self._lines.skip(number, "expected sale_id;product_id;quantity;unit_price")
                continue
            try:
                records.append(
                    SaleLineRecord(
                        sale_id=row[0],
                        product_id=row[1],
                        quantity=require_positive(int(row[2])),
                        unit_price=Money(Decimal(row[3])),
                    )
                )
            except (ValueError, InvalidOperation, DomainException) as exc:
                self._lines.skip(number, str(exc))
        return records

    def save(self, sale: Sale) -> None:
        self._headers.append([[sale.id, sale.timestamp.isoformat()]])
        self._lines.append(
            [
                sale.id,
                line.product.id,
                str(line.quantity),
                line.unit_price.to_plain_string(),
            ]
            for line in sale.lines
        )

    def delete(self, sale_id: str) -> None:
        raise UnsupportedOperationError("Sales are append-only and cannot be deleted")
