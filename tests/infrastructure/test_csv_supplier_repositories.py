"""Tests for the flat-file supplier and supplier-assignment repositories."""

import logging

from ims.domain.model.supplier import Supplier
from ims.infrastructure.persistence.csv_supplier_assignment_repository import (
    CsvSupplierAssignmentRepository,
)
from ims.infrastructure.persistence.csv_supplier_repository import CsvSupplierRepository


class TestCsvSupplierRepository:

    def test_round_trip_and_upsert(self, tmp_path):
        repo = CsvSupplierRepository(tmp_path / "suppliers.csv")
        repo.save(Supplier("S1", "Sol", "old@example.com"))
        repo.save(Supplier("S1", "Sol; SRL", "new@example.com"))

        loaded = CsvSupplierRepository(tmp_path / "suppliers.csv").list_all()
        assert loaded == [Supplier("S1", "Sol; SRL", "new@example.com")]

    def test_delete(self, tmp_path):
        repo = CsvSupplierRepository(tmp_path / "suppliers.csv")
        repo.save(Supplier("S1", "Sol", "sol@example.com"))
        repo.delete("S9")
        repo.delete("S1")
        assert repo.get_by_id("S1") is None

    def test_blank_row_fields_skipped(self, tmp_path, caplog):
        path = tmp_path / "suppliers.csv"
        path.write_text("id;name;contact\nS1;;x\nS2;Sur;y\n", encoding="utf-8")
        with caplog.at_level(logging.WARNING):
            assert [s.id for s in CsvSupplierRepository(path).list_all()] == ["S2"]
        assert "Supplier name is required" in caplog.text


class TestCsvSupplierAssignmentRepository:

    def test_assign_persists_last_write(self, tmp_path):
        path = tmp_path / "product_suppliers.csv"
        repo = CsvSupplierAssignmentRepository(path)
        repo.assign("PAN", "S1")
        repo.assign("PAN", "S2")
        repo.assign("LECHE", "S1")

        reloaded = CsvSupplierAssignmentRepository(path)
        assert reloaded.list_all() == {"PAN": "S2", "LECHE": "S1"}
        assert reloaded.supplier_for("PAN") == "S2"

    def test_unassign(self, tmp_path):
        path = tmp_path / "product_suppliers.csv"
        repo = CsvSupplierAssignmentRepository(path)
        repo.assign("PAN", "S1")
        repo.unassign("PAN")
        repo.unassign("PAN")
        assert CsvSupplierAssignmentRepository(path).supplier_for("PAN") is None

    def test_missing_file_is_empty(self, tmp_path):
        repo = CsvSupplierAssignmentRepository(tmp_path / "none.csv")
        assert repo.list_all() == {}

    def test_unreadable_file_degrades_to_empty(self, tmp_path, caplog):
        unreadable = tmp_path / "product_suppliers.csv"
        unreadable.mkdir()
        with caplog.at_level(logging.WARNING):
            repo = CsvSupplierAssignmentRepository(unreadable)
        assert repo.list_all() == {}
        assert "starting empty" in caplog.text
