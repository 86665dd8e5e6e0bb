"""Tests for the supplier CSV loader."""

import csv
import tempfile
from pathlib import Path

import pytest

from assignflow.adapters.csv_loader.loader import load_suppliers


def _write_csv(rows: list[dict], path: Path, delimiter: str = ",", encoding: str = "utf-8-sig") -> None:
    """Helper to write a test CSV file."""
    with open(path, "w", encoding=encoding, newline="") as f:
        writer = csv.DictWriter(f, fieldnames=rows[0].keys(), delimiter=delimiter)
        writer.writeheader()
        writer.writerows(rows)


def test_load_suppliers_basic():
    with tempfile.TemporaryDirectory() as tmpdir:
        csv_path = Path(tmpdir) / "suppliers.csv"
        _write_csv([
            {"ID": "sup_1", "Company Name": "Gulf Parts Co.", "Contact Name": "Omar", "Is Active": "yes"},
            {"ID": "sup_2", "Company Name": "Desert Motors", "Contact Name": "", "Is Active": "no"},
        ], csv_path)

        suppliers = load_suppliers(csv_path)
        assert len(suppliers) == 2
        assert suppliers[0] == {
            "id": "sup_1", "company_name": "Gulf Parts Co.", "contact_name": "Omar", "is_active": True,
        }
        assert suppliers[1]["contact_name"] is None
        assert suppliers[1]["is_active"] is False


def test_load_suppliers_semicolon_and_arabic_headers():
    with tempfile.TemporaryDirectory() as tmpdir:
        csv_path = Path(tmpdir) / "الموردين.csv"
        _write_csv([
            {"id": "sup_9", "اسم الشركة": "الأمل لقطع الغيار"},
        ], csv_path, delimiter=";")

        suppliers = load_suppliers(csv_path)
        assert suppliers[0]["company_name"] == "الأمل لقطع الغيار"
        assert suppliers[0]["is_active"] is True


def test_load_suppliers_skips_incomplete_rows():
    with tempfile.TemporaryDirectory() as tmpdir:
        csv_path = Path(tmpdir) / "suppliers.csv"
        _write_csv([
            {"id": "", "company_name": "No Id Ltd"},
            {"id": "sup_3", "company_name": "  "},
            {"id": "sup_4", "company_name": "Kept"},
        ], csv_path)

        assert [s["id"] for s in load_suppliers(csv_path)] == ["sup_4"]


def test_load_suppliers_empty_file():
    with tempfile.TemporaryDirectory() as tmpdir:
        csv_path = Path(tmpdir) / "suppliers.csv"
        csv_path.write_text("", encoding="utf-8")
        with pytest.raises(ValueError):
            load_suppliers(csv_path)
