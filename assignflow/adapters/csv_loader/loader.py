"""CSV loader — reads and normalizes supplier data files."""

from __future__ import annotations

import csv
import logging
from pathlib import Path

from assignflow.adapters.csv_loader.normalizer import (
    clean_string,
    normalize_column_name,
    parse_bool,
)

logger = logging.getLogger(__name__)


def _sniff_dialect(sample: str) -> type[csv.Dialect]:
    """Detect the delimiter (comma/semicolon/tab); spreadsheet exports vary."""
    if not sample:
        return csv.excel

    first_line = sample.splitlines()[0]
    counts = {d: first_line.count(d) for d in (";", ",", "\t")}
    best_delim = max(counts, key=counts.get)
    if counts[best_delim] == 0:
        return csv.excel

    class DynamicDialect(csv.excel):
        delimiter = best_delim

    return DynamicDialect


def _read_csv(file_path: Path, encoding: str = "utf-8-sig") -> list[dict[str, str | None]]:
    """Read a CSV file with BOM handling and column normalization.

    Returns one dict per row keyed by normalized column name.
    """
    with open(file_path, encoding=encoding, newline="") as f:
        sample = f.read(4096)
        f.seek(0)
        reader = csv.DictReader(f, dialect=_sniff_dialect(sample))
        if reader.fieldnames is None:
            raise ValueError(f"CSV file {file_path} has no header row")

        col_map = {col: normalize_column_name(col) for col in reader.fieldnames}
        rows = [
            {col_map[k]: clean_string(v) for k, v in raw_row.items() if k is not None}
            for raw_row in reader
        ]

    logger.info("Loaded %d rows from %s (columns: %s)", len(rows), file_path.name, list(col_map.values()))
    return rows


def load_suppliers(file_path: Path) -> list[dict]:
    """Load and normalize the suppliers CSV.

    Expected columns (after normalization):
        id, company_name (or اسم_الشركة / name), contact_name, is_active
    Rows without an id or a company name are skipped.
    """
    suppliers = []
    for line_no, row in enumerate(_read_csv(file_path), start=2):
        supplier_id = row.get("id") or row.get("supplier_id")
        company_name = (
            row.get("company_name")
            or row.get("companyname")
            or row.get("اسم_الشركة")
            or row.get("name")
        )
        if not supplier_id or not company_name:
            logger.warning("%s:%d: missing id or company name, skipping", file_path.name, line_no)
            continue

        suppliers.append({
            "id": supplier_id,
            "company_name": company_name,
            "contact_name": row.get("contact_name") or row.get("contactname") or row.get("contact"),
            "is_active": parse_bool(row.get("is_active") or row.get("active")),
        })
    logger.info("Parsed %d suppliers", len(suppliers))
    return suppliers
