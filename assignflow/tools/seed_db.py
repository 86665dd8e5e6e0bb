"""Seed database from CSV files.

Usage:
    python -m assignflow.tools.seed_db
    python -m assignflow.tools.seed_db --data-dir data
    python -m assignflow.tools.seed_db --drop  # drop existing data first
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from collections import Counter
from pathlib import Path

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from assignflow.adapters.csv_loader.loader import load_suppliers
from assignflow.adapters.persistence.database import async_session_factory
from assignflow.adapters.persistence.models import (
    AssignmentAuditModel,
    AssignmentModel,
    SupplierModel,
)
from assignflow.config import settings

logging.basicConfig(level=logging.INFO, format="%(levelname)s | %(message)s")
logger = logging.getLogger(__name__)


async def _drop_data(session: AsyncSession) -> None:
    """Delete all data in FK order."""
    for model in [AssignmentAuditModel, AssignmentModel, SupplierModel]:
        await session.execute(delete(model))
    await session.commit()
    logger.info("Dropped all existing data")


async def seed(data_dir: Path, drop: bool = False) -> dict[str, int]:
    """Seed suppliers. Existing ids are skipped. Returns counts of seeded records."""
    counts = {"suppliers": 0, "skipped": 0}

    supplier_csv = _find_csv(data_dir, ["suppliers", "supplier", "موردين", "الموردين"])
    if not supplier_csv:
        raise FileNotFoundError(
            f"No suppliers CSV found in {data_dir}. Expected something like suppliers.csv"
        )

    async with async_session_factory() as session:
        if drop:
            await _drop_data(session)

        for sd in load_suppliers(supplier_csv):
            if await session.get(SupplierModel, sd["id"]) is not None:
                logger.debug("Supplier '%s' already exists, skipping", sd["id"])
                counts["skipped"] += 1
                continue
            session.add(SupplierModel(**sd))
            counts["suppliers"] += 1

        await session.commit()

    logger.info("Seed complete: %d suppliers (%d skipped)", counts["suppliers"], counts["skipped"])
    return counts


def _find_csv(data_dir: Path, name_hints: list[str]) -> Path | None:
    """Find a CSV file matching any of the name hints."""
    for f in sorted(data_dir.glob("*.csv")):
        fname_lower = f.stem.lower()
        for hint in name_hints:
            if hint in fname_lower:
                logger.info("Found CSV: %s (matched hint '%s')", f.name, hint)
                return f
    return None


async def _verify_data() -> None:
    """Print sanity checks after seeding."""
    async with async_session_factory() as session:
        suppliers = (await session.execute(select(SupplierModel))).scalars().all()
        assignments = (await session.execute(select(AssignmentModel))).scalars().all()

        print(f"\n{'='*50}")
        print("SEED VERIFICATION")
        print(f"{'='*50}")
        print(f"Suppliers:   {len(suppliers)} ({sum(1 for s in suppliers if s.is_active)} active)")
        print(f"Assignments: {len(assignments)}")
        print(f"Status distribution: {dict(Counter(a.status for a in assignments))}")
        print(f"Type distribution:   {dict(Counter(a.request_type for a in assignments))}")
        print(f"{'='*50}\n")


def main():
    parser = argparse.ArgumentParser(description="Seed the assignment database from CSV files")
    parser.add_argument(
        "--data-dir", type=str, default=settings.csv_data_path,
        help=f"Directory containing CSV files (default: {settings.csv_data_path})",
    )
    parser.add_argument(
        "--drop", action="store_true",
        help="Drop existing data before seeding",
    )
    parser.add_argument(
        "--verify-only", action="store_true",
        help="Only run verification, don't seed",
    )
    args = parser.parse_args()

    data_dir = Path(args.data_dir)
    if not args.verify_only and not data_dir.exists():
        logger.error("Data directory not found: %s", data_dir)
        sys.exit(1)

    if args.verify_only:
        asyncio.run(_verify_data())
    else:
        async def run_all():
            await seed(data_dir, drop=args.drop)
            await _verify_data()
        asyncio.run(run_all())


if __name__ == "__main__":
    main()
