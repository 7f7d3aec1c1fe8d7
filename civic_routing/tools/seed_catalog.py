"""Seed the routing catalog from CSV files.

Usage:
    python -m civic_routing.tools.seed_catalog
    python -m civic_routing.tools.seed_catalog --data-dir data
    python -m civic_routing.tools.seed_catalog --drop  # drop existing catalog first

Files (looked up by name hint inside the data directory):
    cities.csv, issue_categories.csv, authorities.csv, authority_categories.csv
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from civic_routing.adapters.csv_loader.loader import (
    load_authorities,
    load_authority_categories,
    load_cities,
    load_issue_categories,
)
from civic_routing.adapters.persistence.database import async_session_factory
from civic_routing.adapters.persistence.models import (
    AuthorityCategoryModel,
    AuthorityModel,
    CityModel,
    IssueCategoryModel,
)
from civic_routing.config import settings

logger = logging.getLogger(__name__)


async def _drop_catalog(session: AsyncSession) -> None:
    """Delete the catalog in FK order. Reports and ledger rows are never touched,
    so this fails if any report still references an authority."""
    for model in [AuthorityCategoryModel, AuthorityModel, IssueCategoryModel, CityModel]:
        await session.execute(delete(model))
    await session.commit()
    logger.info("Dropped existing routing catalog")


async def seed(data_dir: Path, drop: bool = False) -> dict[str, int]:
    """Main seed function. Returns counts of inserted records."""
    counts = {"cities": 0, "issue_categories": 0, "authorities": 0, "mappings": 0}

    city_csv = _find_csv(data_dir, ["cities", "city"])
    category_csv = _find_csv(data_dir, ["issue_categories", "categories", "issues"])
    authority_csv = _find_csv(data_dir, ["authorities"])
    mapping_csv = _find_csv(data_dir, ["authority_categories", "authority_issue", "mappings"])

    for label, path in [
        ("cities", city_csv),
        ("issue categories", category_csv),
        ("authorities", authority_csv),
        ("authority-category mappings", mapping_csv),
    ]:
        if path is None:
            raise FileNotFoundError(f"No {label} CSV found in {data_dir}")

    async with async_session_factory() as session:
        if drop:
            await _drop_catalog(session)

        # 1. Cities
        city_ids: dict[str, int] = {}
        for cd in load_cities(city_csv):
            if not cd["name"]:
                continue
            existing = (
                await session.execute(select(CityModel).where(CityModel.name == cd["name"]))
            ).scalar_one_or_none()
            if existing is None:
                existing = CityModel(name=cd["name"], state=cd["state"])
                session.add(existing)
                await session.flush()
                counts["cities"] += 1
            city_ids[cd["name"].lower()] = existing.id
        await session.commit()

        # 2. Issue categories
        category_ids: dict[str, int] = {}
        for cat in load_issue_categories(category_csv):
            if not cat["name"]:
                continue
            existing = (
                await session.execute(
                    select(IssueCategoryModel).where(IssueCategoryModel.name == cat["name"])
                )
            ).scalar_one_or_none()
            if existing is None:
                existing = IssueCategoryModel(name=cat["name"], slug=cat["slug"])
                session.add(existing)
                await session.flush()
                counts["issue_categories"] += 1
            category_ids[cat["name"].lower()] = existing.id
        await session.commit()

        # 3. Authorities. Insertion follows file order, and ids break the
        # oldest-wins tie between authorities created in one transaction.
        authority_ids: dict[tuple[str, int], int] = {}
        for ad in load_authorities(authority_csv):
            city_id = city_ids.get(ad["city_name"].lower())
            if city_id is None:
                logger.warning(
                    "Authority '%s': city '%s' not found, skipping", ad["name"], ad["city_name"]
                )
                continue
            existing = (
                await session.execute(
                    select(AuthorityModel).where(
                        AuthorityModel.name == ad["name"],
                        AuthorityModel.city_id == city_id,
                    )
                )
            ).scalar_one_or_none()
            if existing is None:
                existing = AuthorityModel(
                    name=ad["name"],
                    city_id=city_id,
                    region=ad["region"],
                    address=ad["address"],
                    is_active=ad["is_active"],
                )
                session.add(existing)
                await session.flush()
                counts["authorities"] += 1
            authority_ids[(ad["name"].lower(), city_id)] = existing.id
        await session.commit()

        # 4. Mappings
        for md in load_authority_categories(mapping_csv):
            category_id = category_ids.get(md["category_name"].lower())
            authority_id = _resolve_authority_id(md, authority_ids, city_ids)
            if category_id is None or authority_id is None:
                logger.warning(
                    "Mapping '%s' → '%s': unknown authority or category, skipping",
                    md["authority_name"], md["category_name"],
                )
                continue
            if await session.get(AuthorityCategoryModel, (authority_id, category_id)):
                continue
            session.add(
                AuthorityCategoryModel(authority_id=authority_id, issue_category_id=category_id)
            )
            counts["mappings"] += 1
        await session.commit()

    logger.info(
        "Seed complete: %d cities, %d categories, %d authorities, %d mappings",
        counts["cities"], counts["issue_categories"], counts["authorities"], counts["mappings"],
    )
    return counts


def _find_csv(data_dir: Path, name_hints: list[str]) -> Path | None:
    """Find a CSV whose file stem equals one of the name hints (in hint order)."""
    files = sorted(data_dir.glob("*.csv"))
    for hint in name_hints:
        for f in files:
            if f.stem.lower() == hint:
                logger.info("Found CSV: %s (matched hint '%s')", f.name, hint)
                return f
    return None


def _resolve_authority_id(
    mapping: dict,
    authority_ids: dict[tuple[str, int], int],
    city_ids: dict[str, int],
) -> int | None:
    """Resolve an authority by name, narrowed by city when the row has one.

    A name shared by authorities in several cities is ambiguous without a city.
    """
    name = mapping["authority_name"].lower()
    if mapping.get("city_name"):
        city_id = city_ids.get(mapping["city_name"].lower())
        return authority_ids.get((name, city_id)) if city_id is not None else None

    matches = [aid for (aname, _), aid in authority_ids.items() if aname == name]
    if len(matches) > 1:
        logger.warning("Authority name '%s' exists in several cities; add a city column", name)
        return None
    return matches[0] if matches else None


def main():
    parser = argparse.ArgumentParser(description="Seed the routing catalog from CSV files")
    parser.add_argument(
        "--data-dir", type=str, default=settings.catalog_data_path,
        help=f"Directory containing CSV files (default: {settings.catalog_data_path})",
    )
    parser.add_argument(
        "--drop", action="store_true",
        help="Drop the existing catalog before seeding",
    )
    args = parser.parse_args()

    logging.basicConfig(level=settings.log_level.upper(), format="%(levelname)s | %(message)s")

    data_dir = Path(args.data_dir)
    if not data_dir.exists():
        logger.error("Data directory not found: %s", data_dir)
        sys.exit(1)

    asyncio.run(seed(data_dir, drop=args.drop))


if __name__ == "__main__":
    main()
