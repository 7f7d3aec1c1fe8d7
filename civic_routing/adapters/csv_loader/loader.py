"""CSV loader — reads the routing catalog files."""

from __future__ import annotations

import csv
import logging
from pathlib import Path

from civic_routing.adapters.csv_loader.normalizer import (
    clean_string,
    normalize_column_name,
    parse_bool,
)

logger = logging.getLogger(__name__)


def _sniff_dialect(sample: str) -> type[csv.Dialect]:
    """Detect the delimiter (comma/semicolon/tab) from the header line."""
    if not sample:
        return csv.excel

    first_line = sample.splitlines()[0]
    delims = [";", ",", "\t"]
    counts = {d: first_line.count(d) for d in delims}
    best_delim = max(counts, key=counts.get)

    if counts[best_delim] > 0:
        class DynamicDialect(csv.excel):
            delimiter = best_delim
        return DynamicDialect
    return csv.excel


def _read_csv(file_path: Path, encoding: str = "utf-8-sig") -> list[dict[str, str | None]]:
    """Read a CSV file with BOM handling and column normalization.

    Args:
        file_path: path to the CSV file.
        encoding: file encoding (utf-8-sig strips BOM automatically).

    Returns:
        List of dicts with normalized column names.
    """
    with open(file_path, encoding=encoding, newline="") as f:
        sample = f.read(4096)
        f.seek(0)
        reader = csv.DictReader(f, dialect=_sniff_dialect(sample))
        if reader.fieldnames is None:
            raise ValueError(f"CSV file {file_path} has no header row")

        col_map = {col: normalize_column_name(col) for col in reader.fieldnames}
        rows = []
        for raw_row in reader:
            row = {col_map[k]: clean_string(v) for k, v in raw_row.items() if k is not None}
            if any(row.values()):
                rows.append(row)

    logger.info("Loaded %d rows from %s (columns: %s)", len(rows), file_path.name, list(col_map.values()))
    return rows


def load_cities(file_path: Path) -> list[dict]:
    """Columns: name, state."""
    cities = [
        {"name": row.get("name") or row.get("city") or "", "state": row.get("state")}
        for row in _read_csv(file_path)
    ]
    logger.info("Parsed %d cities", len(cities))
    return cities


def load_issue_categories(file_path: Path) -> list[dict]:
    """Columns: name, slug."""
    categories = []
    for row in _read_csv(file_path):
        name = row.get("name") or row.get("category") or ""
        slug = row.get("slug") or name.lower().replace(" ", "-")
        categories.append({"name": name, "slug": slug})
    logger.info("Parsed %d issue categories", len(categories))
    return categories


def load_authorities(file_path: Path) -> list[dict]:
    """Load and normalize the authorities CSV.

    Expected columns (after normalization):
        name, city, region, address, active
    A missing ``active`` column means every authority is active.
    """
    authorities = []
    for row in _read_csv(file_path):
        authorities.append({
            "name": row.get("name") or row.get("authority") or "",
            "city_name": row.get("city") or row.get("city_name") or "",
            "region": row.get("region") or row.get("zone") or "",
            "address": row.get("address"),
            "is_active": parse_bool(row.get("active") or row.get("is_active")),
        })
    logger.info("Parsed %d authorities", len(authorities))
    return authorities


def load_authority_categories(file_path: Path) -> list[dict]:
    """Columns: authority (name), category (name).

    Rows are mappings, one (authority, category) pair each.
    """
    mappings = []
    for row in _read_csv(file_path):
        mappings.append({
            "authority_name": row.get("authority") or row.get("authority_name") or "",
            "category_name": row.get("category") or row.get("issue_category") or "",
            "city_name": row.get("city"),
        })
    logger.info("Parsed %d authority-category mappings", len(mappings))
    return mappings
