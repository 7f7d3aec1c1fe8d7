"""Tests for CSV loader functions."""

import csv
import tempfile
from pathlib import Path

import pytest

from civic_routing.adapters.csv_loader.loader import (
    load_authorities,
    load_authority_categories,
    load_cities,
    load_issue_categories,
)


def _write_csv(rows: list[dict], path: Path, encoding: str = "utf-8-sig") -> None:
    """Helper to write a test CSV file."""
    if not rows:
        return
    with open(path, "w", encoding=encoding, newline="") as f:
        writer = csv.DictWriter(f, fieldnames=rows[0].keys())
        writer.writeheader()
        writer.writerows(rows)


def test_load_cities_basic():
    with tempfile.TemporaryDirectory() as tmpdir:
        csv_path = Path(tmpdir) / "cities.csv"
        _write_csv([
            {"Name": "Springfield", "State": "IL"},
            {"Name": "Shelbyville", "State": ""},
        ], csv_path)

        cities = load_cities(csv_path)
        assert cities == [
            {"name": "Springfield", "state": "IL"},
            {"name": "Shelbyville", "state": None},
        ]


def test_load_issue_categories_derives_slug():
    with tempfile.TemporaryDirectory() as tmpdir:
        csv_path = Path(tmpdir) / "issue_categories.csv"
        _write_csv([
            {"Category": "Pot Holes", "Slug": ""},
            {"Category": "Street Lights", "Slug": "lights"},
        ], csv_path)

        categories = load_issue_categories(csv_path)
        assert categories[0] == {"name": "Pot Holes", "slug": "pot-holes"}
        assert categories[1]["slug"] == "lights"


def test_load_authorities_basic():
    with tempfile.TemporaryDirectory() as tmpdir:
        csv_path = Path(tmpdir) / "authorities.csv"
        _write_csv([
            {"Name": "Roads North", "City": "Springfield", "Region": "Zone 1", "Address": "1 Main St", "Active": "yes"},
            {"Name": "Roads South", "City": "Springfield", "Region": "Zone 2", "Address": "", "Active": "no"},
        ], csv_path)

        authorities = load_authorities(csv_path)
        assert len(authorities) == 2
        assert authorities[0] == {
            "name": "Roads North",
            "city_name": "Springfield",
            "region": "Zone 1",
            "address": "1 Main St",
            "is_active": True,
        }
        assert authorities[1]["is_active"] is False
        assert authorities[1]["address"] is None


def test_load_authorities_without_active_column():
    with tempfile.TemporaryDirectory() as tmpdir:
        csv_path = Path(tmpdir) / "authorities.csv"
        _write_csv([{"Authority": "Parks", "City Name": "Springfield", "Zone": "Central"}], csv_path)

        [authority] = load_authorities(csv_path)
        assert authority["name"] == "Parks"
        assert authority["city_name"] == "Springfield"
        assert authority["region"] == "Central"
        assert authority["is_active"] is True


def test_load_authorities_bad_flag_raises():
    with tempfile.TemporaryDirectory() as tmpdir:
        csv_path = Path(tmpdir) / "authorities.csv"
        _write_csv([{"Name": "Parks", "City": "Springfield", "Region": "Central", "Active": "perhaps"}], csv_path)

        with pytest.raises(ValueError):
            load_authorities(csv_path)


def test_load_authority_categories():
    with tempfile.TemporaryDirectory() as tmpdir:
        csv_path = Path(tmpdir) / "authority_categories.csv"
        _write_csv([
            {"Authority": "Roads North", "Category": "Pot Holes", "City": "Springfield"},
            {"Authority": "Parks", "Category": "Fallen Trees", "City": ""},
        ], csv_path)

        mappings = load_authority_categories(csv_path)
        assert mappings[0] == {
            "authority_name": "Roads North",
            "category_name": "Pot Holes",
            "city_name": "Springfield",
        }
        assert mappings[1]["city_name"] is None


def test_semicolon_delimiter_sniffing():
    with tempfile.TemporaryDirectory() as tmpdir:
        csv_path = Path(tmpdir) / "authorities.csv"
        with open(csv_path, "w", encoding="utf-8-sig", newline="") as f:
            f.write("Name;City;Region;Active\n")
            f.write("Water Board;Springfield;Zone 1, East;1\n")

        [authority] = load_authorities(csv_path)
        assert authority["name"] == "Water Board"
        assert authority["region"] == "Zone 1, East"


def test_blank_rows_are_skipped():
    with tempfile.TemporaryDirectory() as tmpdir:
        csv_path = Path(tmpdir) / "cities.csv"
        with open(csv_path, "w", encoding="utf-8", newline="") as f:
            f.write("Name,State\n")
            f.write("Springfield,IL\n")
            f.write(" , \n")
            f.write("Ogdenville,\n")

        cities = load_cities(csv_path)
        assert [c["name"] for c in cities] == ["Springfield", "Ogdenville"]


def test_load_with_bom_and_trailing_spaces():
    """CSV with BOM encoding and trailing spaces in column names."""
    with tempfile.TemporaryDirectory() as tmpdir:
        csv_path = Path(tmpdir) / "cities.csv"
        with open(csv_path, "w", encoding="utf-8-sig", newline="") as f:
            f.write("Name  ,State \n")
            f.write("Springfield,IL\n")

        cities = load_cities(csv_path)
        assert cities[0]["name"] == "Springfield"
        assert cities[0]["state"] == "IL"


def test_empty_file_raises():
    with tempfile.TemporaryDirectory() as tmpdir:
        csv_path = Path(tmpdir) / "cities.csv"
        csv_path.write_text("", encoding="utf-8")

        with pytest.raises(ValueError):
            load_cities(csv_path)
