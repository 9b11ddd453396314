"""Tests for catalog loading and product search."""

import json

from frioger_bot.tools.catalog import CatalogIndex, load_catalog, parse_catalog
from tests.conftest import SAMPLE_CATALOG


class TestFindProduct:
    def test_matches_name(self, catalog):
        match = catalog.find_product("Split")
        assert match is not None
        assert match.name == "Split Midea 12.000 BTUs"
        assert match.category == "Climatização"
        assert match.sub == "Splits"

    def test_matches_description(self, catalog):
        match = catalog.find_product("frigobar")
        assert match is not None
        assert match.name == "Geladeira Compacta 120L"

    def test_matches_spec(self, catalog):
        match = catalog.find_product("r-32")
        assert match is not None
        assert match.name == "Split Midea 12.000 BTUs"

    def test_accent_and_case_insensitive(self, catalog):
        match = catalog.find_product("GAS R-32")
        assert match is not None
        assert match.name == "Split Midea 12.000 BTUs"

    def test_first_match_in_catalog_order(self, catalog):
        match = catalog.find_product("geladeira")
        assert match is not None
        assert match.name == "Geladeira Frost Free 480L"

    def test_short_query_returns_none(self, catalog):
        assert catalog.find_product("ge") is None
        assert catalog.find_product("1") is None

    def test_three_characters_is_enough(self, catalog):
        assert catalog.find_product("sp") is None
        assert catalog.find_product("spl") is not None

    def test_empty_query_returns_none(self, catalog):
        assert catalog.find_product("") is None
        assert catalog.find_product(None) is None

    def test_no_match(self, catalog):
        assert catalog.find_product("televisão") is None

    def test_item_without_specs(self, catalog):
        match = catalog.find_product("compacta")
        assert match is not None
        assert match.item.tech_specs is None


class TestCatalogIndex:
    def test_len_counts_items(self, catalog):
        assert len(catalog) == 3

    def test_empty_index(self):
        index = CatalogIndex()
        assert len(index) == 0
        assert index.find_product("geladeira") is None

    def test_pages_preserved_in_order(self, catalog):
        assert [p.title for p in catalog.pages] == ["Refrigeração", "Climatização"]

    def test_page_without_items(self):
        index = parse_catalog([{"title": "Vazia", "sub": ""}])
        assert len(index) == 0


class TestLoadCatalog:
    def test_loads_json_file(self, tmp_path):
        path = tmp_path / "catalog.json"
        path.write_text(json.dumps(SAMPLE_CATALOG), encoding="utf-8")
        index = load_catalog(path)
        assert len(index) == 3
        assert index.find_product("inverter") is not None

    def test_missing_file_gives_empty_index(self, tmp_path):
        index = load_catalog(tmp_path / "missing.json")
        assert len(index) == 0

    def test_invalid_json_gives_empty_index(self, tmp_path):
        path = tmp_path / "catalog.json"
        path.write_text("{not json", encoding="utf-8")
        assert len(load_catalog(path)) == 0

    def test_invalid_shape_gives_empty_index(self, tmp_path):
        path = tmp_path / "catalog.json"
        path.write_text(json.dumps({"title": "not a list"}), encoding="utf-8")
        assert len(load_catalog(path)) == 0
