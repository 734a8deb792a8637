"""Tests for catalog lookup, search and the browse listing."""

import pytest
from catalog.product.catalog import Catalog, CatalogQuery, SortOrder
from catalog.product.product import Product
from catalog.product.seed import PRODUCTS, load_default_catalog
from pydantic import ValidationError


class TestLookup:
    def test_list_all_keeps_order(self, catalog):
        assert [p.id for p in catalog.list_all()] == [1, 2, 3, "acc-1"]

    def test_get_by_id(self, catalog):
        assert catalog.get(2).title == "Galaxy A55"

    def test_get_accepts_string_form_of_numeric_id(self, catalog):
        assert catalog.get("2").id == 2

    def test_get_unknown_returns_none(self, catalog):
        assert catalog.get(999) is None

    def test_categories_in_first_seen_order(self, catalog):
        assert catalog.categories() == ("tv", "phone", "appliance", "audio")


class TestSearch:
    def test_case_insensitive_title_match(self, catalog):
        assert [p.id for p in catalog.search("galaxy")] == [2]

    def test_matches_description(self):
        catalog = Catalog([Product(id=1, title="TV", description="Smart 4K", price=1, type="tv")])
        assert len(catalog.search("4k")) == 1

    def test_blank_query_matches_nothing(self, catalog):
        assert catalog.search("   ") == ()


class TestBrowse:
    def test_defaults_return_everything_within_price_range(self, catalog):
        page = catalog.browse()
        assert page.total == 4
        assert page.page == 1
        assert page.total_pages == 1

    def test_filter_by_category(self, catalog):
        page = catalog.browse(CatalogQuery(category="phone"))
        assert [p.id for p in page.items] == [2]

    def test_price_range_is_inclusive(self, catalog):
        page = catalog.browse(CatalogQuery(min_price=10_000, max_price=49_000))
        assert {p.id for p in page.items} == {1, "acc-1"}

    @pytest.mark.parametrize(
        "sort,expected",
        [
            (SortOrder.POPULAR, [1, 2, 3, "acc-1"]),
            (SortOrder.PRICE_LOW, [2, 1, "acc-1", 3]),
            (SortOrder.PRICE_HIGH, [3, "acc-1", 1, 2]),
            (SortOrder.RATING, [3, 1, 2, "acc-1"]),
            (SortOrder.NAME, [3, 2, "acc-1", 1]),
        ],
    )
    def test_sort_orders(self, catalog, sort, expected):
        assert [p.id for p in catalog.browse(CatalogQuery(sort=sort)).items] == expected

    def test_sort_accepts_its_string_value(self, catalog):
        page = catalog.browse(CatalogQuery(sort="price-low"))
        assert page.items[0].id == 2

    def test_pagination(self, catalog):
        page = catalog.browse(CatalogQuery(page=2, page_size=3))
        assert [p.id for p in page.items] == ["acc-1"]
        assert page.total == 4
        assert page.total_pages == 2

    def test_page_past_the_end_is_empty(self, catalog):
        page = catalog.browse(CatalogQuery(page=5, page_size=3))
        assert page.items == ()

    def test_empty_result_has_zero_pages(self, catalog):
        page = catalog.browse(CatalogQuery(category="books"))
        assert page.total == 0
        assert page.total_pages == 0

    def test_page_must_be_positive(self):
        with pytest.raises(ValidationError):
            CatalogQuery(page=0)


class TestSeedCatalog:
    def test_loads_every_seed_product(self):
        catalog = load_default_catalog()
        assert len(catalog) == len(PRODUCTS)

    def test_seed_ids_are_unique(self):
        ids = [p.id for p in load_default_catalog().list_all()]
        assert len(ids) == len(set(ids))

    def test_from_records_validates(self):
        with pytest.raises(ValidationError):
            Catalog.from_records([{"id": 1, "title": "No price", "type": "tv"}])
