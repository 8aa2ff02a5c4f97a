import pytest

from uniform_app.errors import InvalidInput, ItemNotFound
from uniform_app.models.inventory import SortField, SortOrder, StockFilter, StockLevel
from uniform_app.services.inventory import bulk_restock, query_items, restock_item, summarize
from tests.conftest import add_item


@pytest.fixture
def stocked(store):
    return {
        'shirt_s': add_item(store, 'Shirt', 'S', quantity=0, threshold=5),
        'shirt_m': add_item(store, 'Shirt', 'M', quantity=12, threshold=5),
        'trouser_30': add_item(store, 'Trouser', '30', quantity=3, threshold=4),
        'sweater_l': add_item(store, 'Sweater', 'L', quantity=8, threshold=2),
    }


def _ids(views):
    return [v.id for v in views]


def test_filter_low_stock_excludes_empty_rows(store, stocked):
    views = query_items(store.list_items('SCH001'), stock_filter=StockFilter.LOW_STOCK)
    assert _ids(views) == [stocked['trouser_30'].id]


def test_filter_in_and_out_of_stock(store, stocked):
    items = store.list_items('SCH001')
    assert _ids(query_items(items, stock_filter=StockFilter.OUT_OF_STOCK)) == [stocked['shirt_s'].id]
    assert len(query_items(items, stock_filter=StockFilter.IN_STOCK)) == 3


def test_search_matches_type_or_size(store, stocked):
    items = store.list_items('SCH001')
    assert len(query_items(items, search='shirt')) == 2
    assert _ids(query_items(items, search=' l ')) == [stocked['sweater_l'].id]


def test_sort_by_quantity_desc(store, stocked):
    views = query_items(store.list_items('SCH001'), sort=SortField.QUANTITY, order=SortOrder.DESC)
    assert [v.quantity for v in views] == [12, 8, 3, 0]
    assert views[-1].stock_level == StockLevel.OUT_OF_STOCK


def test_summary_groups_by_item_type(store, stocked):
    summary = summarize(store.list_items('SCH001'), school_id='SCH001')
    groups = {g.item_type: g for g in summary.groups}

    assert summary.total_items == 4
    assert summary.low_stock_count == 1
    assert summary.out_of_stock_count == 1
    assert groups['Shirt'].total_quantity == 12
    assert groups['Shirt'].sizes == {'S': 0, 'M': 12}
    assert groups['Shirt'].low_stock is True
    assert groups['Sweater'].low_stock is False
    assert groups['Trouser'].low_stock is True


def test_restock_item(store, stocked):
    assert restock_item(store, stocked['shirt_s'].id, 7).quantity == 7
    with pytest.raises(InvalidInput):
        restock_item(store, stocked['shirt_s'].id, 0)


def test_bulk_restock_orders_twice_threshold(store, stocked):
    updated = bulk_restock(store, [stocked['shirt_s'].id, stocked['trouser_30'].id])
    assert [i.quantity for i in updated] == [10, 11]


def test_bulk_restock_unknown_id_changes_nothing(store, stocked):
    with pytest.raises(ItemNotFound):
        bulk_restock(store, [stocked['shirt_s'].id, 'missing'])
    assert store.get_item(stocked['shirt_s'].id).quantity == 0
