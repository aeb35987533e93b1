from datetime import datetime

import pytest

from controllers.list_view_controller import (
    CREATE_ERROR,
    CREATE_SUCCESS,
    FETCH_ERROR,
    QUANTITY_ERROR,
    REMOVE_ERROR,
    ListViewController,
)
from services.stores.base import StoreError, StoreResponse
from services.week import to_wire
from tests.factories import item_row, shop_row


@pytest.fixture
def controller(repository, notifier, fixed_now):
    return ListViewController(
        repository=repository,
        notifier=notifier,
        state={},
        clock=lambda: fixed_now,
    )


def _with_items(fake_store, items):
    fake_store.select_response = StoreResponse(data=shop_row(items=items))


def _ids_and_quantities(controller):
    return [(i.id, i.quantity) for i in controller.current_shop.items]


def test_starts_loading_without_shop(controller):
    assert controller.loading
    assert controller.current_shop is None
    assert not controller.has_shop


def test_mount_loads_once(controller, fake_store):
    controller.mount()
    controller.mount()
    assert len([c for c in fake_store.calls if c[0] == "select"]) == 1


def test_mount_queries_from_start_of_week(controller, fake_store):
    controller.mount()
    query = fake_store.calls[0][1]
    # Wednesday 10 Jan 2024 -> Sunday 7 Jan 2024, local midnight
    assert query.filters[0].value == to_wire(datetime(2024, 1, 7))


def test_no_rows_is_no_shop_without_toast(controller, notifier):
    controller.mount()
    assert not controller.loading
    assert controller.current_shop is None
    assert notifier.messages == []


def test_store_error_toasts_once_and_clears_loading(controller, fake_store, notifier):
    fake_store.select_response = StoreResponse(error=StoreError(code="HTTP500", message="boom"))
    controller.mount()
    assert not controller.loading
    assert controller.current_shop is None
    assert notifier.errors == [FETCH_ERROR]
    assert notifier.successes == []


def test_found_shop_is_current(controller, fake_store, notifier):
    _with_items(fake_store, [item_row(1, 2), item_row(2, 5)])
    controller.mount()
    assert controller.has_shop
    assert _ids_and_quantities(controller) == [(1, 2), (2, 5)]
    assert notifier.messages == []


def test_create_new_list_from_no_shop(controller, fake_store, notifier, fixed_now):
    controller.mount()
    shop = controller.create_new_list()

    assert shop is not None
    assert controller.current_shop is shop
    assert shop.items == []
    assert notifier.successes == [CREATE_SUCCESS]
    assert fake_store.calls[-1] == ("insert", "weekly_shops", {"shop_date": to_wire(fixed_now)})


def test_create_failure_leaves_no_shop(controller, fake_store, notifier):
    controller.mount()
    fake_store.insert_response = StoreResponse(error=StoreError(code="HTTP503", message="unavailable"))
    assert controller.create_new_list() is None
    assert controller.current_shop is None
    assert notifier.errors == [CREATE_ERROR]


def test_create_ignored_while_loading(controller, fake_store):
    assert controller.create_new_list() is None
    assert fake_store.calls == []


def test_create_ignored_when_shop_exists(controller, fake_store):
    _with_items(fake_store, [item_row(1, 2)])
    controller.mount()
    shop = controller.current_shop
    assert controller.create_new_list() is None
    assert controller.current_shop is shop
    assert not [c for c in fake_store.calls if c[0] == "insert"]


def test_item_removed(controller, fake_store):
    _with_items(fake_store, [item_row(1, 2), item_row(2, 5)])
    controller.mount()
    controller.on_item_removed(1)
    assert _ids_and_quantities(controller) == [(2, 5)]


def test_removing_unknown_item_changes_nothing(controller, fake_store):
    _with_items(fake_store, [item_row(1, 2), item_row(2, 5)])
    controller.mount()
    controller.on_item_removed(99)
    assert _ids_and_quantities(controller) == [(1, 2), (2, 5)]


def test_quantity_changed_preserves_other_fields(controller, fake_store):
    _with_items(fake_store, [item_row(1, 2), item_row(2, 5, name="Eggs")])
    controller.mount()
    before = controller.current_shop.items[1]
    controller.on_quantity_changed(2, 9)

    assert _ids_and_quantities(controller) == [(1, 2), (2, 9)]
    after = controller.current_shop.items[1]
    assert after.product == before.product
    assert after.product_id == before.product_id
    assert before.quantity == 5


def test_quantity_change_for_unknown_item_changes_nothing(controller, fake_store):
    _with_items(fake_store, [item_row(1, 2)])
    controller.mount()
    controller.on_quantity_changed(99, 4)
    assert _ids_and_quantities(controller) == [(1, 2)]


def test_quantity_changed_rejects_negative(controller, fake_store):
    _with_items(fake_store, [item_row(1, 2)])
    controller.mount()
    with pytest.raises(ValueError):
        controller.on_quantity_changed(1, -4)
    assert _ids_and_quantities(controller) == [(1, 2)]


def test_item_events_without_shop_are_ignored(controller):
    controller.mount()
    controller.on_item_removed(1)
    controller.on_quantity_changed(1, 3)
    assert controller.current_shop is None


def test_remove_item_commits_then_mirrors(controller, fake_store):
    _with_items(fake_store, [item_row(1, 2), item_row(2, 5)])
    controller.mount()
    assert controller.remove_item(1)
    assert fake_store.calls[-1] == ("delete", "weekly_shop_items", 1)
    assert _ids_and_quantities(controller) == [(2, 5)]


def test_remove_item_failure_keeps_item(controller, fake_store, notifier):
    _with_items(fake_store, [item_row(1, 2)])
    controller.mount()
    fake_store.delete_response = StoreResponse(error=StoreError(code="TIMEOUT", message="timed out"))
    assert not controller.remove_item(1)
    assert _ids_and_quantities(controller) == [(1, 2)]
    assert notifier.errors == [REMOVE_ERROR]


def test_change_quantity_commits_then_mirrors(controller, fake_store):
    _with_items(fake_store, [item_row(1, 2)])
    controller.mount()
    assert controller.change_quantity(1, 4)
    assert fake_store.calls[-1] == ("update", "weekly_shop_items", 1, {"quantity": 4})
    assert _ids_and_quantities(controller) == [(1, 4)]


def test_change_quantity_failure_keeps_quantity(controller, fake_store, notifier):
    _with_items(fake_store, [item_row(1, 2)])
    controller.mount()
    fake_store.update_response = StoreResponse(error=StoreError(code="HTTP500", message="boom"))
    assert not controller.change_quantity(1, 4)
    assert _ids_and_quantities(controller) == [(1, 2)]
    assert notifier.errors == [QUANTITY_ERROR]


def test_change_quantity_rejects_negative(controller, fake_store):
    _with_items(fake_store, [item_row(1, 2)])
    controller.mount()
    with pytest.raises(ValueError):
        controller.change_quantity(1, -1)


def test_load_finishing_after_dispose_is_dropped(controller, fake_store):
    _with_items(fake_store, [item_row(1, 2)])
    fake_store.on_select = controller.dispose
    controller.mount()
    assert controller.current_shop is None
    assert controller.loading


def test_superseded_load_is_dropped(controller, fake_store):
    stale = StoreResponse(data=shop_row(shop_id=1, items=[item_row(1, 2)]))
    fresh = StoreResponse(data=shop_row(shop_id=2, items=[item_row(5, 1)]))
    fake_store.select_response = stale

    def trigger_newer_load():
        fake_store.on_select = None
        fake_store.select_response = fresh
        controller.fetch_current_shop()
        fake_store.select_response = stale

    fake_store.on_select = trigger_newer_load
    controller.mount()

    assert controller.current_shop.id == 2
    assert not controller.loading


def test_reload_retries_after_failure(controller, fake_store, notifier):
    fake_store.select_response = StoreResponse(error=StoreError(code="HTTP500", message="boom"))
    controller.mount()
    _with_items(fake_store, [item_row(1, 2)])
    controller.reload()
    assert controller.has_shop
    assert notifier.errors == [FETCH_ERROR]


def test_state_survives_new_controller_on_rerun(repository, notifier, fixed_now, fake_store):
    state = {}
    _with_items(fake_store, [item_row(1, 2)])
    first = ListViewController(repository=repository, notifier=notifier, state=state, clock=lambda: fixed_now)
    first.mount()
    second = ListViewController(repository=repository, notifier=notifier, state=state, clock=lambda: fixed_now)
    second.mount()
    assert second.has_shop
    assert len(fake_store.calls) == 1


def test_search_filters_visible_items_case_insensitively(controller, fake_store):
    _with_items(fake_store, [item_row(1, 2, name="Whole Milk"), item_row(2, 5, name="Eggs")])
    controller.mount()

    controller.set_search_term("  MILK ")
    assert [i.id for i in controller.visible_items] == [1, 2]  # not applied until submitted
    controller.submit_search()
    assert controller.applied_search == "MILK"
    assert [i.id for i in controller.visible_items] == [1]
    assert [i.id for i in controller.current_shop.items] == [1, 2]
    assert len(fake_store.calls) == 1  # no store query


def test_empty_search_shows_everything(controller, fake_store):
    _with_items(fake_store, [item_row(1, 2, name="Milk"), item_row(2, 5, name="Eggs")])
    controller.mount()
    controller.set_search_term("eggs")
    controller.submit_search()
    controller.set_search_term("")
    controller.submit_search()
    assert [i.id for i in controller.visible_items] == [1, 2]


def test_clear_search(controller, fake_store):
    _with_items(fake_store, [item_row(1, 2, name="Milk")])
    controller.mount()
    controller.set_search_term("bread")
    controller.submit_search()
    assert controller.visible_items == []
    controller.clear_search()
    assert controller.search_term == ""
    assert [i.id for i in controller.visible_items] == [1]


def test_visible_items_without_shop(controller):
    assert controller.visible_items == []
