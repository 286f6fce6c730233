"""
Unit Tests: merging the basket into an existing order

When the buyer already has an order for the selected pickup date, checkout
opens the merge dialog instead of placing a second order.

Run with:
    pytest tests/order/unit/test_merge_flow.py -v
"""

from datetime import datetime
from unittest.mock import AsyncMock, patch
from zoneinfo import ZoneInfo

import pytest
import pytest_asyncio

from enums.flow_status import FlowStatus
from enums.merge_resolution import MergeResolution
from enums.order_status import OrderStatus
from exceptions import RemoteFailureException
from models.order import Order
from models.result import Result


@pytest_asyncio.fixture
async def existing_order(order_repository, profile_repository, buyer_profile, apples, pickup_date):
    """Order existing123 for Friday with one kilogram of apples."""
    order = Order(id="existing123", buyer_profile=buyer_profile, seller_id="seller_1", market_id="market_1",
                  pick_up_date=pickup_date, articles=[apples.with_quantity(1.0)], status=OrderStatus.PLACED)
    placed = (await order_repository.place_order(order)).value
    profile_repository.profile = buyer_profile.with_placed_order("20250110", placed.id)
    return placed


@pytest_asyncio.fixture
async def merge_pending(synchronizer, existing_order, apples, pickup_date):
    """Basket with two kilograms of apples, checked out against existing123."""
    synchronizer.add_item(apples)
    synchronizer.select_pickup_date(pickup_date)
    result = await synchronizer.checkout()
    assert result.status == FlowStatus.MERGE_REQUIRED
    return synchronizer


class TestMergeDetection:

    @pytest.mark.asyncio
    async def test_checkout_opens_merge_dialog(self, merge_pending, order_repository, basket_store, apples):
        state = merge_pending.state

        assert state.show_merge_dialog is True
        assert state.is_checking_out is False
        assert state.existing_order_for_merge.id == "existing123"
        assert len(state.merge_conflicts) == 1
        conflict = state.merge_conflicts[0]
        assert conflict.product_id == "apples"
        assert conflict.existing_quantity == 1.0
        assert conflict.new_quantity == 2.0
        assert conflict.resolution == MergeResolution.UNDECIDED

        # Nothing sent yet
        assert order_repository.get("existing123").articles[0].amount_count == 1.0
        assert basket_store.items == (apples,)
        assert basket_store.get_loaded_order_info() is None

    @pytest.mark.asyncio
    async def test_no_conflicts_for_disjoint_items(self, synchronizer, existing_order, carrots, pickup_date):
        synchronizer.add_item(carrots)
        synchronizer.select_pickup_date(pickup_date)

        result = await synchronizer.checkout()

        assert result.status == FlowStatus.MERGE_REQUIRED
        assert synchronizer.state.merge_conflicts == ()

    @pytest.mark.asyncio
    async def test_cancelled_order_does_not_require_merge(self, synchronizer, existing_order, order_repository,
                                                          profile_repository, apples, pickup_date):
        await order_repository.cancel_order("seller_1", "20250110", "existing123")
        synchronizer.add_item(apples)
        synchronizer.select_pickup_date(pickup_date)

        result = await synchronizer.checkout()

        assert result.status == FlowStatus.SUCCESS
        assert synchronizer.state.order_id != "existing123"
        assert profile_repository.profile.placed_order_ids == {"20250110": synchronizer.state.order_id}

    @pytest.mark.asyncio
    async def test_lookup_failure_fails_checkout(self, synchronizer, existing_order, order_repository,
                                                 apples, pickup_date):
        synchronizer.add_item(apples)
        synchronizer.select_pickup_date(pickup_date)
        failure = Result.failure(RemoteFailureException("Order load", "unavailable"))

        with patch.object(order_repository, 'load_order', new=AsyncMock(return_value=failure)), \
                patch.object(order_repository, 'place_order', new=AsyncMock()) as place_order:
            result = await synchronizer.checkout()

        assert result.status == FlowStatus.FAILED
        assert synchronizer.state.show_merge_dialog is False
        place_order.assert_not_called()


class TestConfirmMerge:

    @pytest.mark.asyncio
    async def test_add_resolution(self, merge_pending, order_repository, basket_store):
        merge_pending.resolve_merge_conflict("apples", MergeResolution.ADD)

        result = await merge_pending.confirm_merge()

        assert result.status == FlowStatus.SUCCESS
        stored = order_repository.get("existing123")
        assert [item.amount_count for item in stored.articles] == [3.0]

        state = merge_pending.state
        assert state.show_merge_dialog is False
        assert state.merge_conflicts == ()
        assert state.order_id == "existing123"
        assert state.order_success is True
        assert state.has_changes is False
        assert basket_store.get_loaded_order_info().order_id == "existing123"
        assert basket_store.items[0].amount_count == 3.0

    @pytest.mark.asyncio
    async def test_add_uses_quantity_edited_in_dialog(self, merge_pending, order_repository, basket_store):
        merge_pending.update_quantity("apples", 5.0)
        merge_pending.resolve_merge_conflict("apples", MergeResolution.ADD)

        result = await merge_pending.confirm_merge()

        assert result.status == FlowStatus.SUCCESS
        stored = order_repository.get("existing123")
        assert [item.amount_count for item in stored.articles] == [6.0]
        assert basket_store.items[0].amount_count == 6.0
        assert merge_pending.state.has_changes is False

    @pytest.mark.asyncio
    async def test_undecided_keeps_existing_and_appends_new(self, merge_pending, order_repository, radishes):
        merge_pending.add_item(radishes)

        result = await merge_pending.confirm_merge()

        assert result.status == FlowStatus.SUCCESS
        stored = order_repository.get("existing123")
        assert [(item.product_id, item.amount_count) for item in stored.articles] == [
            ("apples", 1.0), ("radishes", 2.0)
        ]

    @pytest.mark.asyncio
    async def test_failed_update_keeps_dialog(self, merge_pending, order_repository):
        merge_pending.resolve_merge_conflict("apples", MergeResolution.USE_NEW)
        failure = Result.failure(RemoteFailureException("Order update", "timeout"))

        with patch.object(order_repository, 'update_order', new=AsyncMock(return_value=failure)):
            result = await merge_pending.confirm_merge()

        state = merge_pending.state
        assert result.status == FlowStatus.FAILED
        assert state.show_merge_dialog is True
        assert state.is_merging is False
        assert state.merge_conflicts[0].resolution == MergeResolution.USE_NEW
        assert state.order_error == "Something went wrong: timeout"

    @pytest.mark.asyncio
    async def test_deadline_passed_before_confirm(self, merge_pending, order_repository, clock):
        clock.now = datetime(2025, 1, 9, 0, 0, tzinfo=ZoneInfo("Europe/Berlin"))

        with patch.object(order_repository, 'update_order', new=AsyncMock()) as update_order:
            result = await merge_pending.confirm_merge()

        assert result.status == FlowStatus.FAILED
        assert merge_pending.state.show_merge_dialog is True
        update_order.assert_not_called()

    @pytest.mark.asyncio
    async def test_hide_dialog_discards_merge(self, merge_pending, order_repository):
        merge_pending.hide_merge_dialog()

        result = await merge_pending.confirm_merge()

        assert merge_pending.state.show_merge_dialog is False
        assert result.status == FlowStatus.FAILED
        assert merge_pending.state.order_error == "There is no existing order to merge into"
        assert order_repository.get("existing123").articles[0].amount_count == 1.0
