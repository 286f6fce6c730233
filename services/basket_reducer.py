"""
Pure state transitions of the basket screen.

reduce() looks up the handler registered for the event type, applies it and
recomputes the derived fields (total, has_changes) from the full snapshot.
"""

from typing import Callable, Dict

from enums.flow_kind import FlowKind
from models.basket_event import (
    BasketEvent,
    BasketChanged,
    AvailableDatesLoaded,
    DatePickerToggled,
    ReorderDatePickerToggled,
    PickupDateSelected,
    FlowStarted,
    FlowFailed,
    OrderLoaded,
    OrderPlaced,
    OrderUpdated,
    EditingEnabled,
    MergeRequired,
    MergeConflictResolved,
    MergeDismissed,
    MergeConfirmed,
    OrderCancelled,
    ReorderPrepared,
    OrderStateReset,
    BasketReset,
)
from models.basket_state import BasketScreenState
from services.reconciliation import ReconciliationService

# In-flight flag owned by each flow
FLOW_FLAGS: Dict[FlowKind, str] = {
    FlowKind.CHECKOUT: "is_checking_out",
    FlowKind.UPDATE: "is_checking_out",
    FlowKind.CANCEL: "is_cancelling",
    FlowKind.REORDER: "is_reordering",
    FlowKind.MERGE: "is_merging",
    FlowKind.LOAD: "is_loading_order",
}


def _basket_changed(state: BasketScreenState, event: BasketChanged) -> BasketScreenState:
    return state.model_copy(update={'items': event.items})


def _available_dates_loaded(state: BasketScreenState, event: AvailableDatesLoaded) -> BasketScreenState:
    return state.model_copy(update={'available_pickup_dates': event.dates})


def _date_picker_toggled(state: BasketScreenState, event: DatePickerToggled) -> BasketScreenState:
    return state.model_copy(update={'show_date_picker': event.visible})


def _reorder_date_picker_toggled(state: BasketScreenState, event: ReorderDatePickerToggled) -> BasketScreenState:
    return state.model_copy(update={'show_reorder_date_picker': event.visible})


def _pickup_date_selected(state: BasketScreenState, event: PickupDateSelected) -> BasketScreenState:
    return state.model_copy(update={
        'selected_pickup_date': event.pickup_date,
        'show_date_picker': False,
        'order_error': None,
        'error_kind': None,
    })


def _flow_started(state: BasketScreenState, event: FlowStarted) -> BasketScreenState:
    update = {
        FLOW_FLAGS[event.flow]: True,
        'order_error': None,
        'error_kind': None,
    }
    if event.flow in (FlowKind.CHECKOUT, FlowKind.UPDATE):
        update['order_success'] = False
    elif event.flow == FlowKind.CANCEL:
        update['cancel_success'] = False
    elif event.flow == FlowKind.REORDER:
        update['reorder_success'] = False
        update['show_reorder_date_picker'] = False
    return state.model_copy(update=update)


def _flow_failed(state: BasketScreenState, event: FlowFailed) -> BasketScreenState:
    update = {
        'order_error': event.error,
        'error_kind': event.error_kind,
    }
    if event.flow is not None:
        update[FLOW_FLAGS[event.flow]] = False
    if event.show_date_picker:
        update['show_date_picker'] = True
    if event.clear_selected_date:
        update['selected_pickup_date'] = None
    if event.show_reorder_date_picker:
        update['show_reorder_date_picker'] = True
    return state.model_copy(update=update)


def _loaded_order_fields(event: OrderLoaded | OrderPlaced | MergeConfirmed) -> dict:
    return {
        'order_id': event.order.id,
        'order_date': event.date_key,
        'pickup_date': event.order.pick_up_date,
        'created_date': event.order.created_date,
        'can_edit': event.can_edit,
        'original_order_items': tuple(event.order.articles),
        'is_loading_order': False,
    }


def _order_loaded(state: BasketScreenState, event: OrderLoaded) -> BasketScreenState:
    return state.model_copy(update=_loaded_order_fields(event))


def _order_placed(state: BasketScreenState, event: OrderPlaced) -> BasketScreenState:
    return state.model_copy(update={
        **_loaded_order_fields(event),
        'is_checking_out': False,
        'order_success': True,
        'is_edit_mode': False,
    })


def _order_updated(state: BasketScreenState, event: OrderUpdated) -> BasketScreenState:
    return state.model_copy(update={
        'original_order_items': event.items,
        'is_checking_out': False,
        'order_success': True,
        'is_edit_mode': False,
    })


def _editing_enabled(state: BasketScreenState, event: EditingEnabled) -> BasketScreenState:
    return state.model_copy(update={'is_edit_mode': True, 'order_error': None, 'error_kind': None})


def _merge_required(state: BasketScreenState, event: MergeRequired) -> BasketScreenState:
    return state.model_copy(update={
        'is_checking_out': False,
        'show_merge_dialog': True,
        'existing_order_for_merge': event.existing_order,
        'merge_conflicts': event.conflicts,
    })


def _merge_conflict_resolved(state: BasketScreenState, event: MergeConflictResolved) -> BasketScreenState:
    conflicts = ReconciliationService.resolve_conflict(state.merge_conflicts, event.product_id, event.resolution)
    return state.model_copy(update={'merge_conflicts': tuple(conflicts)})


def _merge_dismissed(state: BasketScreenState, event: MergeDismissed) -> BasketScreenState:
    return state.model_copy(update={
        'show_merge_dialog': False,
        'existing_order_for_merge': None,
        'merge_conflicts': (),
    })


def _merge_confirmed(state: BasketScreenState, event: MergeConfirmed) -> BasketScreenState:
    return state.model_copy(update={
        **_loaded_order_fields(event),
        'show_merge_dialog': False,
        'existing_order_for_merge': None,
        'merge_conflicts': (),
        'is_merging': False,
        'order_success': True,
        'is_edit_mode': False,
    })


def _order_cancelled(state: BasketScreenState, event: OrderCancelled) -> BasketScreenState:
    return BasketScreenState(
        available_pickup_dates=state.available_pickup_dates,
        cancel_success=event.confirmed,
    )


def _reorder_prepared(state: BasketScreenState, event: ReorderPrepared) -> BasketScreenState:
    return state.model_copy(update={
        'order_id': None,
        'order_date': None,
        'pickup_date': None,
        'created_date': None,
        'can_edit': True,
        'is_edit_mode': False,
        'original_order_items': (),
        'selected_pickup_date': event.pickup_date,
        'is_reordering': False,
        'reorder_success': True,
        'show_reorder_date_picker': False,
    })


def _order_state_reset(state: BasketScreenState, event: OrderStateReset) -> BasketScreenState:
    return state.model_copy(update={
        'order_success': False,
        'order_error': None,
        'error_kind': None,
        'cancel_success': False,
        'reorder_success': False,
    })


def _basket_reset(state: BasketScreenState, event: BasketReset) -> BasketScreenState:
    return BasketScreenState(available_pickup_dates=state.available_pickup_dates)


REDUCERS: Dict[type, Callable[[BasketScreenState, BasketEvent], BasketScreenState]] = {
    BasketChanged: _basket_changed,
    AvailableDatesLoaded: _available_dates_loaded,
    DatePickerToggled: _date_picker_toggled,
    ReorderDatePickerToggled: _reorder_date_picker_toggled,
    PickupDateSelected: _pickup_date_selected,
    FlowStarted: _flow_started,
    FlowFailed: _flow_failed,
    OrderLoaded: _order_loaded,
    OrderPlaced: _order_placed,
    OrderUpdated: _order_updated,
    EditingEnabled: _editing_enabled,
    MergeRequired: _merge_required,
    MergeConflictResolved: _merge_conflict_resolved,
    MergeDismissed: _merge_dismissed,
    MergeConfirmed: _merge_confirmed,
    OrderCancelled: _order_cancelled,
    ReorderPrepared: _reorder_prepared,
    OrderStateReset: _order_state_reset,
    BasketReset: _basket_reset,
}


def reduce(state: BasketScreenState, event: BasketEvent) -> BasketScreenState:
    """
    Apply an event to the screen state.

    Raises:
        ValueError: If no reducer is registered for the event type
    """
    reducer = REDUCERS.get(type(event))
    if reducer is None:
        raise ValueError(f"No reducer registered for {type(event).__name__}")

    new_state = reducer(state, event)
    return new_state.model_copy(update={
        'total': sum(item.total_price for item in new_state.items),
        'has_changes': ReconciliationService.has_changes(new_state.items, new_state.original_order_items),
    })
