"""
State transitions produced by the synchronizer and consumed by the reducer.
"""

from pydantic import BaseModel, ConfigDict

from enums.error_kind import ErrorKind
from enums.flow_kind import FlowKind
from enums.merge_resolution import MergeResolution
from models.merge_conflict import MergeConflict
from models.order import Order
from models.ordered_product import OrderedProduct


class BasketEvent(BaseModel):
    model_config = ConfigDict(frozen=True)


class BasketChanged(BasketEvent):
    items: tuple[OrderedProduct, ...]


class AvailableDatesLoaded(BasketEvent):
    dates: tuple[int, ...]


class DatePickerToggled(BasketEvent):
    visible: bool


class ReorderDatePickerToggled(BasketEvent):
    visible: bool


class PickupDateSelected(BasketEvent):
    pickup_date: int


class FlowStarted(BasketEvent):
    flow: FlowKind


class FlowFailed(BasketEvent):
    flow: FlowKind | None = None  # None for errors outside a remote flow
    error: str
    error_kind: ErrorKind
    show_date_picker: bool = False
    clear_selected_date: bool = False
    show_reorder_date_picker: bool = False


class OrderLoaded(BasketEvent):
    order: Order
    date_key: str
    can_edit: bool


class OrderPlaced(BasketEvent):
    order: Order
    date_key: str
    can_edit: bool


class OrderUpdated(BasketEvent):
    items: tuple[OrderedProduct, ...]


class EditingEnabled(BasketEvent):
    pass


class MergeRequired(BasketEvent):
    existing_order: Order
    conflicts: tuple[MergeConflict, ...]


class MergeConflictResolved(BasketEvent):
    product_id: str
    resolution: MergeResolution


class MergeDismissed(BasketEvent):
    pass


class MergeConfirmed(BasketEvent):
    order: Order
    date_key: str
    can_edit: bool


class OrderCancelled(BasketEvent):
    confirmed: bool  # False when the order was already gone remotely


class ReorderPrepared(BasketEvent):
    pickup_date: int


class OrderStateReset(BasketEvent):
    pass


class BasketReset(BasketEvent):
    pass
