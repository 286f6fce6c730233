"""
User intents dispatched from the basket screen.

Each intent is a small immutable model tagged by its ``kind`` so that a
serialized intent can be parsed back into the right class via BasketIntent.
"""

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

from enums.merge_resolution import MergeResolution
from models.article import Article
from models.ordered_product import OrderedProduct


class _Intent(BaseModel):
    model_config = ConfigDict(frozen=True)


class AddItem(_Intent):
    kind: Literal["add_item"] = "add_item"
    item: OrderedProduct


class RemoveItem(_Intent):
    kind: Literal["remove_item"] = "remove_item"
    product_id: str


class UpdateQuantity(_Intent):
    kind: Literal["update_quantity"] = "update_quantity"
    product_id: str
    quantity: float


class ClearBasket(_Intent):
    kind: Literal["clear_basket"] = "clear_basket"


class Checkout(_Intent):
    kind: Literal["checkout"] = "checkout"


class LoadOrder(_Intent):
    kind: Literal["load_order"] = "load_order"
    order_id: str
    date_key: str
    force_load: bool = False


class EnableEditing(_Intent):
    kind: Literal["enable_editing"] = "enable_editing"


class UpdateOrder(_Intent):
    kind: Literal["update_order"] = "update_order"


class CancelOrder(_Intent):
    kind: Literal["cancel_order"] = "cancel_order"


class ShowDatePicker(_Intent):
    kind: Literal["show_date_picker"] = "show_date_picker"


class HideDatePicker(_Intent):
    kind: Literal["hide_date_picker"] = "hide_date_picker"


class SelectPickupDate(_Intent):
    kind: Literal["select_pickup_date"] = "select_pickup_date"
    pickup_date: int


class LoadAvailableDates(_Intent):
    kind: Literal["load_available_dates"] = "load_available_dates"


class ShowReorderDatePicker(_Intent):
    kind: Literal["show_reorder_date_picker"] = "show_reorder_date_picker"


class HideReorderDatePicker(_Intent):
    kind: Literal["hide_reorder_date_picker"] = "hide_reorder_date_picker"


class ReorderWithNewDate(_Intent):
    kind: Literal["reorder_with_new_date"] = "reorder_with_new_date"
    pickup_date: int
    current_articles: list[Article] = []


class ResolveMergeConflict(_Intent):
    kind: Literal["resolve_merge_conflict"] = "resolve_merge_conflict"
    product_id: str
    resolution: MergeResolution


class HideMergeDialog(_Intent):
    kind: Literal["hide_merge_dialog"] = "hide_merge_dialog"


class ConfirmMerge(_Intent):
    kind: Literal["confirm_merge"] = "confirm_merge"


class ResetOrderState(_Intent):
    kind: Literal["reset_order_state"] = "reset_order_state"


class StartNewOrder(_Intent):
    kind: Literal["start_new_order"] = "start_new_order"


class Logout(_Intent):
    kind: Literal["logout"] = "logout"


BasketIntent = Annotated[
    Union[
        AddItem, RemoveItem, UpdateQuantity, ClearBasket, Checkout, LoadOrder,
        EnableEditing, UpdateOrder, CancelOrder, ShowDatePicker, HideDatePicker,
        SelectPickupDate, LoadAvailableDates, ShowReorderDatePicker, HideReorderDatePicker,
        ReorderWithNewDate, ResolveMergeConflict, HideMergeDialog, ConfirmMerge,
        ResetOrderState, StartNewOrder, Logout
    ],
    Field(discriminator="kind")
]
