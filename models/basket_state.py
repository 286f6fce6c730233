from pydantic import BaseModel, ConfigDict

from enums.basket_phase import BasketPhase
from enums.error_kind import ErrorKind
from models.merge_conflict import MergeConflict
from models.order import Order
from models.ordered_product import OrderedProduct


class BasketScreenState(BaseModel):
    """
    Immutable snapshot rendered by the basket screen.

    total and has_changes are derived from items and original_order_items and
    are recomputed by the reducer on every transition.
    Dates are epoch milliseconds.
    """
    model_config = ConfigDict(frozen=True)

    items: tuple[OrderedProduct, ...] = ()
    total: float = 0.0
    original_order_items: tuple[OrderedProduct, ...] = ()
    has_changes: bool = False

    # Loaded order
    order_id: str | None = None
    order_date: str | None = None  # date_key of the loaded order
    pickup_date: int | None = None
    created_date: int | None = None
    can_edit: bool = True
    is_edit_mode: bool = False
    is_loading_order: bool = False

    # Checkout / update
    is_checking_out: bool = False
    order_success: bool = False
    order_error: str | None = None
    error_kind: ErrorKind | None = None

    # Pickup date selection
    selected_pickup_date: int | None = None
    available_pickup_dates: tuple[int, ...] = ()
    show_date_picker: bool = False

    # Cancel
    is_cancelling: bool = False
    cancel_success: bool = False

    # Reorder
    show_reorder_date_picker: bool = False
    is_reordering: bool = False
    reorder_success: bool = False

    # Merge
    show_merge_dialog: bool = False
    existing_order_for_merge: Order | None = None
    merge_conflicts: tuple[MergeConflict, ...] = ()
    is_merging: bool = False

    @property
    def item_count(self) -> int:
        return sum(item.pieces_count for item in self.items)

    @property
    def has_loaded_order(self) -> bool:
        return self.order_id is not None

    @property
    def phase(self) -> BasketPhase:
        if self.is_loading_order:
            return BasketPhase.LOADING
        if self.is_checking_out or self.is_merging:
            return BasketPhase.CHECKOUT_IN_FLIGHT
        if self.show_merge_dialog:
            return BasketPhase.MERGE_REQUIRED
        if self.order_error is not None:
            return BasketPhase.FAILED
        if self.order_success:
            return BasketPhase.PLACED
        if self.order_id is not None:
            return BasketPhase.EDITING_LOCALLY if self.has_changes else BasketPhase.VIEWING
        if self.items:
            return BasketPhase.EDITING_LOCALLY
        return BasketPhase.NO_ORDER
