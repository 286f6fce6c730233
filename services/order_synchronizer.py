import inspect
import logging
from datetime import datetime, tzinfo
from typing import Any, AsyncIterator, Awaitable, Callable, Optional

import config
from enums.error_kind import ErrorKind
from enums.flow_kind import FlowKind
from enums.flow_status import FlowStatus
from enums.merge_resolution import MergeResolution
from enums.order_status import OrderStatus
from exceptions import (
    MarketplaceException,
    RemoteFailureException,
    OperationInProgressException,
    EmptyBasketException,
    NothingToReorderException,
    UserNotAuthenticatedException,
    NoPendingMergeException,
    PickupDateNotSelectedException,
    PickupDateExpiredException,
    EditDeadlinePassedException,
    MissingOrderInfoException,
)
from models.article import Article
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
from models.basket_intent import (
    AddItem,
    RemoveItem,
    UpdateQuantity,
    ClearBasket,
    Checkout,
    LoadOrder,
    EnableEditing,
    UpdateOrder,
    CancelOrder,
    ShowDatePicker,
    HideDatePicker,
    SelectPickupDate,
    LoadAvailableDates,
    ShowReorderDatePicker,
    HideReorderDatePicker,
    ReorderWithNewDate,
    ResolveMergeConflict,
    HideMergeDialog,
    ConfirmMerge,
    ResetOrderState,
    StartNewOrder,
    Logout,
)
from models.basket_state import BasketScreenState
from models.buyer_profile import BuyerProfile
from models.flow_result import FlowResult
from models.order import Order, order_path
from models.order_schedule import OrderScheduleConfig
from models.ordered_product import OrderedProduct
from models.result import Result
from repositories.auth import AuthRepository
from repositories.order import OrderRepository
from repositories.profile import ProfileRepository
from services.basket_reducer import reduce
from services.basket_store import BasketStore
from services.reconciliation import ReconciliationService
from utils.error_handler import handle_service_error
from utils.order_date_utils import OrderDateUtils, from_millis, resolve_timezone, to_millis
from utils.order_state_machine import OrderStateMachine
from utils.state_stream import StateStream

logger = logging.getLogger(__name__)

SUCCESS = FlowResult(status=FlowStatus.SUCCESS)


class OrderSynchronizer:
    """
    Keeps the local basket and the buyer's remote order for a pickup date consistent.

    Every user intent ends up here. Local changes go to the BasketStore, remote
    changes go through the repositories, and every outcome is folded into one
    immutable BasketScreenState by the reducer.

    Remote flows (checkout, update, cancel, merge, reorder, load) are guarded by
    their in-flight flag: a second dispatch while the first one runs is rejected
    with FlowStatus.REJECTED and leaves the state untouched. Collaborator errors
    never escape a flow, they end up as order_error on the state.
    """

    def __init__(self, basket_store: BasketStore, order_repository: OrderRepository,
                 profile_repository: ProfileRepository, auth_repository: AuthRepository,
                 seller_id: Optional[str] = None, market_id: Optional[str] = None,
                 schedule: Optional[OrderScheduleConfig] = None, tz: Optional[tzinfo] = None,
                 clock: Optional[Callable[[], datetime]] = None, lang: Optional[str] = None):
        self._basket = basket_store
        self._orders = order_repository
        self._profiles = profile_repository
        self._auth = auth_repository
        self._seller_id = seller_id if seller_id is not None else config.SELLER_ID
        self._market_id = market_id if market_id is not None else config.MARKET_ID
        self._schedule = schedule or OrderScheduleConfig.from_config()
        self._tz = tz or resolve_timezone()
        self._clock = clock or (lambda: datetime.now(self._tz))
        self._lang = lang

        self._state = StateStream(reduce(BasketScreenState(), BasketChanged(items=basket_store.items)))
        self._basket.add_listener(self._on_basket_changed)

        self._intent_handlers: dict[type, Callable[[Any], Any]] = {
            AddItem: lambda intent: self.add_item(intent.item),
            RemoveItem: lambda intent: self.remove_item(intent.product_id),
            UpdateQuantity: lambda intent: self.update_quantity(intent.product_id, intent.quantity),
            ClearBasket: lambda intent: self.clear_basket(),
            Checkout: lambda intent: self.checkout(),
            LoadOrder: lambda intent: self.load_order(intent.order_id, intent.date_key, intent.force_load),
            EnableEditing: lambda intent: self.enable_editing(),
            UpdateOrder: lambda intent: self.update_order(),
            CancelOrder: lambda intent: self.cancel_order(),
            ShowDatePicker: lambda intent: self.show_date_picker(),
            HideDatePicker: lambda intent: self.hide_date_picker(),
            SelectPickupDate: lambda intent: self.select_pickup_date(intent.pickup_date),
            LoadAvailableDates: lambda intent: self.load_available_dates(),
            ShowReorderDatePicker: lambda intent: self.show_reorder_date_picker(),
            HideReorderDatePicker: lambda intent: self.hide_reorder_date_picker(),
            ReorderWithNewDate: lambda intent: self.reorder_with_new_date(intent.pickup_date,
                                                                          intent.current_articles),
            ResolveMergeConflict: lambda intent: self.resolve_merge_conflict(intent.product_id,
                                                                             intent.resolution),
            HideMergeDialog: lambda intent: self.hide_merge_dialog(),
            ConfirmMerge: lambda intent: self.confirm_merge(),
            ResetOrderState: lambda intent: self.reset_order_state(),
            StartNewOrder: lambda intent: self.start_new_order(),
            Logout: lambda intent: self.logout(),
        }

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def state(self) -> BasketScreenState:
        return self._state.value

    def observe_state(self) -> AsyncIterator[BasketScreenState]:
        return self._state.subscribe()

    def add_state_listener(self, listener: Callable[[BasketScreenState], None]) -> Callable[[], None]:
        return self._state.add_listener(listener)

    def _apply(self, event: BasketEvent) -> None:
        self._state.emit(reduce(self._state.value, event))

    def _on_basket_changed(self, items: tuple[OrderedProduct, ...]) -> None:
        self._apply(BasketChanged(items=items))

    async def dispatch(self, intent) -> FlowResult | None:
        """
        Route a user intent to its operation.

        Returns:
            FlowResult for remote flows and validated selections, None for plain basket edits

        Raises:
            ValueError: If the intent type is unknown
        """
        handler = self._intent_handlers.get(type(intent))
        if handler is None:
            raise ValueError(f"Unsupported intent: {type(intent).__name__}")

        logger.debug(f"Dispatching {intent.kind}")
        result = handler(intent)
        if inspect.isawaitable(result):
            result = await result
        return result

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _date_key(self, pickup_millis: int) -> str:
        return OrderDateUtils.format_date_key(from_millis(pickup_millis, self._tz), self._tz)

    def _is_pickup_date_valid(self, pickup_millis: int) -> bool:
        return OrderDateUtils.is_pickup_date_valid(from_millis(pickup_millis, self._tz), self._clock(),
                                                   self._tz, self._schedule)

    def _can_edit(self, pickup_millis: int) -> bool:
        try:
            return OrderDateUtils.can_edit_order(from_millis(pickup_millis, self._tz), self._clock(),
                                                 self._tz, self._schedule)
        except ValueError as e:
            # Pickup outside the configured cadence, e.g. placed before a schedule change
            logger.warning(f"Treating order as locked: {e}")
            return False

    def _fail(self, flow: FlowKind | None, exception: MarketplaceException, show_date_picker: bool = False,
              clear_selected_date: bool = False, show_reorder_date_picker: bool = False) -> FlowResult:
        message = handle_service_error(exception, lang=self._lang)
        self._apply(FlowFailed(
            flow=flow,
            error=message,
            error_kind=exception.kind,
            show_date_picker=show_date_picker,
            clear_selected_date=clear_selected_date,
            show_reorder_date_picker=show_reorder_date_picker
        ))
        return FlowResult(status=FlowStatus.FAILED, error=message, error_kind=exception.kind)

    def _reject(self, flow: FlowKind) -> FlowResult:
        logger.warning(f"{flow.value} requested while already in progress, rejecting")
        exception = OperationInProgressException(flow.value)
        return FlowResult(status=FlowStatus.REJECTED, error=handle_service_error(exception, lang=self._lang),
                          error_kind=exception.kind)

    def _reject_stale_date(self, flow: FlowKind, pickup_millis: int) -> FlowResult:
        is_reorder = flow == FlowKind.REORDER
        result = self._fail(flow, PickupDateExpiredException(pickup_millis),
                            show_date_picker=not is_reorder,
                            clear_selected_date=not is_reorder,
                            show_reorder_date_picker=is_reorder)
        self.load_available_dates()
        return result

    async def _call(self, operation: str, call: Awaitable[Result]) -> Result:
        """Await a repository call, turning unexpected exceptions into a failed Result."""
        try:
            result = await call
        except Exception as e:
            logger.exception(f"{operation} raised {type(e).__name__}")
            return Result.failure(RemoteFailureException(operation, str(e) or type(e).__name__))
        if not result.is_success:
            logger.error(f"{operation} failed: {result.error!r}")
        return result

    async def _current_user_id(self) -> str | None:
        try:
            return await self._auth.get_current_user_id()
        except Exception as e:
            logger.exception(f"Auth lookup raised {type(e).__name__}, treating user as signed out")
            return None

    async def _load_profile(self, user_id: str) -> BuyerProfile:
        result = await self._call("Profile load", self._profiles.get_buyer_profile())
        if result.is_success:
            return result.value
        logger.warning(f"Using default buyer profile for user {user_id}")
        return BuyerProfile(id=user_id, display_name=config.DEFAULT_BUYER_DISPLAY_NAME, anonymous=False)

    async def _remember_placed_order(self, date_key: str, order_id: str) -> None:
        result = await self._call("Profile load", self._profiles.get_buyer_profile())
        if not result.is_success:
            logger.warning(f"Order {order_id} not recorded in buyer profile")
            return
        profile = result.value
        if profile.placed_order_ids.get(date_key) == order_id:
            return
        await self._call("Profile save", self._profiles.save_buyer_profile(profile.with_placed_order(date_key, order_id)))

    async def _forget_placed_order(self, order_id: str) -> None:
        result = await self._call("Profile load", self._profiles.get_buyer_profile())
        if not result.is_success:
            logger.warning(f"Order {order_id} not removed from buyer profile")
            return
        profile = result.value
        if order_id not in profile.placed_order_ids.values():
            return
        await self._call("Profile save", self._profiles.save_buyer_profile(profile.without_placed_order(order_id)))

    def _link_basket(self, submitted: tuple[OrderedProduct, ...], items: list[OrderedProduct],
                     order_id: str, date_key: str) -> None:
        """
        Point the basket at an order after a successful submit.

        Lines edited while the request was in flight are kept as pending changes.
        """
        if self._basket.items != submitted:
            logger.warning(f"Basket changed while order {order_id} was submitted, keeping local edits")
            items = list(self._basket.items)
        self._basket.load_order_items(items, order_id, date_key)

    def _show_loaded_order(self, order: Order, date_key: str, force_load: bool) -> None:
        link = self._basket.get_loaded_order_info()
        if force_load or not self._basket.items or link is None or link.order_id != order.id:
            self._basket.load_order_items(order.articles, order.id, date_key)
        self._apply(OrderLoaded(order=order, date_key=date_key, can_edit=self._can_edit(order.pick_up_date)))

    # ------------------------------------------------------------------
    # Basket edits
    # ------------------------------------------------------------------

    def add_item(self, item: OrderedProduct) -> None:
        self._basket.add_item(item)

    def remove_item(self, product_id: str) -> None:
        self._basket.remove_item(product_id)

    def update_quantity(self, product_id: str, quantity: float) -> None:
        self._basket.update_quantity(product_id, quantity)

    def clear_basket(self) -> None:
        self._basket.clear()

    # ------------------------------------------------------------------
    # Pickup date selection
    # ------------------------------------------------------------------

    def load_available_dates(self) -> None:
        dates = OrderDateUtils.available_pickup_dates(None, self._clock(), self._tz, self._schedule)
        self._apply(AvailableDatesLoaded(dates=tuple(to_millis(date) for date in dates)))

    def show_date_picker(self) -> None:
        self.load_available_dates()
        self._apply(DatePickerToggled(visible=True))

    def hide_date_picker(self) -> None:
        self._apply(DatePickerToggled(visible=False))

    def select_pickup_date(self, pickup_date: int) -> FlowResult:
        if not self._is_pickup_date_valid(pickup_date):
            result = self._fail(None, PickupDateExpiredException(pickup_date),
                                show_date_picker=True, clear_selected_date=True)
            self.load_available_dates()
            return result
        self._apply(PickupDateSelected(pickup_date=pickup_date))
        return SUCCESS

    def show_reorder_date_picker(self) -> None:
        self.load_available_dates()
        self._apply(ReorderDatePickerToggled(visible=True))

    def hide_reorder_date_picker(self) -> None:
        self._apply(ReorderDatePickerToggled(visible=False))

    def reset_order_state(self) -> None:
        self._apply(OrderStateReset())

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    async def initialize(self) -> None:
        """
        Prepare the screen: pickup dates plus the order the basket belongs to.

        A basket linked to an order is refreshed from it, or emptied when that
        order is gone or finalized. An unlinked basket picks up the buyer's
        most recent order that can still be edited.
        """
        self.load_available_dates()
        await self.load_most_recent_editable_order()

    async def load_most_recent_editable_order(self) -> None:
        link = self._basket.get_loaded_order_info()
        if link is not None:
            result = await self._call("Order load", self._orders.load_order(
                self._seller_id, link.order_id, order_path(self._seller_id, link.date_key, link.order_id)))
            if not result.is_success or OrderStateMachine.is_final_status(result.value.status):
                logger.info(f"Linked order {link.order_id} is no longer open, clearing basket")
                self._basket.clear()
                self._apply(BasketReset())
                self.load_available_dates()
                return
            self._show_loaded_order(result.value, link.date_key, force_load=False)
            return

        user_id = await self._current_user_id()
        if user_id is None:
            return
        profile_result = await self._call("Profile load", self._profiles.get_buyer_profile())
        if not profile_result.is_success or not profile_result.value.placed_order_ids:
            return

        result = await self._call("Open order lookup", self._orders.get_open_editable_order(
            self._seller_id, profile_result.value.placed_order_ids))
        order = result.get_or_none()
        if order is None:
            logger.info(f"No editable order for user {user_id}")
            return
        await self.load_order(order.id, self._date_key(order.pick_up_date))

    async def load_order(self, order_id: str, date_key: str, force_load: bool = False) -> FlowResult:
        """
        Load a remote order and show it.

        The basket is replaced by the order's lines when forced, when it is
        empty or when it belongs to a different order; otherwise local edits
        to this order are kept.
        """
        if self.state.is_loading_order:
            return self._reject(FlowKind.LOAD)
        self._apply(FlowStarted(flow=FlowKind.LOAD))

        result = await self._call("Order load", self._orders.load_order(
            self._seller_id, order_id, order_path(self._seller_id, date_key, order_id)))
        if not result.is_success:
            return self._fail(FlowKind.LOAD, result.error)

        self._show_loaded_order(result.value, date_key, force_load)
        logger.info(f"Order {order_id} loaded ({date_key})")
        return SUCCESS

    def enable_editing(self) -> FlowResult:
        state = self.state
        if state.pickup_date is None or not self._can_edit(state.pickup_date):
            return self._fail(None, EditDeadlinePassedException(state.order_id, state.pickup_date))
        self._apply(EditingEnabled())
        return SUCCESS

    # ------------------------------------------------------------------
    # Checkout
    # ------------------------------------------------------------------

    async def checkout(self) -> FlowResult:
        """
        Place the basket as an order for the selected pickup date.

        When the buyer already has an order for that date, nothing is sent:
        the merge dialog opens with the conflicting lines instead.
        """
        if self.state.is_checking_out:
            return self._reject(FlowKind.CHECKOUT)
        self._apply(FlowStarted(flow=FlowKind.CHECKOUT))

        user_id = await self._current_user_id()
        if user_id is None:
            return self._fail(FlowKind.CHECKOUT, UserNotAuthenticatedException())

        items = self._basket.items
        if not items:
            return self._fail(FlowKind.CHECKOUT, EmptyBasketException())

        pickup_date = self.state.selected_pickup_date
        if pickup_date is None:
            return self._fail(FlowKind.CHECKOUT, PickupDateNotSelectedException(), show_date_picker=True)
        if not self._is_pickup_date_valid(pickup_date):
            return self._reject_stale_date(FlowKind.CHECKOUT, pickup_date)

        profile = await self._load_profile(user_id)
        date_key = self._date_key(pickup_date)

        existing_order_id = profile.placed_order_ids.get(date_key)
        if existing_order_id:
            result = await self._call("Order load", self._orders.load_order(
                self._seller_id, existing_order_id, order_path(self._seller_id, date_key, existing_order_id)))
            if result.is_success and not OrderStateMachine.is_final_status(result.value.status):
                existing = result.value
                conflicts = ReconciliationService.compute_merge_conflicts(items, existing.articles)
                self._apply(MergeRequired(existing_order=existing, conflicts=tuple(conflicts)))
                logger.info(f"Checkout: order {existing.id} already exists for {date_key}, merge required")
                return FlowResult(status=FlowStatus.MERGE_REQUIRED)
            if not result.is_success and result.error.kind != ErrorKind.NOT_FOUND:
                return self._fail(FlowKind.CHECKOUT, result.error)

            logger.warning(f"Checkout: order {existing_order_id} for {date_key} is gone, placing a new order")
            await self._forget_placed_order(existing_order_id)

        # The deadline may have passed while waiting for the profile
        if not self._is_pickup_date_valid(pickup_date):
            return self._reject_stale_date(FlowKind.CHECKOUT, pickup_date)

        order = Order(
            buyer_profile=profile,
            created_date=to_millis(self._clock()),
            seller_id=self._seller_id,
            market_id=self._market_id,
            pick_up_date=pickup_date,
            message="",
            articles=list(items),
            status=OrderStatus.PLACED
        )
        result = await self._call("Order placement", self._orders.place_order(order))
        if not result.is_success:
            return self._fail(FlowKind.CHECKOUT, result.error)

        placed = result.value
        placed_date_key = self._date_key(placed.pick_up_date)
        self._link_basket(items, placed.articles, placed.id, placed_date_key)
        self._apply(OrderPlaced(order=placed, date_key=placed_date_key, can_edit=self._can_edit(placed.pick_up_date)))
        logger.info(f"Checkout: order {placed.id} placed for {placed_date_key} ({len(placed.articles)} items)")

        await self._remember_placed_order(placed_date_key, placed.id)
        return SUCCESS

    # ------------------------------------------------------------------
    # Merge
    # ------------------------------------------------------------------

    def resolve_merge_conflict(self, product_id: str, resolution: MergeResolution) -> None:
        self._apply(MergeConflictResolved(product_id=product_id, resolution=resolution))

    def hide_merge_dialog(self) -> None:
        self._apply(MergeDismissed())

    async def confirm_merge(self) -> FlowResult:
        """
        Merge the basket into the existing order using the chosen resolutions.

        On failure the dialog and its resolutions stay as they are, so the
        buyer can retry.
        """
        if self.state.is_merging:
            return self._reject(FlowKind.MERGE)
        self._apply(FlowStarted(flow=FlowKind.MERGE))

        existing = self.state.existing_order_for_merge
        if existing is None:
            return self._fail(FlowKind.MERGE, NoPendingMergeException())

        snapshot = self._basket.items
        merged = ReconciliationService.build_merged_items(existing.articles, snapshot, self.state.merge_conflicts)

        user_id = await self._current_user_id()
        if user_id is None:
            return self._fail(FlowKind.MERGE, UserNotAuthenticatedException())
        profile = await self._load_profile(user_id)

        if not self._can_edit(existing.pick_up_date):
            return self._fail(FlowKind.MERGE, EditDeadlinePassedException(existing.id, existing.pick_up_date))

        merged_order = existing.model_copy(update={'buyer_profile': profile, 'articles': merged})
        result = await self._call("Order update", self._orders.update_order(merged_order))
        if not result.is_success:
            return self._fail(FlowKind.MERGE, result.error)

        date_key = self._date_key(existing.pick_up_date)
        self._link_basket(snapshot, merged, existing.id, date_key)
        self._apply(MergeConfirmed(order=merged_order, date_key=date_key,
                                   can_edit=self._can_edit(existing.pick_up_date)))
        logger.info(f"Merge: basket merged into order {existing.id} ({len(merged)} items)")
        return SUCCESS

    # ------------------------------------------------------------------
    # Update / cancel
    # ------------------------------------------------------------------

    async def update_order(self) -> FlowResult:
        """Replace the loaded order's lines with the basket."""
        if self.state.is_checking_out:
            return self._reject(FlowKind.UPDATE)
        self._apply(FlowStarted(flow=FlowKind.UPDATE))

        state = self.state
        if state.order_id is None or state.pickup_date is None or state.created_date is None:
            return self._fail(FlowKind.UPDATE, MissingOrderInfoException("update"))
        if not self._can_edit(state.pickup_date):
            return self._fail(FlowKind.UPDATE, EditDeadlinePassedException(state.order_id, state.pickup_date))

        user_id = await self._current_user_id()
        if user_id is None:
            return self._fail(FlowKind.UPDATE, UserNotAuthenticatedException())

        items = self._basket.items
        if not items:
            return self._fail(FlowKind.UPDATE, EmptyBasketException("update"))

        profile = await self._load_profile(user_id)
        if not self._can_edit(state.pickup_date):
            return self._fail(FlowKind.UPDATE, EditDeadlinePassedException(state.order_id, state.pickup_date))

        order = Order(
            id=state.order_id,
            buyer_profile=profile,
            created_date=state.created_date,
            seller_id=self._seller_id,
            market_id=self._market_id,
            pick_up_date=state.pickup_date,
            message="",
            articles=list(items),
            status=OrderStatus.PLACED
        )
        result = await self._call("Order update", self._orders.update_order(order))
        if not result.is_success:
            return self._fail(FlowKind.UPDATE, result.error)

        self._apply(OrderUpdated(items=items))
        logger.info(f"Order {state.order_id} updated ({len(items)} items)")
        return SUCCESS

    async def cancel_order(self) -> FlowResult:
        """
        Cancel the loaded order and empty the basket.

        An order that no longer exists remotely counts as cancelled: local
        state is cleaned up the same way and RECONCILED is returned.
        """
        if self.state.is_cancelling:
            return self._reject(FlowKind.CANCEL)
        self._apply(FlowStarted(flow=FlowKind.CANCEL))

        state = self.state
        if state.order_id is None or state.order_date is None or state.pickup_date is None:
            return self._fail(FlowKind.CANCEL, MissingOrderInfoException("cancel"))
        if not self._can_edit(state.pickup_date):
            return self._fail(FlowKind.CANCEL, EditDeadlinePassedException(state.order_id, state.pickup_date))

        result = await self._call("Order cancellation", self._orders.cancel_order(
            self._seller_id, state.order_date, state.order_id))
        reconciled = not result.is_success and result.error.kind == ErrorKind.NOT_FOUND
        if not result.is_success and not reconciled:
            return self._fail(FlowKind.CANCEL, result.error)

        await self._forget_placed_order(state.order_id)
        self._basket.clear()
        self._apply(OrderCancelled(confirmed=not reconciled))

        if reconciled:
            logger.info(f"Order {state.order_id} was already gone, local state cleaned up")
            return FlowResult(status=FlowStatus.RECONCILED)
        logger.info(f"Order {state.order_id} cancelled")
        return SUCCESS

    # ------------------------------------------------------------------
    # Reorder
    # ------------------------------------------------------------------

    async def reorder_with_new_date(self, new_pickup_date: int, current_articles: list[Article]) -> FlowResult:
        """
        Turn the basket into a fresh, unplaced order for another pickup date.

        Prices, names and units are refreshed from the current catalog. Lines
        whose article is unavailable keep their previous values.
        """
        if self.state.is_reordering:
            return self._reject(FlowKind.REORDER)
        self._apply(FlowStarted(flow=FlowKind.REORDER))

        if not self._is_pickup_date_valid(new_pickup_date):
            return self._reject_stale_date(FlowKind.REORDER, new_pickup_date)

        items = self._basket.items
        if not items:
            return self._fail(FlowKind.REORDER, NothingToReorderException())

        self._basket.replace_items(ReconciliationService.reprice_items(items, current_articles))
        self._apply(ReorderPrepared(pickup_date=new_pickup_date))
        logger.info(f"Reorder: {len(items)} items prepared for {self._date_key(new_pickup_date)}")
        return SUCCESS

    # ------------------------------------------------------------------
    # Session
    # ------------------------------------------------------------------

    def start_new_order(self) -> None:
        self._basket.clear()
        self._apply(BasketReset())
        self.load_available_dates()

    def logout(self) -> None:
        logger.info("Buyer signed out, discarding basket")
        self.start_new_order()
