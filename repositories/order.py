import asyncio
import logging
from datetime import datetime, timezone, tzinfo
from typing import Callable, Optional, Protocol, runtime_checkable
from uuid import uuid4

from enums.order_status import OrderStatus
from exceptions import OrderNotFoundException, RemoteFailureException
from models.order import Order
from models.order_schedule import OrderScheduleConfig
from models.result import Result
from utils.order_date_utils import OrderDateUtils, from_millis, to_millis
from utils.order_state_machine import OrderStateMachine

logger = logging.getLogger(__name__)


@runtime_checkable
class OrderRepository(Protocol):
    """
    Remote order persistence.

    Orders are stored under orders/{seller_id}/{date_key}/{order_id} and are
    always written as a whole document. Failures are returned, never raised.
    """

    async def place_order(self, order: Order) -> Result:
        """Store a new order. Result value: the stored Order with id and created_date set."""
        ...

    async def update_order(self, order: Order) -> Result:
        """Overwrite an existing order. Result value: the stored Order."""
        ...

    async def load_order(self, seller_id: str, order_id: str, path: str | None = None) -> Result:
        """Result value: the Order, or OrderNotFoundException as error."""
        ...

    async def cancel_order(self, seller_id: str, date_key: str, order_id: str) -> Result:
        """Result value: True once cancelled, OrderNotFoundException if the order is gone."""
        ...

    async def get_open_editable_order(self, seller_id: str, placed_order_ids: dict[str, str]) -> Result:
        """Result value: the buyer's latest order still within its edit deadline, or None."""
        ...

    async def get_upcoming_order(self, seller_id: str, placed_order_ids: dict[str, str]) -> Result:
        """Result value: the buyer's latest order whose pickup is still ahead, or None."""
        ...


class InMemoryOrderRepository:
    """
    OrderRepository kept in process memory, used for local runs and tests.

    Applies the same rules a backend enforces: status transitions through
    OrderStateMachine and the edit deadline for updates.
    """

    def __init__(self, clock: Callable[[], datetime] | None = None, tz: Optional[tzinfo] = None,
                 schedule: Optional[OrderScheduleConfig] = None):
        self._orders: dict[str, Order] = {}
        self._lock = asyncio.Lock()
        self._clock = clock or (lambda: datetime.now(timezone.utc))
        self._tz = tz
        self._schedule = schedule

    def get(self, order_id: str) -> Order | None:
        return self._orders.get(order_id)

    def _is_editable(self, order: Order) -> bool:
        pickup_date = from_millis(order.pick_up_date, self._tz)
        try:
            return OrderDateUtils.can_edit_order(pickup_date, self._clock(), self._tz, self._schedule)
        except ValueError:
            return False

    async def place_order(self, order: Order) -> Result:
        async with self._lock:
            order_id = order.id or f"order_{uuid4().hex[:12]}"
            if not OrderStateMachine.validate_and_log_transition(order_id, OrderStatus.DRAFT, OrderStatus.PLACED,
                                                                 buyer_id=order.buyer_profile.id):
                return Result.failure(RemoteFailureException("Order placement", "invalid order status"))

            placed = order.model_copy(update={
                'id': order_id,
                'created_date': order.created_date or to_millis(self._clock()),
                'status': OrderStatus.PLACED,
            })
            self._orders[order_id] = placed
            logger.info(f"Order {order_id} placed for seller {order.seller_id} with {len(order.articles)} items")
            return Result.success(placed)

    async def update_order(self, order: Order) -> Result:
        async with self._lock:
            existing = self._orders.get(order.id)
            if existing is None:
                return Result.failure(OrderNotFoundException(order.id, "Order update"))
            if not OrderStateMachine.validate_and_log_transition(order.id, existing.status, order.status,
                                                                 buyer_id=order.buyer_profile.id):
                return Result.failure(RemoteFailureException(
                    "Order update", f"order is {existing.status.value}", details={'order_id': order.id}))
            if not self._is_editable(existing):
                return Result.failure(RemoteFailureException(
                    "Order update", "edit deadline passed", details={'order_id': order.id}))

            self._orders[order.id] = order
            logger.info(f"Order {order.id} updated with {len(order.articles)} items")
            return Result.success(order)

    async def load_order(self, seller_id: str, order_id: str, path: str | None = None) -> Result:
        order = self._orders.get(order_id)
        if order is None or order.seller_id != seller_id:
            logger.warning(f"Order {order_id} not found (path: {path})")
            return Result.failure(OrderNotFoundException(order_id, "Order load"))
        return Result.success(order)

    async def cancel_order(self, seller_id: str, date_key: str, order_id: str) -> Result:
        async with self._lock:
            order = self._orders.get(order_id)
            if order is None or order.seller_id != seller_id:
                return Result.failure(OrderNotFoundException(order_id, "Order cancellation"))
            if not OrderStateMachine.validate_and_log_transition(order_id, order.status, OrderStatus.CANCELLED,
                                                                 buyer_id=order.buyer_profile.id):
                return Result.failure(RemoteFailureException(
                    "Order cancellation", f"order is {order.status.value}", details={'order_id': order_id}))

            self._orders[order_id] = order.model_copy(update={'status': OrderStatus.CANCELLED})
            return Result.success(True)

    def _buyer_orders(self, seller_id: str, placed_order_ids: dict[str, str]) -> list[Order]:
        orders = [self._orders.get(order_id) for order_id in placed_order_ids.values()]
        return [
            order for order in orders
            if order is not None and order.seller_id == seller_id and order.status != OrderStatus.CANCELLED
        ]

    async def get_open_editable_order(self, seller_id: str, placed_order_ids: dict[str, str]) -> Result:
        editable = [
            order for order in self._buyer_orders(seller_id, placed_order_ids)
            if order.status.is_editable and self._is_editable(order)
        ]
        return Result.success(max(editable, key=lambda o: o.pick_up_date, default=None))

    async def get_upcoming_order(self, seller_id: str, placed_order_ids: dict[str, str]) -> Result:
        now_millis = to_millis(self._clock())
        upcoming = [
            order for order in self._buyer_orders(seller_id, placed_order_ids)
            if order.pick_up_date > now_millis and not order.status.is_finalized
        ]
        return Result.success(max(upcoming, key=lambda o: o.pick_up_date, default=None))
