import logging
from typing import AsyncIterator, Callable

from models.loaded_order_link import LoadedOrderLink
from models.ordered_product import OrderedProduct
from utils.state_stream import StateStream

logger = logging.getLogger(__name__)


class BasketStore:
    """
    Local basket: the source of truth for what the buyer is about to order.

    Every mutation builds a new tuple of lines and emits it once, so
    observers never see a half-applied change.
    """

    def __init__(self):
        self._items = StateStream(())
        self._loaded_order: LoadedOrderLink | None = None

    @property
    def items(self) -> tuple[OrderedProduct, ...]:
        return self._items.value

    def observe(self) -> AsyncIterator[tuple[OrderedProduct, ...]]:
        return self._items.subscribe()

    def add_listener(self, listener: Callable[[tuple[OrderedProduct, ...]], None]) -> Callable[[], None]:
        return self._items.add_listener(listener)

    def add_item(self, item: OrderedProduct) -> None:
        """
        Add a line, or add its quantity to the existing line of the same product.

        The existing line keeps its price snapshot and name.
        """
        items = list(self.items)
        for index, existing in enumerate(items):
            if existing.product_id == item.product_id:
                items[index] = existing.with_quantity(existing.amount_count + item.amount_count)
                logger.debug(f"Basket: merged {item.amount_count} into product {item.product_id}")
                break
        else:
            items.append(item.with_quantity(item.amount_count))
            logger.debug(f"Basket: added product {item.product_id}")
        self._items.emit(tuple(items))

    def remove_item(self, product_id: str) -> None:
        items = tuple(item for item in self.items if item.product_id != product_id)
        self._items.emit(items)

    def update_quantity(self, product_id: str, new_quantity: float) -> None:
        """
        Set the quantity of a line and re-derive its piece count.

        Raises:
            ValueError: If new_quantity is negative
        """
        if new_quantity < 0:
            raise ValueError(f"Quantity must not be negative (got: {new_quantity})")
        items = tuple(
            item.with_quantity(new_quantity) if item.product_id == product_id else item
            for item in self.items
        )
        self._items.emit(items)

    def clear(self) -> None:
        """Empty the basket and forget the loaded order."""
        self._loaded_order = None
        self._items.emit(())
        logger.debug("Basket: cleared")

    def load_order_items(self, items: list[OrderedProduct] | tuple[OrderedProduct, ...],
                         order_id: str, date_key: str) -> None:
        """Replace the basket with the lines of a remote order and remember the order."""
        self._loaded_order = LoadedOrderLink(order_id=order_id, date_key=date_key)
        self._items.emit(tuple(items))
        logger.info(f"Basket: loaded {len(items)} items from order {order_id} ({date_key})")

    def replace_items(self, items: list[OrderedProduct] | tuple[OrderedProduct, ...]) -> None:
        """Replace the basket with unplaced lines, detached from any order."""
        self._loaded_order = None
        self._items.emit(tuple(items))

    def get_loaded_order_info(self) -> LoadedOrderLink | None:
        return self._loaded_order

    def total(self) -> float:
        return sum(item.total_price for item in self.items)

    def item_count(self) -> int:
        return sum(item.pieces_count for item in self.items)
