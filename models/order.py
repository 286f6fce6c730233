from pydantic import BaseModel, ConfigDict

from enums.order_status import OrderStatus
from models.buyer_profile import BuyerProfile
from models.ordered_product import OrderedProduct


class Order(BaseModel):
    """
    Remote order document. Always read and written as a whole snapshot.

    pick_up_date and created_date are epoch milliseconds.
    """
    model_config = ConfigDict(frozen=True)

    id: str = ""
    buyer_profile: BuyerProfile = BuyerProfile()
    created_date: int = 0
    seller_id: str = ""
    market_id: str = ""
    pick_up_date: int = 0
    message: str = ""
    not_favourite: bool = False
    articles: list[OrderedProduct] = []
    status: OrderStatus = OrderStatus.DRAFT

    @property
    def total(self) -> float:
        return sum(article.total_price for article in self.articles)


def order_path(seller_id: str, date_key: str, order_id: str) -> str:
    """Storage path of an order document: orders/{seller}/{YYYYMMDD}/{order}."""
    return f"orders/{seller_id}/{date_key}/{order_id}"
