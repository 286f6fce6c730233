from pydantic import BaseModel, ConfigDict


class BuyerProfile(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str = ""
    display_name: str = ""
    email_address: str = ""
    telephone_number: str = ""
    photo_url: str = ""
    anonymous: bool = True
    default_market: str = ""
    default_pick_up_time: str = ""
    placed_order_ids: dict[str, str] = {}  # date_key (YYYYMMDD) -> order id
    favourite_articles: list[str] = []

    def with_placed_order(self, date_key: str, order_id: str) -> 'BuyerProfile':
        return self.model_copy(update={'placed_order_ids': {**self.placed_order_ids, date_key: order_id}})

    def without_placed_order(self, order_id: str) -> 'BuyerProfile':
        remaining = {key: value for key, value in self.placed_order_ids.items() if value != order_id}
        return self.model_copy(update={'placed_order_ids': remaining})
