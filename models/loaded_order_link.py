from pydantic import BaseModel, ConfigDict


class LoadedOrderLink(BaseModel):
    """The remote order the basket currently mirrors."""
    model_config = ConfigDict(frozen=True)

    order_id: str
    date_key: str  # YYYYMMDD of the pickup date in the local timezone
