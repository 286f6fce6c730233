from pydantic import BaseModel, ConfigDict

from enums.merge_resolution import MergeResolution


class MergeConflict(BaseModel):
    """A product present in both the basket and the placed order with different quantities."""
    model_config = ConfigDict(frozen=True)

    product_id: str
    product_name: str = ""
    unit: str = ""
    existing_quantity: float
    new_quantity: float
    existing_price: float = 0.0
    new_price: float = 0.0
    resolution: MergeResolution = MergeResolution.UNDECIDED
