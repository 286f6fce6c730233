import math

from pydantic import BaseModel, ConfigDict, Field

from enums.product_unit import ProductUnit


class OrderedProduct(BaseModel):
    """
    One basket line. Unique per product_id within a basket.

    amount_count is the quantity in the line's unit (kg for weight products,
    pieces for countable ones), pieces_count is always derived from it.
    """
    model_config = ConfigDict(frozen=True)

    id: str = ""  # Order-scoped line id, empty until the order is placed
    product_id: str
    product_name: str = ""
    unit: str = ProductUnit.PIECE.value
    price: float = 0.0  # Unit price snapshot taken when the line was added
    amount_count: float = Field(default=0.0, ge=0.0)
    pieces_count: int = 0
    weight_per_piece: float = 0.0  # Same unit as amount_count, 0.0 when unknown

    @staticmethod
    def derive_pieces_count(unit: str, amount_count: float, weight_per_piece: float) -> int:
        """
        Number of physical pieces for a quantity.

        Weight units with a known weight per piece divide by it, everything
        else counts whole units of the amount.

        Examples:
            >>> OrderedProduct.derive_pieces_count("kg", 1.5, 0.5)
            3
            >>> OrderedProduct.derive_pieces_count("Bund", 2.0, 0.0)
            2
        """
        if ProductUnit.from_string(unit).is_weight and weight_per_piece > 0:
            # Round away float noise such as 0.3 / 0.1 = 2.9999999999999996
            return math.floor(round(amount_count / weight_per_piece, 9))
        return math.floor(round(amount_count, 9))

    @classmethod
    def create(cls, product_id: str, product_name: str, unit: str, price: float,
               amount_count: float, weight_per_piece: float = 0.0, id: str = "") -> 'OrderedProduct':
        return cls(
            id=id,
            product_id=product_id,
            product_name=product_name,
            unit=unit,
            price=price,
            amount_count=amount_count,
            pieces_count=cls.derive_pieces_count(unit, amount_count, weight_per_piece),
            weight_per_piece=weight_per_piece
        )

    def with_quantity(self, amount_count: float) -> 'OrderedProduct':
        if amount_count < 0:
            raise ValueError(f"Quantity must not be negative (got: {amount_count})")
        return self.model_copy(update={
            'amount_count': amount_count,
            'pieces_count': self.derive_pieces_count(self.unit, amount_count, self.weight_per_piece)
        })

    @property
    def total_price(self) -> float:
        return self.price * self.amount_count
