from enum import Enum


class ProductUnit(str, Enum):
    """
    Selling units for marketplace products.

    Measurable units are sold by weight or volume, countable units by piece.
    Values are the German display labels used by the sellers' catalogs.
    Examples:
    - KILOGRAM ("kg") → amount is a weight, pieces derived from weight per piece
    - BUNCH ("Bund") → amount is a piece count
    """

    # Weight units
    KILOGRAM = "kg"
    GRAM = "g"

    # Volume units
    LITER = "L"
    MILLILITER = "ml"

    # Countable units
    PIECE = "Stück"
    BUNCH = "Bund"
    BAG = "Beutel"
    BOWL = "Schale"
    CRATE = "Kasten"
    JAR = "Glas"
    BOTTLE = "Flasche"
    CAN = "Dose"

    @classmethod
    def from_string(cls, value: str | None) -> 'ProductUnit':
        """
        Convert a catalog unit string to ProductUnit.

        Matching is case-insensitive and accepts common spellings
        ("stk", "pcs", "kilo", "liter"). Unknown or empty values fall back
        to PIECE, since every catalog entry can at least be counted.

        Examples:
            >>> ProductUnit.from_string(" KG ")
            ProductUnit.KILOGRAM
            >>> ProductUnit.from_string("stk")
            ProductUnit.PIECE
        """
        if not value:
            return cls.PIECE

        normalized = value.strip().lower()

        for unit in cls:
            if unit.value.lower() == normalized:
                return unit

        return _UNIT_ALIASES.get(normalized, cls.PIECE)

    @property
    def is_weight(self) -> bool:
        return self in (ProductUnit.KILOGRAM, ProductUnit.GRAM)

    @property
    def is_measurable(self) -> bool:
        return self in (ProductUnit.KILOGRAM, ProductUnit.GRAM, ProductUnit.LITER, ProductUnit.MILLILITER)

    @property
    def is_countable(self) -> bool:
        return not self.is_measurable

    @property
    def display_name(self) -> str:
        """
        Human-readable enum name, e.g. 'Kilogram' or 'Milliliter'.
        """
        return self.name.replace('_', ' ').title()


_UNIT_ALIASES = {
    "kilo": ProductUnit.KILOGRAM,
    "kilogramm": ProductUnit.KILOGRAM,
    "gramm": ProductUnit.GRAM,
    "gr": ProductUnit.GRAM,
    "l": ProductUnit.LITER,
    "liter": ProductUnit.LITER,
    "milliliter": ProductUnit.MILLILITER,
    "stk": ProductUnit.PIECE,
    "stk.": ProductUnit.PIECE,
    "stueck": ProductUnit.PIECE,
    "pcs": ProductUnit.PIECE,
    "pcs.": ProductUnit.PIECE,
    "piece": ProductUnit.PIECE,
}
