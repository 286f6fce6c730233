from pydantic import BaseModel, ConfigDict

from enums.article_change_kind import ArticleChangeKind
from enums.product_unit import ProductUnit


class Article(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    product_id: str = ""
    product_name: str = ""
    available: bool = True
    unit: str = ProductUnit.PIECE.value
    price: float = 0.0
    weight_per_piece: float = 0.0
    image_url: str = ""
    category: str = ""
    search_terms: str = ""
    detail_info: str = ""

    def matches_product(self, product_id: str) -> bool:
        return product_id == self.id or (bool(self.product_id) and product_id == self.product_id)


class ArticleChange(BaseModel):
    """Single entry of a seller's catalog change stream."""
    model_config = ConfigDict(frozen=True)

    article: Article
    change_kind: ArticleChangeKind
