from typing import AsyncIterator, Protocol, runtime_checkable

from enums.article_change_kind import ArticleChangeKind
from models.article import Article, ArticleChange


@runtime_checkable
class ArticleRepository(Protocol):

    def stream_articles(self, seller_id: str) -> AsyncIterator[ArticleChange]:
        """
        Catalog change stream of a seller.

        Starts with an ADDED entry per existing article, followed by live changes.
        """
        ...


class InMemoryArticleRepository:

    def __init__(self, articles: dict[str, list[Article]] | None = None):
        self._changes: dict[str, list[ArticleChange]] = {
            seller_id: [ArticleChange(article=article, change_kind=ArticleChangeKind.ADDED) for article in items]
            for seller_id, items in (articles or {}).items()
        }

    def publish(self, seller_id: str, article: Article, change_kind: ArticleChangeKind):
        self._changes.setdefault(seller_id, []).append(ArticleChange(article=article, change_kind=change_kind))

    async def stream_articles(self, seller_id: str) -> AsyncIterator[ArticleChange]:
        for change in list(self._changes.get(seller_id, [])):
            yield change
