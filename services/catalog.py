import logging

from enums.article_change_kind import ArticleChangeKind
from models.article import Article, ArticleChange
from repositories.article import ArticleRepository

logger = logging.getLogger(__name__)


class CatalogService:
    """
    Keeps a seller's current catalog from its article change stream.
    """

    @staticmethod
    def apply_change(catalog: dict[str, Article], change: ArticleChange) -> dict[str, Article]:
        """
        Return a new catalog with the change applied.

        ADDED, CHANGED and MOVED replace the article by id, REMOVED drops it.
        """
        updated = dict(catalog)
        if change.change_kind == ArticleChangeKind.REMOVED:
            updated.pop(change.article.id, None)
        else:
            updated[change.article.id] = change.article
        return updated

    @staticmethod
    async def load_catalog(article_repository: ArticleRepository, seller_id: str) -> list[Article]:
        """
        Fold the change stream into a list of current articles.

        Consumes the stream until it ends, so use it with finite streams
        (snapshots) only.
        """
        catalog: dict[str, Article] = {}
        async for change in article_repository.stream_articles(seller_id):
            catalog = CatalogService.apply_change(catalog, change)
        logger.info(f"Catalog for seller {seller_id} loaded with {len(catalog)} articles")
        return list(catalog.values())
