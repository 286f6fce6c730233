import logging

from enums.merge_resolution import MergeResolution
from models.article import Article
from models.merge_conflict import MergeConflict
from models.ordered_product import OrderedProduct

logger = logging.getLogger(__name__)


class ReconciliationService:
    """
    Pure comparisons between the local basket and a remote order.
    """

    @staticmethod
    def has_changes(current: list[OrderedProduct] | tuple[OrderedProduct, ...],
                    original: list[OrderedProduct] | tuple[OrderedProduct, ...]) -> bool:
        """
        Check whether the basket differs from the order it was loaded from.

        Lines are compared by product_id and quantity only, order of lines and
        price snapshots are ignored.

        Args:
            current: Lines currently in the basket
            original: Lines of the loaded order

        Returns:
            False when both are empty or contain the same products with equal quantities
        """
        if not current and not original:
            return False
        if len(current) != len(original):
            return True

        original_amounts = {item.product_id: item.amount_count for item in original}
        for item in current:
            if item.product_id not in original_amounts:
                return True
            if original_amounts[item.product_id] != item.amount_count:
                return True
        return False

    @staticmethod
    def compute_merge_conflicts(new_items: list[OrderedProduct] | tuple[OrderedProduct, ...],
                                existing_items: list[OrderedProduct] | tuple[OrderedProduct, ...]
                                ) -> list[MergeConflict]:
        """
        Find products ordered on both sides with different quantities.

        Products only present on one side are not conflicts: existing-only lines
        stay in the order and new-only lines are appended on merge.
        """
        existing_by_product = {item.product_id: item for item in existing_items}
        conflicts = []
        for new_item in new_items:
            existing = existing_by_product.get(new_item.product_id)
            if existing is None or existing.amount_count == new_item.amount_count:
                continue
            conflicts.append(MergeConflict(
                product_id=new_item.product_id,
                product_name=new_item.product_name or existing.product_name,
                unit=new_item.unit,
                existing_quantity=existing.amount_count,
                new_quantity=new_item.amount_count,
                existing_price=existing.price,
                new_price=new_item.price
            ))
        logger.info(f"Merge: {len(conflicts)} conflicts between {len(new_items)} new "
                    f"and {len(existing_items)} existing items")
        return conflicts

    @staticmethod
    def resolve_conflict(conflicts: list[MergeConflict] | tuple[MergeConflict, ...], product_id: str,
                         resolution: MergeResolution) -> list[MergeConflict]:
        return [
            conflict.model_copy(update={'resolution': resolution}) if conflict.product_id == product_id
            else conflict
            for conflict in conflicts
        ]

    @staticmethod
    def build_merged_items(existing_items: list[OrderedProduct] | tuple[OrderedProduct, ...],
                           new_items: list[OrderedProduct] | tuple[OrderedProduct, ...],
                           conflicts: list[MergeConflict] | tuple[MergeConflict, ...]) -> list[OrderedProduct]:
        """
        Combine an existing order with the basket according to the chosen resolutions.

        Existing lines come first in their original order:
        - ADD: existing quantity plus the current basket quantity, basket price used
        - KEEP_EXISTING / UNDECIDED: existing line unchanged
        - USE_NEW: basket line replaces the existing one
        - no conflict but present in the basket: basket line (same quantity)
        Basket lines for products not in the order are appended afterwards.
        """
        new_by_product = {item.product_id: item for item in new_items}
        conflict_by_product = {conflict.product_id: conflict for conflict in conflicts}

        merged = []
        for existing in existing_items:
            new_item = new_by_product.get(existing.product_id)
            conflict = conflict_by_product.get(existing.product_id)

            if new_item is None:
                merged.append(existing)
            elif conflict is None or conflict.resolution == MergeResolution.USE_NEW:
                merged.append(new_item)
            elif conflict.resolution == MergeResolution.ADD:
                merged.append(existing.with_quantity(existing.amount_count + new_item.amount_count)
                              .model_copy(update={'price': new_item.price}))
            else:
                merged.append(existing)

        existing_product_ids = {item.product_id for item in existing_items}
        merged.extend(item for item in new_items if item.product_id not in existing_product_ids)
        return merged

    @staticmethod
    def reprice_items(items: list[OrderedProduct] | tuple[OrderedProduct, ...],
                      articles: list[Article]) -> list[OrderedProduct]:
        """
        Refresh price, name and unit of each line from the current catalog.

        Lines whose article is missing or unavailable are kept unchanged.
        """
        repriced = []
        for item in items:
            article = next((a for a in articles if a.matches_product(item.product_id)), None)
            if article is None or not article.available:
                logger.info(f"Reorder: product {item.product_id} not available, keeping previous price")
                repriced.append(item)
                continue
            repriced.append(item.model_copy(update={
                'price': article.price,
                'product_name': article.product_name,
                'unit': article.unit,
                'weight_per_piece': article.weight_per_piece or item.weight_per_piece
            }).with_quantity(item.amount_count))
        return repriced
