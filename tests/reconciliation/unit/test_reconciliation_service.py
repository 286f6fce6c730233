"""
Unit Tests: ReconciliationService

Tests the pure basket/order comparisons:
- Change detection against the loaded order
- Merge conflict detection and resolution
- Merged line construction
- Repricing for reorders
"""

import pytest

from enums.merge_resolution import MergeResolution
from models.article import Article
from models.merge_conflict import MergeConflict
from models.ordered_product import OrderedProduct
from services.reconciliation import ReconciliationService


class TestHasChanges:

    def test_both_empty(self):
        assert ReconciliationService.has_changes([], []) is False

    def test_same_lines_in_other_order(self, carrots, apples):
        assert ReconciliationService.has_changes([apples, carrots], [carrots, apples]) is False

    def test_price_difference_is_ignored(self, carrots):
        assert ReconciliationService.has_changes([carrots.model_copy(update={'price': 3.0})], [carrots]) is False

    def test_quantity_difference(self, carrots):
        assert ReconciliationService.has_changes([carrots.with_quantity(2.0)], [carrots]) is True

    def test_added_line(self, carrots, apples):
        assert ReconciliationService.has_changes([carrots, apples], [carrots]) is True

    def test_replaced_line(self, carrots, apples):
        assert ReconciliationService.has_changes([apples], [carrots]) is True

    def test_unplaced_basket(self, carrots):
        assert ReconciliationService.has_changes([carrots], []) is True


class TestMergeConflicts:

    def test_only_differing_quantities_conflict(self, carrots, apples, radishes):
        existing = [carrots, apples.with_quantity(1.0)]
        new = [carrots, apples, radishes]

        conflicts = ReconciliationService.compute_merge_conflicts(new, existing)

        assert len(conflicts) == 1
        conflict = conflicts[0]
        assert conflict.product_id == "apples"
        assert conflict.existing_quantity == 1.0
        assert conflict.new_quantity == 2.0
        assert conflict.resolution == MergeResolution.UNDECIDED

    def test_no_overlap_no_conflicts(self, carrots, apples):
        assert ReconciliationService.compute_merge_conflicts([carrots], [apples]) == []

    def test_resolve_conflict_only_touches_product(self):
        conflicts = [
            MergeConflict(product_id="a", existing_quantity=1, new_quantity=2),
            MergeConflict(product_id="b", existing_quantity=1, new_quantity=2),
        ]

        resolved = ReconciliationService.resolve_conflict(conflicts, "b", MergeResolution.USE_NEW)

        assert [c.resolution for c in resolved] == [MergeResolution.UNDECIDED, MergeResolution.USE_NEW]
        assert conflicts[1].resolution == MergeResolution.UNDECIDED


class TestBuildMergedItems:

    @pytest.fixture
    def existing(self, carrots, apples):
        return [carrots, apples.with_quantity(1.0)]

    @pytest.fixture
    def new(self, apples, radishes):
        return [apples.model_copy(update={'price': 3.5}).with_quantity(2.0), radishes]

    def _merge(self, existing, new, resolution):
        conflicts = ReconciliationService.resolve_conflict(
            ReconciliationService.compute_merge_conflicts(new, existing), "apples", resolution)
        merged = ReconciliationService.build_merged_items(existing, new, conflicts)
        return {item.product_id: item for item in merged}, [item.product_id for item in merged]

    def test_add_sums_quantities_with_new_price(self, existing, new):
        merged, order = self._merge(existing, new, MergeResolution.ADD)

        assert merged["apples"].amount_count == 3.0
        assert merged["apples"].pieces_count == 15
        assert merged["apples"].price == 3.5
        assert order == ["carrots", "apples", "radishes"]

    def test_keep_existing(self, existing, new):
        merged, _ = self._merge(existing, new, MergeResolution.KEEP_EXISTING)
        assert merged["apples"].amount_count == 1.0
        assert merged["apples"].price == 3.2

    def test_use_new(self, existing, new):
        merged, _ = self._merge(existing, new, MergeResolution.USE_NEW)
        assert merged["apples"].amount_count == 2.0
        assert merged["apples"].price == 3.5

    def test_undecided_keeps_existing(self, existing, new):
        merged, order = self._merge(existing, new, MergeResolution.UNDECIDED)

        assert merged["apples"].amount_count == 1.0
        assert merged["carrots"].amount_count == 1.0
        assert order == ["carrots", "apples", "radishes"]

    def test_add_uses_basket_line_changed_after_conflicts(self, existing, new, apples, radishes):
        conflicts = ReconciliationService.resolve_conflict(
            ReconciliationService.compute_merge_conflicts(new, existing), "apples", MergeResolution.ADD)
        edited = [apples.model_copy(update={'price': 3.6}).with_quantity(5.0), radishes]

        merged = {item.product_id: item
                  for item in ReconciliationService.build_merged_items(existing, edited, conflicts)}

        assert merged["apples"].amount_count == 6.0
        assert merged["apples"].price == 3.6

    def test_add_without_basket_line_keeps_existing(self, existing, new, radishes):
        conflicts = ReconciliationService.resolve_conflict(
            ReconciliationService.compute_merge_conflicts(new, existing), "apples", MergeResolution.ADD)

        merged = {item.product_id: item
                  for item in ReconciliationService.build_merged_items(existing, [radishes], conflicts)}

        assert merged["apples"].amount_count == 1.0
        assert merged["apples"].price == 3.2

    def test_existing_only_lines_survive(self, carrots, radishes):
        merged = ReconciliationService.build_merged_items([carrots], [radishes], [])
        assert [item.product_id for item in merged] == ["carrots", "radishes"]


class TestRepriceItems:

    def test_updates_from_catalog(self, carrots):
        articles = [Article(id="carrots", product_name="Bio-Karotten", unit="kg", price=2.9, weight_per_piece=0.2)]

        repriced = ReconciliationService.reprice_items([carrots], articles)

        assert repriced[0].price == 2.9
        assert repriced[0].product_name == "Bio-Karotten"
        assert repriced[0].amount_count == 1.0
        assert repriced[0].pieces_count == 5

    def test_matches_by_product_id(self, radishes):
        articles = [Article(id="article_7", product_id="radishes", product_name="Radieschen", unit="Bund", price=1.8)]

        repriced = ReconciliationService.reprice_items([radishes], articles)

        assert repriced[0].price == 1.8
        assert repriced[0].product_id == "radishes"

    def test_unavailable_or_missing_keeps_line(self, carrots, apples):
        articles = [Article(id="carrots", price=9.9, unit="kg", available=False)]

        repriced = ReconciliationService.reprice_items([carrots, apples], articles)

        assert repriced == [carrots, apples]

    def test_unknown_weight_per_piece_keeps_previous(self):
        item = OrderedProduct.create("beans", "Bohnen", "kg", 4.0, 1.0, weight_per_piece=0.5)
        articles = [Article(id="beans", product_name="Bohnen", unit="kg", price=4.5)]

        repriced = ReconciliationService.reprice_items([item], articles)

        assert repriced[0].weight_per_piece == 0.5
        assert repriced[0].pieces_count == 2
