"""
Models Package

Immutable pydantic DTOs shared by the basket store, the synchronizer and the
repository contracts.
"""

from models.ordered_product import OrderedProduct
from models.article import Article, ArticleChange
from models.buyer_profile import BuyerProfile
from models.order import Order
from models.merge_conflict import MergeConflict
from models.loaded_order_link import LoadedOrderLink
from models.order_schedule import OrderScheduleConfig
from models.result import Result
from models.flow_result import FlowResult
from models.basket_state import BasketScreenState
