import logging
from typing import Protocol, runtime_checkable

from exceptions import RemoteFailureException
from models.buyer_profile import BuyerProfile
from models.result import Result

logger = logging.getLogger(__name__)


@runtime_checkable
class ProfileRepository(Protocol):
    """Buyer profile persistence for the signed-in user."""

    async def get_buyer_profile(self) -> Result:
        """Result value: the BuyerProfile of the current user."""
        ...

    async def save_buyer_profile(self, profile: BuyerProfile) -> Result:
        """Result value: the stored BuyerProfile."""
        ...


class InMemoryProfileRepository:

    def __init__(self, profile: BuyerProfile | None = None):
        self.profile = profile

    async def get_buyer_profile(self) -> Result:
        if self.profile is None:
            return Result.failure(RemoteFailureException("Profile load", "no buyer profile"))
        return Result.success(self.profile)

    async def save_buyer_profile(self, profile: BuyerProfile) -> Result:
        self.profile = profile
        logger.info(f"Buyer profile {profile.id} saved ({len(profile.placed_order_ids)} placed orders)")
        return Result.success(profile)
