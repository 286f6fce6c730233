from typing import Protocol, runtime_checkable


@runtime_checkable
class AuthRepository(Protocol):

    async def get_current_user_id(self) -> str | None:
        """ID of the signed-in user, None when signed out."""
        ...


class InMemoryAuthRepository:

    def __init__(self, user_id: str | None = None):
        self.user_id = user_id

    async def get_current_user_id(self) -> str | None:
        return self.user_id

    def sign_in(self, user_id: str):
        self.user_id = user_id

    def sign_out(self):
        self.user_id = None
