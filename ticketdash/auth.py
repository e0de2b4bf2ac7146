from typing import Optional

from .errors import AuthenticationError
from .helpers import ct_equal
from .model.session import AuthUser, SessionStore

INVALID_CREDENTIALS = "Invalid email or password."


class Authenticator:
    """Checks the operator against one configured demo credential pair.

    Sign-in state goes through the injected SessionStore; there is no
    lockout or retry limit.
    """

    def __init__(self, store: SessionStore, email: Optional[str],
                 password: Optional[str]) -> None:
        self.store = store
        self.email = email or ""
        self.password = password or ""

    async def current_user(self) -> Optional[AuthUser]:
        return await self.store.load()

    async def login(self, email: str, password: str) -> AuthUser:
        email = (email or "").strip()
        # an unconfigured pair never matches, not even empty input
        if not self.email or not self.password:
            raise AuthenticationError(INVALID_CREDENTIALS)
        ok_user = ct_equal(email, self.email)
        ok_pass = ct_equal(password or "", self.password)
        if not (ok_user and ok_pass):
            raise AuthenticationError(INVALID_CREDENTIALS)
        user: AuthUser = {"email": email}
        await self.store.save(user)
        return user

    async def logout(self) -> None:
        await self.store.clear()
