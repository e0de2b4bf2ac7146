from typing import MutableMapping, Optional

from ._base import AuthUser, SessionStore

USER_KEY = "user"


class CookieSessionStore(SessionStore):
    """Signed-in user kept inside the signed session cookie."""

    def __init__(self, session: MutableMapping) -> None:
        self.session = session

    async def load(self) -> Optional[AuthUser]:
        user = self.session.get(USER_KEY)
        if not isinstance(user, dict) or not user.get("email"):
            return None
        return {"email": user["email"]}

    async def save(self, user: AuthUser) -> None:
        self.session[USER_KEY] = {"email": user["email"]}

    async def clear(self) -> None:
        self.session.pop(USER_KEY, None)
