from __future__ import annotations
import json
import uuid
from typing import MutableMapping, Optional

import redis.asyncio as redis

from ._base import AuthUser, SessionStore


# ---- keys
def k_user(sid: str) -> str: return f"user:{sid}"


SID_KEY = "sid"


class RedisSessionStore(SessionStore):
    """The cookie carries only an opaque id; the user lives in Redis."""

    def __init__(self, session: MutableMapping, r: redis.Redis,
                 ttl_seconds: int) -> None:
        self.session = session
        self.r = r
        self.ttl = ttl_seconds

    async def load(self) -> Optional[AuthUser]:
        sid = self.session.get(SID_KEY)
        if not sid:
            return None
        raw = await self.r.get(k_user(sid))
        if not raw:
            # expired server-side; drop the dangling id
            self.session.pop(SID_KEY, None)
            return None
        try:
            user = json.loads(raw)
        except json.JSONDecodeError:
            user = None
        if not isinstance(user, dict) or not user.get("email"):
            # unreadable entry; drop the dangling id
            self.session.pop(SID_KEY, None)
            return None
        return {"email": user["email"]}

    async def save(self, user: AuthUser) -> None:
        # fresh id on every login
        await self.clear()
        sid = uuid.uuid4().hex
        await self.r.set(
            k_user(sid), json.dumps({"email": user["email"]}), ex=self.ttl
        )
        self.session[SID_KEY] = sid

    async def clear(self) -> None:
        sid = self.session.pop(SID_KEY, None)
        if sid:
            await self.r.delete(k_user(sid))
