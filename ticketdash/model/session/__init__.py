import os
from typing import MutableMapping, Optional

import redis.asyncio as redis

from ._base import AuthUser, SessionStore
from ._cookie import CookieSessionStore
from ._redis import RedisSessionStore

BACKEND = os.getenv("SESSION_BACKEND", "cookie").lower()  # 'cookie' | 'redis'
TTL_SECONDS = int(os.getenv("SESSION_TTL_SECONDS", str(8 * 3600)))


# Factory keeps server.py simple and constructor-agnostic:
def new_store(*, session: MutableMapping,
              r: Optional[redis.Redis] = None,
              ttl_seconds: int = TTL_SECONDS,
              backend: Optional[str] = None) -> SessionStore:
    backend = (backend or BACKEND).lower()
    if backend == "redis":
        if r is None:
            raise RuntimeError(
                "SessionStore(redis) requires r=redis.Redis"
            )
        return RedisSessionStore(session=session, r=r,
                                 ttl_seconds=ttl_seconds)
    return CookieSessionStore(session=session)


__all__ = [
    "AuthUser", "SessionStore", "CookieSessionStore", "RedisSessionStore",
    "new_store", "BACKEND",
]
