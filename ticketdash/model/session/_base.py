from abc import ABC, abstractmethod
from typing import Optional, TypedDict


class AuthUser(TypedDict):
    email: str


# ----------------------------
# Session Store Interface
# ----------------------------
class SessionStore(ABC):
    @abstractmethod
    async def load(self) -> Optional[AuthUser]: ...

    @abstractmethod
    async def save(self, user: AuthUser) -> None: ...

    @abstractmethod
    async def clear(self) -> None: ...
