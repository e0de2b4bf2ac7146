from abc import ABC, abstractmethod
from typing import Any, List, Mapping, Optional

import httpx

from .errors import ConfigurationError, UpstreamError

NOT_CONFIGURED = "API credentials are not configured"
FETCH_FAILED = "Failed to fetch participant data"


# ----------------------------
# Participants Source Interface
# ----------------------------
class ParticipantsSource(ABC):
    # parsed JSON payload, or None when the upstream has no data (404)
    @abstractmethod
    async def fetch(self) -> Optional[Any]: ...


# ----------------------------
# Upstream HTTP implementation
# ----------------------------
class UpstreamParticipants(ParticipantsSource):

    def __init__(self, http: httpx.AsyncClient, url: Optional[str],
                 token: Optional[str]) -> None:
        self.http = http
        self.url = url
        self.token = token

    async def fetch(self) -> Optional[Any]:
        if not self.url or not self.token:
            raise ConfigurationError(NOT_CONFIGURED)
        try:
            resp = await self.http.get(
                self.url,
                headers={
                    "Authorization": f"Bearer {self.token}",
                    "Content-Type": "application/json",
                },
            )
        except httpx.HTTPError as e:
            raise UpstreamError(FETCH_FAILED) from e

        if resp.status_code == 404:
            return None
        if not resp.is_success:
            raise UpstreamError(
                f"External API returned status {resp.status_code}",
                status_code=resp.status_code,
            )
        try:
            return resp.json()
        except ValueError as e:
            raise UpstreamError(FETCH_FAILED) from e


def records_from_payload(payload: Any) -> List[Any]:
    if not isinstance(payload, Mapping):
        return []
    data = payload.get("data")
    return list(data) if isinstance(data, list) else []


async def load_records(source: ParticipantsSource) -> List[Any]:
    return records_from_payload(await source.fetch())
