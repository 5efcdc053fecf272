"""Quick-match (swipe) endpoints."""
from __future__ import annotations

from nexo.models.backend import (
    LikeResponse,
    LikesReceivedResponse,
    Match,
    ProfileActionRequest,
    ProfilesResponse,
)
from nexo.services.backend.base import BackendClient


class QuickMatchAPI(BackendClient):
    async def get_profiles(self, page: int = 1, limit: int = 20) -> ProfilesResponse:
        response = await self._send("GET", "quick-match/profiles", params={"page": page, "limit": limit})
        return self._decode(ProfilesResponse, response)

    async def like_profile(self, profile_id: str) -> LikeResponse:
        body = ProfileActionRequest(profile_id=profile_id)
        response = await self._send("POST", "quick-match/like", json=body.to_payload())
        return self._decode(LikeResponse, response)

    async def pass_profile(self, profile_id: str) -> None:
        body = ProfileActionRequest(profile_id=profile_id)
        await self._send("POST", "quick-match/pass", json=body.to_payload())

    async def get_matches(self) -> list[Match]:
        response = await self._send("GET", "quick-match/matches")
        return self._decode_list(Match, response)

    async def get_likes_received(self) -> LikesReceivedResponse:
        response = await self._send("GET", "quick-match/likes-received")
        return self._decode(LikesReceivedResponse, response)
