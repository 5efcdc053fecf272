"""Chat endpoints."""
from __future__ import annotations

from nexo.models.backend import (
    ChatDetail,
    ChatListItem,
    ChatMessage,
    CreateChatRequest,
    MessageResponse,
    SendMessageRequest,
    UserSearchResult,
)
from nexo.services.backend.base import BackendClient

MIN_SEARCH_LENGTH = 2


class ChatAPI(BackendClient):
    async def fetch_chats(self, search: str | None = None) -> list[ChatListItem]:
        params = None
        if search and search.strip():
            params = {"search": search}
        response = await self._send("GET", "chats", params=params)
        return self._decode_list(ChatListItem, response)

    async def fetch_messages(self, chat_id: str) -> list[ChatMessage]:
        response = await self._send("GET", f"chats/{chat_id}/messages")
        return self._decode_list(ChatMessage, response)

    async def send_message(self, chat_id: str, text: str) -> ChatMessage:
        body = SendMessageRequest(text=text)
        response = await self._send("POST", f"chats/{chat_id}/messages", json=body.to_payload())
        return self._decode(ChatMessage, response)

    async def mark_chat_as_read(self, chat_id: str) -> None:
        # Any 2xx counts; the body is not used.
        await self._send("PATCH", f"chats/{chat_id}/read")

    async def create_chat(
        self,
        participant_ids: list[str],
        group_name: str | None = None,
        group_avatar: str | None = None,
    ) -> ChatDetail:
        body = CreateChatRequest(
            participant_ids=participant_ids,
            group_name=group_name,
            group_avatar=group_avatar,
        )
        response = await self._send("POST", "chats", json=body.to_payload())
        return self._decode(ChatDetail, response)

    async def delete_chat(self, chat_id: str) -> MessageResponse:
        response = await self._send("DELETE", f"chats/{chat_id}")
        return self._decode(MessageResponse, response)

    async def delete_message(self, message_id: str) -> MessageResponse:
        response = await self._send("DELETE", f"chats/messages/{message_id}")
        return self._decode(MessageResponse, response)

    async def search_users(self, query: str) -> list[UserSearchResult]:
        """Search users by name. Queries shorter than two characters return nothing."""

        trimmed = query.strip()
        if len(trimmed) < MIN_SEARCH_LENGTH:
            return []
        response = await self._send("GET", "users/search", params={"search": trimmed})
        return self._decode_list(UserSearchResult, response)
