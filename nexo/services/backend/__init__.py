"""Clients for the NEXO REST backend."""
from nexo.services.backend.activities import ActivityService
from nexo.services.backend.base import BackendClient
from nexo.services.backend.chats import ChatAPI
from nexo.services.backend.profile import ProfileAPI
from nexo.services.backend.quick_match import QuickMatchAPI
from nexo.services.backend.token_store import InMemoryTokenStore, TokenStore

__all__ = [
    "ActivityService",
    "BackendClient",
    "ChatAPI",
    "InMemoryTokenStore",
    "ProfileAPI",
    "QuickMatchAPI",
    "TokenStore",
]
