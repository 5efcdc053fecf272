"""DTOs mirroring the NEXO backend JSON shapes.

Decoding is tolerant: fields with several possible key names list their
candidates in ``key_candidates`` (tried in order), nulls and values of the wrong
type fall back to the field default, and unknown keys are ignored.
"""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, ClassVar, Mapping

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    ValidationInfo,
    ValidatorFunctionWrapHandler,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel

from nexo.models.decoding import first_present_str, new_placeholder_id

ID_KEYS = ("id", "_id")
MONGO_ID_KEYS = ("_id", "id")


class TolerantModel(BaseModel):
    """Base for decode-only DTOs."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    key_candidates: ClassVar[dict[str, tuple[str, ...]]] = {}

    @classmethod
    def _prepare(cls, data: dict[str, Any]) -> dict[str, Any]:
        return data

    @model_validator(mode="before")
    @classmethod
    def _resolve_keys(cls, data: Any) -> Any:
        if not isinstance(data, Mapping):
            return data
        resolved = {key: value for key, value in data.items() if value is not None}
        for field_name, keys in cls.key_candidates.items():
            alias = to_camel(field_name)
            value = first_present_str(data, keys)
            if value is None:
                resolved.pop(alias, None)
            else:
                resolved[alias] = value
        return cls._prepare(resolved)

    @field_validator("*", mode="wrap")
    @classmethod
    def _default_on_bad_value(
        cls, value: Any, handler: ValidatorFunctionWrapHandler, info: ValidationInfo
    ) -> Any:
        try:
            return handler(value)
        except ValidationError:
            field = cls.model_fields[info.field_name]
            if field.is_required():
                raise
            return field.get_default(call_default_factory=True)


class RequestModel(BaseModel):
    """Base for request bodies; serialised camelCase with nulls omitted."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")


# --- Errors and generic envelopes -------------------------------------------


class ApiErrorEnvelope(BaseModel):
    """NestJS error body: ``{statusCode, message: str | [str], error}``."""

    status_code: int | None = None
    messages: list[str] = Field(default_factory=list)
    error_type: str | None = None

    @classmethod
    def from_payload(cls, payload: Any) -> "ApiErrorEnvelope | None":
        if not isinstance(payload, Mapping):
            return None
        status = payload.get("statusCode")
        message = payload.get("message")
        if isinstance(message, str):
            messages = [message]
        elif isinstance(message, list):
            messages = [item for item in message if isinstance(item, str)]
        else:
            messages = []
        if not messages:
            return None
        error_type = payload.get("error")
        return cls(
            status_code=status if isinstance(status, int) and not isinstance(status, bool) else None,
            messages=messages,
            error_type=error_type if isinstance(error_type, str) else None,
        )

    @property
    def user_message(self) -> str:
        return self.messages[0] if self.messages else "Something went wrong. Please try again."


class MessageResponse(TolerantModel):
    message: str = "OK"

    key_candidates = {"message": ("message", "msg", "status")}


# --- Activities --------------------------------------------------------------


class ApiCreator(TolerantModel):
    id: str = ""
    name: str | None = None
    email: str | None = None
    profile_image_url: str | None = None

    key_candidates = {"id": MONGO_ID_KEYS}


class ApiActivity(TolerantModel):
    id: str = ""
    creator: ApiCreator = Field(default_factory=ApiCreator)
    sport_type: str = ""
    title: str = ""
    description: str | None = None
    location: str = ""
    latitude: float | None = None
    longitude: float | None = None
    date: str = ""
    time: str = ""
    participants: int = 0
    level: str = ""
    visibility: str = "public"
    created_at: str | None = None
    updated_at: str | None = None

    key_candidates = {"id": MONGO_ID_KEYS}

    @classmethod
    def _prepare(cls, data: dict[str, Any]) -> dict[str, Any]:
        # Unpopulated references arrive as a bare id string.
        creator = data.get("creator")
        if isinstance(creator, str):
            data["creator"] = {"_id": creator}
        return data


class CreateActivityRequest(RequestModel):
    sport_type: str
    title: str
    description: str | None = None
    location: str
    latitude: float | None = None
    longitude: float | None = None
    date: str
    time: str
    participants: int
    level: str
    visibility: str = "public"


# --- Chats -------------------------------------------------------------------


class ChatListItem(TolerantModel):
    id: str = ""
    participant_names: str = ""
    participant_avatars: list[str] = Field(default_factory=list)
    last_message: str = ""
    last_message_time: str = ""
    unread_count: int = 0
    is_group: bool = False

    key_candidates = {"id": ID_KEYS}


def format_message_time(value: str) -> str:
    """Render an ISO-8601 timestamp as ``h:mm AM`` (UTC); unparseable input is returned unchanged."""

    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return value
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc).strftime("%I:%M %p").lstrip("0")


class ChatMessage(TolerantModel):
    """A chat message in either the UI shape or the raw database shape."""

    id: str = ""
    text: str = ""
    sender: str = "me"
    time: str = ""
    sender_name: str | None = None
    avatar: str | None = None

    key_candidates = {"id": ID_KEYS}

    @classmethod
    def _prepare(cls, data: dict[str, Any]) -> dict[str, Any]:
        sender = data.get("sender")
        if isinstance(sender, str):
            return data

        # Database shape: sender is a user object and time comes from createdAt.
        sender_obj = sender if isinstance(sender, Mapping) else {}
        created_at = data.get("createdAt")
        prepared = {key: value for key, value in data.items() if key not in {"sender", "senderName", "avatar", "time"}}
        prepared["senderName"] = first_present_str(sender_obj, ("name",))
        prepared["avatar"] = first_present_str(sender_obj, ("profileImageUrl",))
        prepared["time"] = format_message_time(created_at) if isinstance(created_at, str) else ""
        # Send responses echo our own message back.
        prepared["sender"] = "me"
        return {key: value for key, value in prepared.items() if value is not None}


class ChatDetail(TolerantModel):
    id: str = ""

    key_candidates = {"id": ID_KEYS}


class SendMessageRequest(RequestModel):
    text: str


class CreateChatRequest(RequestModel):
    participant_ids: list[str]
    group_name: str | None = None
    group_avatar: str | None = None


class UserSearchResult(TolerantModel):
    id: str = ""
    name: str = "Unknown"
    avatar: str | None = None

    key_candidates = {
        "id": ID_KEYS,
        "name": ("name", "username"),
        "avatar": ("profileImageUrl", "avatar", "profileImageThumbnailUrl"),
    }


# --- Profile -----------------------------------------------------------------


class UserProfile(TolerantModel):
    id: str = ""
    email: str = ""
    name: str = ""
    location: str = ""
    is_email_verified: bool = False
    phone: str | None = None
    date_of_birth: str | None = None
    about: str | None = None
    sports_interests: list[str] | None = None
    profile_image_url: str | None = None
    profile_image_thumbnail_url: str | None = None
    created_at: str | None = None
    updated_at: str | None = None

    key_candidates = {"id": MONGO_ID_KEYS}

    @property
    def initials(self) -> str:
        letters = "".join(part[0] for part in self.name.split() if part)
        return letters.upper() or "?"

    @property
    def first_name(self) -> str:
        parts = self.name.split()
        return parts[0] if parts else self.name

    @property
    def is_complete(self) -> bool:
        return bool(
            self.name
            and self.email
            and self.location
            and self.phone is not None
            and self.date_of_birth is not None
            and self.about is not None
            and self.sports_interests
        )


class UpdateProfileRequest(RequestModel):
    name: str | None = None
    email: str | None = None
    phone: str | None = None
    date_of_birth: str | None = None  # DD/MM/YYYY
    location: str | None = None
    about: str | None = None
    sports_interests: list[str] | None = None


class SendVerificationEmailRequest(RequestModel):
    email: str


class ChangePasswordRequest(RequestModel):
    current_password: str
    new_password: str


# --- Quick match -------------------------------------------------------------


class Sport(TolerantModel):
    name: str | None = None
    icon: str | None = None
    level: str | None = None


class Profile(TolerantModel):
    id: str = Field(default_factory=new_placeholder_id)
    name: str | None = None
    age: int | None = None
    email: str | None = None
    avatar_url: str | None = None
    cover_image_url: str | None = None
    location: str | None = None
    distance: str | None = None
    bio: str | None = None
    about: str | None = None
    sports_interests: list[str] | None = None
    sports: list[Sport] | None = None
    interests: list[str] | None = None
    rating: int | None = None
    activities_joined: int | None = None
    profile_image_url: str | None = None

    key_candidates = {"id": MONGO_ID_KEYS}


class Pagination(TolerantModel):
    total: int = 0
    page: int = 1
    total_pages: int = 0
    limit: int = 0


class ProfilesResponse(TolerantModel):
    profiles: list[Profile] = Field(default_factory=list)
    pagination: Pagination = Field(default_factory=Pagination)


class ProfileActionRequest(RequestModel):
    """Body of both like and pass calls."""

    profile_id: str


class LikeResponse(TolerantModel):
    is_match: bool = False
    matched_profile: Profile | None = None


class MatchUser(TolerantModel):
    id: str = Field(default_factory=new_placeholder_id)
    name: str | None = None
    email: str | None = None
    profile_image_url: str | None = None

    key_candidates = {"id": MONGO_ID_KEYS}


class Match(TolerantModel):
    match_id: str = ""
    user: MatchUser = Field(default_factory=MatchUser)
    has_chatted: bool = False
    chat_id: str | None = None
    created_at: str = ""


class LikeUser(TolerantModel):
    id: str = Field(default_factory=new_placeholder_id)
    name: str | None = None
    profile_image_url: str | None = None
    avatar_url: str | None = None

    key_candidates = {"id": MONGO_ID_KEYS}


class LikeReceived(TolerantModel):
    like_id: str = ""
    from_user: LikeUser = Field(default_factory=LikeUser)
    is_match: bool = False
    match_id: str | None = None
    created_at: str = ""


class LikesReceivedResponse(TolerantModel):
    likes: list[LikeReceived] = Field(default_factory=list)
