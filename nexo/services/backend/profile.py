"""Profile, verification-email and password endpoints."""
from __future__ import annotations

import logging

from pydantic import ValidationError

from nexo.errors import DecodeError
from nexo.models.backend import (
    ChangePasswordRequest,
    MessageResponse,
    SendVerificationEmailRequest,
    UpdateProfileRequest,
    UserProfile,
)
from nexo.models.decoding import first_present_str
from nexo.services.backend.base import BackendClient


logger = logging.getLogger(__name__)

VERIFICATION_SENT = "Verification email sent successfully"
PASSWORD_CHANGED = "Password changed successfully"


class ProfileAPI(BackendClient):
    async def get_profile(self) -> UserProfile:
        response = await self._send("GET", "users/profile", failure_message="Failed to get profile")
        return self._decode(UserProfile, response)

    async def update_profile(self, user_id: str, request: UpdateProfileRequest) -> UserProfile:
        response = await self._send(
            "PATCH",
            f"users/{user_id}",
            json=request.to_payload(),
            failure_message="Failed to update profile",
        )
        return self._user_from(response)

    async def upload_profile_image(self, user_id: str, image_data: bytes) -> UserProfile:
        """Upload a JPEG as multipart field ``image``."""

        response = await self._send(
            "PATCH",
            f"users/{user_id}/profile-image",
            files={"image": ("profile.jpg", image_data, "image/jpeg")},
            failure_message="Failed to upload image",
        )
        logger.info("Uploaded profile image for %s (%d bytes)", user_id, len(image_data))
        return self._user_from(response)

    async def send_verification_email(self, email: str) -> str:
        """Works signed in or out; the token is attached only when present."""

        body = SendVerificationEmailRequest(email=email)
        response = await self._send(
            "POST",
            "auth/send-verification-email",
            auth=False,
            json=body.to_payload(),
            failure_message="Failed to send verification email",
        )
        return self._message_from(response, VERIFICATION_SENT)

    async def change_password(self, user_id: str, request: ChangePasswordRequest) -> str:
        response = await self._send(
            "PATCH",
            f"users/{user_id}/change-password",
            json=request.to_payload(),
            failure_message="Failed to change password",
        )
        return self._message_from(response, PASSWORD_CHANGED)

    def _user_from(self, response) -> UserProfile:
        # Either {user, message} or the user object itself.
        payload = self._json(response)
        if isinstance(payload, dict) and isinstance(payload.get("user"), dict):
            payload = payload["user"]
        if not isinstance(payload, dict):
            raise DecodeError()
        try:
            return UserProfile.model_validate(payload)
        except ValidationError as err:
            raise DecodeError() from err

    def _message_from(self, response, default: str) -> str:
        if not response.content:
            return default
        try:
            payload = response.json()
        except ValueError:
            return default
        if not isinstance(payload, dict):
            return default
        return first_present_str(payload, MessageResponse.key_candidates["message"], default)
