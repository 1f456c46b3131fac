"""Authentication domain service."""

import logging
from pathlib import Path
from typing import Optional

from mymoney.api import endpoints
from mymoney.api.http_client import HttpClient
from mymoney.api.mappers import profile_to_domain
from mymoney.api.upload import ImageUploader
from mymoney.domain.entities import Profile
from mymoney.domain.errors import ApiError, ValidationError
from mymoney.session.cancellation import ActionLatch
from mymoney.session.controller import SessionController
from mymoney.utils.validation import validate_email

logger = logging.getLogger(__name__)


class AuthService:
    """Service for account creation, activation and login."""

    def __init__(
        self,
        client: HttpClient,
        session: SessionController,
        uploader: Optional[ImageUploader] = None,
    ):
        """Initialize auth service.

        Args:
            client: HTTP client
            session: Session controller that receives the new session
            uploader: Image uploader used for profile images at registration
        """
        self.client = client
        self.session = session
        self.uploader = uploader
        self.latch = ActionLatch()

    def _validate_credentials(self, email: str, password: str) -> None:
        if not validate_email(email):
            raise ValidationError("Please enter a valid email address")
        if not password or not password.strip():
            raise ValidationError("Please enter your password")

    async def login(self, email: str, password: str) -> Profile:
        """Exchange credentials for a bearer token and start the session.

        Raises:
            ValidationError: If email or password is invalid
            ApiError: If the server rejects the login or sends no token
        """
        self._validate_credentials(email, password)

        with self.latch.hold("login"):
            response = await self.client.post(
                endpoints.LOGIN, {"email": email.strip(), "password": password}
            )
        data = response.json() if response.content else {}
        token = data.get("token") if isinstance(data, dict) else None
        if not token:
            raise ApiError("Login response did not include a token", status=response.status_code)

        profile = profile_to_domain(data.get("user") or {"email": email.strip()})
        self.session.start(profile, token=token)
        logger.info("Logged in as %s", profile.email)
        return profile

    async def register(
        self,
        full_name: str,
        email: str,
        password: str,
        profile_image: Optional[str | Path] = None,
    ) -> Profile:
        """Create an account.

        The profile image, when given, is uploaded first. An upload failure
        aborts the registration and is raised to the caller.

        Args:
            full_name: User's full name
            email: Email address used to log in
            password: Password
            profile_image: Optional path to an image file

        Returns:
            Profile of the created (not yet activated) account

        Raises:
            ValidationError: If any field is invalid
            UploadError: If the profile image could not be uploaded
            ApiError: If the server rejects the registration
        """
        if not full_name or not full_name.strip():
            raise ValidationError("Please enter your full name")
        self._validate_credentials(email, password)

        with self.latch.hold("register"):
            profile_image_url = ""
            if profile_image is not None:
                if self.uploader is None:
                    raise ValidationError("Profile image upload is not configured")
                profile_image_url = await self.uploader.upload(profile_image)

            response = await self.client.post(
                endpoints.REGISTER,
                {
                    "fullName": full_name.strip(),
                    "email": email.strip(),
                    "password": password,
                    "profileImageUrl": profile_image_url,
                },
            )

        data = response.json() if response.content else None
        if isinstance(data, dict) and data:
            return profile_to_domain(data)
        return Profile(
            full_name=full_name.strip(),
            email=email.strip(),
            profile_image_url=profile_image_url or None,
        )

    async def activate(self, activation_token: str) -> str:
        """Activate a registered account with the emailed token."""
        if not activation_token or not activation_token.strip():
            raise ValidationError("Activation token is required")
        response = await self.client.get(
            endpoints.ACTIVATE, params={"token": activation_token.strip()}
        )
        return response.text.strip() or "Profile activated successfully"

    async def status(self) -> str:
        """Return the server's health message."""
        response = await self.client.get(endpoints.STATUS)
        return response.text.strip()
