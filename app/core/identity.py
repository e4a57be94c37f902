"""
Identity provider client.

Wraps the parts of the Supabase Auth REST API the backend needs: reading the
session carried by an access token, exchanging an OAuth code for a session,
writing ``user_type`` into user metadata and deleting accounts. When no
provider URL is configured the remote calls are skipped and the local
``users`` table is the only metadata store.
"""

import logging
from dataclasses import dataclass, field
from typing import Optional

import requests

from app.core.config import settings
from app.core.errors import ProviderError, Unauthenticated
from app.core.security import decode_access_token

logger = logging.getLogger("satas.identity")


@dataclass(frozen=True)
class ProviderSession:
    """The identity carried by a verified access token."""

    user_id: str
    email: str
    metadata: dict = field(default_factory=dict)

    @property
    def user_type(self) -> Optional[str]:
        return self.metadata.get("user_type") or None

    @property
    def full_name(self) -> str:
        return self.metadata.get("full_name") or self.metadata.get("name") or ""

    @classmethod
    def from_token(cls, token: Optional[str]) -> "ProviderSession":
        """Verify ``token`` and build a session, or raise ``Unauthenticated``."""
        if not token:
            raise Unauthenticated()

        payload = decode_access_token(token)
        if payload is None or not payload.get("sub"):
            raise Unauthenticated("Invalid or expired session")

        return cls(
            user_id=payload["sub"],
            email=(payload.get("email") or "").lower(),
            metadata=payload.get("user_metadata") or {},
        )


class IdentityProvider:
    """Thin REST client for the identity provider's auth endpoints."""

    def __init__(
        self,
        base_url: str,
        anon_key: str = "",
        service_role_key: str = "",
        timeout: float = 10.0,
    ):
        self.base_url = base_url.rstrip("/")
        self.anon_key = anon_key
        self.service_role_key = service_role_key
        self.timeout = timeout

    @property
    def enabled(self) -> bool:
        return bool(self.base_url)

    def exchange_code_for_session(self, code: str, code_verifier: Optional[str]) -> dict:
        """
        Complete an OAuth redirect by exchanging ``code`` for a session.

        Args:
            code: Authorization code from the redirect
            code_verifier: PKCE verifier generated by the client that started
                the sign-in

        Returns:
            The provider's session payload; ``access_token`` is always present

        Raises:
            Unauthenticated: no verifier, so the exchange cannot succeed
        """
        if not code_verifier:
            raise Unauthenticated("Missing PKCE code verifier")
        if not self.enabled:
            raise ProviderError("Identity provider is not configured")

        session = self._request(
            "POST",
            "/auth/v1/token",
            params={"grant_type": "pkce"},
            json={"auth_code": code, "code_verifier": code_verifier},
            headers={"apikey": self.anon_key},
        )
        if not session.get("access_token"):
            raise ProviderError("Identity provider returned no access token")
        return session

    def set_user_type(self, user_id: str, user_type: str) -> None:
        """Write ``user_type`` into the provider-side user metadata."""
        if not self.enabled:
            logger.debug("Identity provider disabled; user_type kept locally for %s", user_id)
            return

        self._request(
            "PUT",
            f"/auth/v1/admin/users/{user_id}",
            json={"user_metadata": {"user_type": user_type}},
            headers=self._admin_headers(),
        )
        logger.info("Provider metadata updated: user=%s user_type=%s", user_id, user_type)

    def delete_user(self, user_id: str) -> None:
        """Remove the provider account; its sessions stop verifying upstream."""
        if not self.enabled:
            return

        self._request(
            "DELETE",
            f"/auth/v1/admin/users/{user_id}",
            headers=self._admin_headers(),
        )
        logger.info("Provider account deleted: user=%s", user_id)

    def _admin_headers(self) -> dict:
        return {
            "apikey": self.service_role_key,
            "Authorization": f"Bearer {self.service_role_key}",
        }

    def _request(self, method: str, path: str, **kwargs) -> dict:
        try:
            response = requests.request(
                method,
                f"{self.base_url}{path}",
                timeout=self.timeout,
                **kwargs,
            )
            response.raise_for_status()
        except requests.RequestException as e:
            logger.error("Identity provider %s %s failed: %s", method, path, e)
            raise ProviderError("Identity provider request failed") from e

        if not response.content:
            return {}
        return response.json()


def get_identity_provider() -> IdentityProvider:
    """Dependency returning the configured identity provider client."""
    return IdentityProvider(
        base_url=settings.SUPABASE_URL,
        anon_key=settings.SUPABASE_ANON_KEY,
        service_role_key=settings.SUPABASE_SERVICE_ROLE_KEY,
        timeout=settings.IDENTITY_REQUEST_TIMEOUT,
    )
