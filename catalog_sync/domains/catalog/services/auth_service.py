"""
Identity provider client (Supabase GoTrue password grant)
"""

from dataclasses import dataclass
from typing import Any, Optional

import httpx

from catalog_sync.core.config.settings import AuthSettings
from catalog_sync.core.exceptions import AuthenticationError, NetworkError, error_message
from catalog_sync.core.http_client import BaseAPIClient
from catalog_sync.core.logging import get_logger
from catalog_sync.shared.constants import DEFAULT_REQUEST_TIMEOUT_MS

logger = get_logger(__name__)


@dataclass
class AuthResult:
    success: bool
    token: Optional[str] = None
    error: Optional[str] = None

    def raise_for_failure(self, email: Optional[str] = None) -> str:
        """Return the token, or raise AuthenticationError"""
        if not self.success or not self.token:
            raise AuthenticationError(self.error or "Authentication failed", email=email)
        return self.token


def _provider_message(body: Any) -> Optional[str]:
    if isinstance(body, dict):
        for key in ("error_description", "msg", "message", "error"):
            if body.get(key):
                return str(body[key])
    if isinstance(body, str) and body:
        return body
    return None


class AuthService(BaseAPIClient):
    """Exchanges an email and password for a bearer token"""

    def __init__(
        self,
        settings: AuthSettings,
        http_client: Optional[httpx.AsyncClient] = None,
        timeout_ms: int = DEFAULT_REQUEST_TIMEOUT_MS,
    ):
        super().__init__(timeout_ms=timeout_ms, http_client=http_client)
        self.settings = settings

    @property
    def token_url(self) -> str:
        return f"{self.settings.SUPABASE_URL.rstrip('/')}/auth/v1/token"

    async def authenticate(self, email: str, password: str) -> AuthResult:
        """Password grant. Never raises; failures are reported in the result."""
        logger.info("Authenticating with identity provider", email=email)

        if not self.settings.SUPABASE_ANON_KEY:
            logger.error("SUPABASE_ANON_KEY is not configured")
            return AuthResult(success=False, error="SUPABASE_ANON_KEY is not configured")

        try:
            data = await self._post_json(
                self.token_url,
                {"email": email, "password": password},
                params={"grant_type": "password"},
                headers={
                    "apikey": self.settings.SUPABASE_ANON_KEY,
                    "Authorization": f"Bearer {self.settings.SUPABASE_ANON_KEY}",
                },
            )
        except NetworkError as e:
            message = _provider_message(e.response_body) or error_message(e)
            logger.error("Authentication failed", email=email, error=message)
            return AuthResult(success=False, error=message)
        except Exception as e:
            message = error_message(e)
            logger.error("Authentication error", email=email, error=message)
            return AuthResult(success=False, error=message)

        token = data.get("access_token") if isinstance(data, dict) else None
        if not token:
            logger.error("No access token received", email=email)
            return AuthResult(success=False, error="No access token received")

        logger.info("Authentication successful", email=email)
        return AuthResult(success=True, token=token)
