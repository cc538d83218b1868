from jose import jwt
import base64
import binascii
import json
import asyncio
import logging
import aiohttp
from datetime import datetime, timedelta, timezone
from typing import Dict, Any, Optional

from slowtravel.core.config import settings
from slowtravel.core.errors import ConfigurationError, SheetsError

logger = logging.getLogger(__name__)

SHEETS_SCOPE = "https://www.googleapis.com/auth/spreadsheets"
JWT_BEARER_GRANT = "urn:ietf:params:oauth:grant-type:jwt-bearer"


def load_service_account(encoded: Optional[str]) -> Dict[str, Any]:
    """Decode the base64 service account JSON from the environment."""
    if not encoded:
        raise ConfigurationError("GOOGLE_SERVICE_ACCOUNT_BASE64 is not set")

    try:
        info = json.loads(base64.b64decode(encoded).decode("utf-8"))
    except (binascii.Error, UnicodeDecodeError, json.JSONDecodeError) as e:
        raise ConfigurationError(f"Service account credentials are unreadable: {e}") from e

    for field in ("client_email", "private_key"):
        if not info.get(field):
            raise ConfigurationError(f"Service account credentials lack '{field}'")

    return info


class ServiceAccountTokenManager:
    """Exchanges signed service account assertions for Google access tokens."""

    def __init__(self, encoded_credentials: Optional[str] = None, token_uri: Optional[str] = None):
        self._encoded = encoded_credentials
        self._token_uri = token_uri
        self._token: Optional[str] = None
        self._expires_at: Optional[datetime] = None
        self._lock = asyncio.Lock()

        # Refresh a little before Google's expiry
        self.token_ttl = timedelta(hours=1)
        self.refresh_margin = timedelta(minutes=5)

    def create_assertion(self, info: Dict[str, Any]) -> str:
        """Create the RS256 JWT assertion for the token endpoint."""
        now = datetime.now(timezone.utc)
        payload = {
            "iss": info["client_email"],
            "scope": SHEETS_SCOPE,
            "aud": info.get("token_uri") or self._token_uri or settings.google_token_uri,
            "iat": int(now.timestamp()),
            "exp": int((now + self.token_ttl).timestamp()),
        }
        headers = {"kid": info["private_key_id"]} if info.get("private_key_id") else None

        return jwt.encode(payload, info["private_key"], algorithm="RS256", headers=headers)

    def _is_fresh(self) -> bool:
        if not self._token or not self._expires_at:
            return False
        return datetime.now(timezone.utc) < self._expires_at - self.refresh_margin

    async def get_access_token(self, session: aiohttp.ClientSession) -> str:
        """Return a cached access token or fetch a new one."""
        async with self._lock:
            if self._is_fresh():
                return self._token

            info = load_service_account(self._encoded or settings.google_service_account_base64)
            token_uri = self._token_uri or info.get("token_uri") or settings.google_token_uri
            data = {"grant_type": JWT_BEARER_GRANT, "assertion": self.create_assertion(info)}

            async with session.post(token_uri, data=data) as response:
                if response.status != 200:
                    body = await response.text()
                    raise SheetsError(f"Token exchange failed: {body[:200]}", status=response.status)
                payload = await response.json()

            self._token = payload["access_token"]
            expires_in = int(payload.get("expires_in", 3600))
            self._expires_at = datetime.now(timezone.utc) + timedelta(seconds=expires_in)
            logger.info("Fetched Google access token", extra={"expires_in": expires_in})

            return self._token

    def invalidate(self):
        """Forget the cached token so the next call re-authenticates."""
        self._token = None
        self._expires_at = None


# Shared token manager
token_manager = ServiceAccountTokenManager()
