from __future__ import annotations

import time
from typing import Optional

import requests

from .config import ConnectionConfig, OAuthConfig
from .errors import AuthError

# Refresh this many seconds before the warehouse token expires.
EXPIRY_MARGIN = 30


def client_credentials_token(session: requests.Session, oauth: OAuthConfig) -> tuple[str, int]:
    """Exchange client credentials for an access token and its lifetime in seconds."""
    form = {
        "grant_type": "client_credentials",
        "client_id": oauth.client_id,
        "client_secret": oauth.client_secret,
    }
    if oauth.scope:
        form["scope"] = oauth.scope

    try:
        response = session.post(oauth.token_url, data=form, timeout=10)
        if response.status_code != 200:
            raise AuthError(f"Token endpoint returned {response.status_code}")
        payload = response.json()
        return payload["access_token"], int(payload.get("expires_in", 3600))
    except requests.RequestException as exc:
        raise AuthError("Failed to contact token endpoint") from exc
    except (ValueError, KeyError) as exc:
        raise AuthError("Invalid token response payload") from exc


class TokenProvider:
    """Access tokens for a warehouse connection.

    A configured static token wins; otherwise an OAuth token is fetched and
    reused until shortly before it expires.
    """

    def __init__(self, connection: ConnectionConfig, session: Optional[requests.Session] = None) -> None:
        self._connection = connection
        self._session = session or requests.Session()
        self._cached: tuple[str, float] | None = None

    def get_token(self) -> str:
        if self._connection.access_token:
            return self._connection.access_token
        if self._connection.oauth is None:
            raise AuthError("No access token or OAuth credentials configured")

        if self._cached and time.time() < self._cached[1] - EXPIRY_MARGIN:
            return self._cached[0]
        token, expires_in = client_credentials_token(self._session, self._connection.oauth)
        self._cached = (token, time.time() + expires_in)
        return token
