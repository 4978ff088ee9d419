"""Keycloak OIDC provider for token introspection."""

import logging
from dataclasses import dataclass

from keycloak import KeycloakOpenID
from keycloak.exceptions import KeycloakError

logger = logging.getLogger(__name__)


@dataclass
class OIDCIdentity:
    """Identity asserted by an active access token."""

    subject: str
    username: str | None
    email: str | None


class KeycloakProvider:
    """Keycloak OIDC - introspects access tokens."""

    def __init__(
        self,
        server_url: str,
        realm: str,
        client_id: str,
        client_secret: str = "",
    ) -> None:
        self._keycloak = KeycloakOpenID(
            server_url=server_url,
            realm_name=realm,
            client_id=client_id,
            client_secret_key=client_secret,
        )

    async def decode_token(self, token: str) -> OIDCIdentity | None:
        """Return the identity of an active token, or None."""
        try:
            token_info = await self._keycloak.a_introspect(token)
        except KeycloakError as exc:
            logger.warning("Token introspection failed: %s", exc)
            return None
        if not token_info.get("active"):
            return None
        return OIDCIdentity(
            subject=token_info.get("sub", ""),
            username=token_info.get("preferred_username"),
            email=token_info.get("email"),
        )
