"""Auth middleware - resolves the bearer token to an auth identity."""

from dataclasses import dataclass

import falcon.asgi

from grantkeeper.infrastructure.auth.keycloak_provider import KeycloakProvider


@dataclass
class RequestUser:
    """User from request context."""

    auth_id: str
    email: str | None = None
    username: str | None = None


class AuthMiddleware:
    """Middleware that validates the bearer token and sets req.context.user.

    Missing or invalid tokens leave req.context.user as None; resources
    answer 401 for those requests.
    """

    def __init__(self, keycloak_provider: KeycloakProvider | None = None) -> None:
        self._keycloak = keycloak_provider

    async def process_request(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """Extract user from Authorization header."""
        req.context.user = None
        auth = req.get_header("Authorization")
        if not auth or not auth.startswith("Bearer ") or not self._keycloak:
            return
        user = await self._keycloak.authenticate(auth[7:])
        if user:
            req.context.user = RequestUser(
                auth_id=user.auth_id,
                email=user.email,
                username=user.username,
            )
