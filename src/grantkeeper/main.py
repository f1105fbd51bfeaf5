"""Application entry point and composition root."""

import structlog

from grantkeeper import __version__
from grantkeeper.config import get_settings
from grantkeeper.infrastructure.access.access_resolver import EntityAccessResolver
from grantkeeper.infrastructure.auth.keycloak_provider import KeycloakProvider
from grantkeeper.infrastructure.logging import configure_logging
from grantkeeper.infrastructure.persistence.postgres.connection import create_pool
from grantkeeper.infrastructure.persistence.postgres.unit_of_work import create_uow_factory
from grantkeeper.interfaces.api.app import build_resources, create_app
from grantkeeper.interfaces.api.middleware.auth import AuthMiddleware
from grantkeeper.interfaces.api.middleware.cors import CORSMiddleware
from grantkeeper.interfaces.api.middleware.pool_lifespan import PoolLifespanMiddleware

logger = structlog.get_logger()


def create_grantkeeper_app():
    """Composition root - build Falcon app with all dependencies."""
    settings = get_settings()
    configure_logging(settings.log_level, settings.log_json)

    pool = create_pool(
        settings.database_url,
        min_size=settings.database_pool_min_size,
        max_size=settings.database_pool_max_size,
    )
    uow_factory = create_uow_factory(pool)

    keycloak = (
        KeycloakProvider(
            server_url=settings.keycloak_url,
            realm=settings.keycloak_realm,
            client_id=settings.keycloak_client_id,
            client_secret=settings.keycloak_client_secret,
        )
        if settings.keycloak_client_secret
        else None
    )
    if keycloak is None:
        logger.warning("keycloak_not_configured", detail="all requests are unauthenticated")

    access_resolver = EntityAccessResolver(uow_factory)
    resources = build_resources(uow_factory, access_resolver, pool=pool)

    cors_origins = [o.strip() for o in settings.cors_origins.split(",") if o.strip()]
    app = create_app(
        resources,
        middleware=[
            CORSMiddleware(cors_origins),
            PoolLifespanMiddleware(pool),
            AuthMiddleware(keycloak),
        ],
    )
    logger.info("app_created", version=__version__, environment=settings.environment)
    return app


def main() -> None:
    """CLI entry point - run uvicorn server."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "grantkeeper.main:create_grantkeeper_app",
        factory=True,
        host="0.0.0.0",
        port=8000,
        log_level=settings.log_level.lower(),
        reload=settings.debug,
    )
