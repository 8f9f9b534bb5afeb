from typing import Optional

import structlog
import uvicorn
from fastapi import FastAPI

from tourney import __version__
from tourney.api.endpoints import auth as auth_endpoints
from tourney.api.endpoints import banners as banner_endpoints
from tourney.api.endpoints import health as health_endpoints
from tourney.api.endpoints import organizers as organizer_endpoints
from tourney.api.endpoints import registrations as registration_endpoints
from tourney.api.endpoints import tournaments as tournament_endpoints
from tourney.api.endpoints import users as user_endpoints
from tourney.api.errors import register_exception_handlers
from tourney.core.config import Settings, get_settings
from tourney.core.logging import configure_logging
from tourney.services.payment_service import PaymentSimulator
from tourney.services.sample_data import seed_sample_data
from tourney.services.storage import Storage, build_storage

logger = structlog.get_logger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    storage: Optional[Storage] = None,
    payment_simulator: Optional[PaymentSimulator] = None,
) -> FastAPI:
    """Build the API with its storage and payment simulator.

    Anything not passed in is constructed from ``settings`` (the environment by
    default). Tests hand in their own storage and a zero-latency simulator.
    """
    settings = settings or get_settings()
    configure_logging(settings.log_level, app_env=settings.app_env, version=__version__)

    if storage is None:
        storage = build_storage(settings)
    if payment_simulator is None:
        payment_simulator = PaymentSimulator(
            latency_seconds=settings.payment_latency_seconds,
            success_rate=settings.payment_success_rate,
        )
    if settings.seed_sample_data:
        seed_sample_data(storage)

    app = FastAPI(title="Free Fire Tournament API", version=__version__)
    app.state.settings = settings
    app.state.storage = storage
    app.state.payment_simulator = payment_simulator

    register_exception_handlers(app)

    app.include_router(health_endpoints.router)
    app.include_router(auth_endpoints.router, prefix="/api/auth", tags=["Authentication"])
    app.include_router(user_endpoints.router, prefix="/api/users", tags=["Users"])
    app.include_router(tournament_endpoints.router, prefix="/api/tournaments", tags=["Tournaments"])
    app.include_router(registration_endpoints.router, prefix="/api/registrations", tags=["Registrations"])
    app.include_router(organizer_endpoints.router, prefix="/api/organizer", tags=["Organizers"])
    app.include_router(banner_endpoints.router, prefix="/api/tournament-banner", tags=["Banners"])

    logger.info("app_created", storage=storage.name, env=settings.app_env)
    return app


def run() -> None:
    settings = get_settings()
    uvicorn.run(
        "tourney.main:create_app",
        factory=True,
        host=settings.app_host,
        port=settings.app_port,
        reload=settings.app_env == "dev",
    )


if __name__ == "__main__":
    run()
