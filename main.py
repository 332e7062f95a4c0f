"""
SecureSign API — application entry point.

Usage:
    python main.py [--migrate] [--seed]

Or, without the boot flags:
    uvicorn --factory main:create_app

``--migrate`` creates the database schema before serving; ``--seed``
(only honoured together with ``--migrate``) adds the platform admin when
no user exists yet.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import pathlib
import sys
from typing import Optional, Sequence

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from api.middleware import register_middleware
from api.routes import router as api_router
from auth.password import hash_password
from auth.routes import router as auth_router
from config.settings import Settings
from database.helpers import seed_admin
from database.session import build_engine, build_session_factory, init_schema

logger = logging.getLogger(__name__)


def configure_logging(debug: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(asctime)s  %(levelname)-8s  %(name)s — %(message)s",
        stream=sys.stdout,
    )
    for _noisy in ("httpcore", "httpx", "asyncio", "aiosqlite"):
        logging.getLogger(_noisy).setLevel(logging.WARNING)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or Settings()

    app = FastAPI(
        title="SecureSign API",
        version="0.1.0",
        description="Multi-tenant SaaS scaffold: auth and tenants.",
        docs_url="/swagger",
    )

    engine = build_engine(settings)
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = build_session_factory(engine)

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_middleware(app)

    # Routes
    app.include_router(auth_router, prefix="/api/auth")
    app.include_router(api_router, prefix="/api")

    frontend_dir = pathlib.Path(__file__).resolve().parent / "frontend"
    if frontend_dir.is_dir():
        app.mount("/", StaticFiles(directory=str(frontend_dir), html=True), name="frontend")

    @app.on_event("startup")
    async def on_startup():
        if settings.uses_default_secret:
            logger.warning("JWT_SECRET not set — using the development secret.")
        logger.info("Application ready to accept requests.")

    @app.on_event("shutdown")
    async def on_shutdown():
        await engine.dispose()

    return app


async def bootstrap_database(settings: Settings, seed: bool = False) -> None:
    """Create the schema and optionally seed the platform admin."""
    engine = build_engine(settings)
    try:
        logger.info("Creating database schema…")
        await init_schema(engine)
        if seed:
            session_factory = build_session_factory(engine)
            password_hash = hash_password(
                settings.platform_admin_pwd, settings.bcrypt_rounds
            )
            async with session_factory() as session:
                await seed_admin(session, settings.platform_admin_email, password_hash)
    finally:
        await engine.dispose()


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the SecureSign API server.")
    parser.add_argument("--migrate", action="store_true", help="create the database schema on boot")
    parser.add_argument("--seed", action="store_true", help="seed the admin user (requires --migrate)")
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = parse_args(argv)
    settings = Settings()
    configure_logging(settings.debug)

    if args.migrate:
        asyncio.run(bootstrap_database(settings, seed=args.seed))
    elif args.seed:
        logger.warning("--seed ignored without --migrate")

    uvicorn.run(
        create_app(settings),
        host=settings.host,
        port=settings.port,
        log_level="debug" if settings.debug else "info",
    )


if __name__ == "__main__":
    main()
