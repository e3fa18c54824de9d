"""demo-api entrypoint: a FastAPI app protected by passlist Basic-Auth."""

from __future__ import annotations

import uvicorn
from fastapi import FastAPI, Request
from starlette.types import ASGIApp

from passlist.application.services.auth_deciders import PathPrefixDecider
from passlist.config.settings import Settings, load_settings
from passlist.infrastructure.http.auth_middleware import AUTHENTICATED_USER_STATE_KEY, wrap
from passlist.infrastructure.logging import configure_logging
from passlist.infrastructure.security.password_hasher import BcryptPasswordHasher


def build_api() -> FastAPI:
    """Create the unprotected FastAPI application."""

    api = FastAPI(title="passlist demo")

    @api.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    @api.get("/whoami")
    async def whoami(request: Request) -> dict[str, str | None]:
        user = getattr(request.state, AUTHENTICATED_USER_STATE_KEY, None)
        return {"username": user.username if user is not None else None}

    return api


def create_app(*, settings: Settings | None = None) -> ASGIApp:
    """Create the demo application guarded by the configured password file."""

    if settings is None:
        settings = load_settings()
        configure_logging(level=settings.log_level)

    return wrap(
        build_api(),
        realm=settings.realm,
        passwd_file=settings.passwd_file,
        decider=PathPrefixDecider(public_prefixes=settings.public_path_list),
        hasher=BcryptPasswordHasher(rounds=settings.bcrypt_rounds),
        pepper=settings.pepper,
        failure_policy=settings.auth_failure_policy,
    )


def run_asgi_server(*, host: str | None = None, port: int | None = None) -> None:
    """Run demo-api as a long-lived ASGI process using application factory mode."""

    settings = load_settings()
    uvicorn.run(
        "apps.demo_api.main:create_app",
        host=host or settings.api_host,
        port=port or settings.api_port,
        factory=True,
    )


def main() -> None:
    """Run demo-api runtime process."""

    run_asgi_server()


if __name__ == "__main__":
    main()
