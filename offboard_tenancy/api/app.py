import logging

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .error import ClientError, ServerError

logger = logging.getLogger(__name__)


async def handle_client_error(request: Request, exc: ClientError):
    body = exc.to_body()
    logger.warning(f"Client error on {request.url.path}: {body['error']}")
    return JSONResponse(status_code=exc.status_code, content=body)


async def handle_server_error(request: Request, exc: ServerError):
    logger.error(
        f"Server error on {request.url.path}: {exc.base_error.code} "
        f"{exc.base_error.message}"
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=exc.to_body()
    )


def create_app(ApplicationConfig) -> FastAPI:
    app = FastAPI(title="Offboard Tenancy API", version="0.1.0")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ApplicationConfig.CORS_ORIGINS,
        allow_credentials=ApplicationConfig.CORS_ALLOW_CREDENTIALS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    from offboard_tenancy.api.routes import (
        account,
        admin,
        health_check,
        invitation,
        organization,
        trial,
    )

    app.include_router(health_check.router, tags=["Health"])
    app.include_router(trial.router, tags=["Trials"])
    app.include_router(account.router, tags=["Account"])
    app.include_router(organization.router, tags=["Organizations"])
    app.include_router(invitation.router, tags=["Invitations"])
    app.include_router(admin.router, tags=["Admin"])

    app.add_exception_handler(ClientError, handle_client_error)
    app.add_exception_handler(ServerError, handle_server_error)

    return app
