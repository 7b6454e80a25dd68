"""
DevAlley Bridge - FastAPI Application Entry Point
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from routers import auth, chat, completion, config, hover, panel
from services.backend_client import Transport
from services.bridge import Bridge
from services.config_manager import ConfigManager
from services.errors import (
    AuthenticationFailed,
    AuthenticationRequired,
    BackendError,
    LoginError,
)

logger = logging.getLogger(__name__)


def create_app(transport: Transport | None = None) -> FastAPI:
    """Build the application; transport overrides the HTTP client used for the backend"""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan manager - startup and shutdown logic"""
        logger.info("[Bridge] Starting DevAlley Bridge...")
        config = ConfigManager.get_instance().get_config()
        app.state.bridge = Bridge(config, transport)
        logger.info("[Bridge] Backend at %s", app.state.bridge.client.base_url)

        yield
        logger.info("[Bridge] Shutting down DevAlley Bridge...")

    app = FastAPI(
        title="DevAlley Bridge",
        description="Editor bridge to the DevAlley inference backend",
        version="1.0.0",
        lifespan=lifespan,
    )

    # CORS middleware for the editor panel webview
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(LoginError)
    async def login_error_handler(request: Request, exc: LoginError):
        return JSONResponse(status_code=401, content={"detail": str(exc)})

    @app.exception_handler(BackendError)
    async def backend_error_handler(request: Request, exc: BackendError):
        if isinstance(exc, (AuthenticationRequired, AuthenticationFailed)):
            return JSONResponse(status_code=401, content={"detail": str(exc)})
        return JSONResponse(status_code=502, content={"detail": f"Backend error: {exc}"})

    # Include routers
    app.include_router(auth.router, prefix="/api/auth", tags=["auth"])
    app.include_router(chat.router, prefix="/api/chat", tags=["chat"])
    app.include_router(completion.router, prefix="/api/completion", tags=["completion"])
    app.include_router(hover.router, prefix="/api/hover", tags=["hover"])
    app.include_router(config.router, prefix="/api/config", tags=["config"])
    app.include_router(panel.router, prefix="/api/panel", tags=["panel"])

    @app.get("/health")
    async def health_check():
        """Health check endpoint"""
        return {"status": "healthy", "service": "devalley-bridge"}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    server = ConfigManager.get_instance().get("server", {})
    uvicorn.run(app, host=server.get("host", "127.0.0.1"), port=server.get("port", 8000))
