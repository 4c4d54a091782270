from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from pmadmin.core.config import Settings, load_settings
from pmadmin.infrastructure import AdminApiClient, configure_api_client
from pmadmin.routes import boards, mutations, tools


def create_app(settings: Settings | None = None, *, api_client: AdminApiClient | None = None) -> FastAPI:
    settings = settings or load_settings()
    client = api_client or AdminApiClient.from_settings(settings)
    configure_api_client(client)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        # Only closes the httpx client the API client created itself.
        await client.aclose()

    app = FastAPI(title="Project Admin Dashboard API", version="0.1.0", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(boards.router, prefix="/api")
    app.include_router(mutations.router, prefix="/api")
    app.include_router(tools.router, prefix="/api")

    @app.get("/", include_in_schema=False)
    async def root() -> JSONResponse:
        """Provide a lightweight landing page for container checks."""
        return JSONResponse(
            {
                "message": "Project Admin Dashboard API",
                "docs": "/docs",
                "backend": settings.api_base_url,
                "health": "/api/boards",
            }
        )

    return app


app = create_app()
