from typing import Optional

from fastapi import FastAPI

from swiftbank import __version__
from swiftbank.api.deps import access_control_for
from swiftbank.api.routers import access
from swiftbank.common.logger import configure_logging
from swiftbank.core.config import Settings, get_settings


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the application.

    The access tables are loaded here so that a bad tables file stops
    startup instead of failing requests.
    """
    settings = settings or get_settings()

    configure_logging(settings)
    access_control_for(settings.access_tables_path)

    app = FastAPI(
        title=settings.app_name,
        description="Role and capability access control for SwiftBank",
        version=__version__,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
    )
    app.dependency_overrides[get_settings] = lambda: settings

    app.include_router(access.router, prefix="/api")

    @app.get("/health")
    async def health_check():
        return {"status": "healthy", "version": __version__}

    return app


app = create_app()
