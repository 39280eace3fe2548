"""FastAPI application factory."""

from fastapi import FastAPI

from nutrition_insight.api.parse import router as parse_router
from nutrition_insight.app_logging import configure_logging
from nutrition_insight.containers import AppContainer


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()

    app = FastAPI(title="Nutrition Insight")
    app.state.container = container

    app.include_router(parse_router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app
