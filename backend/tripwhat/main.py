"""FastAPI application."""

from fastapi import FastAPI

from backend.tripwhat.api.routes.conversations import router as conversations_router
from backend.tripwhat.api.routes.health import router as health_router
from backend.tripwhat.api.routes.metrics import router as metrics_router
from backend.tripwhat.orchestration.factory import build_orchestrator
from backend.tripwhat.orchestration.modification import ModificationOrchestrator


def create_app(orchestrator: ModificationOrchestrator | None = None) -> FastAPI:
    """Build the API; the orchestrator defaults to one wired from settings."""
    app = FastAPI(title="Tripwhat Itinerary API", version="0.1.0")
    app.state.orchestrator = orchestrator or build_orchestrator()

    app.include_router(health_router, tags=["health"])
    app.include_router(metrics_router, tags=["metrics"])
    app.include_router(conversations_router)

    @app.get("/")
    async def root() -> dict[str, str]:
        """Root endpoint."""
        return {"message": "Tripwhat Itinerary API", "version": "0.1.0"}

    return app


app = create_app()
