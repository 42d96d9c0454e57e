"""FastAPI application factory."""
from fastapi import FastAPI

from laststand.api.routes import summary


def create_app() -> FastAPI:
    """Build and return the FastAPI app."""
    app = FastAPI(
        title="Last Stand API",
        description="Stand/move activity timeline from step-count samples",
        version="0.1.0",
    )

    app.include_router(summary.router, prefix="/summary", tags=["summary"])

    return app


# Module-level app instance for uvicorn
app = create_app()
