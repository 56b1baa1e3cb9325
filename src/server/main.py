"""FastAPI application for mdtoc."""

from fastapi import FastAPI

from mdtoc.utils.logging_config import configure_logging
from server.routers.validate import router as validate_router

configure_logging()

app = FastAPI(
    title="mdtoc",
    description="Validate and generate Markdown tables of contents.",
)
app.include_router(validate_router)


@app.get("/health")
async def health() -> dict[str, str]:
    """Liveness probe."""
    return {"status": "ok"}
