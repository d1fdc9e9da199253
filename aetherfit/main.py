"""FastAPI application entry point."""
from fastapi import FastAPI

from aetherfit.logging_config import configure_logging
from aetherfit.routers import alerts, analysis, dashboard, health, telemetry

configure_logging()

app = FastAPI(title="AetherFit AQFA API")


@app.get("/health", tags=["system"])
async def health_check() -> dict[str, str]:
    """Simple liveness check."""
    return {"status": "ok"}


# Include routers
app.include_router(health.router)
app.include_router(analysis.router)
app.include_router(dashboard.router)
app.include_router(telemetry.router)
app.include_router(alerts.router)
