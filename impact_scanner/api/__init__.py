"""API server with health check and impact estimation endpoints.

Each feature has its own router module, assembled here into a single FastAPI app.

Endpoints:
    GET  /health           - Health check for ECS monitoring
    POST /impacts          - Estimate impacts of an inventory
    POST /impacts/summary  - Estimate and summarize impacts of an inventory
"""

from fastapi import FastAPI

from impact_scanner.api.health_router import router as health_router
from impact_scanner.api.impacts_router import router as impacts_router
from impact_scanner.common.tracing import TraceIdMiddleware

app = FastAPI(title="Cloud Impact Scanner API")

app.add_middleware(TraceIdMiddleware)
app.include_router(health_router)
app.include_router(impacts_router)
