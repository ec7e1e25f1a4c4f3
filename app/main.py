from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.api.v1 import functions as functions_router
from app.api.v1 import incidents as incidents_router
from app.api.v1 import tickets as tickets_router
from app.config.db import check_db_connection, engine
from app.config.redis import check_redis_connection
from app.config.supabase import check_supabase_connection
from app.utils.logging_config import logger


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Handle application startup and shutdown events.
    """
    await check_db_connection()
    await check_redis_connection()
    await check_supabase_connection()
    logger.info("INCIDENT TICKETS API IS READY")

    yield

    await engine.dispose()


app = FastAPI(
    lifespan=lifespan,
    title="Incident Tickets",
    description="Turns uploaded call recordings into structured incident tickets",
)

# The mobile/web client calls the function endpoints directly.
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["authorization", "x-client-info", "apikey", "content-type"],
)

# Include routers
app.include_router(functions_router.router, prefix="/functions", tags=["Functions"])
app.include_router(tickets_router.router, prefix="/api/v1/tickets", tags=["Tickets"])
app.include_router(
    incidents_router.router, prefix="/api/v1/incidents", tags=["Incidents"]
)


@app.get("/")
def read_root() -> dict[str, str]:
    return {"message": "Hello from Incident Tickets API!"}


@app.get("/health")
async def health() -> JSONResponse:
    checks = {
        "database": check_db_connection,
        "redis": check_redis_connection,
        "supabase": check_supabase_connection,
    }
    results = {}
    for name, check in checks.items():
        try:
            await check()
            results[name] = "ok"
        except Exception as e:
            results[name] = f"error: {e}"
    healthy = all(value == "ok" for value in results.values())
    return JSONResponse(results, status_code=200 if healthy else 503)
