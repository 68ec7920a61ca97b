import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.config import settings
from app.database import Database
from app.logging_config import setup_logging
from app.routers import applications, candidates, job_offers, job_requests, notifications, profile, users

setup_logging()
logger = logging.getLogger(__name__)

SECRET_KEY_PLACEHOLDER = "replace-with-a-long-random-secret-key"
DATABASE_URL_PLACEHOLDER = "username:password@"
PRODUCTION_ENVS = {"production", "prod"}

app = FastAPI(
    title="JobBoard API",
    description="Company and candidate profiles, job offers, applications, interviews and notifications.",
    version="1.0.0",
)

# One owned connection pool per app instance; handlers reach it through get_db.
app.state.database = Database(
    settings.database_url,
    pool_size=settings.db_pool_size,
    max_overflow=settings.db_max_overflow,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[origin.strip() for origin in settings.cors_allow_origins.split(",") if origin.strip()],
    allow_credentials=True,
    allow_methods=["GET", "POST", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["Authorization", "Content-Type"],
)

for router_module in (applications, notifications, profile, users, candidates, job_offers, job_requests):
    app.include_router(router_module.router)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


def placeholder_settings() -> list[str]:
    """Names of settings still carrying the .env.example placeholder values."""
    found = []
    if settings.secret_key == SECRET_KEY_PLACEHOLDER:
        found.append("SECRET_KEY")
    if DATABASE_URL_PLACEHOLDER in settings.database_url:
        found.append("DATABASE_URL")
    return found


@app.on_event("startup")
def on_startup():
    env = (settings.app_env or "development").lower()
    logger.info("Starting JobBoard API (env=%s)", env)
    placeholders = placeholder_settings()
    if placeholders and env in PRODUCTION_ENVS:
        raise RuntimeError(f"Placeholder values are not allowed in production: {', '.join(placeholders)}")
    for name in placeholders:
        logger.warning("%s is still the placeholder from .env.example; set a real value before deploying.", name)
    app.state.database.init_db()


@app.on_event("shutdown")
def on_shutdown():
    logger.info("Shutting down JobBoard API")
    app.state.database.dispose()


@app.get("/health/live")
def health_live():
    return {"status": "ok"}


@app.get("/health/ready")
def health_ready():
    """Ready once the database answers a trivial query."""
    try:
        app.state.database.ping()
    except Exception:
        logger.exception("Readiness check failed: database unreachable")
        return JSONResponse(status_code=503, content={"status": "not_ready"})
    return {"status": "ready"}


@app.get("/")
def root():
    return {"message": "JobBoard API. See /docs for the available endpoints."}
