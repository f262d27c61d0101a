import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from applyflow.core import config
from applyflow.core.logging_config import setup_logging, sanitize_log_data
from applyflow.api.routes import (
    activity,
    analytics,
    applications,
    calendar,
    dashboard,
    health,
    interviews,
    preferences,
    referrals,
    resumes,
)

setup_logging(log_level=config.LOG_LEVEL, log_dir=config.LOG_DIR)
logger = logging.getLogger(__name__)


# ============================================
# ✅ FASTAPI APP INIT
# ============================================

app = FastAPI(title="ApplyFlow API", version="1.0.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE"],
    allow_headers=["Authorization", "Content-Type"],
)


# ============================================
# ✅ REGISTER ALL ROUTERS
# ============================================

app.include_router(applications.router)
app.include_router(referrals.router)
app.include_router(resumes.router)
app.include_router(interviews.router)
app.include_router(preferences.router)
app.include_router(activity.router)
app.include_router(dashboard.router)
app.include_router(analytics.router)
app.include_router(calendar.router)
app.include_router(health.router)


# ============================================
# ✅ DATABASE SETUP
# ============================================

@app.on_event("startup")
def prepare_database():
    safe_config = sanitize_log_data({
        "database_url": config.DATABASE_URL,
        "run_migrations": config.RUN_MIGRATIONS,
        "storage_dir": config.STORAGE_DIR,
        "auth_jwt_audience": config.AUTH_JWT_AUDIENCE,
    })
    logger.info(f"Starting with config: {safe_config}")
    if config.RUN_MIGRATIONS:
        from applyflow.db.migrate import run_migrations
        run_migrations()
    else:
        from applyflow.db.init_db import init_db
        init_db()
    logger.info("ApplyFlow API started")


@app.get("/")
def root():
    return {"status": "ApplyFlow API running"}
