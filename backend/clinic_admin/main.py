from fastapi import FastAPI
from fastapi.responses import RedirectResponse
from starlette.middleware.sessions import SessionMiddleware
import logging

# -------------------------------------------------------
# ⚙️ Core Imports
# -------------------------------------------------------
from .core.config import settings
from .core.db import Base, engine, db_healthcheck
from .core.log_config import setup_logging
from .models import patient, payment  # noqa: F401  (register tables on Base)

# -------------------------------------------------------
# 🧩 Routers
# -------------------------------------------------------
from .routers import admin

setup_logging()
logger = logging.getLogger(__name__)

# -------------------------------------------------------
# 🚀 FastAPI Initialization
# -------------------------------------------------------
app = FastAPI(
    title=settings.PROJECT_NAME,
    version="0.2.0",
    description="Dashboard Administrasi – patient payments, revenue and pending queue",
)

# -------------------------------------------------------
# 🍪 Signed session (flash notifications)
# -------------------------------------------------------
app.add_middleware(SessionMiddleware, secret_key=settings.SECRET_KEY, same_site="lax")

# -------------------------------------------------------
# 🏁 Startup Events
# -------------------------------------------------------
@app.on_event("startup")
def on_startup():
    """Optionally create tables; the managed database normally owns the schema."""
    if settings.CREATE_SCHEMA_ON_STARTUP:
        try:
            Base.metadata.create_all(bind=engine)
            logger.info("✅ Database models created.")
        except Exception as e:
            logger.warning("⚠️ Database init skipped: %s", e)

    logger.info("🗃️ Environment: %s", settings.ENVIRONMENT)
    logger.info("🕓 Timezone: %s", settings.TIMEZONE)

# -------------------------------------------------------
# ❤️ Health Checks
# -------------------------------------------------------
@app.get("/health", tags=["Health"])
def health():
    return {
        "status": "ok",
        "service": settings.PROJECT_NAME,
        "version": "0.2.0",
    }

@app.get("/health/db", tags=["Health"])
def health_db():
    ok, error = db_healthcheck()
    return {"database": "ok" if ok else "error", "error": error}

# -------------------------------------------------------
# 🧭 Root → Admin dashboard
# -------------------------------------------------------
@app.get("/", include_in_schema=False)
def root():
    return RedirectResponse(url="/admin/dashboard", status_code=307)

# -------------------------------------------------------
# 🔗 Router Registration
# -------------------------------------------------------
app.include_router(admin.router)
