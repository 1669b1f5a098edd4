from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.middleware.sessions import SessionMiddleware
import logging
import os

from app.core.config import settings
from app.core.exceptions import AdminAPIError
from app.core.firebase_init import initialize_firebase, get_firebase_status
from app.core.scheduler import scheduler, start_scheduler, stop_scheduler
from app.routers import auth, coupons, notifications, remote_config, reviews, service_status, users

# Configure logging
logging.basicConfig(level=getattr(logging, settings.LOG_LEVEL, logging.INFO))
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Duka Admin API",
    description="Push notifications, remote config and content management for the Duka app",
    version="1.0.0"
)

# Signed cookie session holding the admin loggedIn flag
app.add_middleware(
    SessionMiddleware,
    secret_key=settings.SESSION_SECRET,
    max_age=settings.SESSION_MAX_AGE,
    same_site="lax",
)


@app.exception_handler(AdminAPIError)
async def admin_api_error_handler(request: Request, exc: AdminAPIError):
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


# ==================== LIFECYCLE ====================
@app.on_event("startup")
async def startup_event():
    """Initialize Firebase and start the deferred-send scheduler"""
    logger.info("🚀 FastAPI startup event triggered")
    if initialize_firebase():
        logger.info("✅ Firebase ready")
    else:
        logger.warning("⚠️ Firebase initialization failed - store and messaging calls will fail")
    start_scheduler()


@app.on_event("shutdown")
async def shutdown_event():
    """Stop scheduler on app shutdown; pending scheduled sends are lost"""
    logger.info("⛔ FastAPI shutdown event triggered")
    stop_scheduler()

# ==================== ROUTERS ====================

for router_module in (auth, notifications, remote_config, reviews, coupons, users, service_status):
    app.include_router(router_module.router)


@app.get("/health")
async def health_check():
    firebase_status = get_firebase_status()
    return {
        "status": "healthy",
        "firebase_available": firebase_status['available'],
        "scheduler_running": scheduler.running,
        "pending_scheduled_jobs": len(scheduler.get_jobs()),
    }


# Admin dashboard; mounted last so the API routes take precedence
if os.path.isdir(settings.STATIC_DIR):
    app.mount("/", StaticFiles(directory=settings.STATIC_DIR, html=True), name="static")
    logger.info(f"Serving admin dashboard from {settings.STATIC_DIR}/")
