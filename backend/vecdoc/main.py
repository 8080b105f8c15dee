"""
FastAPI application entry point.
"""
import logging
from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.orm import Session

from vecdoc.core.config import settings
from vecdoc.core.database import SessionLocal, engine, get_db
from vecdoc.core.exceptions import AppException
from vecdoc.api import api_router
from vecdoc.jobs.alert_scheduler import AlertScheduler

# Logging setup
logging.basicConfig(
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    level=logging.INFO,
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title=settings.APP_TITLE,
    description="Document expiry alerts and maintenance reminders",
    version="1.0.0",
)


@app.exception_handler(AppException)
async def app_exception_handler(request, exc: AppException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail, "error_code": exc.error_code},
    )


# CORS: allowed origins come from the environment
origins = [o.strip() for o in settings.ALLOWED_ORIGINS.split(",") if o.strip()]
app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health")
def health(db: Session = Depends(get_db)):
    """Health check endpoint with database verification."""
    try:
        db.execute(text("SELECT 1"))
        return {"status": "healthy", "database": "connected"}
    except Exception as e:
        return JSONResponse(
            status_code=503,
            content={"status": "unhealthy", "database": str(e)},
        )


app.include_router(api_router)


@app.on_event("startup")
async def startup_event():
    """Starts the alert scheduler."""
    logger.info("Application startup")
    app.state.alert_scheduler = AlertScheduler(SessionLocal)
    if settings.ALERT_SCHEDULER_ENABLED:
        app.state.alert_scheduler.start()
    else:
        logger.info("Alert scheduler disabled")


@app.on_event("shutdown")
async def shutdown_event():
    """Stops the alert scheduler and releases the connection pool."""
    scheduler = getattr(app.state, "alert_scheduler", None)
    if scheduler is not None:
        await scheduler.stop()
    engine.dispose()
    logger.info("Application shutdown")


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
