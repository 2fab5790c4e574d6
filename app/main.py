from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import sys
from pathlib import Path
import logging
import os
from dotenv import load_dotenv

# Load .env variables
load_dotenv()

# Configure base logging
logging.basicConfig(level=os.getenv("LOG_LEVEL", "INFO").upper())
logger = logging.getLogger("app")

# Add the parent directory to sys.path
sys.path.append(str(Path(__file__).parent.parent))

from app.routers import (
    admin,
    auth,
    bookings,
    public,
    venue_management,
)
from app.database import engine, Base, SessionLocal
from app.error_handlers import register_exception_handlers
from app.init_db import create_initial_admin
from app.services.email import email_service
import uvicorn

# Create database tables
Base.metadata.create_all(bind=engine)

# Initialize admin account
logger.info("Initializing database with admin account...")
db = SessionLocal()
try:
    create_initial_admin(db)
finally:
    db.close()

app = FastAPI(
    title="QuickCourt API",
    description="API for booking sports courts and managing venues",
    version="1.0.0",
)


# Configure email error reporting
def _configure_email_error_reporting() -> None:
    if not email_service.enabled:
        logger.info(
            "Email error reporting disabled (ENABLE_ERROR_EMAILS not set or false)"
        )
        return

    if not email_service.is_configured():
        logger.warning("Email service not configured: missing SMTP settings")
        return

    logger.info("Email error reporting configured successfully")


_configure_email_error_reporting()
register_exception_handlers(app)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        origin.strip()
        for origin in os.getenv("CORS_ORIGINS", "*").split(",")
        if origin.strip()
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(auth.router, prefix="/api/auth", tags=["authentication"])
app.include_router(public.router, prefix="/api/public", tags=["public"])
app.include_router(bookings.router, prefix="/api/bookings", tags=["bookings"])
app.include_router(
    venue_management.router, prefix="/api/venue-management", tags=["venue-management"]
)
app.include_router(admin.router, prefix="/api/admin", tags=["admin"])


@app.get("/")
def read_root():
    return {"message": "Welcome to QuickCourt API"}


@app.get("/health")
def health_check():
    return {"status": "ok"}


if __name__ == "__main__":
    uvicorn.run(
        "app.main:app",
        host="0.0.0.0",
        port=int(os.getenv("PORT", "5000")),
        reload=True,
    )
