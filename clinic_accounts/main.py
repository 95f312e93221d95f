"""
Main FastAPI application entry point.
Configures the application, middleware, and includes routers.
"""
from dotenv import load_dotenv

# Load environment variables from .env file first
load_dotenv()

from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import logging

from .config import settings
from .database import Base, SessionLocal, engine
from .exceptions import register_exception_handlers
from .core.middleware import setup_middlewares
from .core.bootstrap import bootstrap_super_admin_if_needed
from .accounts import models  # noqa: F401  registers the accounts table on Base
from .auth.router import router as auth_router
from .super_admin.router import router as super_admin_router
from .admin.router import router as admin_router
from .doctors.router import router as doctors_router
from .patients.router import router as patients_router

# Configure logging
logging.basicConfig(level=settings.log_level.upper())
logger = logging.getLogger(__name__)

API_PREFIX = "/api/v1"


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Starting Clinic Accounts API...")
    if not settings.secret_key:
        logger.critical("SECRET_KEY is not set: login and every authenticated endpoint will fail with 500")

    # Create database tables if they don't exist
    Base.metadata.create_all(bind=engine)

    db = SessionLocal()
    try:
        bootstrap_super_admin_if_needed(db)
    except Exception as e:
        logger.error(f"Bootstrap process failed: {str(e)}")
    finally:
        db.close()

    yield
    engine.dispose()


# Create FastAPI application
app = FastAPI(
    title="Clinic Accounts API",
    description="Accounts, session authentication and doctor-patient assignment for the clinical record platform",
    version="1.0.0",
    lifespan=lifespan,
)

# Register exception handlers
register_exception_handlers(app)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Setup custom middleware
setup_middlewares(app)

# Include routers
app.include_router(auth_router, prefix=f"{API_PREFIX}/auth", tags=["Authentication"])
app.include_router(super_admin_router, prefix=f"{API_PREFIX}/super-admin", tags=["Super Admin"])
app.include_router(admin_router, prefix=f"{API_PREFIX}/admin", tags=["Admin"])
app.include_router(doctors_router, prefix=f"{API_PREFIX}/doctor", tags=["Doctor"])
app.include_router(patients_router, prefix=f"{API_PREFIX}/patients", tags=["Patients"])

# Root endpoint
@app.get("/")
def root():
    """
    Root endpoint for API health check.
    
    Returns:
        dict: Simple welcome message
    """
    return {"message": "Welcome to Clinic Accounts API", "version": app.version}

# Health check endpoint
@app.get("/health")
def health_check():
    """
    Health check endpoint for monitoring.
    
    Returns:
        dict: Health status information
    """
    return {"status": "healthy", "database": engine.dialect.name}
