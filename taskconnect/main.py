# ========================================
# taskconnect/main.py
# ========================================

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from taskconnect import config
from taskconnect.database import connect_to_mongo, close_mongo_connection
from taskconnect.exceptions import (
    LifecycleError,
    AccessDenied,
    NotFound,
    AlreadyApplied,
    InvalidTransition,
    DuplicateAccount,
    PersistenceError
)
from taskconnect.logging_config import setup_logging

# ===========================
# IMPORT ALL ROUTERS
# ===========================

from taskconnect.routes.user import router as user_router
from taskconnect.routes.job import router as job_router

VERSION = "1.0.0"

# ===========================
# CREATE FASTAPI APP
# ===========================

app = FastAPI(
    title="TaskConnect API",
    description="Job board backend for professional bodies and workers",
    version=VERSION,
    docs_url="/docs",
    redoc_url="/redoc"
)

# ===========================
# CORS MIDDLEWARE
# ===========================
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ===========================
# ERROR MAPPING
# ===========================

ERROR_STATUS_CODES = {
    AccessDenied: 403,
    NotFound: 404,
    AlreadyApplied: 400,
    InvalidTransition: 409,
    DuplicateAccount: 400,
    PersistenceError: 500,
}


@app.exception_handler(LifecycleError)
async def lifecycle_error_handler(request: Request, exc: LifecycleError):
    status_code = ERROR_STATUS_CODES.get(type(exc), 500)
    return JSONResponse(status_code=status_code, content={"detail": exc.message})

# ===========================
# STARTUP / SHUTDOWN
# ===========================

@app.on_event("startup")
async def start_app():
    """Configure logging, then connect to MongoDB"""
    setup_logging(config.LOG_LEVEL, config.JSON_LOGS)
    await connect_to_mongo()

@app.on_event("shutdown")
async def stop_app():
    await close_mongo_connection()

# ===========================
# REGISTER ROUTERS
# ===========================

app.include_router(user_router, tags=["Users"])
app.include_router(job_router, tags=["Jobs"])

# ===========================
# ROOT ENDPOINTS
# ===========================

@app.get("/")
async def root():
    """API root endpoint with a route summary"""
    return {
        "status": "TaskConnect API Running",
        "version": VERSION,
        "documentation": "/docs",
        "endpoints": {
            "authentication": ["/users/register", "/users/login", "/users/profile"],
            "public": ["/jobs (GET)", "/jobs/{job_id}"],
            "professional-body": [
                "/jobs (POST)",
                "/jobs/applications",
                "/jobs/applications/{application_id}/accept",
                "/jobs/applications/{application_id}/reject"
            ],
            "worker": ["/jobs/{job_id}/apply", "/jobs/my-applications"]
        }
    }


@app.get("/health")
async def health_check():
    return {"status": "healthy", "version": VERSION}
