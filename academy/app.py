"""Main FastAPI application."""
import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from academy.database import SessionLocal, init_db
from academy.logging_setup import setup_console_logging
from academy.routes import admin, auth, certificates, contents, courses, users
from academy.services.auth_service import cleanup_expired_sessions

setup_console_logging()
logger = logging.getLogger(__name__)

app = FastAPI(title="Academy API")

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.on_event("startup")
def startup_events() -> None:
    """Create tables and drop sessions that expired while the server was down."""
    init_db()
    db = SessionLocal()
    try:
        removed = cleanup_expired_sessions(db)
    finally:
        db.close()
    if removed:
        logger.info("Removed %d expired sessions", removed)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error method=%s path=%s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


@app.get("/api/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


# Include routers
app.include_router(auth.router)
app.include_router(users.router)
app.include_router(admin.router)
app.include_router(courses.router)
app.include_router(contents.router)
app.include_router(certificates.router)
