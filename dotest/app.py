"""Main FastAPI application with modularized routes."""
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from dotest.config import LOG_LEVEL
from dotest.database import init_db
from dotest.errors import DataIntegrityError, InvalidStateError, NotFoundError
from dotest.logging_setup import setup_console_logging
from dotest.routes import (
    admin,
    chapter_items,
    chapters,
    feedback,
    questions,
    saved_tests,
    sessions,
    subjects,
    test_results,
    textbooks,
)
from dotest.services.cleanup_service import schedule_session_cleanup

setup_console_logging(LOG_LEVEL)

app = FastAPI(title="Do Test API")

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


# Domain errors
@app.exception_handler(NotFoundError)
def not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:
    return JSONResponse(status_code=404, content={"detail": str(exc)})


@app.exception_handler(InvalidStateError)
def invalid_state_handler(request: Request, exc: InvalidStateError) -> JSONResponse:
    return JSONResponse(status_code=409, content={"detail": str(exc)})


@app.exception_handler(DataIntegrityError)
def data_integrity_handler(request: Request, exc: DataIntegrityError) -> JSONResponse:
    return JSONResponse(status_code=422, content={"detail": str(exc)})


# Startup events
@app.on_event("startup")
def startup_events() -> None:
    """Initialize database and schedule cleanup tasks on startup."""
    init_db()
    schedule_session_cleanup()


@app.get("/api/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


# Include routers
app.include_router(subjects.router)
app.include_router(textbooks.router)
app.include_router(chapters.router)
app.include_router(chapter_items.router)
app.include_router(questions.router)
app.include_router(sessions.router)
app.include_router(test_results.router)
app.include_router(saved_tests.router)
app.include_router(feedback.router)
app.include_router(admin.router)
