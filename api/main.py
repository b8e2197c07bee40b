"""
CaseDesk - Main FastAPI Application.

REST API over the workflow engine: rule administration, execution
history, manual trigger processing and scheduler ticks.
"""
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import logging
import time

from api.routes import cases, health, history, processing, rules
from core.domain.exceptions import RuleDefinitionError, RuleNotFoundError
from core.infrastructure.database.config import close_database, init_database
from core.infrastructure.logging import configure_logging


configure_logging()
logger = logging.getLogger(__name__)


# =============================================================================
# LIFESPAN
# =============================================================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("🚀 CaseDesk API starting up...")
    await init_database()
    logger.info("📚 Swagger UI available at: /docs")
    yield
    await close_database()
    logger.info("👋 CaseDesk API shutting down...")


# =============================================================================
# CREATE FASTAPI APP
# =============================================================================

app = FastAPI(
    title="CaseDesk - Workflow Automation API",
    description="""
    Rule-driven automation for support cases.
    
    Features:
    - Workflow rule administration
    - Trigger processing with ordered actions
    - Time-based escalation sweeps
    - Execution history
    """,
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    lifespan=lifespan,
)


# =============================================================================
# CORS MIDDLEWARE
# =============================================================================

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS", "PATCH"],
    allow_headers=["*"],
)


# =============================================================================
# REQUEST LOGGING MIDDLEWARE
# =============================================================================

@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log all requests with timing."""
    start_time = time.time()
    logger.info(f"→ {request.method} {request.url.path}")
    
    response = await call_next(request)
    
    duration = time.time() - start_time
    logger.info(
        f"← {request.method} {request.url.path} "
        f"[{response.status_code}] ({duration:.3f}s)"
    )
    return response


# =============================================================================
# EXCEPTION HANDLERS
# =============================================================================

@app.exception_handler(RuleDefinitionError)
async def rule_definition_error_handler(request: Request, exc: RuleDefinitionError):
    return JSONResponse(status_code=422, content={"detail": str(exc), "rule_id": exc.rule_id})


@app.exception_handler(RuleNotFoundError)
async def rule_not_found_handler(request: Request, exc: RuleNotFoundError):
    return JSONResponse(status_code=404, content={"detail": str(exc)})


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Handle all uncaught exceptions."""
    logger.error(f"Unhandled exception: {exc}", exc_info=True)
    
    return JSONResponse(
        status_code=500,
        content={
            "error": "Internal server error",
            "detail": str(exc),
            "path": request.url.path
        }
    )


# =============================================================================
# INCLUDE ROUTERS
# =============================================================================

app.include_router(health.router, tags=["Health"])
app.include_router(rules.router, prefix="/api/v1/rules", tags=["Rules"])
app.include_router(history.router, prefix="/api/v1/history", tags=["History"])
app.include_router(cases.router, prefix="/api/v1/cases", tags=["Cases"])
app.include_router(processing.router, prefix="/api/v1/workflow", tags=["Workflow"])


# =============================================================================
# ROOT ENDPOINT
# =============================================================================

@app.get("/", tags=["Root"])
async def root():
    """API root endpoint."""
    return {
        "message": "CaseDesk - Workflow Automation API",
        "version": "1.0.0",
        "docs": "/docs",
        "health": "/health"
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)
