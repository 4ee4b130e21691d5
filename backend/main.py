"""
ADHD Planner FastAPI Backend

Main entry point for the API server that exposes the record store and the
weekly analysis engine to the frontend.

Architecture:
- FastAPI handles HTTP routing and request/response validation
- Pydantic schemas ensure type safety
- RecordStore owns every record (memory or SQLite backend)
- ReportBuilder / ReviewAgent compute the analysis views

Run with:
    uvicorn backend.main:app --reload --port 8000

Or:
    python -m backend.main
"""

import logging
import sys
from pathlib import Path
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware

# Add project root to path for imports
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from adhd_planner import __version__
from adhd_planner.core.store import RecordStore
from backend.routers import (
    tasks_router,
    mood_entries_router,
    focus_sessions_router,
    routine_blocks_router,
    reframes_router,
    emergency_plans_router,
    analysis_router,
)
from backend.dependencies import get_store, get_config

logger = logging.getLogger("backend")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    Startup builds the record store once so configuration errors surface
    before the first request.
    """
    config = get_config()
    logging.basicConfig(level=config.get("log_level", default="WARNING"))
    store = get_store()
    logger.info("Config loaded from: %s", config.config_dir)
    logger.info("Record store ready (%s)", type(store.adapter).__name__)

    yield

    logger.info("Shutting down...")


# Create FastAPI app
app = FastAPI(
    title="ADHD Planner API",
    description="""
    Task, mood and focus tracking with weekly analysis.

    ## Features

    - **Tasks**: Eisenhower-prioritized tasks with step decomposition
    - **Mood**: Five-level mood check-ins
    - **Focus**: Pomodoro work and break sessions
    - **Routine**: Weekly routine board
    - **Reframes / Emergency plans**: Emotional regulation tools
    - **Analysis**: Weekly metrics, trends, recommendations and insights
    """,
    version=__version__,
    lifespan=lifespan,
)

# Configure CORS for frontend access
app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "http://localhost:5173",  # Vite dev server
        "http://localhost:3000",
        "http://127.0.0.1:5173",
        "http://127.0.0.1:3000",
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(tasks_router)
app.include_router(mood_entries_router)
app.include_router(focus_sessions_router)
app.include_router(routine_blocks_router)
app.include_router(reframes_router)
app.include_router(emergency_plans_router)
app.include_router(analysis_router)


@app.get("/")
async def root():
    """API root - returns basic info and available endpoints."""
    return {
        "name": "ADHD Planner API",
        "version": __version__,
        "docs": "/docs",
        "endpoints": {
            "tasks": "/api/tasks",
            "mood": "/api/mood-entries",
            "focus": "/api/pomodoro-sessions",
            "routine": "/api/routine-blocks",
            "reframes": "/api/cognitive-reframes",
            "emergency_plans": "/api/emergency-plans",
            "analysis": "/api/analysis/week",
        }
    }


@app.get("/health")
async def health_check(store: RecordStore = Depends(get_store)):
    """Health check endpoint for monitoring."""
    try:
        store.adapter.last_id("task")
        return {"status": "healthy", "storage": type(store.adapter).__name__}
    except Exception as e:
        logger.error("Health check failed: %s", e, exc_info=True)
        return {"status": "unhealthy", "error": str(e)}


# Allow running directly with: python -m backend.main
if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "backend.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
    )
