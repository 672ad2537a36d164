from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from app.config import settings
from app.database import init_db
import logging
import os

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

# Initialize FastAPI app
app = FastAPI(
    title=settings.app_name,
    version=settings.api_version,
    debug=settings.debug
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.on_event("startup")
async def startup_event():
    """Create tables and seed the exercise catalog on startup"""
    init_db()

    if settings.seed_on_startup:
        from app.services.exercise_store import exercise_store, load_seed_file
        exercise_store.seed(load_seed_file(settings.seed_file))

    logger.info("%s is starting...", settings.app_name)
    logger.info("Database: %s", settings.database_url)


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "healthy"}


# Import and include routers
from app.routes import exercises, rooms

app.include_router(exercises.router, prefix="/api/exercises", tags=["Exercises"])
app.include_router(rooms.router)


# Serve the built editor UI when present; routes above take precedence
if os.path.isdir(settings.client_dist_dir):
    app.mount("/", StaticFiles(directory=settings.client_dist_dir, html=True), name="client")
else:
    @app.get("/")
    async def root():
        """Root endpoint"""
        return {
            "message": f"Welcome to {settings.app_name}",
            "version": settings.api_version,
            "status": "running"
        }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("app.main:app", host=settings.host, port=settings.port)
