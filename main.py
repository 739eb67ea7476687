import argparse
import logging
import uvicorn
from fastapi import FastAPI
from contextlib import asynccontextmanager

import sys
from pathlib import Path

# Add project root to path for package imports
base_dir = Path(__file__).parent
sys.path.insert(0, str(base_dir))

from db.database import init_db
from db.fallback import get_store
from config import load_config
from routes import topics, vocabulary, progress, flashcards, quiz, sessions, stats  # Import routers

logger = logging.getLogger(__name__)

def configure_logging() -> None:
    level = load_config()["logging"]["level"]
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

# First-run init
@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: init DB and config
    configure_logging()
    init_db()
    yield
    # Shutdown if needed

app = FastAPI(
    title="VocabCoach",
    description="Vocabulary practice with flashcards, quizzes and mastery tracking",
    lifespan=lifespan,
)

# Include routers
app.include_router(topics.router, prefix="/users", tags=["topics"])
app.include_router(vocabulary.router, prefix="/users", tags=["vocabulary"])
app.include_router(progress.router, prefix="/users", tags=["progress"])
app.include_router(flashcards.router, prefix="/users", tags=["flashcards"])
app.include_router(quiz.router, prefix="/users", tags=["quiz"])
app.include_router(sessions.router, prefix="/users", tags=["sessions"])
app.include_router(stats.router, prefix="/users", tags=["stats"])

@app.get("/health")
async def health():
    store = get_store()
    return {"status": "ok", "degraded": store.degraded}

if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="VocabCoach App")
    parser.add_argument("--init", action="store_true", help="Initialize DB and config")
    parser.add_argument("--dev", action="store_true", help="Run in dev mode with reload")
    args = parser.parse_args()
    configure_logging()
    if args.init:
        init_db()
        logger.info("DB initialized and config copied to ~/.vocabcoach/")
        exit(0)
    # Run server
    port = 8000
    reload = args.dev
    uvicorn.run("main:app", host="127.0.0.1", port=port, reload=reload, log_level="info")
