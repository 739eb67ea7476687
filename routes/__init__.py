# Routes package __init__.py - re-exports routers for main.py convenience
from .topics import router as topics_router
from .vocabulary import router as vocabulary_router
from .progress import router as progress_router
from .flashcards import router as flashcards_router
from .quiz import router as quiz_router
from .sessions import router as sessions_router
from .stats import router as stats_router

__all__ = [
    'topics_router',
    'vocabulary_router',
    'progress_router',
    'flashcards_router',
    'quiz_router',
    'sessions_router',
    'stats_router',
]
