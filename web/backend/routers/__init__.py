"""API route handlers."""

from .jobs import router as jobs_router
from .applications import router as applications_router
from .resume import router as resume_router
from .assistant import router as assistant_router
