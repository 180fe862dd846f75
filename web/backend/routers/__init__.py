"""API route handlers."""

from .matches import router as matches_router
from .skills import router as skills_router
