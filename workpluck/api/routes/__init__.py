"""
API routes module.
"""

from workpluck.api.routes.health import router as health_router
from workpluck.api.routes.observe import router as observe_router
from workpluck.api.routes.results import router as results_router
from workpluck.api.routes.tasks import router as tasks_router

__all__ = ["tasks_router", "results_router", "observe_router", "health_router"]
