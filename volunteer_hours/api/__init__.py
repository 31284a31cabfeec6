"""HTTP API routers."""
from volunteer_hours.api.student import router as student_router
from volunteer_hours.api.admin import router as admin_router

__all__ = [
    "student_router",
    "admin_router",
]
