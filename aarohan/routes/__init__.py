"""
API routes for the AAROHAN eligibility service
"""

from .eligibility import router as eligibility_router
from .recommendations import router as recommendations_router
from .users import router as users_router
from .application import router as application_router
from .dashboard import router as dashboard_router

__all__ = [
    "eligibility_router",
    "recommendations_router",
    "users_router",
    "application_router",
    "dashboard_router"
]
