"""
API v1 routes.
"""

from fastapi import APIRouter

from .endpoints import auth, disputes, payments, users

api_router = APIRouter()

# Include all endpoint routers
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])

api_router.include_router(users.router, prefix="/users", tags=["users"])

api_router.include_router(
    payments.router, prefix="/payments", tags=["payments"]
)

api_router.include_router(
    disputes.router, prefix="/disputes", tags=["disputes"]
)
