"""Places module for the map application.

This module provides the functionality for:
- Place management (CRUD operations)
- Planned/visited status transitions
- Proximity search and visit statistics

The package is organized into:
- routes/: API endpoint handlers
- services/: Business logic and data access
- schemas.py: Request validation models
- serializers.py: External representation of places
"""

from fastapi import APIRouter

from places.routes import places

router = APIRouter()
router.include_router(places.router, tags=["places"])

__all__ = ["router"]
