"""API v1 router aggregating all endpoint routers.

All endpoints are mounted under /api/v1 via the v1_prefix configuration.
"""

from __future__ import annotations

from fastapi import APIRouter

from restaurant_reviews.api.v1.endpoints import auth, health, restaurants, reviews, users


router = APIRouter()

router.include_router(health.router)
router.include_router(auth.router)
router.include_router(restaurants.router)
router.include_router(reviews.router)
router.include_router(users.router)
