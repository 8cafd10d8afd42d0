"""API v1 router aggregating all endpoint routers.

All endpoints are mounted under /api/v1/storefront/ via the v1_prefix configuration.
"""

from __future__ import annotations

from fastapi import APIRouter

from storefront_gateway.api.v1.endpoints import health, pricing, products, reviews


router = APIRouter()

router.include_router(health.router)
router.include_router(reviews.router)
router.include_router(products.router)
router.include_router(pricing.router)
