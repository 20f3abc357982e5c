"""API v1 router aggregation."""

from fastapi import APIRouter

from storefront.api.v1 import balance, cart, purchases

api_router = APIRouter()

# Include all v1 routers
api_router.include_router(balance.router)
api_router.include_router(purchases.router)
api_router.include_router(cart.router)
