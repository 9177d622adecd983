from fastapi import APIRouter, Security

from api.routers.api_v1.endpoints import conditions, dev, mint, registries
from api.utils.security import get_api_key


api_router = APIRouter(dependencies=[Security(get_api_key)])

api_router.include_router(registries.router, prefix="/registries", tags=["Registries"])
api_router.include_router(conditions.router, prefix="/registries", tags=["Conditions"])
api_router.include_router(mint.router, prefix="/registries", tags=["Mint"])
api_router.include_router(dev.router, prefix="/dev", tags=["Dev"])
