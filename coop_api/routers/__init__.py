# coop_api/routers/__init__.py

from fastapi import APIRouter

from . import relay_router

# Router de la API REST; los relays ya desplegados usan el prefijo /api sin versión
api_router = APIRouter(prefix="/api")

api_router.include_router(relay_router.router)
