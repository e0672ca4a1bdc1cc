from fastapi import APIRouter
from .health import router as health_router
from .dimensoes import router as dimensoes_router
from .produtos import router as produtos_router
from .producao import router as producao_router
from .descarte import router as descarte_router
from .dashboard import router as dashboard_router

api_router = APIRouter()
api_router.include_router(health_router)
api_router.include_router(dimensoes_router)
api_router.include_router(produtos_router)
api_router.include_router(producao_router)
api_router.include_router(descarte_router)
api_router.include_router(dashboard_router)
