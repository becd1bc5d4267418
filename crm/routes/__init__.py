from fastapi import APIRouter

from .clients import router as clients_router
from .dashboard import router as dashboard_router
from .invoices import router as invoices_router
from .leads import router as leads_router
from .services import router as services_router
from .settings import router as settings_router
from .tasks import router as tasks_router

api_router = APIRouter()
api_router.include_router(dashboard_router, tags=["dashboard"])
api_router.include_router(leads_router, tags=["leads"])
api_router.include_router(clients_router, tags=["clients"])
api_router.include_router(services_router, tags=["services"])
api_router.include_router(invoices_router, tags=["invoices"])
api_router.include_router(tasks_router, tags=["tasks"])
api_router.include_router(settings_router, tags=["settings"])
