# routers/__init__.py
from .auth import router as auth_router
from .institutions import router as institutions_router
from .students import router as students_router
from .records import router as records_router
from .ledger import router as ledger_router
from .payments import router as payments_router
from .admin import router as admin_router

__all__ = [
     "auth_router",
     "institutions_router",
     "students_router",
     "records_router",
     "ledger_router",
     "payments_router",
     "admin_router",
]
