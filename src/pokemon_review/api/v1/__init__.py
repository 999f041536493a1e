from fastapi import APIRouter

from .categories import router as categories_router
from .reviews import router as reviews_router
from .error_handlers import register_exception_handlers
from .validation import ValidationResult

api_router = APIRouter()
api_router.include_router(categories_router)
api_router.include_router(reviews_router)

__all__ = ["api_router", "register_exception_handlers", "ValidationResult"]
