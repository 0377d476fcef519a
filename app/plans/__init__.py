from .router import router as plans_router

__all__ = ["plans_router"]
