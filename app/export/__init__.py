from .router import router as export_router

__all__ = ["export_router"]
