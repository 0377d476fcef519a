from .router import router as speech_router

__all__ = ["speech_router"]
