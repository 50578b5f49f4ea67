from .redirect import redirect_router

__all__ = ["redirect_router"]
