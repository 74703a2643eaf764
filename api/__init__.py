"""HTTP routes for the PrepMaster+ gateway."""
from .routes import router

__all__ = ["router"]
