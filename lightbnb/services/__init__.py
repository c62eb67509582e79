"""
Application services shared by the API layer.
"""

from lightbnb.services.error_handler import ErrorHandlerService

__all__ = ["ErrorHandlerService"]
