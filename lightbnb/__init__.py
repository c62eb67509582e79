"""
LightBnB: data access and HTTP API for a property rental application.
"""

__version__ = "1.0.0"
