"""
Middleware package for Flask application.
"""
from .security import add_security_headers

__all__ = [
    'add_security_headers'
]
