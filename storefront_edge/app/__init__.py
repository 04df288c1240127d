"""
Application package.

``core`` holds settings, logging, the request/result model and the
dispatch middleware; ``services`` the crawler classifier and the two
interceptors; ``api`` the health endpoint and the origin routes.
"""

from .main import app  # noqa: F401
