"""
External integrations package.
"""

from .distance_matrix import GoogleDistanceMatrixProvider
from .http_client import HTTPClient

__all__ = [
    "GoogleDistanceMatrixProvider",
    "HTTPClient",
]
