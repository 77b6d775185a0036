"""
Collection service protocol: payload building and the HTTP client.
"""

from .client import Credential, SyncClient
from .payload import build_payload

__all__ = [
    'Credential',
    'SyncClient',
    'build_payload'
]
