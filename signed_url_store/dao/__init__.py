"""Data Access Objects package."""

from .base import BaseDAO
from .signed_url_dao import SignedUrlDAO

__all__ = [
    "BaseDAO",
    "SignedUrlDAO",
]
