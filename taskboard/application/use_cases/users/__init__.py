"""Use cases for registering and authenticating users."""

from .authenticate_user import authenticate_user
from .get_user import get_user
from .register_user import register_user

__all__ = ["authenticate_user", "get_user", "register_user"]
