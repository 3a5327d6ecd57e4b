"""Telegram admin bot handlers and states."""

from .admin_handlers import register_admin_handlers
from .handlers import register_handlers
from .states import AdminStates

__all__ = [
    "register_handlers",
    "register_admin_handlers",
    "AdminStates",
]
