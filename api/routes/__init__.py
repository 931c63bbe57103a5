"""API routes package"""

from . import users, ledger, health

__all__ = ["users", "ledger", "health"]
