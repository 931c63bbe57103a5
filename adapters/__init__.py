"""
Adapters package - External collaborators of the ledger core.
The ledger store and the identity provider.
"""

from adapters.ledger_store import LedgerStore
from adapters.sql_ledger_store import SQLLedgerStore
from adapters.identity_provider import (
    IdentityProvider,
    SessionTokenIdentityProvider,
    parse_bearer,
)

__all__ = [
    "LedgerStore",
    "SQLLedgerStore",
    "IdentityProvider",
    "SessionTokenIdentityProvider",
    "parse_bearer",
]
