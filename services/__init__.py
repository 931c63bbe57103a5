"""Services package - Business logic layer"""

from services.aggregation_service import LedgerAggregator
from services.reconciler import RangeReconciler, require_range
from services.mutation_service import MutationApplier, RecordLockRegistry
from services.reset_service import ResetService
from services.auth_service import AuthService

__all__ = [
    "LedgerAggregator",
    "RangeReconciler",
    "require_range",
    "MutationApplier",
    "RecordLockRegistry",
    "ResetService",
    "AuthService",
]
