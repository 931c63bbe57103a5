import logging
from typing import Optional
from uuid import UUID

from adapters.ledger_store import LedgerStore
from domain.schemas.ledger_schemas import DateRange
from services.reconciler import require_range

logger = logging.getLogger("mealledger.reset")


class ResetService:
    """
    Clears a range by deleting its rows.

    The delete is a single store call, so either every row in the range goes
    or none does. Callers drop their active range afterwards.
    """

    def __init__(self, store: LedgerStore):
        self.store = store

    async def reset(self, owner: UUID, date_range: Optional[DateRange]) -> int:
        date_range = require_range(date_range)
        deleted = await self.store.delete(owner, date_range)
        logger.info(
            f"reset owner={owner} range={date_range.start}..{date_range.end} deleted={deleted}"
        )
        return deleted
