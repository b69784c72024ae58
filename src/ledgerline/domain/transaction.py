"""Transaction domain service."""

from typing import Optional
from datetime import date
from ledgerline.database.base import Database
from ledgerline.domain.entities import Transaction as TransactionEntity


class TransactionService:
    """Read access to stored ledger transactions."""

    def __init__(self, db: Database):
        """Initialize transaction service.

        Args:
            db: Database instance
        """
        self.db = db

    def get_transaction(self, user_id: str, transaction_id: int) -> Optional[TransactionEntity]:
        """Get a transaction owned by the user.

        Args:
            user_id: Ledger owner
            transaction_id: Transaction ID

        Returns:
            Transaction entity or None if not found
        """
        txn = self.db.get_transaction(transaction_id)
        if txn is None or txn.user_id != user_id:
            return None
        return txn

    def list_transactions(
        self,
        user_id: str,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        company_id: Optional[str] = None,
        uncategorized: bool = False,
    ) -> list[TransactionEntity]:
        """List the user's transactions, newest first.

        Raises:
            ValueError: If start_date is after end_date
        """
        if start_date is not None and end_date is not None and start_date > end_date:
            raise ValueError(f"Start date {start_date} is after end date {end_date}")

        return self.db.list_transactions(
            user_id=user_id,
            start_date=start_date,
            end_date=end_date,
            company_id=company_id,
            uncategorized=uncategorized,
        )
