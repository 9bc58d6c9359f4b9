from datetime import date

from database.transaction_dao import TransactionDAO
from models.summary import CategoryExpenseBucket, DateGroup, PeriodTotals
from models.transaction import Transaction
from services.aggregator import aggregate, group_by_date, group_expenses_by_category
from services.period_filter import filter_by_period, period_range
from utils.date_helpers import format_date, today


class ReportService:
    """Fetches a fresh snapshot for a window and runs the pure passes over it."""

    def __init__(self, tx_dao: TransactionDAO):
        self._tx_dao = tx_dao

    def get_period_transactions(
        self, reference_date: date | str | None = None, granularity: str = "month"
    ) -> list[Transaction]:
        ref = reference_date or today()
        start, end = period_range(ref, granularity)
        snapshot = self._tx_dao.get_all(format_date(start), format_date(end))
        return filter_by_period(snapshot, ref, granularity)

    def get_summary(
        self, reference_date: date | str | None = None, granularity: str = "month"
    ) -> PeriodTotals:
        return aggregate(self.get_period_transactions(reference_date, granularity))

    def get_category_breakdown(
        self, reference_date: date | str | None = None, granularity: str = "month"
    ) -> tuple[CategoryExpenseBucket, ...]:
        expenses = [
            t for t in self.get_period_transactions(reference_date, granularity)
            if t.type == "expense"
        ]
        return group_expenses_by_category(expenses)

    def get_date_groups(
        self, reference_date: date | str | None = None, granularity: str | None = None
    ) -> tuple[DateGroup, ...]:
        """Newest-first date groups; all transactions when granularity is None."""
        if granularity is None:
            return group_by_date(self._tx_dao.get_all())
        return group_by_date(self.get_period_transactions(reference_date, granularity))
