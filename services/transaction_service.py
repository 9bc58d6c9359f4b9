import logging
from datetime import date

from models.transaction import Transaction
from database.transaction_dao import TransactionDAO
from database.category_dao import CategoryDAO
from utils.constants import RECURRING_FREQUENCIES, TRANSACTION_TYPES
from utils.currency import parse_positive_amount
from utils.date_helpers import format_date, parse_date, to_date
from utils.exceptions import NotFoundError, ValidationError

logger = logging.getLogger(__name__)


class TransactionService:
    def __init__(self, tx_dao: TransactionDAO, category_dao: CategoryDAO):
        self._dao = tx_dao
        self._category_dao = category_dao

    def list_transactions(
        self,
        start_date: date | str | None = None,
        end_date: date | str | None = None,
    ) -> list[Transaction]:
        """Joined transactions, newest first, optionally limited to an inclusive range."""
        start = format_date(to_date(start_date)) if start_date else None
        end = format_date(to_date(end_date)) if end_date else None
        return self._dao.get_all(start, end)

    def get(self, tx_id: int) -> Transaction:
        tx = self._dao.get_by_id(tx_id)
        if tx is None:
            raise NotFoundError(f"Transaction {tx_id} does not exist.")
        return tx

    def add_transaction(
        self,
        type_: str,
        amount,
        category_id: int,
        date: date | str,
        description: str | None = None,
        is_recurring: bool = False,
        recurring_frequency: str | None = None,
        recurring_end_date: date | str | None = None,
    ) -> Transaction:
        self._validate_type(type_)
        value = parse_positive_amount(amount)
        date_str = self._validate_date(date)
        self._require_category(category_id)
        frequency, end_date = self._validate_recurrence(
            is_recurring, recurring_frequency, recurring_end_date, date_str
        )
        tx = self._dao.create(
            type_=type_,
            amount=value,
            category_id=category_id,
            date=date_str,
            description=(description or "").strip() or None,
            is_recurring=is_recurring,
            recurring_frequency=frequency,
            recurring_end_date=end_date,
        )
        logger.info("Added %s transaction %s: %s on %s", type_, tx.id, value, date_str)
        return tx

    def update_transaction(self, tx_id: int, **changes) -> Transaction:
        """Partial update. Accepts any of type, amount, category_id, date,
        description, is_recurring, recurring_frequency, recurring_end_date."""
        current = self.get(tx_id)
        values: dict = {}

        if "type" in changes:
            values["type"] = self._validate_type(changes["type"])
        if "amount" in changes:
            values["amount"] = parse_positive_amount(changes["amount"])
        if "category_id" in changes:
            self._require_category(changes["category_id"])
            values["category_id"] = changes["category_id"]
        if "date" in changes:
            values["date"] = self._validate_date(changes["date"])
        if "description" in changes:
            values["description"] = (changes["description"] or "").strip() or None

        recurrence_keys = {"is_recurring", "recurring_frequency", "recurring_end_date"}
        if recurrence_keys & changes.keys() or "date" in values:
            is_recurring = changes.get("is_recurring", current.is_recurring)
            frequency, end_date = self._validate_recurrence(
                is_recurring,
                changes.get("recurring_frequency", current.recurring_frequency),
                changes.get("recurring_end_date", current.recurring_end_date),
                values.get("date", current.date),
            )
            values.update(
                is_recurring=is_recurring,
                recurring_frequency=frequency,
                recurring_end_date=end_date,
            )

        unknown = changes.keys() - set(values) - recurrence_keys
        if unknown:
            raise ValidationError(f"Unknown transaction fields: {', '.join(sorted(unknown))}")

        updated = self._dao.update(tx_id, values)
        if updated is None:
            raise NotFoundError(f"Transaction {tx_id} does not exist.")
        logger.info("Updated transaction %s (%s)", tx_id, ", ".join(sorted(values)))
        return updated

    def delete_transaction(self, tx_id: int):
        if not self._dao.delete(tx_id):
            raise NotFoundError(f"Transaction {tx_id} does not exist.")
        logger.info("Deleted transaction %s", tx_id)

    def _require_category(self, category_id):
        if category_id is None:
            raise ValidationError("Category is required.")
        if self._category_dao.get_by_id(category_id) is None:
            raise NotFoundError(f"Category {category_id} does not exist.")

    def _validate_type(self, type_: str) -> str:
        if type_ not in TRANSACTION_TYPES:
            raise ValidationError(f"Invalid type: {type_}")
        return type_

    def _validate_date(self, value) -> str:
        if not value:
            raise ValidationError("Date is required.")
        return format_date(to_date(value))

    def _validate_recurrence(
        self, is_recurring: bool, frequency, end_date, tx_date: str
    ) -> tuple[str | None, str | None]:
        """Recurrence is descriptive only; the fields are cleared when not recurring."""
        if not is_recurring:
            return None, None
        if frequency not in RECURRING_FREQUENCIES:
            raise ValidationError(
                f"Recurring frequency must be one of {', '.join(RECURRING_FREQUENCIES)}."
            )
        if not end_date:
            return frequency, None
        end = to_date(end_date)
        if end < parse_date(tx_date):
            raise ValidationError("Recurring end date cannot be before the transaction date.")
        return frequency, format_date(end)
