"""
dashboard/controller.py
-----------------------
Drives the dashboard: talks to the API, validates the input form and
feeds results to the store. Every failure is logged and left in
``state.notice`` for the UI to show.
"""

import threading
from typing import Dict, Optional, Union

from pydantic import ValidationError as PydanticValidationError

from dashboard.api import ApiError, TransactionApi
from dashboard.store import (
    BudgetChanged, DashboardState, DateRangeChanged, FormChanged, FormCleared,
    NoticeRaised, Store, TransactionAdded, TransactionRemoved, TransactionsLoaded,
)
from exceptions import ValidationError
from schemas import TransactionCreate
from utils.logger import get_logger

logger = get_logger(__name__)

LIST_KEY = "list"


class RequestSequencer:
    """Hands out increasing tickets per resource key.

    A result may be applied only if its ticket is newer than the last one
    applied for that key; a failed newer request supersedes nothing.
    """

    def __init__(self):
        self._issued: Dict[str, int] = {}
        self._applied: Dict[str, int] = {}
        self._lock = threading.Lock()

    def issue(self, key: str) -> int:
        with self._lock:
            ticket = self._issued.get(key, 0) + 1
            self._issued[key] = ticket
            return ticket

    def try_apply(self, key: str, ticket: int) -> bool:
        """Record ``ticket`` as applied unless a newer one already was."""
        with self._lock:
            if ticket <= self._applied.get(key, 0):
                return False
            self._applied[key] = ticket
            return True


class Dashboard:
    def __init__(self, api: Optional[TransactionApi] = None, store: Optional[Store] = None,
                 sequencer: Optional[RequestSequencer] = None):
        self.api = api or TransactionApi()
        self.store = store or Store()
        self.sequencer = sequencer or RequestSequencer()

    @property
    def state(self) -> DashboardState:
        return self.store.state

    def _notify(self, message: Optional[str]):
        if message:
            logger.info("Notice: %s", message)
        self.store.dispatch(NoticeRaised(message=message))

    def load(self) -> bool:
        """Fetch the full transaction list. Failures keep the current list."""
        ticket = self.sequencer.issue(LIST_KEY)
        try:
            transactions = self.api.list_transactions()
        except ApiError as exc:
            logger.error("Error fetching transactions: %s", exc.message)
            self._notify(f"Error fetching transactions: {exc.message}")
            return False

        if not self.sequencer.try_apply(LIST_KEY, ticket):
            logger.debug("Dropping stale transaction list (ticket %s)", ticket)
            return False
        self.store.dispatch(TransactionsLoaded(transactions=transactions))
        return True

    def set_date_range(self, start: Optional[str], end: Optional[str]):
        self.store.dispatch(DateRangeChanged(start=start, end=end))

    def set_budget(self, value: Optional[Union[str, float]]):
        self.store.dispatch(BudgetChanged(value=value))

    def confirm_budget(self):
        self._notify(f"Budget set to ${self.state.budget_input}")

    def update_form(self, **fields):
        self.store.dispatch(FormChanged(fields=fields))

    def add_transaction(self, form: Optional[Union[TransactionCreate, dict]] = None):
        """Validate and submit a transaction, defaulting to the input form.

        Raises ValidationError when a field is empty; nothing is sent then.
        Returns the created transaction, or None when the API call failed.
        """
        if form is None:
            form = self.state.form
        elif isinstance(form, dict):
            try:
                form = TransactionCreate.model_validate(form)
            except PydanticValidationError as exc:
                self._notify("Please fill in all fields.")
                raise ValidationError("All fields are required") from exc

        if form.missing_fields():
            self._notify("Please fill in all fields.")
            raise ValidationError("All fields are required")

        logger.debug("Sending transaction %s", form.model_dump())
        try:
            message, transaction = self.api.create_transaction(form.model_dump())
        except ApiError as exc:
            logger.error("Error adding transaction: %s", exc.message)
            self._notify("Failed to add transaction")
            return None

        self.store.dispatch(TransactionAdded(transaction=transaction))
        self.store.dispatch(FormCleared())
        self._notify(message)
        return transaction

    def delete_transaction(self, transaction_id: int) -> bool:
        """Delete by id; a success always removes the entry locally."""
        try:
            message = self.api.delete_transaction(transaction_id)
        except ApiError as exc:
            logger.error("Error deleting transaction %s: %s", transaction_id, exc.message)
            self._notify(exc.message)
            return False

        self.store.dispatch(TransactionRemoved(transaction_id=transaction_id))
        self._notify(message)
        return True
