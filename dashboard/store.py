"""
dashboard/store.py
------------------
Single state container for the dashboard. All changes go through
``Store.dispatch`` and the pure ``reduce`` function, which re-derives the
view whenever the transactions, the date range or the budget change.
"""

import threading
from typing import Any, Callable, Dict, List, Optional, Tuple, Union

from pydantic import BaseModel

from dashboard.derive import DerivedView, derive_view
from schemas import TransactionCreate, TransactionResponse
from utils.logger import get_logger

logger = get_logger(__name__)


class DashboardState(BaseModel):
    transactions: List[TransactionResponse] = []
    date_range: Tuple[Optional[str], Optional[str]] = (None, None)
    budget: Optional[float] = None
    budget_input: str = ""
    form: TransactionCreate = TransactionCreate()
    notice: Optional[str] = None
    view: DerivedView = DerivedView()


# Actions
class TransactionsLoaded(BaseModel):
    transactions: List[TransactionResponse]


class TransactionAdded(BaseModel):
    transaction: TransactionResponse


class TransactionRemoved(BaseModel):
    transaction_id: int


class DateRangeChanged(BaseModel):
    start: Optional[str] = None
    end: Optional[str] = None


class BudgetChanged(BaseModel):
    value: Optional[Union[str, float]] = None


class FormChanged(BaseModel):
    fields: Dict[str, Any]


class FormCleared(BaseModel):
    pass


class NoticeRaised(BaseModel):
    message: Optional[str] = None


def parse_budget(value) -> Optional[float]:
    """Budget input to a number; blank or non-numeric input means no budget."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    text = str(value).strip()
    if not text:
        return None
    try:
        return float(text)
    except ValueError:
        logger.warning("Ignoring non-numeric budget %r", value)
        return None


def _with_view(state: DashboardState, **changes) -> DashboardState:
    state = state.model_copy(update=changes)
    view = derive_view(state.transactions, state.date_range, state.budget)
    return state.model_copy(update={"view": view})


def reduce(state: DashboardState, action) -> DashboardState:
    if isinstance(action, TransactionsLoaded):
        return _with_view(state, transactions=list(action.transactions))

    if isinstance(action, TransactionAdded):
        return _with_view(state, transactions=state.transactions + [action.transaction])

    if isinstance(action, TransactionRemoved):
        remaining = [t for t in state.transactions if t.id != action.transaction_id]
        return _with_view(state, transactions=remaining)

    if isinstance(action, DateRangeChanged):
        return _with_view(state, date_range=(action.start or None, action.end or None))

    if isinstance(action, BudgetChanged):
        raw = "" if action.value is None else str(action.value)
        return _with_view(state, budget=parse_budget(action.value), budget_input=raw)

    if isinstance(action, FormChanged):
        form = state.form.model_copy(update=action.fields)
        return state.model_copy(update={"form": form})

    if isinstance(action, FormCleared):
        return state.model_copy(update={"form": TransactionCreate()})

    if isinstance(action, NoticeRaised):
        return state.model_copy(update={"notice": action.message})

    raise TypeError(f"Unknown action {type(action).__name__}")


class Store:
    def __init__(self, state: Optional[DashboardState] = None):
        self._state = state or DashboardState()
        self._listeners: List[Callable[[DashboardState], None]] = []
        self._lock = threading.Lock()

    @property
    def state(self) -> DashboardState:
        return self._state

    def subscribe(self, listener: Callable[[DashboardState], None]) -> Callable[[], None]:
        """Register a listener; returns a function that removes it."""
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe():
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    def dispatch(self, action) -> DashboardState:
        with self._lock:
            self._state = reduce(self._state, action)
            state = self._state
            listeners = list(self._listeners)
        for listener in listeners:
            listener(state)
        return state
