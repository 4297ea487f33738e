"""Session-scoped storage for quote form inputs (process memory only)"""

import threading
from collections import OrderedDict
from typing import Optional

from benkon_quote.config import settings
from benkon_quote.domain.models import CostComponents, CustomerInfo, FormState

DEFAULT_SESSION_ID = "default"


def default_form_state() -> FormState:
    """Initial form values shown before anything has been saved"""
    return FormState(
        customer=CustomerInfo(
            customer_name="",
            company_name="",
            address="",
            contact="",
            number_of_stores=settings.default_number_of_stores,
        ),
        costs=CostComponents(
            hardware_cost=settings.default_hardware_cost,
            software_cost_per_year=settings.default_software_cost_per_year,
            installation_cost_per_store=settings.default_installation_cost_per_store,
            setup_service_per_store=settings.default_setup_service_per_store,
        ),
        language=settings.default_locale,
    )


class FormStateRepository:
    """Load/save contract for the form collaborator; the calculation engine never uses it"""

    def load(self) -> Optional[FormState]:
        raise NotImplementedError

    def save(self, state: FormState) -> None:
        raise NotImplementedError

    def clear(self) -> None:
        raise NotImplementedError


class SessionFormStateStore:
    """
    Saved form state per session ID; nothing outlives the process.

    Only saves create entries. Once more than max_sessions sessions hold
    state, the least recently used one is dropped.
    """

    def __init__(self, max_sessions: Optional[int] = None):
        self.max_sessions = max_sessions or settings.form_state_max_sessions
        self._states: "OrderedDict[str, FormState]" = OrderedDict()
        self._lock = threading.Lock()

    def load(self, session_id: str) -> Optional[FormState]:
        with self._lock:
            state = self._states.get(session_id)
            if state is not None:
                self._states.move_to_end(session_id)
            return state

    def save(self, session_id: str, state: FormState) -> None:
        with self._lock:
            self._states[session_id] = state
            self._states.move_to_end(session_id)
            while len(self._states) > self.max_sessions:
                self._states.popitem(last=False)

    def clear(self, session_id: str) -> None:
        with self._lock:
            self._states.pop(session_id, None)

    def for_session(self, session_id: str) -> FormStateRepository:
        """Repository bound to one session"""
        return SessionFormStateRepository(self, session_id)

    def session_count(self) -> int:
        with self._lock:
            return len(self._states)


class SessionFormStateRepository(FormStateRepository):
    """One session's view of a SessionFormStateStore"""

    def __init__(self, store: SessionFormStateStore, session_id: str):
        self.store = store
        self.session_id = session_id

    def load(self) -> Optional[FormState]:
        return self.store.load(self.session_id)

    def save(self, state: FormState) -> None:
        self.store.save(self.session_id, state)

    def clear(self) -> None:
        self.store.clear(self.session_id)
