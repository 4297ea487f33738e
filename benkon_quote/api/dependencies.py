"""Dependency injection for FastAPI endpoints"""

from typing import Optional

from fastapi import Depends, Header, Request

from benkon_quote.infrastructure.state.repositories import (
    DEFAULT_SESSION_ID,
    FormStateRepository,
    SessionFormStateStore,
)

_form_state_store = SessionFormStateStore()


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_session_id(x_session_id: Optional[str] = Header(default=None)) -> str:
    """Session the form state belongs to (X-Session-ID header)"""
    return x_session_id or DEFAULT_SESSION_ID


def get_form_state_store() -> SessionFormStateStore:
    """Process-wide session store"""
    return _form_state_store


def get_form_state_repository(
    session_id: str = Depends(get_session_id),
    store: SessionFormStateStore = Depends(get_form_state_store),
) -> FormStateRepository:
    """Provide the caller's form-state repository"""
    return store.for_session(session_id)


def get_accept_language(accept_language: Optional[str] = Header(default=None)) -> Optional[str]:
    """First language tag of the Accept-Language header"""
    if not accept_language:
        return None
    return accept_language.split(",")[0].split(";")[0].strip() or None
