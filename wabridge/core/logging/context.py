"""
Request context management using contextvars for automatic propagation.

The session context is set once by middleware for every
``/sessions/{session_id}/...`` request; the recipient context is set by
message handlers while they work on a single jid. Both are picked up by
every ContextLogger without manual parameter passing.
"""

from contextvars import ContextVar

_session_context: ContextVar[str | None] = ContextVar(
    "session_id", default=None
)  # From request path
_recipient_context: ContextVar[str | None] = ContextVar(
    "recipient_jid", default=None
)  # From request body


def set_request_context(
    session_id: str | None = None,
    recipient_jid: str | None = None,
) -> None:
    """
    Set the request context for the current async context.

    Args:
        session_id: Messaging session identifier from the request path
        recipient_jid: Recipient jid currently being handled
    """
    if session_id is not None:
        _session_context.set(session_id)
    if recipient_jid is not None:
        _recipient_context.set(recipient_jid)


def get_current_session_context() -> str | None:
    """Get the current session ID, or None if not set."""
    return _session_context.get()


def get_current_recipient_context() -> str | None:
    """Get the current recipient jid, or None if not set."""
    return _recipient_context.get()


def clear_recipient_context() -> None:
    """Forget the recipient once a handler is done with it."""
    _recipient_context.set(None)

