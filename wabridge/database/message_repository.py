"""
Message log repository.

Reads pages of the message log with a pk cursor and records the message
info returned by the messaging client after a send.
"""

from typing import Any

from sqlmodel import select

from wabridge.core.logging.logger import get_logger
from wabridge.domain.models.message_log import Message, MessagePage, MessageRecord

from .adapter import SessionFactory


def _as_int(value: Any) -> int | None:
    """Coerce the numeric shapes the client uses (int, numeric string, Long dict)."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        return int(value) if value.strip().isdigit() else None
    if isinstance(value, dict) and "low" in value:
        low = int(value.get("low") or 0) & 0xFFFFFFFF
        high = int(value.get("high") or 0) & 0xFFFFFFFF
        return (high << 32) | low
    return None


class MessageRepository:
    """
    Message log access on top of an async session factory.

    Example:
        repository = MessageRepository(app.state.db_session)
        page = await repository.list_page("sales", cursor=None, limit=25)
    """

    def __init__(self, session_factory: SessionFactory):
        self._session_factory = session_factory
        self.logger = get_logger(__name__)

    async def list_page(
        self, session_id: str, cursor: int | None = None, limit: int = 25
    ) -> MessagePage:
        """Return up to ``limit`` messages after ``cursor`` in pk order.

        The returned cursor is the last pk of the page when the page is full,
        None otherwise.
        """
        statement = select(Message).where(Message.session_id == session_id)
        if cursor is not None:
            statement = statement.where(Message.pk_id > cursor)
        statement = statement.order_by(Message.pk_id).limit(limit)

        async with self._session_factory() as session:
            rows = (await session.exec(statement)).all()

        data = [MessageRecord.model_validate(row) for row in rows]
        next_cursor = data[-1].pk_id if data and len(data) == limit else None
        return MessagePage(data=data, cursor=next_cursor)

    async def record(self, session_id: str, info: dict[str, Any]) -> Message | None:
        """Insert or update a message from the client's message info.

        Message info without a key (remoteJid + id) is skipped.
        """
        key = info.get("key") or {}
        remote_jid = key.get("remoteJid")
        message_id = key.get("id")
        if not remote_jid or not message_id:
            self.logger.debug("Message info without key, not logged")
            return None

        async with self._session_factory() as session:
            statement = select(Message).where(
                Message.session_id == session_id,
                Message.remote_jid == remote_jid,
                Message.id == message_id,
            )
            row = (await session.exec(statement)).first()
            if row is None:
                row = Message(session_id=session_id, remote_jid=remote_jid, id=message_id)

            row.from_me = key.get("fromMe")
            row.push_name = info.get("pushName", row.push_name)
            row.status = _as_int(info.get("status"))
            row.message_timestamp = _as_int(info.get("messageTimestamp"))
            row.message = info.get("message")
            session.add(row)
            await session.flush()
            await session.refresh(row)

        self.logger.debug(f"Logged message {message_id} for {remote_jid}")
        return row
