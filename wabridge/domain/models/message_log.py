"""
Message log persistence models.

``Message`` is the SQLModel table; ``MessageRecord`` is its API shape with
camelCase keys.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from sqlalchemy import JSON, BigInteger, Column, UniqueConstraint
from sqlmodel import Field, SQLModel


class Message(SQLModel, table=True):
    """A message sent or received through a session."""

    __tablename__ = "message"
    __table_args__ = (
        UniqueConstraint("session_id", "remote_jid", "id", name="unique_message_key_per_session"),
    )

    pk_id: int | None = Field(default=None, primary_key=True)
    session_id: str = Field(index=True, max_length=128)
    remote_jid: str = Field(max_length=128)
    id: str = Field(max_length=128)
    from_me: bool | None = None
    push_name: str | None = Field(default=None, max_length=128)
    status: int | None = None
    message_timestamp: int | None = Field(
        default=None, sa_column=Column(BigInteger, nullable=True)
    )
    message: dict[str, Any] | None = Field(default=None, sa_column=Column(JSON))


class MessageRecord(BaseModel):
    """API representation of a logged message."""

    model_config = ConfigDict(
        from_attributes=True, alias_generator=to_camel, populate_by_name=True
    )

    pk_id: int
    session_id: str
    remote_jid: str
    id: str
    from_me: bool | None = None
    push_name: str | None = None
    status: int | None = None
    message_timestamp: int | None = None
    message: dict[str, Any] | None = None


class MessagePage(BaseModel):
    """One page of the message log."""

    data: list[MessageRecord]
    cursor: int | None = None
