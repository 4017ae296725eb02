"""User records."""

from typing import ClassVar

from pydantic import Field

from eventhub.models.base import EntityKind, Record, RecordInput


class User(Record):
    """A person who owns events and takes part in them."""

    kind: ClassVar[EntityKind] = EntityKind.USER

    username: str = Field(description="Display name")
    email: str = Field(description="Contact address")


class CreateUserInput(RecordInput):
    """Fields required to create a user."""

    username: str
    email: str


class UpdateUserInput(RecordInput):
    """Fields that may be changed on a user."""

    username: str | None = None
    email: str | None = None
