"""Partial-update merging for records."""

from typing import TypeVar

from eventhub.models.base import Record, RecordInput

T = TypeVar("T", bound=Record)


def apply_partial(existing: T, partial: RecordInput) -> T:
    """Apply the fields set on ``partial`` over ``existing``.

    Precedence:
    - A field set on ``partial`` replaces the existing value
    - A field omitted from ``partial`` keeps the existing value
    - An explicit None clears optional fields and is ignored for
      required ones

    The identifier is never changed. Returns a new record; ``existing``
    is not modified.
    """
    record_fields = type(existing).model_fields
    changes = {}
    for name in partial.model_fields_set:
        field = record_fields.get(name)
        if field is None or name == "id":
            continue
        value = getattr(partial, name)
        if value is None and field.is_required():
            continue
        changes[name] = value

    if not changes:
        return existing
    return type(existing).model_validate({**existing.model_dump(), **changes})
