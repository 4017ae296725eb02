"""Operation dispatch for callers that address the core by name.

A transport hands over a kind, an operation and an argument bundle; the
dispatcher validates the bundle and calls the matching service. GraphQL
style names (``createUser``, ``deleteAllEvents``, ``eventCreated``) are
accepted as well via :meth:`OperationDispatcher.execute_named`.
"""

from collections.abc import Mapping
from enum import Enum
from typing import Any

import structlog

from eventhub.events.bus import NotificationBus, Subscription
from eventhub.events.topics import Topic
from eventhub.models import EntityKind
from eventhub.services.registry import ServiceRegistry

logger = structlog.get_logger()


class Operation(str, Enum):
    """Operations available on every entity kind."""

    LIST = "list"
    GET = "get"
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"
    DELETE_ALL = "delete_all"


class OperationError(Exception):
    """Base class for malformed operation requests."""


class UnknownOperationError(OperationError):
    """Raised for an unrecognized kind, operation or operation name."""


class MissingArgumentError(OperationError):
    """Raised when an operation is called without a required argument."""


def _build_named_operations() -> dict[str, tuple[EntityKind, Operation]]:
    table: dict[str, tuple[EntityKind, Operation]] = {}
    for kind in EntityKind:
        label = kind.label
        table[kind.plural] = (kind, Operation.LIST)
        table[kind.value] = (kind, Operation.GET)
        table[f"create{label}"] = (kind, Operation.CREATE)
        table[f"update{label}"] = (kind, Operation.UPDATE)
        table[f"delete{label}"] = (kind, Operation.DELETE)
        table[f"deleteAll{label}s"] = (kind, Operation.DELETE_ALL)
    return table


NAMED_OPERATIONS = _build_named_operations()


class OperationDispatcher:
    """Routes named operations to the entity services and the bus."""

    def __init__(self, services: ServiceRegistry, bus: NotificationBus):
        """Initialize dispatcher.

        Args:
            services: Per-kind entity services
            bus: Bus used for subscriptions
        """
        self._services = services
        self._bus = bus

    def execute(
        self,
        kind: EntityKind | str,
        operation: Operation | str,
        args: Mapping[str, Any] | None = None,
    ) -> Any:
        """Run one operation against one entity kind.

        Args:
            kind: Entity kind (``"user"`` or ``EntityKind.USER``)
            operation: Operation name (``"update"`` or ``Operation.UPDATE``)
            args: Argument bundle: ``id`` and/or ``data`` as required

        Returns:
            A record, a list of records, None (``get`` on a missing id)
            or a DeleteAllResult

        Raises:
            UnknownOperationError: If kind or operation is not recognized
            MissingArgumentError: If ``id`` or ``data`` is required but absent
            NotFoundError: If update/delete names a missing record
        """
        kind = self._parse(EntityKind, kind, "kind")
        operation = self._parse(Operation, operation, "operation")
        args = args or {}
        service = self._services.for_kind(kind)

        logger.debug("operation_dispatched", kind=kind.value, operation=operation.value)

        if operation is Operation.LIST:
            return service.list()
        if operation is Operation.GET:
            return service.get(self._require(args, "id"))
        if operation is Operation.CREATE:
            return service.create(self._require(args, "data"))
        if operation is Operation.UPDATE:
            return service.update(
                self._require(args, "id"), self._require(args, "data")
            )
        if operation is Operation.DELETE:
            return service.delete(self._require(args, "id"))
        return service.delete_all()

    def subscribe(self, topic: Topic | str, user_id: str | None = None) -> Subscription:
        """Open a subscription on a topic, optionally filtered by user id."""
        if not isinstance(topic, Topic):
            try:
                topic = Topic.parse(topic)
            except ValueError as e:
                raise UnknownOperationError(str(e)) from e
        return self._bus.subscribe(topic, user_id=user_id)

    def execute_named(self, name: str, args: Mapping[str, Any] | None = None) -> Any:
        """Run an operation addressed by its GraphQL-style name.

        Subscription names (``userCreated``, ``eventCreated``,
        ``participantAdded``) return a Subscription.
        """
        args = args or {}
        target = NAMED_OPERATIONS.get(name)
        if target is not None:
            kind, operation = target
            return self.execute(kind, operation, args)

        try:
            topic = Topic.parse(name)
        except ValueError:
            msg = f"Unknown operation: {name}"
            raise UnknownOperationError(msg) from None
        return self.subscribe(topic, user_id=args.get("user_id"))

    @staticmethod
    def _parse(enum_cls: type[Enum], value: Any, label: str) -> Any:
        if isinstance(value, enum_cls):
            return value
        try:
            return enum_cls(value)
        except ValueError:
            msg = f"Unknown {label}: {value}"
            raise UnknownOperationError(msg) from None

    @staticmethod
    def _require(args: Mapping[str, Any], name: str) -> Any:
        if args.get(name) is None:
            msg = f"Missing required argument: {name}"
            raise MissingArgumentError(msg)
        return args[name]
