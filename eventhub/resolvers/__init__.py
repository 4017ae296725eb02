"""Relationship resolution between users, locations, events and participants."""

from eventhub.resolvers.relations import (
    RELATIONS,
    RelationResolver,
    UnknownRelationError,
    relation_names,
)

__all__ = [
    "RELATIONS",
    "RelationResolver",
    "UnknownRelationError",
    "relation_names",
]
