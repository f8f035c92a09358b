"""
Copyright (C) 2025  EntityStore Development Team
SPDX-License-Identifier: AGPL-3.0-or-later

This file is part of EntityStore. See the LICENSE file in the project
root for full license details.
"""
import typing


class StoreError(Exception):
    """Base exception for entity store errors."""

    def __init__(self, message: str, **context: object) -> None:
        """
        Initialise store error.

        Args:
            message: Human-readable error message.
            **context: Additional context about the error.
        """
        self.message = message
        self.context = context
        super().__init__(message)


class ExecutionFailure(StoreError):
    """The database call itself failed (connectivity, constraint, syntax)."""

    def __init__(self, entity: str, operation: str,
                 detail: typing.Optional[str] = None) -> None:
        super().__init__(
            f"{operation} on '{entity}' failed: {detail}" if detail
            else f"{operation} on '{entity}' failed",
            entity=entity,
            operation=operation,
            detail=detail,
        )
        self.entity = entity
        self.operation = operation
        self.detail = detail


class EntityNotFoundError(StoreError):
    """A by-id lookup matched no rows."""

    def __init__(self, entity: str, entity_id: object) -> None:
        super().__init__(f"{entity} with id {entity_id} not found",
                         entity=entity,
                         entity_id=entity_id)
        self.entity = entity
        self.entity_id = entity_id


class GenerationFailure(StoreError):
    """A create statement did not yield a database-generated identifier."""

    def __init__(self, entity: str) -> None:
        super().__init__(f"Create on '{entity}' did not generate an id",
                         entity=entity)
        self.entity = entity
