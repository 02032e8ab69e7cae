"""Identity assignment for tasks and recurring definitions.

Identifiers are random UUID4 strings, so no counter or central authority is involved.
"""

import uuid
from typing import TypeVar

from pydantic import BaseModel

M = TypeVar("M", bound=BaseModel)


def new_identifier() -> str:
    """Generate a new globally unique identifier."""
    return str(uuid.uuid4())


def assign_identifier_if_absent(record: M) -> M:
    """Fill in `record.id` when it is missing.

    Args:
        record: Task or RecurringTask model (mutated in place)

    Returns:
        The same record, for chaining
    """
    if not record.id:
        record.id = new_identifier()
    return record
