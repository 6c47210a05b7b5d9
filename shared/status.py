"""Component status levels and their aggregation."""
from enum import IntEnum


class Status(IntEnum):
    """Validity summary exposed by a component, ordered by severity."""
    OK = 0
    WARNING = 1
    ERROR = 2


def aggregate_status(statuses) -> Status:
    """Worst status of a group of components; OK for an empty group."""
    return max((Status(s) for s in statuses), default=Status.OK)
