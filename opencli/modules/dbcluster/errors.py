"""Exceptions raised while describing database clusters."""
from typing import Iterable, List


class DescribeError(Exception):
    """Base class for all describe failures."""
    pass


class UsageError(DescribeError):
    """The command was invoked without the arguments it needs."""
    pass


class LocatorError(DescribeError):
    """Enumerating cluster resources failed outright."""
    pass


class FetchError(DescribeError):
    """A located resource could not be retrieved."""
    pass


class MalformedResourceError(FetchError):
    """A fetched resource lacks a field or has one of the wrong type.

    Attributes:
        path: Dotted path of the offending field, e.g. ``spec.instances``
    """

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"malformed resource: {path} {reason}")


class AggregateError(DescribeError):
    """Soft errors collected over one describe run.

    Messages are kept in first-seen order and never repeated.
    """

    def __init__(self, messages: Iterable[str]):
        self.messages: List[str] = list(dict.fromkeys(messages))
        super().__init__(str(self))

    def __str__(self) -> str:
        if len(self.messages) == 1:
            return self.messages[0]
        return "[" + ", ".join(self.messages) + "]"

    def __len__(self) -> int:
        return len(self.messages)
