"""Typed outcomes for S3 commands.

Every command returns an ``Outcome``: either ``Ok`` wrapping the value, or
``Err`` wrapping one of the error kinds below. The kinds form a closed union,
so callers can match on them exhaustively::

    match ops.get("bucket", "key"):
        case Ok(value=data):
            ...
        case Err(error=Redirect(region=region)):
            ...
        case Err(error=Throttled()):
            ...
"""

from dataclasses import dataclass
from typing import Callable, Generic, TypeVar, Union

T = TypeVar("T")
U = TypeVar("U")


@dataclass(frozen=True)
class Redirect:
    """The bucket lives in another region; retry the command there."""

    region: str


@dataclass(frozen=True)
class Throttled:
    """The service is busy (500/503). Back off and retry."""


@dataclass(frozen=True)
class NotFound:
    """The bucket or object does not exist."""


@dataclass(frozen=True)
class Unknown:
    """An unclassified service error.

    Attributes:
        status: HTTP status, or -1 for a local consistency check
        code: Service error code (``Code`` element of the error document)
    """

    status: int
    code: str


@dataclass(frozen=True)
class Exn:
    """A local decoding or processing fault on an otherwise delivered reply."""

    error: Exception


@dataclass(frozen=True)
class TransportFailure:
    """The request could not be delivered by the transport."""

    error: Exception


ErrorKind = Union[Redirect, Throttled, NotFound, Unknown, Exn, TransportFailure]


@dataclass(frozen=True)
class Ok(Generic[T]):
    """Successful outcome."""

    value: T

    def is_ok(self) -> bool:
        return True

    def unwrap(self) -> T:
        return self.value

    def and_then(self, fn: "Callable[[T], Outcome[U]]") -> "Outcome[U]":
        return fn(self.value)


@dataclass(frozen=True)
class Err:
    """Failed outcome."""

    error: ErrorKind

    def is_ok(self) -> bool:
        return False

    def unwrap(self):
        raise ValueError(f"Called unwrap on a failed outcome: {self.error!r}")

    def and_then(self, fn: Callable) -> "Err":
        return self


Outcome = Union[Ok[T], Err]
