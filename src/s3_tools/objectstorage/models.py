"""Value types used when building requests and returning listings."""

from dataclasses import dataclass
from typing import Optional, Union

from s3_tools.schemas import ListEntry


@dataclass(frozen=True)
class ObjectRef:
    """A stored object: bucket plus key."""

    bucket: str
    key: str


@dataclass(frozen=True)
class ByteRange:
    """An HTTP byte range; a negative ``last`` without ``first`` means the
    final ``-last`` bytes."""

    first: Optional[int] = None
    last: Optional[int] = None

    def header_value(self) -> Optional[str]:
        """Return the ``Range`` header value, or None for a full fetch."""
        if self.first is None and self.last is None:
            return None
        if self.first is not None:
            last = "" if self.last is None else str(self.last)
            return f"bytes={self.first}-{last}"
        if self.last < 0:
            return f"bytes=-{-self.last}"
        return f"bytes=0-{self.last}"


@dataclass(frozen=True)
class Done:
    """No further pages."""


@dataclass(frozen=True)
class More:
    """More pages exist; pass ``token`` to the next list call."""

    token: str


Continuation = Union[Done, More]


@dataclass(frozen=True)
class ListPage:
    entries: tuple[ListEntry, ...]
    continuation: Continuation
