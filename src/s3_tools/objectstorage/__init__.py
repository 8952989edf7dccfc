"""Wire codec, response classification and typed outcomes for S3 commands.

The command layer (``operations``, ``multipart``) and the HTTP transport
(``clients``) build on these modules and are imported from their own
submodules.
"""

from .classifier import Response, classify
from .codec import decode, encode
from .models import ByteRange, Continuation, Done, ListPage, More, ObjectRef
from .outcome import (
    Err,
    ErrorKind,
    Exn,
    NotFound,
    Ok,
    Outcome,
    Redirect,
    Throttled,
    TransportFailure,
    Unknown,
)
from .regions import endpoint_for_region, region_of_host, region_of_string

__all__ = [
    "ByteRange",
    "Continuation",
    "Done",
    "Err",
    "ErrorKind",
    "Exn",
    "ListPage",
    "More",
    "NotFound",
    "ObjectRef",
    "Ok",
    "Outcome",
    "Redirect",
    "Response",
    "Throttled",
    "TransportFailure",
    "Unknown",
    "classify",
    "decode",
    "encode",
    "endpoint_for_region",
    "region_of_host",
    "region_of_string",
]
