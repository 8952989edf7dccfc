"""A client for S3-compatible object storage over the REST/XML API.

This package turns storage operations into HTTP requests, classifies the
replies into typed outcomes, and drives the multi-request protocols
(paginated listing, multi-object delete, multipart upload).

Key Features:
    - Typed outcomes instead of exceptions for service errors
    - Region redirect detection
    - Caller-driven pagination with continuation tokens
    - Multipart upload sessions
    - CLI interface

Recommended Usage:
    >>> from s3_tools import CommandExecutor, HttpTransport, ObjectOperations
    >>> from s3_tools import S3ClientConfig
    >>> transport = HttpTransport(S3ClientConfig(aws_profile="default"))
    >>> ops = ObjectOperations(CommandExecutor(transport))
    >>> page = ops.list("my-bucket", prefix="data/")

Every command returns ``Ok(value)`` or ``Err(kind)``; retrying and following
``Redirect`` errors is up to the caller (see ``s3_tools.transfer.retry``).
"""

__version__ = "0.1.0"

# Leaf modules first: the command executor depends on the classifier.
from .objectstorage import (
    ByteRange,
    Done,
    Err,
    ErrorKind,
    Exn,
    ListPage,
    More,
    NotFound,
    ObjectRef,
    Ok,
    Outcome,
    Redirect,
    Throttled,
    TransportFailure,
    Unknown,
)
from .command_executor import CommandExecutor, Request, Transport, TransportResponse
from .objectstorage.clients import HttpTransport, S3ClientConfig
from .objectstorage.multipart import MultipartSession, MultipartUploads, SessionState
from .objectstorage.operations import ObjectOperations
from .schemas import DeleteMultiResult, DeleteObject, ETag, ListEntry, StorageClass

__all__ = [
    # Outcomes
    "Ok",
    "Err",
    "Outcome",
    "ErrorKind",
    "Redirect",
    "Throttled",
    "NotFound",
    "Unknown",
    "Exn",
    "TransportFailure",
    # Values
    "ByteRange",
    "Done",
    "More",
    "ListPage",
    "ObjectRef",
    "ETag",
    "ListEntry",
    "StorageClass",
    "DeleteObject",
    "DeleteMultiResult",
    # Commands
    "CommandExecutor",
    "Request",
    "Transport",
    "TransportResponse",
    "ObjectOperations",
    "MultipartSession",
    "MultipartUploads",
    "SessionState",
    # HTTP transport
    "HttpTransport",
    "S3ClientConfig",
]
