"""Exception hierarchy for s3-tools.

Service-reported failures are returned as values (see
``s3_tools.objectstorage.outcome``). Exceptions are reserved for local faults
and caller mistakes.
"""


class S3ToolsError(Exception):
    """Base exception for all s3-tools errors."""

    pass


class ValidationError(S3ToolsError):
    """Raised when validation fails."""

    pass


class CommandExecutionError(S3ToolsError):
    """Raised when command execution fails."""

    pass


class TransportError(S3ToolsError):
    """Raised by a transport when a request cannot be delivered."""

    pass


class ProtocolViolationError(S3ToolsError):
    """Raised when a reply is missing something the wire contract requires."""

    pass


class SessionStateError(S3ToolsError):
    """Raised when a multipart session is used after completion or abort."""

    pass
