from dataclasses import dataclass, field
from typing import Mapping, Optional, Protocol, Sequence

from s3_tools.core import get_logger, get_tracer
from s3_tools.core.exceptions import TransportError
from s3_tools.core.observability import command_span
from s3_tools.objectstorage.classifier import Response, classify
from s3_tools.objectstorage.outcome import Err, Ok, Outcome, TransportFailure

logger = get_logger(__name__)
tracer = get_tracer(__name__)


@dataclass(frozen=True)
class Request:
    """A prepared S3 request.

    ``path`` is ``{bucket}`` or ``{bucket}/{key}``. ``query`` keeps its order;
    flag parameters such as ``uploads`` carry an empty value.
    """

    method: str
    path: str
    query: Sequence[tuple[str, str]] = ()
    headers: Mapping[str, str] = field(default_factory=dict)
    body: Optional[bytes] = None


@dataclass(frozen=True)
class TransportResponse:
    status: int
    headers: Mapping[str, str]
    body: bytes


class Transport(Protocol):
    """Protocol for sending a single request to the service."""

    def send_request(
        self,
        method: str,
        path: str,
        query: Sequence[tuple[str, str]],
        headers: Mapping[str, str],
        body: Optional[bytes],
        region: Optional[str] = None,
    ) -> TransportResponse:
        """Send the request once and return the raw reply.

        Raises:
            TransportError: when the request could not be delivered
        """
        ...


class CommandExecutor:
    """Runs prepared requests through a transport and classifies the reply.

    Exactly one round trip per call. Retries and redirect following are left
    to the caller.
    """

    def __init__(self, transport: Transport):
        self.transport = transport

    def execute(
        self, request: Request, region: Optional[str] = None
    ) -> Outcome[Response]:
        with command_span(tracer, request.method, request.path) as span:
            try:
                reply = self.transport.send_request(
                    request.method,
                    request.path,
                    request.query,
                    request.headers,
                    request.body,
                    region,
                )
            except TransportError as e:
                logger.debug("Transport failed", error=str(e))
                return Err(TransportFailure(e))

            span.set_attribute("http.status_code", reply.status)
            headers = {name.lower(): value for name, value in reply.headers.items()}
            outcome = classify(reply.status, headers, reply.body)

            if isinstance(outcome, Ok):
                logger.debug("Command succeeded", status=reply.status)
            else:
                logger.debug(
                    "Command failed",
                    status=reply.status,
                    error=type(outcome.error).__name__,
                )
            return outcome
