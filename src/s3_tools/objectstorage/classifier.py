"""Classification of HTTP replies into typed outcomes."""

from dataclasses import dataclass, field
from typing import Mapping

from s3_tools.schemas import ErrorDocument

from .codec import decode
from .outcome import Err, NotFound, Ok, Outcome, Redirect, Throttled, Unknown
from .regions import region_of_host, region_of_string

REDIRECT_CODES = frozenset({"PermanentRedirect", "TemporaryRedirect"})
THROTTLE_STATUSES = frozenset({500, 503})


@dataclass(frozen=True)
class Response:
    """A successful reply: status, lower-cased headers and raw body."""

    status: int
    headers: Mapping[str, str] = field(default_factory=dict)
    body: bytes = b""


def _error_code(body: bytes) -> tuple[str, ErrorDocument | None]:
    result = decode(ErrorDocument, body)
    if isinstance(result, Ok):
        return result.value.code, result.value
    return "", None


def classify(status: int, headers: Mapping[str, str], body: bytes) -> Outcome[Response]:
    """Map a reply to ``Ok(Response)`` or an error kind.

    Only 3xx/4xx (other than 404) and unexpected statuses have their error
    document decoded. An undecodable error document yields an empty code.
    """
    if 200 <= status < 300:
        return Ok(Response(status=status, headers=headers, body=body))
    if status == 404:
        return Err(NotFound())
    if 300 <= status < 500:
        code, document = _error_code(body)
        if document is not None:
            if code in REDIRECT_CODES and document.endpoint:
                return Err(Redirect(region_of_host(document.endpoint)))
            if code == "AuthorizationHeaderMalformed" and document.region:
                return Err(Redirect(region_of_string(document.region)))
        return Err(Unknown(status, code))
    if status in THROTTLE_STATUSES:
        # 500 is NOT_READY and 503 is THROTTLED; both are transient.
        return Err(Throttled())
    code, _ = _error_code(body)
    return Err(Unknown(status, code))
