"""XML encoding and decoding of the S3 wire documents.

Decoding never raises: malformed XML or a document that does not fit the
schema comes back as ``Err(Exn(...))``, which callers can tell apart from a
service-reported error.

Encoding is generic: a model is dumped under a root element named after its
type, then the root is renamed to the tag the service expects for that
request (``Delete``, ``CompleteMultipartUpload``).
"""

import base64
import hashlib
from typing import Any, TypeVar
from xml.parsers.expat import ExpatError

import xmltodict
from pydantic import ValidationError as SchemaError

from s3_tools.core import get_logger
from s3_tools.schemas import (
    CompleteMultipartUploadRequest,
    DeleteMultiRequest,
    WireModel,
)

from .outcome import Err, Exn, Ok, Outcome

logger = get_logger(__name__)

M = TypeVar("M", bound=WireModel)

# Root element required on the wire, keyed by request type.
WIRE_ROOTS: dict[type, str] = {
    DeleteMultiRequest: "Delete",
    CompleteMultipartUploadRequest: "CompleteMultipartUpload",
}


def to_document(value: WireModel) -> dict[str, Any]:
    """Dump a model to an xmltodict document rooted at its type name."""
    content = value.model_dump(mode="json", by_alias=True, exclude_none=True)
    return {type(value).__name__: content}


def with_root(document: dict[str, Any], name: str) -> dict[str, Any]:
    """Rename the root element of a document."""
    (content,) = document.values()
    return {name: content}


def encode(value: WireModel) -> bytes:
    """Encode a request model as an XML document."""
    document = to_document(value)
    root = WIRE_ROOTS.get(type(value))
    if root is not None:
        document = with_root(document, root)
    return xmltodict.unparse(document, encoding="utf-8").encode("utf-8")


def decode(schema: type[M], body: bytes) -> Outcome[M]:
    """Decode an XML reply into ``schema``; the root element name is not checked."""
    try:
        document = xmltodict.parse(body, force_list=schema.xml_lists)
        (content,) = document.values()
        return Ok(schema.model_validate(content or {}))
    except (ExpatError, SchemaError, ValueError) as e:
        logger.debug(
            "Failed to decode reply", schema=schema.__name__, error=str(e)
        )
        return Err(Exn(e))


def content_md5(body: bytes) -> str:
    """Base64 MD5 digest for the ``Content-MD5`` integrity header."""
    return base64.b64encode(hashlib.md5(body).digest()).decode("ascii")
