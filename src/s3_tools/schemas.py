"""Wire schemas for the S3 REST/XML API.

Field aliases are the exact XML element names. Every schema ignores elements
it does not know about, so newer service replies still decode.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Annotated, Any, ClassVar, Optional

from pydantic import (
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    PlainSerializer,
    field_validator,
)


@dataclass(frozen=True)
class ETag:
    """Content digest of an object or part.

    On the wire an etag is a quoted hex string. Objects assembled by a
    multipart upload carry a ``-N`` suffix giving the number of parts.
    """

    digest: bytes
    parts: Optional[int] = None

    @classmethod
    def from_wire(cls, value: str) -> "ETag":
        """Parse a wire etag, stripping one leading and one trailing quote."""
        text = value.strip()
        if text.startswith('"'):
            text = text[1:]
        if text.endswith('"'):
            text = text[:-1]
        digest, separator, parts = text.partition("-")
        return cls(
            digest=bytes.fromhex(digest),
            parts=int(parts) if separator else None,
        )

    def hex(self) -> str:
        if self.parts is None:
            return self.digest.hex()
        return f"{self.digest.hex()}-{self.parts}"

    def to_wire(self) -> str:
        return f'"{self.hex()}"'


def _parse_etag(value: Any) -> Any:
    if isinstance(value, str):
        return ETag.from_wire(value)
    return value


WireETag = Annotated[
    ETag,
    BeforeValidator(_parse_etag),
    PlainSerializer(lambda etag: etag.to_wire(), return_type=str),
]


class StorageClass(str, Enum):
    """Storage classes reported in listings."""

    STANDARD = "STANDARD"
    STANDARD_IA = "STANDARD_IA"
    REDUCED_REDUNDANCY = "REDUCED_REDUNDANCY"
    GLACIER = "GLACIER"


class WireModel(BaseModel):
    """Base for all XML documents exchanged with the service."""

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    # Child elements that may repeat and must always decode as lists.
    xml_lists: ClassVar[tuple[str, ...]] = ()


# Listing


class ListEntry(WireModel):
    """One ``Contents`` element of a listing."""

    key: str = Field(..., alias="Key")
    size: int = Field(..., alias="Size")
    last_modified: datetime = Field(..., alias="LastModified")
    etag: WireETag = Field(..., alias="ETag")
    storage_class: StorageClass = Field(..., alias="StorageClass")


class CommonPrefix(WireModel):
    prefix: str = Field(..., alias="Prefix")


class ListBucketResult(WireModel):
    """A ListObjectsV2 result page."""

    xml_lists: ClassVar[tuple[str, ...]] = ("Contents", "CommonPrefixes")

    name: str = Field(..., alias="Name")
    prefix: Optional[str] = Field(None, alias="Prefix")
    delimiter: Optional[str] = Field(None, alias="Delimiter")
    max_keys: int = Field(..., alias="MaxKeys")
    key_count: int = Field(..., alias="KeyCount")
    is_truncated: bool = Field(..., alias="IsTruncated")
    continuation_token: Optional[str] = Field(None, alias="ContinuationToken")
    next_continuation_token: Optional[str] = Field(
        None, alias="NextContinuationToken"
    )
    contents: tuple[ListEntry, ...] = Field((), alias="Contents")
    common_prefixes: tuple[CommonPrefix, ...] = Field((), alias="CommonPrefixes")


# Errors


class ErrorDocument(WireModel):
    """The ``Error`` document returned with 3xx/4xx replies."""

    code: str = Field(..., alias="Code")
    message: str = Field("", alias="Message")
    bucket: Optional[str] = Field(None, alias="Bucket")
    endpoint: Optional[str] = Field(None, alias="Endpoint")
    region: Optional[str] = Field(None, alias="Region")
    request_id: str = Field("", alias="RequestId")
    host_id: str = Field("", alias="HostId")


# Multi-object delete


class DeleteObject(WireModel):
    key: str = Field(..., alias="Key")
    version_id: Optional[str] = Field(None, alias="VersionId")


class DeleteMultiRequest(WireModel):
    """Request body for ``POST ?delete``; sent with a ``Delete`` root."""

    quiet: bool = Field(False, alias="Quiet")
    objects: tuple[DeleteObject, ...] = Field(..., alias="Object")


class DeleteError(WireModel):
    key: str = Field(..., alias="Key")
    version_id: Optional[str] = Field(None, alias="VersionId")
    code: str = Field(..., alias="Code")
    message: str = Field("", alias="Message")


class DeleteMultiResult(WireModel):
    """Per-object outcome of a multi-object delete.

    A non-empty ``errors`` list is a partial failure, not a failed request.
    """

    xml_lists: ClassVar[tuple[str, ...]] = ("Deleted", "Error")

    delete_marker: bool = Field(False, alias="DeleteMarker")
    delete_marker_version_id: Optional[str] = Field(
        None, alias="DeleteMarkerVersionId"
    )
    deleted: tuple[DeleteObject, ...] = Field((), alias="Deleted")
    errors: tuple[DeleteError, ...] = Field((), alias="Error")

    @field_validator("delete_marker", mode="before")
    @classmethod
    def _absent_marker_is_false(cls, value: Any) -> Any:
        # The service omits or empties the element when no marker was created.
        return False if value is None else value


# Multipart upload


class InitiateMultipartUploadResult(WireModel):
    bucket: str = Field(..., alias="Bucket")
    key: str = Field(..., alias="Key")
    upload_id: str = Field(..., alias="UploadId")


class CompletedPart(WireModel):
    part_number: int = Field(..., alias="PartNumber")
    etag: WireETag = Field(..., alias="ETag")


class CompleteMultipartUploadRequest(WireModel):
    """Request body for completing an upload; sent with a
    ``CompleteMultipartUpload`` root."""

    parts: tuple[CompletedPart, ...] = Field((), alias="Part")


class CompleteMultipartUploadResult(WireModel):
    location: str = Field(..., alias="Location")
    bucket: str = Field(..., alias="Bucket")
    key: str = Field(..., alias="Key")
    etag: WireETag = Field(..., alias="ETag")
