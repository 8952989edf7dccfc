"""Multipart upload sessions.

A session is created by ``initiate``, collects one ``CompletedPart`` per
successful ``upload_part``, and ends with ``complete`` or ``abort``::

    uploads = MultipartUploads(executor)
    session = uploads.initiate("bucket", "big.bin").unwrap()
    for number, chunk in enumerate(chunks, start=1):
        uploads.upload_part(session, number, chunk)
    etag = uploads.complete(session)

A session has a single writer. Uploading parts of one session from several
threads needs external locking around ``upload_part``.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from s3_tools.command_executor import CommandExecutor, Request
from s3_tools.core import get_logger
from s3_tools.core.exceptions import SessionStateError
from s3_tools.schemas import (
    CompletedPart,
    CompleteMultipartUploadRequest,
    CompleteMultipartUploadResult,
    ETag,
    InitiateMultipartUploadResult,
)

from .codec import decode, encode
from .operations import etag_header, object_path, optional_headers
from .outcome import Err, Ok, Outcome, Unknown

logger = get_logger(__name__)


class SessionState(str, Enum):
    INITIATED = "initiated"
    UPLOADING_PARTS = "uploading_parts"
    COMPLETED = "completed"
    ABORTED = "aborted"


@dataclass
class MultipartSession:
    """State of one multipart upload.

    ``parts`` is appended to in upload order while the session is active and
    becomes a tuple once the upload is completed.
    """

    upload_id: str
    bucket: str
    key: str
    parts: list[CompletedPart] = field(default_factory=list)
    state: SessionState = SessionState.INITIATED

    @property
    def active(self) -> bool:
        return self.state in (SessionState.INITIATED, SessionState.UPLOADING_PARTS)

    def completion_parts(self) -> tuple[CompletedPart, ...]:
        """Parts in ascending part-number order, latest upload per number."""
        latest = {part.part_number: part for part in self.parts}
        return tuple(latest[number] for number in sorted(latest))

    def _check_active(self, action: str) -> None:
        if not self.active:
            raise SessionStateError(
                f"Cannot {action} upload {self.upload_id}: session is {self.state.value}"
            )


class MultipartUploads:
    """Multipart upload commands."""

    def __init__(self, executor: CommandExecutor):
        self.executor = executor

    def initiate(
        self,
        bucket: str,
        key: str,
        content_type: Optional[str] = None,
        content_encoding: Optional[str] = None,
        cache_control: Optional[str] = None,
        acl: Optional[str] = None,
        *,
        region: Optional[str] = None,
    ) -> Outcome[MultipartSession]:
        headers = optional_headers(
            **{
                "Content-Type": content_type,
                "Content-Encoding": content_encoding,
                "Cache-Control": cache_control,
                "x-amz-acl": acl,
            }
        )
        request = Request(
            "POST", object_path(bucket, key), query=(("uploads", ""),), headers=headers
        )
        outcome = self.executor.execute(request, region).and_then(
            lambda response: decode(InitiateMultipartUploadResult, response.body)
        )
        if isinstance(outcome, Err):
            return outcome

        logger.debug(
            "Multipart upload initiated",
            bucket=bucket,
            key=key,
            upload_id=outcome.value.upload_id,
        )
        return Ok(
            MultipartSession(upload_id=outcome.value.upload_id, bucket=bucket, key=key)
        )

    def upload_part(
        self,
        session: MultipartSession,
        part_number: int,
        body: bytes,
        *,
        region: Optional[str] = None,
    ) -> Outcome[None]:
        """Upload one part and record its etag on the session.

        Part numbers are not checked; uploading a number twice records both
        entries and the later one is used on completion.
        """
        session._check_active("upload a part to")
        request = Request(
            "PUT",
            object_path(session.bucket, session.key),
            query=(("partNumber", str(part_number)), ("uploadId", session.upload_id)),
            body=body,
        )
        outcome = self.executor.execute(request, region).and_then(etag_header)
        if isinstance(outcome, Err):
            return outcome

        session.parts.append(CompletedPart(part_number=part_number, etag=outcome.value))
        session.state = SessionState.UPLOADING_PARTS
        return Ok(None)

    def complete(
        self, session: MultipartSession, *, region: Optional[str] = None
    ) -> Outcome[ETag]:
        """Assemble the uploaded parts into the final object."""
        session._check_active("complete")
        body = encode(CompleteMultipartUploadRequest(parts=session.completion_parts()))
        request = Request(
            "POST",
            object_path(session.bucket, session.key),
            query=(("uploadId", session.upload_id),),
            body=body,
        )
        outcome = self.executor.execute(request, region).and_then(
            lambda response: decode(CompleteMultipartUploadResult, response.body)
        )
        if isinstance(outcome, Err):
            return outcome

        result = outcome.value
        if result.bucket != session.bucket or result.key != session.key:
            return Err(Unknown(-1, "Bucket/key does not match"))

        session.parts = tuple(session.parts)  # type: ignore[assignment]
        session.state = SessionState.COMPLETED
        logger.debug(
            "Multipart upload completed",
            bucket=session.bucket,
            key=session.key,
            parts=len(session.parts),
        )
        return Ok(result.etag)

    def abort(
        self, session: MultipartSession, *, region: Optional[str] = None
    ) -> Outcome[None]:
        """Cancel the upload so the service discards the stored parts."""
        session._check_active("abort")
        request = Request(
            "DELETE",
            object_path(session.bucket, session.key),
            query=(("uploadId", session.upload_id),),
        )
        outcome = self.executor.execute(request, region)
        if isinstance(outcome, Err):
            return outcome

        session.state = SessionState.ABORTED
        return Ok(None)
