"""Object operations built on the command executor.

Each method builds a ``Request``, runs it once, and decodes the reply. Every
failure is returned as an ``Err`` value; nothing here retries or follows
redirects.
"""

from typing import Optional, Sequence

from s3_tools.command_executor import CommandExecutor, Request
from s3_tools.core import get_logger
from s3_tools.core.exceptions import ProtocolViolationError
from s3_tools.schemas import (
    DeleteMultiRequest,
    DeleteMultiResult,
    DeleteObject,
    ETag,
    ListBucketResult,
)

from .classifier import Response
from .codec import content_md5, decode, encode
from .models import ByteRange, Done, ListPage, More
from .outcome import Err, Exn, Ok, Outcome

logger = get_logger(__name__)


def object_path(bucket: str, key: str) -> str:
    return f"{bucket}/{key}"


def optional_headers(**headers: Optional[str]) -> dict[str, str]:
    """Drop headers whose value is None."""
    return {name: value for name, value in headers.items() if value is not None}


def etag_header(response: Response) -> Outcome[ETag]:
    """Read the mandatory ``etag`` header of a PUT reply."""
    value = response.headers.get("etag")
    if value is None:
        return Err(
            Exn(ProtocolViolationError("Put reply did not contain an etag header"))
        )
    try:
        return Ok(ETag.from_wire(value))
    except ValueError as e:
        return Err(Exn(e))


class ObjectOperations:
    """Put, get, delete and list objects in S3 buckets."""

    def __init__(self, executor: CommandExecutor):
        self.executor = executor

    def put(
        self,
        bucket: str,
        key: str,
        body: bytes,
        content_type: Optional[str] = None,
        content_encoding: Optional[str] = None,
        acl: Optional[str] = None,
        cache_control: Optional[str] = None,
        *,
        region: Optional[str] = None,
    ) -> Outcome[ETag]:
        """Store ``body`` under ``bucket/key`` and return its etag."""
        headers = optional_headers(
            **{
                "Content-Type": content_type,
                "Content-Encoding": content_encoding,
                "Cache-Control": cache_control,
                "x-amz-acl": acl,
            }
        )
        request = Request("PUT", object_path(bucket, key), headers=headers, body=body)
        return self.executor.execute(request, region).and_then(etag_header)

    def get(
        self,
        bucket: str,
        key: str,
        range: Optional[ByteRange] = None,
        *,
        region: Optional[str] = None,
    ) -> Outcome[bytes]:
        """Fetch an object, or the part of it selected by ``range``."""
        headers = {}
        if range is not None:
            value = range.header_value()
            if value is not None:
                headers["Range"] = value
        request = Request("GET", object_path(bucket, key), headers=headers)
        return self.executor.execute(request, region).and_then(
            lambda response: Ok(response.body)
        )

    def delete(
        self, bucket: str, key: str, *, region: Optional[str] = None
    ) -> Outcome[None]:
        request = Request("DELETE", object_path(bucket, key))
        return self.executor.execute(request, region).and_then(lambda _: Ok(None))

    def delete_multi(
        self,
        bucket: str,
        objects: Sequence[DeleteObject],
        quiet: bool = False,
        *,
        region: Optional[str] = None,
    ) -> Outcome[DeleteMultiResult]:
        """Delete several objects with one request.

        An empty ``objects`` returns an empty result without contacting the
        service. Per-object failures are reported in ``result.errors``; the
        outcome is still ``Ok``.
        """
        if not objects:
            return Ok(DeleteMultiResult())

        body = encode(DeleteMultiRequest(quiet=quiet, objects=tuple(objects)))
        request = Request(
            "POST",
            bucket,
            query=(("delete", ""),),
            headers={"Content-MD5": content_md5(body)},
            body=body,
        )
        outcome = self.executor.execute(request, region).and_then(
            lambda response: decode(DeleteMultiResult, response.body)
        )
        if isinstance(outcome, Ok) and outcome.value.errors:
            logger.debug(
                "Multi-object delete partially failed",
                bucket=bucket,
                failed=len(outcome.value.errors),
            )
        return outcome

    def list(
        self,
        bucket: str,
        prefix: Optional[str] = None,
        continuation_token: Optional[str] = None,
        *,
        region: Optional[str] = None,
    ) -> Outcome[ListPage]:
        """List one page of objects.

        When the page is ``More(token)``, call again with
        ``continuation_token=token`` and the same bucket and prefix.
        """
        query = [("list-type", "2")]
        if continuation_token is not None:
            query.append(("continuation-token", continuation_token))
        if prefix is not None:
            query.append(("prefix", prefix))

        request = Request("GET", bucket, query=tuple(query))
        return (
            self.executor.execute(request, region)
            .and_then(lambda response: decode(ListBucketResult, response.body))
            .and_then(lambda result: Ok(_page_of(result)))
        )


def _page_of(result: ListBucketResult) -> ListPage:
    if result.next_continuation_token:
        continuation = More(result.next_continuation_token)
    else:
        continuation = Done()
    return ListPage(entries=result.contents, continuation=continuation)
