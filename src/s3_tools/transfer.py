"""Copy, remove and list commands on top of the object operations.

This is the orchestration layer above single commands: it retries failed
commands, follows region redirects and moves data between S3 and local files.
"""

import time
from pathlib import Path
from typing import Callable, Iterator, Optional, Sequence, TypeVar

from s3_tools.core import get_logger, settings
from s3_tools.core.exceptions import CommandExecutionError, ValidationError
from s3_tools.objectstorage.clients import parse_s3_uri
from s3_tools.objectstorage.models import ByteRange, More
from s3_tools.objectstorage.operations import ObjectOperations
from s3_tools.objectstorage.outcome import (
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
from s3_tools.schemas import DeleteObject, ListEntry

logger = get_logger(__name__)

T = TypeVar("T")


def describe_error(error: ErrorKind) -> str:
    """Human readable form of an error kind."""
    if isinstance(error, Redirect):
        return f"Redirect: {error.region}"
    if isinstance(error, Throttled):
        return "Throttled"
    if isinstance(error, NotFound):
        return "Not found"
    if isinstance(error, Unknown):
        return f"Unknown: {error.status}, {error.code}"
    if isinstance(error, Exn):
        return f"Exn: {error.error}"
    if isinstance(error, TransportFailure):
        return f"Transport: {error.error}"
    raise TypeError(f"Not an error kind: {error!r}")


def retry(
    fn: Callable[[Optional[str]], Outcome[T]],
    retries: Optional[int] = None,
    delay: Optional[float] = None,
    region: Optional[str] = None,
) -> Outcome[T]:
    """Call ``fn(region)`` until it succeeds or retries run out.

    A redirect to a region not visited yet is followed at once and does not
    use up a retry. A redirect to a visited region is still followed, but
    like every other error it waits ``delay`` seconds and uses up a retry.
    """
    retries = settings.retries if retries is None else retries
    delay = settings.retry_delay if delay is None else delay
    visited = {region}

    while True:
        outcome = fn(region)
        if isinstance(outcome, Ok):
            return outcome

        error = outcome.error
        if isinstance(error, Redirect):
            first_visit = error.region not in visited
            visited.add(error.region)
            region = error.region
            if first_visit:
                logger.info("Following region redirect", region=error.region)
                continue

        if retries <= 0:
            return outcome

        logger.warning(
            "Command failed, retrying",
            error=describe_error(error),
            retries_left=retries,
        )
        retries -= 1
        time.sleep(delay)


def read_file(path: str, first: Optional[int] = None, last: Optional[int] = None) -> bytes:
    """Read a local file, or the inclusive byte range ``first..last`` of it."""
    data = Path(path).read_bytes()
    if first is None and last is None:
        return data
    first = 0 if first is None else first
    last = len(data) - 1 if last is None else last
    return data[first : last + 1]


def save_file(path: str, data: bytes) -> None:
    Path(path).write_bytes(data)


def copy(
    ops: ObjectOperations,
    src: str,
    dst: str,
    first: Optional[int] = None,
    last: Optional[int] = None,
    retries: Optional[int] = None,
) -> Outcome[None]:
    """Copy between S3 and the local filesystem.

    Raises:
        ValidationError: If both or neither of src and dst are s3:// URIs
    """
    src_is_s3 = src.startswith("s3://")
    dst_is_s3 = dst.startswith("s3://")

    if src_is_s3 and dst_is_s3:
        raise ValidationError("Copying from S3 to S3 is not supported")
    if not src_is_s3 and not dst_is_s3:
        raise ValidationError("Neither path is an s3:// URI; use cp(1)")

    if src_is_s3:
        ref = parse_s3_uri(src)
        byte_range = ByteRange(first=first, last=last)
        logger.info("Downloading object", bucket=ref.bucket, key=ref.key, dst=dst)
        outcome = retry(
            lambda region: ops.get(ref.bucket, ref.key, byte_range, region=region),
            retries=retries,
        )
        if isinstance(outcome, Err):
            return outcome
        save_file(dst, outcome.value)
        return Ok(None)

    ref = parse_s3_uri(dst)
    data = read_file(src, first, last)
    logger.info("Uploading object", bucket=ref.bucket, key=ref.key, size=len(data))
    outcome = retry(
        lambda region: ops.put(ref.bucket, ref.key, data, region=region),
        retries=retries,
    )
    return outcome.and_then(lambda _: Ok(None))


def remove(
    ops: ObjectOperations,
    bucket: str,
    keys: Sequence[str],
    retries: Optional[int] = None,
) -> Outcome[None]:
    """Delete one key with DELETE, several with a multi-object delete.

    Keys the service failed to delete are logged; the outcome stays ``Ok``.
    """
    if len(keys) == 1:
        return retry(
            lambda region: ops.delete(bucket, keys[0], region=region), retries=retries
        )

    objects = [DeleteObject(key=key) for key in keys]
    outcome = retry(
        lambda region: ops.delete_multi(bucket, objects, region=region),
        retries=retries,
    )
    if isinstance(outcome, Err):
        return outcome

    for failure in outcome.value.errors:
        logger.warning(
            "Object not deleted",
            bucket=bucket,
            key=failure.key,
            code=failure.code,
            message=failure.message,
        )
    return Ok(None)


def list_all(
    ops: ObjectOperations,
    bucket: str,
    prefix: Optional[str] = None,
    ratelimit: Optional[int] = None,
    retries: Optional[int] = None,
) -> Iterator[ListEntry]:
    """Yield every entry under ``prefix``, following continuation tokens.

    ``ratelimit`` caps the number of page requests per second.

    Raises:
        CommandExecutionError: If a page cannot be listed after retries
    """
    token: Optional[str] = None

    while True:
        outcome = retry(
            lambda r: ops.list(bucket, prefix=prefix, continuation_token=token, region=r),
            retries=retries,
        )
        if isinstance(outcome, Err):
            raise CommandExecutionError(
                f"Failed to list s3://{bucket}/{prefix or ''}: "
                f"{describe_error(outcome.error)}"
            )

        page = outcome.value
        yield from page.entries

        if not isinstance(page.continuation, More):
            return
        token = page.continuation.token
        if ratelimit:
            time.sleep(1.0 / ratelimit)
