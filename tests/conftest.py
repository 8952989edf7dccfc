"""Test configuration and fixtures for s3-tools."""

from dataclasses import dataclass
from typing import Optional

import pytest

from s3_tools.command_executor import CommandExecutor, TransportResponse
from s3_tools.objectstorage.multipart import MultipartUploads
from s3_tools.objectstorage.operations import ObjectOperations

LISTING_XML = b"""<?xml version="1.0" encoding="UTF-8"?>
<ListBucketResult xmlns="http://s3.amazonaws.com/doc/2006-03-01/">
  <Name>s3_osd</Name>
  <Prefix></Prefix>
  <KeyCount>2</KeyCount>
  <MaxKeys>1000</MaxKeys>
  <IsTruncated>false</IsTruncated>
  <Contents>
    <StorageClass>STANDARD</StorageClass>
    <Key>test</Key>
    <LastModified>2018-02-27T13:39:35.000Z</LastModified>
    <ETag>&quot;7538d2bd85ea5dfb689ed65a0f60a7cf&quot;</ETag>
    <Size>20</Size>
  </Contents>
  <Contents>
    <StorageClass>GLACIER</StorageClass>
    <Key>test2</Key>
    <LastModified>2018-02-28T10:00:00.000Z</LastModified>
    <ETag>&quot;0cc175b9c0f1b6a831c399e269772661&quot;</ETag>
    <Size>1</Size>
    <Owner><ID>ignored</ID></Owner>
  </Contents>
</ListBucketResult>
"""

REDIRECT_XML = b"""<Error>
  <Code>PermanentRedirect</Code>
  <Message>The bucket you are attempting to access must be addressed using the specified endpoint.</Message>
  <Bucket>stijntest</Bucket>
  <Endpoint>stijntest.s3-eu-west-1.amazonaws.com</Endpoint>
  <RequestId>9E23E3919C24476C</RequestId>
  <HostId>zdRmjNUli+pR+gwwhfGt2/s7VVerHquAPqgi9KpZ9OVsYhfF+9uAkkRJtxPcLCJKk2ZjzV1MTv8=</HostId>
</Error>
"""


def listing_page(keys, next_token: Optional[str] = None) -> bytes:
    """Build a listing document with one STANDARD entry per key."""
    contents = "".join(
        f"<Contents><Key>{key}</Key><Size>1</Size>"
        "<LastModified>2024-01-01T00:00:00.000Z</LastModified>"
        "<ETag>&quot;0cc175b9c0f1b6a831c399e269772661&quot;</ETag>"
        "<StorageClass>STANDARD</StorageClass></Contents>"
        for key in keys
    )
    token = (
        f"<NextContinuationToken>{next_token}</NextContinuationToken>"
        if next_token
        else ""
    )
    truncated = "true" if next_token else "false"
    return (
        "<ListBucketResult><Name>test-bucket</Name>"
        f"<KeyCount>{len(keys)}</KeyCount><MaxKeys>1000</MaxKeys>"
        f"<IsTruncated>{truncated}</IsTruncated>{token}{contents}"
        "</ListBucketResult>"
    ).encode()


@dataclass
class SentRequest:
    method: str
    path: str
    query: tuple
    headers: dict
    body: Optional[bytes]
    region: Optional[str]


class FakeTransport:
    """Transport that records requests and plays back queued replies."""

    def __init__(self):
        self.replies = []
        self.requests = []

    def reply(self, status=200, headers=None, body=b""):
        self.replies.append(TransportResponse(status, headers or {}, body))
        return self

    def fail(self, error: Exception):
        self.replies.append(error)
        return self

    def send_request(self, method, path, query, headers, body, region=None):
        self.requests.append(
            SentRequest(method, path, tuple(query), dict(headers), body, region)
        )
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return reply


@pytest.fixture
def transport():
    """A fake transport with no queued replies."""
    return FakeTransport()


@pytest.fixture
def executor(transport):
    return CommandExecutor(transport)


@pytest.fixture
def ops(executor):
    return ObjectOperations(executor)


@pytest.fixture
def uploads(executor):
    return MultipartUploads(executor)
