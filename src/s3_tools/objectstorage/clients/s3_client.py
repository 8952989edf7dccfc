"""HTTP transport for S3 commands.

This module provides the default ``Transport`` used by the command executor:
it resolves credentials with boto3, signs each request with SigV4 and sends it
with requests.

Authentication Methods Supported:
    1. AWS CLI profiles (aws_profile)
    2. Explicit credentials (access_key_id, secret_access_key)
    3. Temporary credentials (session_token)
    4. IAM roles / environment variables (no explicit credentials)

S3-Compatible Services:
    Requests are sent path-style (``{endpoint}/{bucket}/{key}``), so custom
    endpoints such as MinIO work via endpoint_url. Without an endpoint_url the
    regional AWS endpoint is used.
"""

from typing import Mapping, Optional, Sequence
from urllib.parse import quote, urlencode, urlparse

import boto3
import requests
from botocore.auth import S3SigV4Auth
from botocore.awsrequest import AWSRequest
from botocore.exceptions import BotoCoreError
from pydantic import BaseModel, ConfigDict, Field

from s3_tools.command_executor import TransportResponse
from s3_tools.core import get_logger, settings
from s3_tools.core.exceptions import TransportError, ValidationError
from s3_tools.objectstorage.models import ObjectRef
from s3_tools.objectstorage.regions import endpoint_for_region

logger = get_logger(__name__)


class S3ClientConfig(BaseModel):
    """Configuration for S3 connections.

    Authentication Priority:
        1. If aws_profile is provided, use profile-based authentication
        2. If explicit credentials are provided, use them
        3. Otherwise, fall back to default AWS credential chain

    Example:
        # AWS profile
        config = S3ClientConfig(aws_profile="my-profile")

        # MinIO endpoint
        config = S3ClientConfig(
            endpoint_url="http://localhost:9000",
            access_key_id="minioadmin",
            secret_access_key="minioadmin"
        )
    """

    model_config = ConfigDict(extra="forbid")

    access_key_id: Optional[str] = Field(None, description="AWS access key ID")
    secret_access_key: Optional[str] = Field(None, description="AWS secret access key")
    session_token: Optional[str] = Field(
        None, description="AWS session token for temporary credentials"
    )
    region_name: str = Field(
        default_factory=lambda: settings.default_region, description="AWS region name"
    )
    endpoint_url: Optional[str] = Field(
        None, description="Custom S3 endpoint URL for S3-compatible services"
    )
    aws_profile: Optional[str] = Field(
        None, description="AWS CLI profile name to use for credentials"
    )
    timeout: Optional[float] = Field(
        None, description="Per-request timeout in seconds passed to requests"
    )


class HttpTransport:
    """Sends signed S3 requests over HTTP."""

    def __init__(self, config: S3ClientConfig, session: Optional[requests.Session] = None):
        self.config = config
        self._http = session or requests.Session()
        self._credentials = None
        logger.info("S3 transport initialized", region=config.region_name)

    @property
    def credentials(self):
        """Resolve credentials once, on first use."""
        if self._credentials is None:
            self._credentials = self._resolve_credentials()
        return self._credentials

    def _resolve_credentials(self):
        try:
            if self.config.aws_profile:
                session = boto3.Session(profile_name=self.config.aws_profile)
                logger.info(
                    "S3 credentials from profile", profile=self.config.aws_profile
                )
            elif self.config.access_key_id and self.config.secret_access_key:
                session = boto3.Session(
                    aws_access_key_id=self.config.access_key_id,
                    aws_secret_access_key=self.config.secret_access_key,
                    aws_session_token=self.config.session_token,
                )
                logger.info("S3 credentials from explicit keys")
            else:
                session = boto3.Session()
                logger.info("S3 credentials from default credential chain")
            credentials = session.get_credentials()
        except BotoCoreError as e:
            raise TransportError(f"Failed to resolve AWS credentials: {e}")

        if credentials is None:
            raise TransportError("No AWS credentials available")
        return credentials.get_frozen_credentials()

    def url_for(
        self, path: str, query: Sequence[tuple[str, str]], region: str
    ) -> str:
        endpoint = self.config.endpoint_url or endpoint_for_region(region)
        url = f"{endpoint.rstrip('/')}/{quote(path, safe='/~')}"
        if query:
            url += "?" + urlencode(list(query), quote_via=quote)
        return url

    def send_request(
        self,
        method: str,
        path: str,
        query: Sequence[tuple[str, str]],
        headers: Mapping[str, str],
        body: Optional[bytes],
        region: Optional[str] = None,
    ) -> TransportResponse:
        region = region or self.config.region_name
        url = self.url_for(path, query, region)

        aws_request = AWSRequest(
            method=method, url=url, data=body or b"", headers=dict(headers)
        )
        S3SigV4Auth(self.credentials, "s3", region).add_auth(aws_request)

        logger.debug("Sending S3 request", method=method, url=url)
        try:
            response = self._http.request(
                method,
                url,
                headers=dict(aws_request.headers.items()),
                data=body,
                timeout=self.config.timeout,
            )
        except requests.RequestException as e:
            raise TransportError(f"{method} {url} failed: {e}")

        return TransportResponse(
            status=response.status_code,
            headers=dict(response.headers),
            body=response.content,
        )


def parse_s3_uri(s3_uri: str) -> ObjectRef:
    """Parse ``s3://bucket/key`` into an ObjectRef.

    Raises:
        ValidationError: If the URI is not an s3:// URI with a bucket
    """
    if not s3_uri.startswith("s3://"):
        raise ValidationError(f"S3 path must start with 's3://': {s3_uri}")

    parsed = urlparse(s3_uri)
    if not parsed.netloc:
        raise ValidationError(f"Invalid S3 path, missing bucket: {s3_uri}")

    ref = ObjectRef(bucket=parsed.netloc, key=parsed.path.lstrip("/"))
    logger.debug("S3 path parsed", bucket=ref.bucket, key=ref.key)
    return ref
