"""HTTP transport and S3 connection configuration."""

from .s3_client import HttpTransport, S3ClientConfig, parse_s3_uri

__all__ = ["HttpTransport", "S3ClientConfig", "parse_s3_uri"]
