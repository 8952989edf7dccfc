"""Tests for region helpers."""

import pytest

from s3_tools.objectstorage.regions import (
    endpoint_for_region,
    region_of_host,
    region_of_string,
)


class TestRegionOfHost:
    """Test region derivation from endpoint hosts."""

    @pytest.mark.parametrize(
        "host, region",
        [
            ("stijntest.s3.amazonaws.com", "us-east-1"),
            ("s3.amazonaws.com", "us-east-1"),
            ("s3-external-1.amazonaws.com", "us-east-1"),
            ("bucket.s3-eu-west-1.amazonaws.com", "eu-west-1"),
            ("bucket.s3.eu-west-1.amazonaws.com", "eu-west-1"),
            ("s3.dualstack.ap-northeast-1.amazonaws.com", "ap-northeast-1"),
            ("Bucket.S3.US-WEST-2.amazonaws.com.", "us-west-2"),
            ("s3-backups.s3.eu-west-1.amazonaws.com", "eu-west-1"),
            ("s3-backups.s3-eu-west-1.amazonaws.com", "eu-west-1"),
            ("logs.s3.archive.s3.eu-west-1.amazonaws.com", "eu-west-1"),
            ("s3-backups.s3.amazonaws.com", "us-east-1"),
            ("bucket.s3.cn-north-1.amazonaws.com.cn", "cn-north-1"),
        ],
    )
    def test_hosts(self, host, region):
        """Test each host form maps to its region."""
        assert region_of_host(host) == region

    def test_unrecognized_host(self):
        """Test a host without an s3 label falls back to us-east-1."""
        assert region_of_host("storage.example.com") == "us-east-1"


class TestRegionOfString:
    """Test region name normalization."""

    @pytest.mark.parametrize(
        "value, region",
        [
            ("eu-central-1", "eu-central-1"),
            (" US-WEST-1 ", "us-west-1"),
            ("", "us-east-1"),
            ("EU", "eu-west-1"),
        ],
    )
    def test_values(self, value, region):
        """Test names are trimmed, lower-cased and aliased."""
        assert region_of_string(value) == region


class TestEndpointForRegion:
    """Test endpoint URLs."""

    def test_default_region_uses_global_endpoint(self):
        assert endpoint_for_region("us-east-1") == "https://s3.amazonaws.com"

    def test_regional_endpoint(self):
        assert endpoint_for_region("eu-west-1") == "https://s3.eu-west-1.amazonaws.com"
