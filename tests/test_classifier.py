"""Tests for response classification."""

import pytest
from conftest import REDIRECT_XML

from s3_tools.objectstorage.classifier import Response, classify
from s3_tools.objectstorage.outcome import (
    Err,
    NotFound,
    Ok,
    Redirect,
    Throttled,
    Unknown,
)


def error_xml(code, **fields) -> bytes:
    extra = "".join(f"<{name}>{value}</{name}>" for name, value in fields.items())
    return (
        f"<Error><Code>{code}</Code><Message>m</Message>{extra}"
        "<RequestId>r</RequestId><HostId>h</HostId></Error>"
    ).encode()


class TestSuccess:
    """Test 2xx replies."""

    @pytest.mark.parametrize("status", [200, 204, 206, 299])
    def test_success_passes_headers_and_body(self, status):
        """Test any 2xx status is Ok with the reply unchanged."""
        outcome = classify(status, {"etag": '"00"'}, b"payload")

        assert outcome == Ok(Response(status, {"etag": '"00"'}, b"payload"))


class TestNotFound:
    """Test 404 replies."""

    @pytest.mark.parametrize(
        "body", [b"", b"not xml at all", error_xml("NoSuchKey"), REDIRECT_XML]
    )
    def test_404_is_not_found(self, body):
        """Test 404 is NotFound regardless of body content."""
        assert classify(404, {}, body) == Err(NotFound())


class TestRedirects:
    """Test region redirect detection."""

    def test_permanent_redirect(self):
        """Test a 301 with an endpoint yields the endpoint's region."""
        assert classify(301, {}, REDIRECT_XML) == Err(Redirect("eu-west-1"))

    def test_temporary_redirect_global_endpoint(self):
        """Test the global endpoint host maps to us-east-1."""
        body = error_xml("TemporaryRedirect", Endpoint="bucket.s3.amazonaws.com")
        assert classify(307, {}, body) == Err(Redirect("us-east-1"))

    def test_dotted_regional_endpoint(self):
        """Test a dotted regional endpoint host."""
        body = error_xml(
            "PermanentRedirect", Endpoint="bucket.s3.ap-southeast-2.amazonaws.com"
        )
        assert classify(301, {}, body) == Err(Redirect("ap-southeast-2"))

    @pytest.mark.parametrize(
        "endpoint",
        [
            "s3-backups.s3.eu-west-1.amazonaws.com",
            "logs.s3.archive.s3.eu-west-1.amazonaws.com",
            "s3-backups.s3-eu-west-1.amazonaws.com",
        ],
    )
    def test_bucket_name_with_s3_labels(self, endpoint):
        """Test s3-like labels in the bucket name do not become the region."""
        body = error_xml("PermanentRedirect", Endpoint=endpoint)
        assert classify(301, {}, body) == Err(Redirect("eu-west-1"))

    def test_redirect_without_endpoint(self):
        """Test a redirect code without an endpoint is Unknown."""
        body = error_xml("TemporaryRedirect")
        assert classify(307, {}, body) == Err(Unknown(307, "TemporaryRedirect"))

    def test_authorization_header_malformed(self):
        """Test a region in an AuthorizationHeaderMalformed error redirects."""
        body = error_xml("AuthorizationHeaderMalformed", Region="eu-central-1")
        assert classify(400, {}, body) == Err(Redirect("eu-central-1"))

    def test_authorization_header_malformed_without_region(self):
        """Test AuthorizationHeaderMalformed without a region is Unknown."""
        body = error_xml("AuthorizationHeaderMalformed")
        assert classify(400, {}, body) == Err(
            Unknown(400, "AuthorizationHeaderMalformed")
        )


class TestOtherErrors:
    """Test throttling and unknown errors."""

    @pytest.mark.parametrize("status", [500, 503])
    def test_throttled_with_unparsable_body(self, status):
        """Test 500 and 503 are Throttled even when the body is garbage."""
        assert classify(status, {}, b"<<<garbage") == Err(Throttled())

    def test_client_error_code(self):
        """Test other 4xx errors carry the service code."""
        assert classify(403, {}, error_xml("AccessDenied")) == Err(
            Unknown(403, "AccessDenied")
        )

    def test_client_error_without_document(self):
        """Test a 4xx without an error document has an empty code."""
        assert classify(400, {}, b"") == Err(Unknown(400, ""))

    def test_other_server_error(self):
        """Test other 5xx statuses are Unknown with the decoded code."""
        assert classify(501, {}, error_xml("NotImplemented")) == Err(
            Unknown(501, "NotImplemented")
        )
