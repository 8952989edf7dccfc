"""Tests for wire schemas and etags."""

import pytest
from pydantic import ValidationError

from s3_tools.schemas import (
    DeleteMultiResult,
    DeleteObject,
    ETag,
    ErrorDocument,
    ListEntry,
    StorageClass,
)

DIGEST_HEX = "7538d2bd85ea5dfb689ed65a0f60a7cf"


class TestETag:
    """Test etag wire handling."""

    def test_from_wire_strips_quotes(self):
        """Test the quoted hex form decodes to the digest bytes."""
        etag = ETag.from_wire(f'"{DIGEST_HEX}"')
        assert etag.digest == bytes.fromhex(DIGEST_HEX)
        assert etag.parts is None

    def test_unquoted_value_is_accepted(self):
        """Test a bare hex value decodes the same way."""
        assert ETag.from_wire(DIGEST_HEX) == ETag.from_wire(f'"{DIGEST_HEX}"')

    def test_wire_round_trip(self):
        """Test decoding the encoded form returns the same digest."""
        etag = ETag(digest=bytes.fromhex(DIGEST_HEX))
        assert etag.to_wire() == f'"{DIGEST_HEX}"'
        assert ETag.from_wire(etag.to_wire()) == etag

    def test_multipart_suffix(self):
        """Test the part-count suffix of a multipart etag is kept."""
        etag = ETag.from_wire(f'"{DIGEST_HEX}-3"')
        assert etag.parts == 3
        assert etag.hex() == f"{DIGEST_HEX}-3"
        assert etag.to_wire() == f'"{DIGEST_HEX}-3"'

    def test_invalid_hex(self):
        """Test non-hex content is rejected."""
        with pytest.raises(ValueError):
            ETag.from_wire('"not-hex"')


class TestListEntry:
    """Test listing entry validation."""

    def test_entry_from_wire_names(self):
        """Test an entry validates from XML element names."""
        entry = ListEntry.model_validate(
            {
                "Key": "data/file.txt",
                "Size": "42",
                "LastModified": "2024-01-01T00:00:00.000Z",
                "ETag": f'"{DIGEST_HEX}"',
                "StorageClass": "STANDARD_IA",
            }
        )
        assert entry.key == "data/file.txt"
        assert entry.size == 42
        assert entry.storage_class is StorageClass.STANDARD_IA
        assert entry.etag.digest == bytes.fromhex(DIGEST_HEX)

    def test_unknown_storage_class(self):
        """Test a storage class outside the enum fails validation."""
        with pytest.raises(ValidationError):
            ListEntry.model_validate(
                {
                    "Key": "k",
                    "Size": "1",
                    "LastModified": "2024-01-01T00:00:00.000Z",
                    "ETag": f'"{DIGEST_HEX}"',
                    "StorageClass": "DEEP_FREEZE",
                }
            )

    def test_entries_are_immutable(self):
        """Test decoded entries cannot be modified."""
        entry = ListEntry(
            key="k",
            size=1,
            last_modified="2024-01-01T00:00:00Z",
            etag=ETag(digest=b"\x00"),
            storage_class=StorageClass.STANDARD,
        )
        with pytest.raises(ValidationError):
            entry.key = "other"

    @pytest.mark.parametrize("storage_class", list(StorageClass))
    def test_storage_class_keys(self, storage_class):
        """Test every storage class maps from its wire key."""
        assert StorageClass(storage_class.value) is storage_class


class TestErrorAndDeleteSchemas:
    """Test error document and delete result defaults."""

    def test_error_document_optional_fields(self):
        """Test only the code is required."""
        document = ErrorDocument.model_validate({"Code": "AccessDenied"})
        assert document.code == "AccessDenied"
        assert document.endpoint is None
        assert document.region is None

    def test_delete_marker_defaults_to_false(self):
        """Test an absent delete marker means false."""
        result = DeleteMultiResult.model_validate({})
        assert result.delete_marker is False
        assert result.deleted == ()
        assert result.errors == ()

    def test_empty_delete_marker_is_false(self):
        """Test an empty delete marker element means false."""
        result = DeleteMultiResult.model_validate({"DeleteMarker": None})
        assert result.delete_marker is False

    def test_delete_object_by_field_name(self):
        """Test delete objects can be built with python field names."""
        obj = DeleteObject(key="a", version_id="v1")
        assert obj.model_dump(by_alias=True) == {"Key": "a", "VersionId": "v1"}
