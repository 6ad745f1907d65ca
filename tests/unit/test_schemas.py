"""Tests for API request and response models.

Tests:
    - camelCase serialization of requests
    - omission of unset optional fields
    - tolerant decoding of partial responses
    - rejection of mistyped responses
"""

import doctest

import pytest
from pydantic import ValidationError

import utapi
from utapi import schemas
from utapi.config import ACL, ContentDisposition
from utapi.schemas import (
    DeleteFilesRequest,
    DeleteFilesResponse,
    GetAppInfoResponse,
    ListFilesRequest,
    ListFilesResponse,
    PresignedPostURLs,
    RenameFilesRequest,
    RenameFileUpdate,
    RequestFileAccessRequest,
    RequestFileAccessResponse,
    UploadFileInfo,
    UploadFilesRequest,
    UploadFilesResponse,
    UsageInfoResponse,
)


@pytest.mark.fast
class TestRequestSerialization:
    """Tests for request bodies sent to the API."""

    def test_delete_files_request(self):
        request = DeleteFilesRequest(file_keys=["a", "b"])
        assert request.to_wire() == {"fileKeys": ["a", "b"]}

    def test_list_files_request_defaults(self):
        assert ListFilesRequest().to_wire() == {"limit": 100, "offset": 0}

    def test_list_files_request_passes_values_through(self):
        # Range checks are left to the API.
        assert ListFilesRequest(limit=-1, offset=-5).to_wire() == {"limit": -1, "offset": -5}

    def test_rename_files_request(self):
        request = RenameFilesRequest(
            updates=[RenameFileUpdate(file_key="k1", new_name="new.png")]
        )
        assert request.to_wire() == {"updates": [{"fileKey": "k1", "newName": "new.png"}]}

    def test_request_file_access_omits_expiry(self):
        request = RequestFileAccessRequest(file_key="k1")
        assert request.to_wire() == {"fileKey": "k1"}

    def test_request_file_access_with_expiry(self):
        request = RequestFileAccessRequest(file_key="k1", expires_in=3600)
        assert request.to_wire() == {"fileKey": "k1", "expiresIn": 3600}

    def test_request_file_access_negative_expiry(self):
        request = RequestFileAccessRequest(file_key="k1", expires_in=-5)
        assert request.to_wire() == {"fileKey": "k1", "expiresIn": -5}

    def test_upload_files_request_minimal(self):
        request = UploadFilesRequest(
            files=[UploadFileInfo(name="a.txt", size=3, type="text/plain")],
        )
        assert request.to_wire() == {
            "files": [{"name": "a.txt", "size": 3, "type": "text/plain"}],
            "acl": "public-read",
        }

    def test_upload_files_request_full(self):
        request = UploadFilesRequest(
            files=[UploadFileInfo(name="a.txt", size=3, type="text/plain", custom_id="my-id")],
            acl="private",
            metadata={"owner": "user-1"},
            content_disposition="attachment",
        )
        assert request.acl is ACL.PRIVATE
        assert request.content_disposition is ContentDisposition.ATTACHMENT
        assert request.to_wire() == {
            "files": [{"name": "a.txt", "size": 3, "type": "text/plain", "customId": "my-id"}],
            "acl": "private",
            "metadata": {"owner": "user-1"},
            "contentDisposition": "attachment",
        }

    def test_upload_files_request_invalid_acl(self):
        with pytest.raises(ValidationError):
            UploadFilesRequest(files=[], acl="world-writable")

    def test_upload_file_info_default_type(self):
        info = UploadFileInfo(name="blob", size=0)
        assert info.type == "application/octet-stream"

    def test_models_accept_snake_case_names(self):
        update = RenameFileUpdate(fileKey="k1", newName="n")
        assert update.file_key == "k1"
        assert update.new_name == "n"


@pytest.mark.fast
class TestResponseDecoding:
    """Tests for response bodies received from the API."""

    def test_delete_files_response(self):
        result = DeleteFilesResponse.model_validate_json('{"success": true, "deletedCount": 2}')
        assert result.success is True
        assert result.deleted_count == 2

    def test_list_files_response(self):
        result = ListFilesResponse.model_validate(
            {
                "hasMore": True,
                "files": [
                    {
                        "id": "f1",
                        "customId": None,
                        "key": "k1",
                        "name": "a.png",
                        "status": "Uploaded",
                        "size": 1024,
                        "uploadedAt": 1760000000000,
                    }
                ],
            }
        )
        assert result.has_more is True
        assert len(result.files) == 1
        assert result.files[0].custom_id is None
        assert result.files[0].uploaded_at == 1760000000000

    def test_usage_info_response(self):
        result = UsageInfoResponse.model_validate(
            {"totalBytes": 10, "appTotalBytes": 5, "filesUploaded": 2, "limitBytes": 2147483648}
        )
        assert result.total_bytes == 10
        assert result.app_total_bytes == 5
        assert result.files_uploaded == 2
        assert result.limit_bytes == 2147483648

    def test_request_file_access_response(self):
        result = RequestFileAccessResponse.model_validate(
            {"ufsUrl": "https://app.ufs.sh/f/k1?sig=x", "url": "https://utfs.io/f/k1"}
        )
        assert result.ufs_url == "https://app.ufs.sh/f/k1?sig=x"
        assert result.url == "https://utfs.io/f/k1"

    def test_app_info_acl_aliases(self):
        result = GetAppInfoResponse.model_validate(
            {"appId": "app1", "defaultACL": "private", "allowACLOverride": True}
        )
        assert result.app_id == "app1"
        assert result.default_acl == "private"
        assert result.allow_acl_override is True

    def test_presigned_post_urls(self, presigned_payload):
        result = UploadFilesResponse.model_validate({"data": [presigned_payload]})
        target = result.data[0]
        assert isinstance(target, PresignedPostURLs)
        assert target.file_name == "report.pdf"
        assert target.polling_jwt.startswith("eyJ")
        assert target.polling_url.endswith("/pollUpload/abc123-report.pdf")
        assert target.fields["policy"] == "eyJleHBpcmF0aW9uIjoiMjAyNiJ9"

    def test_missing_fields_decode_to_zero_values(self):
        result = UsageInfoResponse.model_validate_json("{}")
        assert result.total_bytes == 0
        assert result.files_uploaded == 0

        listing = ListFilesResponse.model_validate_json("{}")
        assert listing.has_more is False
        assert listing.files == []

    def test_null_fields_decode_to_zero_values(self):
        result = UploadFilesResponse.model_validate_json(
            '{"data":[{"key":"k","fileUrl":null,"contentDisposition":null,"fields":null}]}'
        )
        target = result.data[0]
        assert target.key == "k"
        assert target.file_url == ""
        assert target.content_disposition == ""
        assert target.fields == {}

        listing = ListFilesResponse.model_validate_json('{"hasMore":false,"files":null}')
        assert listing.files == []

        usage = UsageInfoResponse.model_validate_json('{"totalBytes":null,"filesUploaded":3}')
        assert usage.total_bytes == 0
        assert usage.files_uploaded == 3

    def test_null_body_rejected(self):
        with pytest.raises(ValidationError):
            UsageInfoResponse.model_validate_json("null")

    def test_unknown_fields_ignored(self):
        result = DeleteFilesResponse.model_validate_json(
            '{"success": true, "deletedCount": 1, "extra": "x"}'
        )
        assert result.deleted_count == 1

    def test_type_mismatch_rejected(self):
        with pytest.raises(ValidationError):
            DeleteFilesResponse.model_validate_json('{"deletedCount": "many"}')

    def test_malformed_json_rejected(self):
        with pytest.raises(ValidationError):
            DeleteFilesResponse.model_validate_json("not json")


@pytest.mark.fast
class TestModuleExamples:
    """Docstring examples that run offline must hold."""

    @pytest.mark.parametrize("module", [utapi, schemas])
    def test_examples_pass(self, module):
        result = doctest.testmod(module)
        assert result.failed == 0
