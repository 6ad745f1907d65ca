"""Request and response models for the UploadThing API.

Field names are snake_case in Python and camelCase on the wire. Response
fields default to zero values so that a partial body still decodes; a
malformed body or a type mismatch raises a ValidationError.

Examples:
    >>> from utapi.schemas import DeleteFilesRequest
    >>> DeleteFilesRequest(file_keys=["abc"]).model_dump(by_alias=True)
    {'fileKeys': ['abc']}

Tests:
    - tests/unit/test_schemas.py
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from utapi.config import ACL, ContentDisposition

__all__ = [
    "DeleteFilesRequest",
    "DeleteFilesResponse",
    "GetAppInfoResponse",
    "ListFilesFile",
    "ListFilesRequest",
    "ListFilesResponse",
    "PresignedPostURLs",
    "RenameFileUpdate",
    "RenameFilesRequest",
    "RenameFilesResponse",
    "RequestFileAccessRequest",
    "RequestFileAccessResponse",
    "UploadFileInfo",
    "UploadFilesRequest",
    "UploadFilesResponse",
    "UsageInfoResponse",
]


class WireModel(BaseModel):
    """Base model mapping snake_case attributes to camelCase JSON keys."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )

    def to_wire(self) -> dict[str, Any]:
        """Serialize for a request body, dropping unset optional fields."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class ResponseModel(WireModel):
    """Base model for response bodies.

    A JSON null decodes to the field default, as an absent key does.
    """

    @model_validator(mode="before")
    @classmethod
    def drop_nulls(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return {k: v for k, v in data.items() if v is not None}
        return data


# Delete files


class DeleteFilesRequest(WireModel):
    file_keys: list[str]


class DeleteFilesResponse(ResponseModel):
    success: bool = False
    deleted_count: int = 0


# List files


class ListFilesRequest(WireModel):
    limit: int = 100
    offset: int = 0


class ListFilesFile(ResponseModel):
    """A stored file as reported by listFiles.

    Attributes:
        id: Provider file id
        custom_id: Caller-supplied id, if one was set on upload
        key: File key used by every other endpoint
        name: File name
        status: Upload status (e.g. "Uploaded")
        size: Size in bytes
        uploaded_at: Upload time, epoch milliseconds
    """

    id: str = ""
    custom_id: str | None = None
    key: str = ""
    name: str = ""
    status: str = ""
    size: int = 0
    uploaded_at: int = 0


class ListFilesResponse(ResponseModel):
    has_more: bool = False
    files: list[ListFilesFile] = Field(default_factory=list)


# Rename files


class RenameFileUpdate(WireModel):
    file_key: str
    new_name: str


class RenameFilesRequest(WireModel):
    updates: list[RenameFileUpdate]


class RenameFilesResponse(ResponseModel):
    success: bool = False
    renamed_count: int = 0


# Usage info


class UsageInfoResponse(ResponseModel):
    """Storage usage counters for the app and account."""

    total_bytes: int = 0
    app_total_bytes: int = 0
    files_uploaded: int = 0
    limit_bytes: int = 0


# File access


class RequestFileAccessRequest(WireModel):
    file_key: str
    expires_in: int | None = None


class RequestFileAccessResponse(ResponseModel):
    ufs_url: str = ""
    # Deprecated by the provider in favour of ufs_url.
    url: str = ""


# App info


class GetAppInfoResponse(ResponseModel):
    app_id: str = ""
    default_acl: str = Field(default="", alias="defaultACL")
    allow_acl_override: bool = Field(default=False, alias="allowACLOverride")


# Uploads


class UploadFileInfo(WireModel):
    """Description of a file to be uploaded.

    Attributes:
        name: File name as stored by UploadThing
        size: Size in bytes
        type: MIME type
        custom_id: Optional caller-supplied id
    """

    name: str
    size: int = Field(ge=0)
    type: str = "application/octet-stream"
    custom_id: str | None = None


class UploadFilesRequest(WireModel):
    files: list[UploadFileInfo]
    acl: ACL = ACL.PUBLIC_READ
    metadata: Any = None
    content_disposition: ContentDisposition | None = None


class PresignedPostURLs(ResponseModel):
    """A presigned POST target for one file.

    ``url`` and ``fields`` form an S3-compatible POST policy; the file is
    uploaded there with upload.upload_file_to_presigned_url. ``polling_url``
    and ``polling_jwt`` let a caller poll for upload completion.
    """

    key: str = ""
    file_name: str = ""
    file_type: str = ""
    file_url: str = ""
    content_disposition: str = ""
    polling_jwt: str = ""
    polling_url: str = ""
    custom_id: str | None = None
    url: str = ""
    fields: dict[str, str] = Field(default_factory=dict)


class UploadFilesResponse(ResponseModel):
    data: list[PresignedPostURLs] = Field(default_factory=list)
