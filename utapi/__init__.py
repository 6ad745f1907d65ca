"""Python client for the UploadThing file-storage API.

Examples:
    Reads UPLOADTHING_SECRET from the environment or a .env file:

        from utapi import UTApi

        with UTApi.from_settings() as api:
            print(api.get_usage_info().files_uploaded)
"""

__version__ = "0.1.0"

from utapi.client import UTApi
from utapi.config import ACL, ContentDisposition, Settings, get_settings
from utapi.errors import (
    APIError,
    ConfigurationError,
    ResponseDecodeError,
    TransportError,
    UploadError,
    UploadThingError,
)
from utapi.schemas import (
    DeleteFilesResponse,
    GetAppInfoResponse,
    ListFilesFile,
    ListFilesResponse,
    PresignedPostURLs,
    RenameFilesResponse,
    RenameFileUpdate,
    UploadFileInfo,
    UploadFilesResponse,
    UsageInfoResponse,
)
from utapi.upload import upload_content_to_presigned_url, upload_file_to_presigned_url

__all__ = [
    "ACL",
    "APIError",
    "ConfigurationError",
    "ContentDisposition",
    "DeleteFilesResponse",
    "GetAppInfoResponse",
    "ListFilesFile",
    "ListFilesResponse",
    "PresignedPostURLs",
    "RenameFileUpdate",
    "RenameFilesResponse",
    "ResponseDecodeError",
    "Settings",
    "TransportError",
    "UTApi",
    "UploadError",
    "UploadFileInfo",
    "UploadFilesResponse",
    "UploadThingError",
    "UsageInfoResponse",
    "get_settings",
    "upload_content_to_presigned_url",
    "upload_file_to_presigned_url",
]
