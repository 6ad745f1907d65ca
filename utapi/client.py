"""UploadThing REST API client.

Each method serializes a small request model to JSON, POSTs it with the
UploadThing authentication headers, checks for a 2xx status and decodes the
body into the matching response model. Failures are raised, never retried.

UploadThing API docs: https://docs.uploadthing.com/api-reference/openapi-spec

Examples:
    >>> from utapi import UTApi
    >>> with UTApi.from_settings() as api:
    ...     page = api.list_files(limit=10)
    ...     api.delete_files([f.key for f in page.files])

Tests:
    - tests/unit/test_client.py
"""

import logging
import mimetypes
import os
from collections.abc import Iterable, Sequence
from pathlib import Path
from typing import Any, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from utapi.config import (
    ACL,
    DEFAULT_API_URL,
    DEFAULT_BE_ADAPTER,
    DEFAULT_TIMEOUT,
    DEFAULT_VERSION,
    ContentDisposition,
    Settings,
    get_settings,
)
from utapi.errors import APIError, ResponseDecodeError, TransportError
from utapi.schemas import (
    DeleteFilesRequest,
    DeleteFilesResponse,
    GetAppInfoResponse,
    ListFilesRequest,
    ListFilesResponse,
    PresignedPostURLs,
    RenameFilesRequest,
    RenameFilesResponse,
    RenameFileUpdate,
    RequestFileAccessRequest,
    RequestFileAccessResponse,
    UploadFileInfo,
    UploadFilesRequest,
    UploadFilesResponse,
    UsageInfoResponse,
)
from utapi.upload import upload_file_to_presigned_url

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)

# API routes
DELETE_FILES_PATH = "/v6/deleteFiles"
LIST_FILES_PATH = "/v6/listFiles"
RENAME_FILES_PATH = "/v6/renameFiles"
USAGE_INFO_PATH = "/v6/getUsageInfo"
REQUEST_FILE_ACCESS_PATH = "/v6/requestFileAccess"
APP_INFO_PATH = "/v7/getAppInfo"
UPLOAD_FILES_PATH = "/v6/uploadFiles"


class UTApi:
    """Synchronous client for the UploadThing server API.

    Attributes:
        api_key: UploadThing secret, sent as x-uploadthing-api-key
        base_url: API host
        version: Protocol version, sent as x-uploadthing-version
        fe_package: Optional x-uploadthing-fe-package header value
        be_adapter: Optional x-uploadthing-be-adapter header value
        timeout: Request timeout in seconds

    The underlying httpx client is created on first use. Pass ``transport``
    to route requests through a custom httpx transport (tests use
    httpx.MockTransport).
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = DEFAULT_API_URL,
        version: str = DEFAULT_VERSION,
        fe_package: str = "",
        be_adapter: str = DEFAULT_BE_ADAPTER,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.version = version
        self.fe_package = fe_package
        self.be_adapter = be_adapter
        self.timeout = timeout
        self._transport = transport
        self._client: httpx.Client | None = None

    @classmethod
    def from_settings(
        cls,
        settings: Settings | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> "UTApi":
        """Create a client from configuration.

        Args:
            settings: Settings to use (defaults to get_settings()).
            transport: Optional httpx transport.

        Raises:
            ConfigurationError: If UPLOADTHING_SECRET is not configured.
        """
        settings = settings or get_settings()
        return cls(
            api_key=settings.UPLOADTHING_SECRET,
            base_url=settings.UPLOADTHING_API_URL,
            version=settings.UPLOADTHING_VERSION,
            fe_package=settings.UPLOADTHING_FE_PACKAGE,
            be_adapter=settings.UPLOADTHING_BE_ADAPTER,
            timeout=settings.UPLOADTHING_TIMEOUT,
            transport=transport,
        )

    @property
    def headers(self) -> dict[str, str]:
        """Headers attached to every API request."""
        headers = {
            "Content-Type": "application/json",
            "x-uploadthing-api-key": self.api_key,
            "x-uploadthing-version": self.version,
        }
        if self.fe_package:
            headers["x-uploadthing-fe-package"] = self.fe_package
        if self.be_adapter:
            headers["x-uploadthing-be-adapter"] = self.be_adapter
        return headers

    @property
    def client(self) -> httpx.Client:
        """Get httpx client (lazy initialization)."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.Client(
                base_url=self.base_url,
                timeout=self.timeout,
                headers=self.headers,
                transport=self._transport,
            )
        return self._client

    def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None and not self._client.is_closed:
            self._client.close()
            self._client = None

    def __enter__(self) -> "UTApi":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"UTApi(base_url={self.base_url!r}, version={self.version!r})"

    def _post(self, path: str, payload: BaseModel | None = None) -> httpx.Response:
        """POST a JSON body and return the 2xx response.

        Raises:
            TransportError: If the request cannot be completed.
            APIError: If the API answers with a non-2xx status.
        """
        body = payload.to_wire() if payload is not None else {}

        logger.info(f"[UTAPI] POST {path}")
        try:
            response = self.client.post(path, json=body)
        except httpx.HTTPError as e:
            logger.error(f"[UTAPI] HTTP error on {path}: {e}")
            raise TransportError(str(e)) from e

        if not response.is_success:
            logger.error(f"[UTAPI] {path} failed with status {response.status_code}")
            raise APIError(response.status_code, response.text)

        return response

    def _decode(self, response: httpx.Response, response_model: type[T]) -> T:
        """Decode a response body into ``response_model``.

        Raises:
            ResponseDecodeError: If the body is not valid JSON for the model.
        """
        try:
            return response_model.model_validate_json(response.content)
        except ValidationError as e:
            logger.error(
                f"[UTAPI] Could not decode {response.request.url.path} "
                f"response as {response_model.__name__}"
            )
            raise ResponseDecodeError(
                f"Invalid {response_model.__name__} response: {e}",
                status_code=response.status_code,
                body=response.text,
            ) from e

    def delete_files(self, file_keys: Sequence[str]) -> DeleteFilesResponse:
        """Delete files by key.

        Args:
            file_keys: Keys of the files to delete.

        Returns:
            DeleteFilesResponse with the number of deleted files.
        """
        payload = DeleteFilesRequest(file_keys=list(file_keys))
        response = self._post(DELETE_FILES_PATH, payload)
        return self._decode(response, DeleteFilesResponse)

    def list_files(self, limit: int = 100, offset: int = 0) -> ListFilesResponse:
        """List stored files, one page at a time.

        Args:
            limit: Maximum number of files to return.
            offset: Number of files to skip.

        Returns:
            ListFilesResponse; ``has_more`` is set when another page exists.
        """
        payload = ListFilesRequest(limit=limit, offset=offset)
        response = self._post(LIST_FILES_PATH, payload)
        return self._decode(response, ListFilesResponse)

    def rename_files(
        self, updates: Iterable[RenameFileUpdate | tuple[str, str]]
    ) -> RenameFilesResponse:
        """Rename files.

        Args:
            updates: RenameFileUpdate models or (file_key, new_name) pairs.

        Returns:
            RenameFilesResponse with the number of renamed files.
        """
        payload = RenameFilesRequest(
            updates=[
                u if isinstance(u, RenameFileUpdate) else RenameFileUpdate(file_key=u[0], new_name=u[1])
                for u in updates
            ]
        )
        response = self._post(RENAME_FILES_PATH, payload)
        return self._decode(response, RenameFilesResponse)

    def get_usage_info(self) -> UsageInfoResponse:
        """Get storage usage for the app and account."""
        response = self._post(USAGE_INFO_PATH)
        return self._decode(response, UsageInfoResponse)

    def get_presigned_url(self, file_key: str, expires_in: int | None = None) -> str:
        """Get a time-limited URL for a private file.

        Args:
            file_key: Key of the file.
            expires_in: Lifetime in seconds. None or 0 uses the app default.

        Returns:
            The signed ufs URL.
        """
        payload = RequestFileAccessRequest(file_key=file_key, expires_in=expires_in or None)
        response = self._post(REQUEST_FILE_ACCESS_PATH, payload)
        result = self._decode(response, RequestFileAccessResponse)
        return result.ufs_url

    def get_app_info(self) -> GetAppInfoResponse:
        """Get app id and access-control defaults."""
        response = self._post(APP_INFO_PATH)
        return self._decode(response, GetAppInfoResponse)

    def get_presigned_upload_url(
        self,
        files: Sequence[UploadFileInfo],
        acl: ACL | str = ACL.PUBLIC_READ,
        metadata: Any = None,
        content_disposition: ContentDisposition | str | None = None,
    ) -> UploadFilesResponse:
        """Request presigned POST targets for uploading files directly.

        Args:
            files: Name, size and type of each file to upload.
            acl: "public-read" or "private".
            metadata: Optional JSON-serializable metadata stored with the files.
            content_disposition: Optional "inline" or "attachment".

        Returns:
            UploadFilesResponse with one PresignedPostURLs per file, in order.
        """
        payload = UploadFilesRequest(
            files=list(files),
            acl=acl,
            metadata=metadata,
            content_disposition=content_disposition,
        )
        response = self._post(UPLOAD_FILES_PATH, payload)
        return self._decode(response, UploadFilesResponse)

    def upload_files(
        self,
        paths: Sequence[str | os.PathLike],
        acl: ACL | str = ACL.PUBLIC_READ,
        metadata: Any = None,
        content_disposition: ContentDisposition | str | None = None,
    ) -> list[PresignedPostURLs]:
        """Upload local files: request presigned targets, then post each file.

        Args:
            paths: Local files to upload.
            acl: "public-read" or "private".
            metadata: Optional JSON-serializable metadata stored with the files.
            content_disposition: Optional "inline" or "attachment".

        Returns:
            The presigned targets used, one per path, in order.

        Raises:
            UploadThingError: If the provider returns a different number of
                targets than files requested, or any request fails.
        """
        paths = [Path(p) for p in paths]
        files = [
            UploadFileInfo(
                name=p.name,
                size=p.stat().st_size,
                type=mimetypes.guess_type(p.name)[0] or "application/octet-stream",
            )
            for p in paths
        ]

        presigned = self.get_presigned_upload_url(
            files,
            acl=acl,
            metadata=metadata,
            content_disposition=content_disposition,
        ).data

        if len(presigned) != len(paths):
            raise ResponseDecodeError(
                f"Expected {len(paths)} presigned uploads, got {len(presigned)}"
            )

        # A separate client: presigned targets must not receive the API key.
        with httpx.Client(timeout=self.timeout, transport=self._transport) as upload_client:
            for path, target in zip(paths, presigned):
                upload_file_to_presigned_url(path, target, http_client=upload_client)

        return presigned
