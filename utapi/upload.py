"""Direct uploads to presigned URLs.

The provider hands out S3-compatible POST policies (see
UTApi.get_presigned_upload_url). These functions send a file to such a
policy as multipart/form-data: every policy field first, then the file part.
No UploadThing credentials are attached to these requests.

Examples:
    >>> response = api.get_presigned_upload_url([UploadFileInfo(name="a.txt", size=3)])
    >>> upload_file_to_presigned_url("a.txt", response.data[0])

Tests:
    - tests/unit/test_upload.py
"""

import io
import logging
import os
from typing import BinaryIO

import httpx

from utapi.config import DEFAULT_TIMEOUT
from utapi.errors import TransportError, UploadError
from utapi.schemas import PresignedPostURLs

logger = logging.getLogger(__name__)

FILE_FIELD = "file"
FILE_CONTENT_TYPE = "application/octet-stream"


def read_exact(content: BinaryIO | bytes | None, size: int) -> bytes:
    """Read exactly ``size`` bytes of upload content.

    Args:
        content: Binary stream or bytes. None means no content.
        size: Number of bytes to send.

    Returns:
        The bytes to upload; empty when content is None or size <= 0.

    Raises:
        UploadError: If fewer than ``size`` bytes are available.
    """
    if content is None or size <= 0:
        return b""

    if isinstance(content, (bytes, bytearray, memoryview)):
        content = io.BytesIO(bytes(content))

    chunks: list[bytes] = []
    remaining = size
    while remaining > 0:
        chunk = content.read(remaining)
        if not chunk:
            break
        chunks.append(chunk)
        remaining -= len(chunk)

    if remaining > 0:
        raise UploadError(
            f"File upload error: expected {size} bytes of content, got {size - remaining}"
        )
    return b"".join(chunks)


def build_multipart(
    data: bytes, presigned: PresignedPostURLs
) -> tuple[dict[str, str], dict[str, tuple[str, bytes, str]]]:
    """Build the form fields and file part for a presigned POST.

    httpx writes ``data`` fields before ``files`` parts, which is the order
    S3-compatible POST policies require.
    """
    fields = dict(presigned.fields)
    files = {FILE_FIELD: (presigned.file_name, data, FILE_CONTENT_TYPE)}
    return fields, files


def _post_form(
    data: bytes,
    presigned: PresignedPostURLs,
    http_client: httpx.Client | None,
    timeout: float,
) -> None:
    fields, files = build_multipart(data, presigned)

    logger.info(
        f"[UPLOAD] Uploading {presigned.file_name!r} ({len(data)} bytes) "
        f"with {len(fields)} form field(s)"
    )

    try:
        if http_client is None:
            with httpx.Client(timeout=timeout) as client:
                response = client.post(presigned.url, data=fields, files=files)
        else:
            response = http_client.post(presigned.url, data=fields, files=files)
    except httpx.HTTPError as e:
        logger.error(f"[UPLOAD] HTTP error uploading {presigned.file_name!r}: {e}")
        raise TransportError(str(e)) from e

    if not response.is_success:
        logger.error(
            f"[UPLOAD] Upload of {presigned.file_name!r} failed with status {response.status_code}"
        )
        raise UploadError.from_status(response.status_code, response.text)

    logger.info(f"[UPLOAD] Uploaded {presigned.file_name!r} (key={presigned.key})")


def upload_content_to_presigned_url(
    content: BinaryIO | bytes | None,
    size: int,
    presigned: PresignedPostURLs,
    http_client: httpx.Client | None = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> None:
    """Upload in-memory or streamed content to a presigned URL.

    Args:
        content: Binary stream or bytes holding the file data.
        size: Number of bytes to send from ``content``.
        presigned: Presigned POST target from get_presigned_upload_url.
        http_client: Client to send with (a temporary one if omitted).
        timeout: Timeout for the temporary client.

    Raises:
        UploadError: If the upload is rejected or content is short.
        TransportError: If the request cannot be completed.
    """
    data = read_exact(content, size)
    _post_form(data, presigned, http_client, timeout)


def upload_file_to_presigned_url(
    file_path: str | os.PathLike,
    presigned: PresignedPostURLs,
    http_client: httpx.Client | None = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> None:
    """Upload a local file to a presigned URL.

    The file is opened and closed within this call.

    Args:
        file_path: Path of the local file.
        presigned: Presigned POST target from get_presigned_upload_url.
        http_client: Client to send with (a temporary one if omitted).
        timeout: Timeout for the temporary client.

    Raises:
        OSError: If the file cannot be opened or read.
        UploadError: If the upload is rejected.
        TransportError: If the request cannot be completed.
    """
    with open(file_path, "rb") as f:
        size = os.fstat(f.fileno()).st_size
        data = read_exact(f, size)
    _post_form(data, presigned, http_client, timeout)
