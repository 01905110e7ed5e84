from dataclasses import dataclass
from typing import Optional
from loguru import logger
import requests
from urllib.parse import quote

from config import Settings
from exceptions import ConfigurationError, UpstreamBlobError

BLOB_API_VERSION = "7"


@dataclass
class BlobResult:
    url: str
    pathname: str
    content_type: Optional[str] = None
    download_url: Optional[str] = None


class BlobService:
    """Client for the Vercel Blob HTTP API."""

    def __init__(self, token: str, base_url: str, timeout: float = 30.0, session: Optional[requests.Session] = None):
        if not token:
            raise ConfigurationError("BLOB_READ_WRITE_TOKEN")
        self.token = token
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    @classmethod
    def from_settings(cls, settings: Settings) -> "BlobService":
        return cls(
            token=settings.blob_read_write_token,
            base_url=settings.blob_api_url,
            timeout=settings.blob_timeout_seconds,
        )

    def _get_headers(self):
        return {
            "Authorization": f"Bearer {self.token}",
            "x-api-version": BLOB_API_VERSION,
        }

    def put(self, pathname: str, body: bytes, access: str = "public", content_type: str = "image/png") -> BlobResult:
        """Upload ``body`` under ``pathname`` and return where it can be read."""
        url = f"{self.base_url}/{quote(pathname.lstrip('/'), safe='/')}"
        headers = self._get_headers()
        headers.update({
            "x-content-type": content_type,
            "x-vercel-blob-access": access,
            # Uploads in the same millisecond with the same name must not collide
            "x-add-random-suffix": "1",
        })

        try:
            response = self.session.put(url, headers=headers, data=body, timeout=self.timeout)
        except requests.RequestException as e:
            logger.error("Blob upload request failed for {}: {}", pathname, e)
            raise UpstreamBlobError(f"Blob upload failed: {e}") from e

        if not response.ok:
            logger.error("Blob upload rejected for {}: {} {}", pathname, response.status_code, response.text)
            raise UpstreamBlobError(f"Blob upload failed with status {response.status_code}: {_error_message(response)}")

        try:
            data = response.json()
            return BlobResult(
                url=data["url"],
                pathname=data.get("pathname", pathname),
                content_type=data.get("contentType", content_type),
                download_url=data.get("downloadUrl"),
            )
        except (ValueError, KeyError, TypeError) as e:
            raise UpstreamBlobError(f"Blob upload returned an invalid response: {e}") from e

    def delete(self, url: str):
        try:
            response = self.session.post(
                f"{self.base_url}/delete",
                headers=self._get_headers(),
                json={"urls": [url]},
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise UpstreamBlobError(f"Blob delete failed: {e}") from e

        if not response.ok:
            raise UpstreamBlobError(f"Blob delete failed with status {response.status_code}: {_error_message(response)}")


def _error_message(response: requests.Response) -> str:
    try:
        error = response.json().get("error", {})
        if isinstance(error, dict):
            return error.get("message") or response.reason
        return str(error)
    except (ValueError, AttributeError):
        return response.text or response.reason
