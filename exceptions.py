from typing import Optional


class APIError(Exception):
    """Base class for errors rendered as ``{"error": ...}`` JSON responses."""

    status_code = 500

    def __init__(self, error: str, status_code: Optional[int] = None):
        super().__init__(error)
        self.error = error
        if status_code is not None:
            self.status_code = status_code


class ConfigurationError(APIError):
    """A required environment setting is missing."""

    def __init__(self, setting: str):
        super().__init__(f"{setting} is not configured")
        self.setting = setting


class ValidationError(APIError):
    status_code = 400


class ImageDecodeError(APIError):
    # Malformed image payloads are reported as 500, same as upload failures
    status_code = 500


class UpstreamStoreError(APIError):
    status_code = 500


class UpstreamBlobError(APIError):
    status_code = 500


class UnsupportedMethod(APIError):
    status_code = 405

    def __init__(self, error: str = "Method not allowed"):
        super().__init__(error)
