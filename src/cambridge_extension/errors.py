"""Error handling for the Cambridge language server extension."""
from typing import Any, Dict, Optional

from mcp.types import (
    ErrorData,
    INVALID_REQUEST,
    INTERNAL_ERROR
)

from cambridge_extension.logging import get_logger

logger = get_logger(__name__)

def log_error(
    error: Exception,
    context: Optional[Dict[str, Any]] = None
) -> None:
    """Log an error with context."""
    error_info: Dict[str, Any] = {
        "event": "extension_error",
        "error_type": error.__class__.__name__,
        "error_message": str(error)
    }
    if context:
        error_info["context"] = context
    if isinstance(error, ExtensionError):
        error_info["code"] = error.code
        error_info["details"] = error.details

    logger.error(error_info)


class ExtensionError(Exception):
    """Base error class for binary resolution."""
    def __init__(
        self,
        message: str,
        code: int = INTERNAL_ERROR,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message)
        self.code = code
        self.details = details or {}

    def to_error_data(self) -> ErrorData:
        """Convert to ErrorData format."""
        return ErrorData(
            code=self.code,
            message=str(self),
            data=self.details
        )


class UnsupportedPlatformError(ExtensionError):
    """No release asset exists for the host platform."""
    def __init__(self, os_name: str, arch: str):
        super().__init__(
            f"Unsupported platform: {os_name}-{arch}",
            code=INVALID_REQUEST,
            details={"os": os_name, "arch": arch}
        )


class DownloadFailedError(ExtensionError):
    """Fetching the release asset failed."""
    def __init__(self, url: str, cause: Exception):
        super().__init__(
            f"Failed to download LSP: {cause}",
            code=INTERNAL_ERROR,
            details={"url": url, "cause": str(cause)}
        )


class MakeExecutableError(ExtensionError):
    """The fetched binary could not be marked executable."""
    def __init__(self, path: str, message: str):
        super().__init__(message, code=INTERNAL_ERROR, details={"path": path})


class BinaryNotFoundError(ExtensionError):
    """Binary not found on the search path."""
    def __init__(self, binary_name: str):
        super().__init__(
            f"{binary_name} not found in PATH. "
            f"Please build it with 'make build-lsp' and add it to your PATH.",
            code=INVALID_REQUEST,
            details={"binary_name": binary_name}
        )
