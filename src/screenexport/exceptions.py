"""Exceptions raised by screenexport."""


class ScreenExportError(Exception):
    """Base exception for all screenexport errors."""
    pass


class ConfigurationError(ScreenExportError):
    """Exception raised when the export configuration is missing or invalid."""
    pass


class FigmaAPIError(ScreenExportError):
    """Exception raised when the Figma API returns an error."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code

    def __str__(self) -> str:
        if self.status_code:
            return f"[{self.status_code}] {self.message}"
        return self.message


class DocumentFetchError(FigmaAPIError):
    """Exception raised when the design file document cannot be fetched.

    This is the only fatal error of an export run.
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        file_key: str | None = None,
    ):
        super().__init__(message, status_code)
        self.file_key = file_key
