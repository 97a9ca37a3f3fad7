"""
Custom exceptions for the Marketplace CLI.
"""


class MarketplaceError(Exception):
    """Base exception class for all Marketplace CLI errors."""
    pass


class TransportError(MarketplaceError):
    """Raised when a request never produced an HTTP response (DNS, connection, timeout)."""
    pass


class RequestFailedError(MarketplaceError):
    """Raised when a request could not be sent or the API answered with an unexpected status."""

    def __init__(self, message: str, status_code: int = None, body: str = None):
        self.status_code = status_code
        self.body = body
        super().__init__(message)


class ProductNotFoundError(MarketplaceError):
    """Raised when the API reports that a product does not exist."""

    def __init__(self, slug: str):
        self.slug = slug
        super().__init__(f'product "{slug}" not found')


class VersionNotFoundError(MarketplaceError):
    """Raised when a product has no version with the requested number."""

    def __init__(self, slug: str, version: str, hint: str = None):
        self.slug = slug
        self.version = version

        message = f'product "{slug}" does not have a version {version}'
        if hint:
            message += f", {hint}"

        super().__init__(message)


class ResponseParseError(MarketplaceError):
    """Raised when a response body does not match the expected envelope."""
    pass


class ConfigurationError(MarketplaceError):
    """Raised when configuration is invalid."""
    pass


class UploadError(MarketplaceError):
    """Raised when uploading a file to object storage fails."""

    def __init__(self, message: str, file_path: str = None):
        self.file_path = file_path

        if file_path:
            message = f"uploading '{file_path}' failed: {message}"

        super().__init__(message)


class RenderError(MarketplaceError):
    """Raised when output rendering fails."""

    def __init__(self, message: str, format_name: str = None):
        self.format_name = format_name

        if format_name:
            message = f"Rendering error for format '{format_name}': {message}"

        super().__init__(message)


class ChartNotFoundError(MarketplaceError):
    """Raised when a product version has no chart with the requested id."""

    def __init__(self, slug: str, version: str, chart_id: str):
        self.slug = slug
        self.version = version
        self.chart_id = chart_id
        super().__init__(f'product "{slug}" {version} does not have a chart with id {chart_id}')
