class LogDropError(Exception):
    """Terminal failure of a single request, mapped to a fixed HTTP status."""

    status_code = 500
    code = "error"
    message = "request failed"

    def __init__(self, message: str | None = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


class MissingContentType(LogDropError):
    status_code = 400
    code = "missing_content_type"
    message = "missing Content-Type"


class UnsupportedMediaType(LogDropError):
    status_code = 415
    code = "unsupported_media_type"
    message = "unsupported media type"


class InvalidContents(LogDropError):
    status_code = 400
    code = "invalid_contents"
    message = "invalid contents"


class PayloadTooLarge(LogDropError):
    status_code = 413
    code = "payload_too_large"
    message = "payload too large"


class InvalidFileName(LogDropError):
    status_code = 400
    code = "invalid_file_name"
    message = "invalid file name"


class MissingIdentifier(LogDropError):
    status_code = 400
    code = "missing_identifier"
    message = "missing id"


class InvalidIdentifier(LogDropError):
    status_code = 400
    code = "invalid_identifier"
    message = "invalid id"


class NotFound(LogDropError):
    status_code = 404
    code = "not_found"
    message = "file not found"


class Forbidden(LogDropError):
    status_code = 403
    code = "forbidden"
    message = "forbidden"


class InternalError(LogDropError):
    status_code = 500
    code = "internal_error"
    message = "internal server error"


class StorageError(Exception):
    """Raised by store implementations when the backend fails."""
