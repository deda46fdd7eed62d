# catalog/core/errors.py
"""
Error taxonomy of the catalog.

Services raise these; the HTTP boundary maps `status_code` onto the
response and renders `{"error": message}`.
"""


class CatalogError(Exception):
    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class Unauthorized(CatalogError):
    status_code = 401
    default_message = "Unauthorized"


class NotFound(CatalogError):
    status_code = 404
    default_message = "Not found"


class Expired(CatalogError):
    status_code = 400
    default_message = "Expired"


class BadRequest(CatalogError):
    status_code = 400
    default_message = "Bad request"


class Conflict(CatalogError):
    status_code = 409
    default_message = "Conflict"


class InternalError(CatalogError):
    status_code = 500


class UploadFailed(InternalError):
    default_message = "Image upload failed"
