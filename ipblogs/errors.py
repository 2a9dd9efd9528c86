class BlogError(Exception):
    status_code = 500
    message = "Internal server error"

    def __init__(self, message=None, detail=None):
        super().__init__(message or self.message)
        if message:
            self.message = message
        self.detail = detail


class ValidationError(BlogError):
    status_code = 400
    message = "Missing required fields"


class PayloadRejected(ValidationError):
    message = "Invalid attachment"


class Unauthorized(BlogError):
    status_code = 401
    message = "Token missing"


class InvalidCredentials(BlogError):
    status_code = 401
    message = "Invalid credentials"


class Forbidden(BlogError):
    status_code = 403
    message = "Unauthorized or not found"


class InvalidToken(Forbidden):
    message = "Invalid token"


class NotFound(BlogError):
    status_code = 404
    message = "Not found"


class UploadFailed(BlogError):
    message = "File upload failed"


class PersistenceError(BlogError):
    message = "Database operation failed"
