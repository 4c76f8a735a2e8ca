class ServiceError(Exception):
    """Base for failures raised by the service layer.

    The message is meant for the client; main.py turns it into a plain-text
    response with ``status_code``.
    """
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class BadRequest(ServiceError):
    status_code = 400


class NotFound(ServiceError):
    status_code = 404
