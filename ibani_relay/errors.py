class RelayError(Exception):
    """Base for every request-scoped failure; rendered as an ErrorResponse."""
    status_code = 500
    error = "Internal Server Error"

    def __init__(self, message: str, status_code: int = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class InvalidTranslationRequest(RelayError):
    status_code = 400
    error = "Bad Request"


class ConfigurationError(RelayError):
    status_code = 500
    error = "Configuration Error"


class UpstreamError(RelayError):
    status_code = 500
    error = "Translation Failed"
