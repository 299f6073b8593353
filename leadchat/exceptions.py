from fastapi import HTTPException

GENERIC_ERROR_MESSAGE = "An error occurred while processing your request. Please try again later."


class UpstreamError(Exception):
    """Raised when the completion API call fails for any reason"""


class InvalidJSONException(HTTPException):
    def __init__(self, detail: str = "Invalid JSON"):
        super().__init__(status_code=400, detail=detail)


class MissingMessageException(HTTPException):
    def __init__(self, detail: str = "Message is required"):
        super().__init__(status_code=400, detail=detail)


class UpstreamServiceException(HTTPException):
    def __init__(self):
        super().__init__(status_code=500, detail=GENERIC_ERROR_MESSAGE)
