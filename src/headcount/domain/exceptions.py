class HeadcountError(Exception):
    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class FetchError(HeadcountError):
    """Attendee records could not be obtained (network, HTTP status or decoding)."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message)
