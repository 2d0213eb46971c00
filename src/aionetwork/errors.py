class NetworkingError(Exception):
    description = "Networking error"

    def __str__(self) -> str:
        return self.description


class InvalidURL(NetworkingError):
    description = "URL isn't valid"


class InvalidStatusCode(NetworkingError):
    description = "Invalid status code"

    def __init__(self, code: int):
        self.code = code
        super().__init__(code)


class InvalidData(NetworkingError):
    """
    Kept for parity with callers matching on the full error set.
    Nothing in this package raises it.
    """

    description = "Response is invalid"


class FailedToDecode(NetworkingError):
    description = "Failed to decode"


class Custom(NetworkingError):
    def __init__(self, error: BaseException):
        self.error = error
        super().__init__(error)

    @property
    def description(self) -> str:  # type: ignore[override]
        return f"Something went wrong: {self.error}"


class DecodeError(Exception):
    """
    Raised by aionetwork.decoding when a JSON value does not fit the
    requested type. NetworkManager turns it into FailedToDecode.
    """

    def __init__(self, message: str, path: str = "$"):
        self.message = message
        self.path = path
        super().__init__(f"{path}: {message}")
