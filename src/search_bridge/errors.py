"""
Custom exceptions for query construction and response decoding.
"""


class SearchBridgeError(Exception):
    """Base exception for all search-bridge errors."""

    pass


class QueryOptionError(SearchBridgeError, ValueError):
    """Raised when a match query cannot be built from its option bag."""

    pass


class UnrecognizedOptionError(QueryOptionError):
    """Raised when an option name is not in the option registry."""

    def __init__(self, key: str):
        self.key = key
        super().__init__(f"illegal match option [{key}]")


class OptionValueInvalidError(QueryOptionError):
    """Raised when an option value cannot be coerced or applied."""

    def __init__(self, key: str, value: str, expected_kind: str, reason: str | None = None):
        self.key = key
        self.value = value
        self.expected_kind = expected_kind
        self.reason = reason
        message = f"invalid value [{value}] for match option [{key}], expected {expected_kind}"
        if reason:
            message += f": {reason}"
        super().__init__(message)


def _format_location(location: tuple[int, int] | None) -> str:
    if location is None:
        return ""
    line, column = location
    return f" at line {line}, column {column}"


class ResponseParseError(SearchBridgeError):
    """Raised when a response body does not have the expected shape."""

    pass


class DocumentMalformedError(ResponseParseError):
    """Raised when the cursor finds a token of the wrong kind."""

    def __init__(
        self,
        expected: str,
        actual: str,
        location: tuple[int, int] | None = None,
    ):
        self.expected = expected
        self.actual = actual
        self.location = location
        super().__init__(
            f"Failed to parse object: expecting token of type [{expected}] "
            f"but found [{actual}]{_format_location(location)}"
        )


class RequiredFieldMissingError(ResponseParseError):
    """Raised when the enclosing object ends before a required field appears."""

    def __init__(self, field_name: str, provider: str = "OpenAI-compatible"):
        self.field_name = field_name
        self.provider = provider
        super().__init__(
            f"Failed to find required field [{field_name}] in {provider} embeddings response"
        )


class ValueMalformedError(ResponseParseError):
    """Raised when an embedding component is not a 32-bit float."""

    def __init__(self, value: str, location: tuple[int, int] | None = None):
        self.value = value
        self.location = location
        super().__init__(f"Expected a float embedding value but found [{value}]{_format_location(location)}")


class EmbeddingRequestError(SearchBridgeError):
    """Raised when the embeddings endpoint answers with a non-success status."""

    def __init__(self, status_code: int, url: str, detail: str = ""):
        self.status_code = status_code
        self.url = url
        self.detail = detail
        message = f"Embeddings request to {url} failed with status {status_code}"
        if detail:
            message += f": {detail}"
        super().__init__(message)
