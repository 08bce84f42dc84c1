"""Error hierarchy for loading, parsing and writing substitution plans.

Transient failures (network timeouts, 5xx answers) are retried by the tenacity
decorators in the sources; everything below PermanentError fails fast.

Example usage with tenacity:
    @retry(retry=retry_if_exception_type(TransientError), stop=stop_after_attempt(3))
    def fetch_timetables(self) -> list[dict]:
        ...
"""


class SubparserError(Exception):
    """Base exception for all subparser errors."""

    pass


class TransientError(SubparserError):
    """Temporary failure that may succeed on retry.

    Examples: network timeouts, 503 Service Unavailable.
    """

    pass


class PermanentError(SubparserError):
    """Failure that won't succeed on retry."""

    pass


class AuthenticationError(PermanentError):
    """Login rejected - wrong credentials or an empty auth token."""

    pass


class LoadingError(PermanentError):
    """A source could not deliver the plan document."""

    pass


class FileReadError(LoadingError):
    """The input file could not be read."""

    pass


class DestinationError(PermanentError):
    """Parsed plans could not be written."""

    pass


class ConfigurationError(PermanentError):
    """Invalid or incomplete settings."""

    pass


class UnknownVariantError(ConfigurationError):
    """A parser, source or destination name that has no implementation."""

    def __init__(self, kind: str, name: str, allowed: list[str]) -> None:
        self.kind = kind
        self.name = name
        self.allowed = allowed
        super().__init__(
            f"Unknown {kind} {name!r}. Allowed: {', '.join(allowed)}"
        )


class ParsingError(PermanentError):
    """Base class for errors raised by the extraction engine."""

    pass


class DocumentParseError(ParsingError):
    """The input could not be read as markup at all."""

    pass


class ElementNotFoundError(ParsingError):
    """A structurally required table or heading is missing."""

    pass


class FormatError(ParsingError):
    """Text was found but does not have the expected shape."""

    pass
