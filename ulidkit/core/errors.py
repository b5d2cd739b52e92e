"""Custom errors with tracking IDs."""

from ulidkit.utils.timestamp import format_timestamp


def _tracking_id():
    # Imported lazily: the codec raises these errors.
    from ulidkit.identifier import Identifier
    return Identifier.create().encode()


class UlidError(Exception):
    """Base error with unique ID and timestamp for tracking."""

    def __init__(self, message, context=None, cause=None):
        super().__init__(message)
        self.error_id = _tracking_id()
        self.timestamp = format_timestamp()
        self.context = context or {}
        self.cause = cause

    def __str__(self):
        return f"[{self.error_id}] {super().__str__()}"


class TimestampRangeError(UlidError, ValueError):
    """Timestamp outside the 48-bit millisecond range (or the datetime range)."""

    def __init__(self, message, value=None, **kwargs):
        context = kwargs.pop("context", {})
        if value is not None:
            context["value"] = value
        super().__init__(message, context=context, **kwargs)
        self.value = value


class DecodeError(UlidError, ValueError):
    """Text could not be decoded into an identifier or field."""

    def __init__(self, message, text=None, **kwargs):
        context = kwargs.pop("context", {})
        if text is not None:
            context["text"] = text
        super().__init__(message, context=context, **kwargs)


class InvalidLengthError(DecodeError):
    """Input length does not match the encoded width."""

    def __init__(self, message, expected=None, actual=None, **kwargs):
        context = kwargs.pop("context", {})
        context["expected"] = expected
        context["actual"] = actual
        super().__init__(message, context=context, **kwargs)
        self.expected = expected
        self.actual = actual


class InvalidSymbolError(DecodeError):
    """Input contains a character outside the base32 alphabet."""

    def __init__(self, message, symbol=None, position=None, **kwargs):
        context = kwargs.pop("context", {})
        context["symbol"] = symbol
        context["position"] = position
        super().__init__(message, context=context, **kwargs)
        self.symbol = symbol
        self.position = position


class TimestampOverflowError(DecodeError):
    """Leading symbol carries bits past the 48-bit timestamp."""


class RandomnessExhaustedError(UlidError):
    """Monotonic increment overflowed the 80-bit randomness."""
