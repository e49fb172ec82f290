"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    error_kind = "DomainError"


class InvalidInputError(DomainException):
    """Input cannot be processed by the requested algorithm"""

    error_kind = "InvalidInput"


class InvalidInputLengthError(InvalidInputError):
    """Input has the wrong number of digits or characters"""

    error_kind = "InvalidInputLength"


class InvalidInputFormatError(InvalidInputError):
    """Non-digit characters where digits are required, wrong country prefix, etc."""

    error_kind = "InvalidInputFormat"


class ChecksumMismatchError(DomainException):
    """Control digits do not match the recomputed value"""

    error_kind = "ChecksumMismatch"


class UnsupportedNetworkError(DomainException):
    """Card network is not known to the validator"""

    error_kind = "UnsupportedNetwork"


class UnsupportedChainError(DomainException):
    """Requested blockchain has no derivation configuration"""

    error_kind = "UnsupportedChain"


class PrimitiveUnavailableError(DomainException):
    """A required cryptographic library failed to load or execute"""

    error_kind = "PrimitiveUnavailable"
