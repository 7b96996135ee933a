"""
Exceptions for the TRC-20 SDK.
"""
from typing import Optional


class Trc20Error(Exception):
    """Base exception for all SDK errors."""
    pass


class AddressError(Trc20Error, ValueError):
    """Raised when a value is not a valid TRON address."""
    pass


class AmountError(Trc20Error, ValueError):
    """Raised when a token amount cannot be converted to base units."""
    pass


class AbiError(Trc20Error):
    """Base exception for ABI encoding and decoding failures."""
    pass


class AbiEncodingError(AbiError):
    """Raised when call arguments do not match their declared ABI types."""
    pass


class AbiDecodingError(AbiError):
    """Raised when a returned payload is empty or does not match the declared output types."""
    pass


class NodeError(Trc20Error):
    """Raised when the node rejects a request."""

    def __init__(self, message: str, code: Optional[str] = None):
        self.code = code
        super().__init__(message)


class SigningError(Trc20Error):
    """Raised when a transaction cannot be signed."""
    pass


class TransactionError(Trc20Error):
    """
    Raised when the build, sign or broadcast step of a state-mutating call fails.

    The ``stage`` attribute names the step that failed.
    """

    def __init__(self, message: str, stage: str):
        self.stage = stage
        super().__init__(f"[{stage}] {message}")
