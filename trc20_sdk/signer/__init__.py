"""
Signer interfaces for the TRC-20 SDK.
"""
from typing import Protocol


class Signer(Protocol):
    """Protocol for transaction signers"""
    address: str

    def sign_digest(self, digest: bytes) -> bytes:
        """Sign a 32-byte transaction id and return the 65-byte r||s||v signature"""
        ...


from .local import LocalSigner  # noqa: E402

__all__ = ["Signer", "LocalSigner"]
