"""
Local private-key signer.
"""
from eth_account import Account
from eth_account.signers.local import LocalAccount

from ..address import ADDRESS_PREFIX, from_abi
from ..exceptions import SigningError


class LocalSigner:
    """
    Signer backed by a secp256k1 private key held in memory.

    TRON uses the same curve and the same keccak-derived 20-byte account id as
    Ethereum, so the key is loaded through ``eth_account`` and only the
    address presentation differs.
    """

    def __init__(self, private_key: str):
        """
        Args:
            private_key: Hex private key, with or without ``0x``

        Raises:
            ValueError: If the key is malformed
        """
        self._account: LocalAccount = Account.from_key(private_key)
        self.address = from_abi(bytes.fromhex(self._account.address[2:]))

    @property
    def hex_address(self) -> str:
        """``41``-prefixed hex form of the signer address"""
        return (ADDRESS_PREFIX + bytes.fromhex(self._account.address[2:])).hex()

    def sign_digest(self, digest: bytes) -> bytes:
        """
        Sign a transaction id.

        Args:
            digest: 32-byte SHA-256 transaction id

        Returns:
            65-byte signature (r || s || v)
        """
        if len(digest) != 32:
            raise SigningError(f"Digest must be 32 bytes, got {len(digest)}")
        signed = self._account.unsafe_sign_hash(digest)
        return bytes(signed.signature)

    def __repr__(self) -> str:
        return f"LocalSigner(address={self.address!r})"
