"""
TRON address helpers.

A TRON account address is 21 bytes: the ``0x41`` network prefix followed by
the same 20-byte account id an Ethereum address carries. It is shown to users
in base58check form (``T...``) and encoded in contract calls as a plain
20-byte ABI address.
"""
import base58

from .exceptions import AddressError

ADDRESS_PREFIX = b"\x41"
ADDRESS_SIZE = 21


def to_raw(address: str) -> bytes:
    """
    Convert any supported address form to its 21-byte representation.

    Accepted forms:
        - base58check, e.g. ``TR7NHqjeKQxGTCi8q8ZY4pL8otSzgjLj6t``
        - hex with the ``41`` prefix (42 hex chars)
        - ``0x``-prefixed 20-byte hex, as returned by ABI decoders

    Raises:
        AddressError: If the value is not a valid address
    """
    if not isinstance(address, str):
        raise AddressError(f"Address must be a string, got {type(address).__name__}")

    if address.startswith("T"):
        try:
            raw = base58.b58decode_check(address)
        except ValueError as e:
            raise AddressError(f"Invalid base58 address {address!r}: {e}") from e
    elif address.startswith(("0x", "0X")):
        raw = ADDRESS_PREFIX + _from_hex(address[2:], 20, address)
    else:
        raw = _from_hex(address, ADDRESS_SIZE, address)

    if len(raw) != ADDRESS_SIZE or raw[:1] != ADDRESS_PREFIX:
        raise AddressError(f"Invalid address {address!r}: expected 21 bytes with 0x41 prefix")
    return raw


def _from_hex(value: str, size: int, original: str) -> bytes:
    try:
        raw = bytes.fromhex(value)
    except ValueError as e:
        raise AddressError(f"Invalid hex address {original!r}: {e}") from e
    if len(raw) != size:
        raise AddressError(f"Invalid hex address {original!r}: expected {size} bytes, got {len(raw)}")
    return raw


def to_base58(address: str) -> str:
    """Return the base58check (``T...``) form of an address."""
    return base58.b58encode_check(to_raw(address)).decode("ascii")


def to_hex(address: str) -> str:
    """Return the ``41``-prefixed hex form of an address."""
    return to_raw(address).hex()


def to_abi(address: str) -> bytes:
    """Return the 20-byte account id used by the ABI ``address`` type."""
    return to_raw(address)[1:]


def from_abi(value) -> str:
    """
    Convert a decoded ABI address back to base58check.

    Args:
        value: 20 raw bytes or a ``0x``-prefixed hex string

    Returns:
        Base58check address
    """
    if isinstance(value, (bytes, bytearray)):
        if len(value) != 20:
            raise AddressError(f"ABI address must be 20 bytes, got {len(value)}")
        raw = ADDRESS_PREFIX + bytes(value)
        return base58.b58encode_check(raw).decode("ascii")
    return to_base58(value)


def is_address(address: str) -> bool:
    """Check whether a value is a valid TRON address in any supported form."""
    try:
        to_raw(address)
    except AddressError:
        return False
    return True
