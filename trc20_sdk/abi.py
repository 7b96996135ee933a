"""
ABI call descriptors for contract functions.

A ``CallDescriptor`` names one contract function together with its ordered,
typed input values and its ordered output types. Encoding and decoding go
through ``eth_abi``; the selector is the first four bytes of the keccak-256
hash of the canonical signature, as on any EVM-compatible chain.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterable, Tuple, Union

from eth_abi import decode, encode
from eth_abi.exceptions import DecodingError, EncodingError
from web3 import Web3

from . import address as tron_address
from .exceptions import AbiDecodingError, AbiEncodingError, AddressError


class AbiType(Enum):
    """Closed set of ABI types used by the TRC-20 standard."""
    ADDRESS = "address"
    BOOL = "bool"
    UINT8 = "uint8"
    UINT16 = "uint16"
    UINT32 = "uint32"
    UINT64 = "uint64"
    UINT128 = "uint128"
    UINT256 = "uint256"
    STRING = "string"

    @property
    def canonical(self) -> str:
        """Canonical type name as used in function signatures."""
        return self.value

    @property
    def is_dynamic(self) -> bool:
        return self is AbiType.STRING

    def prepare(self, value: Any) -> Any:
        """Convert a native value into the form ``eth_abi`` expects for this type."""
        if self is AbiType.ADDRESS:
            try:
                return tron_address.to_abi(value)
            except AddressError as e:
                raise AbiEncodingError(str(e)) from e
        return value

    def convert(self, decoded: Any) -> Any:
        """Convert a value decoded by ``eth_abi`` into its native form."""
        if self is AbiType.ADDRESS:
            return tron_address.from_abi(decoded)
        return decoded

    def encode(self, value: Any) -> bytes:
        """Encode a single value of this type."""
        return _encode_values([self], [value])

    def decode(self, data: bytes) -> Any:
        """Decode a single value of this type."""
        return _decode_values([self], data)[0]


@dataclass(frozen=True)
class TypedValue:
    """A value paired with the ABI type it is encoded as."""
    abi_type: AbiType
    value: Any

    @classmethod
    def address(cls, value: str) -> "TypedValue":
        return cls(AbiType.ADDRESS, value)

    @classmethod
    def boolean(cls, value: bool) -> "TypedValue":
        return cls(AbiType.BOOL, value)

    @classmethod
    def string(cls, value: str) -> "TypedValue":
        return cls(AbiType.STRING, value)

    @classmethod
    def uint(cls, bits: int, value: int) -> "TypedValue":
        try:
            abi_type = AbiType(f"uint{bits}")
        except ValueError:
            raise AbiEncodingError(f"Unsupported unsigned integer width: {bits}")
        return cls(abi_type, value)

    @classmethod
    def uint8(cls, value: int) -> "TypedValue":
        return cls(AbiType.UINT8, value)

    @classmethod
    def uint256(cls, value: int) -> "TypedValue":
        return cls(AbiType.UINT256, value)


@dataclass(frozen=True)
class CallDescriptor:
    """
    One contract function call: name, ordered typed inputs, ordered output types.

    Instances are immutable so the selector and argument layout cannot drift
    after construction.
    """
    function_name: str
    inputs: Tuple[TypedValue, ...] = field(default_factory=tuple)
    outputs: Tuple[AbiType, ...] = field(default_factory=tuple)

    def __post_init__(self):
        object.__setattr__(self, "inputs", tuple(self.inputs))
        object.__setattr__(self, "outputs", tuple(self.outputs))

    @property
    def input_types(self) -> Tuple[AbiType, ...]:
        return tuple(item.abi_type for item in self.inputs)

    @property
    def signature(self) -> str:
        """Canonical signature, e.g. ``transfer(address,uint256)``."""
        types = ",".join(t.canonical for t in self.input_types)
        return f"{self.function_name}({types})"

    @property
    def selector(self) -> bytes:
        """4-byte function selector."""
        return bytes(Web3.keccak(text=self.signature)[:4])

    def encode_arguments(self) -> bytes:
        """Encode the input values without the selector."""
        return _encode_values(self.input_types, [item.value for item in self.inputs])

    def encode(self) -> bytes:
        """Encode the full call payload: selector followed by arguments."""
        return self.selector + self.encode_arguments()

    def decode_outputs(self, data: Union[bytes, str]) -> Tuple[Any, ...]:
        """
        Decode a returned payload against the declared output types.

        Args:
            data: Raw bytes or a hex string (with or without ``0x``)

        Returns:
            Tuple of native values, one per output type

        Raises:
            AbiDecodingError: If the payload does not match the output types
        """
        return _decode_values(self.outputs, _to_bytes(data))

    def decode_single(self, data: Union[bytes, str]) -> Any:
        """Decode a payload for a function with exactly one output."""
        if len(self.outputs) != 1:
            raise AbiDecodingError(
                f"{self.signature} declares {len(self.outputs)} outputs, expected exactly one"
            )
        return self.decode_outputs(data)[0]


def _to_bytes(data: Union[bytes, str]) -> bytes:
    if isinstance(data, (bytes, bytearray)):
        return bytes(data)
    if isinstance(data, str):
        hex_str = data[2:] if data.startswith(("0x", "0X")) else data
        try:
            return bytes.fromhex(hex_str)
        except ValueError as e:
            raise AbiDecodingError(f"Invalid hex payload: {e}") from e
    raise AbiDecodingError(f"Payload must be bytes or hex string, got {type(data).__name__}")


def _encode_values(types: Iterable[AbiType], values: Iterable[Any]) -> bytes:
    types = list(types)
    values = list(values)
    if len(types) != len(values):
        raise AbiEncodingError(f"Expected {len(types)} values, got {len(values)}")
    prepared = [abi_type.prepare(value) for abi_type, value in zip(types, values)]
    try:
        return encode([t.canonical for t in types], prepared)
    except EncodingError as e:
        raise AbiEncodingError(f"Cannot encode {prepared!r} as {[t.canonical for t in types]}: {e}") from e


def _decode_values(types: Iterable[AbiType], data: bytes) -> Tuple[Any, ...]:
    types = list(types)
    try:
        decoded = decode([t.canonical for t in types], data)
    except (DecodingError, UnicodeDecodeError) as e:
        raise AbiDecodingError(f"Cannot decode {len(data)} bytes as {[t.canonical for t in types]}: {e}") from e
    return tuple(abi_type.convert(value) for abi_type, value in zip(types, decoded))
