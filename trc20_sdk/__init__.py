"""
TRC-20 SDK - standard token operations for TRON smart contracts.
"""
from .version import __version__
from .abi import AbiType, CallDescriptor, TypedValue
from .client import Trc20Client
from .config import Network, NetworkConfig, NetworkEndpoints
from .exceptions import (
    Trc20Error, AddressError, AmountError, AbiError, AbiEncodingError,
    AbiDecodingError, NodeError, SigningError, TransactionError
)
from .models import ConstantCallResult, Transaction, TransactionOutcome
from .node import HttpNodeClient, NodeClient, TransactionBuilder
from .scaling import contract_decimals_scaler, fixed_scaler, scale_by_decimals, scale_fixed
from .signer import LocalSigner, Signer

__all__ = [
    "__version__",
    "Trc20Client",
    "AbiType", "CallDescriptor", "TypedValue",
    "Network", "NetworkConfig", "NetworkEndpoints",
    "Trc20Error", "AddressError", "AmountError", "AbiError", "AbiEncodingError",
    "AbiDecodingError", "NodeError", "SigningError", "TransactionError",
    "ConstantCallResult", "Transaction", "TransactionOutcome",
    "NodeClient", "HttpNodeClient", "TransactionBuilder",
    "scale_fixed", "scale_by_decimals", "fixed_scaler", "contract_decimals_scaler",
    "Signer", "LocalSigner",
]
