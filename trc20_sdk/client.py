"""
Trc20Client - standard TRC-20 (TIP-20) token operations.
"""
import logging
from typing import Any, Optional, Union

import requests

from . import functions
from .abi import CallDescriptor
from .config import Network, NetworkConfig, NetworkEndpoints
from .exceptions import AbiError, AmountError, TransactionError
from .models import TransactionOutcome
from .node import HttpNodeClient, NodeClient, validate_fee_limit
from .scaling import Amount, AmountScaler, fixed_scaler
from .signer import LocalSigner, Signer

# Errors besides transport errors that pass through the write pipeline unwrapped
_PASSTHROUGH_ERRORS = (AbiError, AmountError, TransactionError)


class Trc20Client:
    """
    Client for the standard TRC-20 token functions.

    Functions whose names start with ``get_`` are constant calls: they are
    evaluated by the node against current state and never create a
    transaction. ``transfer``, ``transfer_from`` and ``approve`` build, sign
    and broadcast exactly one transaction each.

    The boolean the standard declares as the return value of the
    state-mutating functions is not decoded; callers get the broadcast
    outcome only.
    """

    def __init__(
        self,
        full_node_url: Optional[str] = None,
        priv_key: Optional[str] = None,
        signer: Optional[Signer] = None,
        node: Optional[NodeClient] = None,
        api_key: Optional[str] = None,
        amount_scaler: AmountScaler = fixed_scaler,
        retry_count: int = 3,
        timeout: int = 30,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize the Trc20Client

        Args:
            full_node_url: Full node HTTP endpoint (ignored when node is given)
            priv_key: Hex private key (optional if signer provided)
            signer: Custom signer object (optional if priv_key provided)
            node: Pre-built node client; takes precedence over full_node_url
            api_key: TronGrid API key
            amount_scaler: Strategy converting amounts to base units
                (default: fixed 10**18 factor)
            retry_count: Number of transport-level retries
            timeout: Timeout for HTTP requests in seconds
            logger: Optional logger instance to use for debug/info logging

        Raises:
            ValueError: If neither node nor full_node_url is provided
            ValueError: If full_node_url does not use https (unless localhost)
        """
        self.logger = logger or logging.getLogger(__name__)
        self.amount_scaler = amount_scaler
        self.endpoints: Optional[NetworkEndpoints] = None

        if priv_key and not signer:
            signer = LocalSigner(priv_key)
        self.signer = signer

        if node is None:
            if not full_node_url:
                raise ValueError("Either node or full_node_url must be provided")
            node = HttpNodeClient(
                full_node_url,
                signer=signer,
                api_key=api_key,
                retry_count=retry_count,
                timeout=timeout,
                logger=self.logger
            )
        self.node = node

    @classmethod
    def from_network(
        cls,
        network: Union[Network, str, NetworkEndpoints],
        priv_key: Optional[str] = None,
        signer: Optional[Signer] = None,
        full_node_url: Optional[str] = None,
        api_key: Optional[str] = None,
        **kwargs: Any
    ) -> "Trc20Client":
        """
        Create a client bound to a network preset or to custom endpoints.

        Args:
            network: Preset name, Network member, or NetworkEndpoints
            priv_key: Hex private key (optional if signer provided)
            signer: Custom signer object
            full_node_url: Override for the preset's full node URL
            api_key: TronGrid API key
            **kwargs: Passed through to the constructor

        Raises:
            ValueError: If network is a NetworkEndpoints and full_node_url or
                api_key is also given
        """
        if isinstance(network, NetworkEndpoints):
            if full_node_url is not None or api_key is not None:
                raise ValueError(
                    "full_node_url and api_key cannot be combined with explicit NetworkEndpoints; "
                    "use NetworkEndpoints.custom() instead"
                )
            endpoints = network
        else:
            endpoints = NetworkConfig.get_endpoints(network, full_node=full_node_url, api_key=api_key)
        client = cls(
            full_node_url=endpoints.full_node,
            priv_key=priv_key,
            signer=signer,
            api_key=endpoints.api_key,
            **kwargs
        )
        client.endpoints = endpoints
        return client

    @classmethod
    def of_mainnet(cls, priv_key: str, **kwargs: Any) -> "Trc20Client":
        return cls.from_network(Network.MAINNET, priv_key=priv_key, **kwargs)

    @classmethod
    def of_shasta(cls, priv_key: str, **kwargs: Any) -> "Trc20Client":
        return cls.from_network(Network.SHASTA, priv_key=priv_key, **kwargs)

    @classmethod
    def of_nile(cls, priv_key: str, **kwargs: Any) -> "Trc20Client":
        return cls.from_network(Network.NILE, priv_key=priv_key, **kwargs)

    @property
    def address(self) -> str:
        """
        Get the signer's base58 address

        Raises:
            ValueError: If no signer is available
        """
        if self.signer is None:
            raise ValueError("No signer available")
        return self.signer.address

    def tx_url(self, txid: str) -> Optional[str]:
        """Block explorer URL for a transaction, when the client was built from a preset."""
        return self.endpoints.tx_url(txid) if self.endpoints else None

    def close(self) -> None:
        self.node.close()

    def __enter__(self) -> "Trc20Client":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    # Constant calls

    def _call_constant(self, descriptor: CallDescriptor, caller_addr: str, contract_addr: str) -> Any:
        result = self.node.constant_call(caller_addr, contract_addr, descriptor)
        value = descriptor.decode_single(result.first_result_hex())
        self.logger.debug(f"{descriptor.signature} on {contract_addr} returned {value!r}")
        return value

    def get_name(self, caller_addr: str, contract_addr: str) -> str:
        """
        Call name() - the name of the token, e.g. "MyToken".

        Args:
            caller_addr: The caller's address
            contract_addr: The contract's address

        Returns:
            Token name

        Raises:
            AbiDecodingError: If the node returned no result or a malformed one
            NodeError: If the node rejected the call
        """
        return self._call_constant(functions.name(), caller_addr, contract_addr)

    def get_symbol(self, caller_addr: str, contract_addr: str) -> str:
        """Call symbol() - the symbol of the token, e.g. "USDT"."""
        return self._call_constant(functions.symbol(), caller_addr, contract_addr)

    def get_decimals(self, caller_addr: str, contract_addr: str) -> int:
        """
        Call decimals() - the number of decimals the token uses.

        For example 8 means the base-unit amount is divided by 100000000 to
        get its user representation.
        """
        return self._call_constant(functions.decimals(), caller_addr, contract_addr)

    def get_total_supply(self, caller_addr: str, contract_addr: str) -> int:
        """Call totalSupply() - the total token supply in base units."""
        return self._call_constant(functions.total_supply(), caller_addr, contract_addr)

    def get_balance_of(self, owner_addr: str, caller_addr: str, contract_addr: str) -> int:
        """
        Call balanceOf(address) - the balance of owner_addr in base units.

        Args:
            owner_addr: The token owner's address
            caller_addr: The caller's address
            contract_addr: The contract's address
        """
        return self._call_constant(functions.balance_of(owner_addr), caller_addr, contract_addr)

    def get_allowance(self, owner_addr: str, spender_addr: str,
                      caller_addr: str, contract_addr: str) -> int:
        """
        Call allowance(address, address) - the amount spender_addr may still
        withdraw from owner_addr. Zero means no allowance.
        """
        return self._call_constant(
            functions.allowance(owner_addr, spender_addr), caller_addr, contract_addr
        )

    # State-mutating calls

    def to_base_units(self, amount: Amount, caller_addr: str, contract_addr: str) -> int:
        """Convert an amount with the client's scaler."""
        return self.amount_scaler(amount, lambda: self.get_decimals(caller_addr, contract_addr))

    def _submit(
        self,
        descriptor: CallDescriptor,
        caller_addr: str,
        contract_addr: str,
        fee_limit: int,
        memo: Optional[str]
    ) -> TransactionOutcome:
        """
        Build, sign and broadcast one transaction calling descriptor.

        A failing step aborts the rest. The fee limit is checked before the
        node is contacted. Transport errors, encoding errors and
        TransactionError pass through; transport errors are logged with the
        step and carry it as a note. Anything else is wrapped in a
        TransactionError naming the step.
        """
        stage = "build"
        try:
            validate_fee_limit(fee_limit)
            builder = self.node.trigger_call(caller_addr, contract_addr, descriptor)
            builder.set_fee_limit(fee_limit)
            builder.set_memo(memo)
            unsigned = builder.build()

            stage = "sign"
            signed = self.node.sign_transaction(unsigned)

            stage = "broadcast"
            outcome = self.node.broadcast_transaction(signed)
        except requests.RequestException as e:
            self.logger.error(f"{descriptor.signature} transport error during {stage}: {e}")
            if hasattr(e, "add_note"):
                e.add_note(f"stage: {stage}")
            raise
        except _PASSTHROUGH_ERRORS:
            raise
        except Exception as e:
            self.logger.error(f"{descriptor.signature} failed during {stage}: {e}")
            raise TransactionError(f"{descriptor.signature} failed: {e}", stage=stage) from e

        self.logger.info(f"{descriptor.signature} broadcast: {outcome.txid} (result={outcome.result})")
        return outcome

    def transfer(
        self,
        to_addr: str,
        amount: Amount,
        caller_addr: str,
        contract_addr: str,
        fee_limit: int,
        memo: Optional[str] = None
    ) -> TransactionOutcome:
        """
        Call transfer(address, uint256) - move amount tokens to to_addr.

        Args:
            to_addr: The address to receive the tokens
            amount: Amount in token units, scaled by the client's amount scaler
            caller_addr: The caller's address
            contract_addr: The contract's address
            fee_limit: Maximum energy fee in sun
            memo: Optional transaction memo

        Returns:
            The broadcast outcome as reported by the node

        Raises:
            TransactionError: If building, signing or broadcasting fails
            AmountError: If the amount cannot be scaled
            AbiEncodingError: If an argument does not fit its ABI type
        """
        value = self.to_base_units(amount, caller_addr, contract_addr)
        return self._submit(functions.transfer(to_addr, value), caller_addr, contract_addr, fee_limit, memo)

    def transfer_from(
        self,
        from_addr: str,
        to_addr: str,
        amount: Amount,
        caller_addr: str,
        contract_addr: str,
        fee_limit: int,
        memo: Optional[str] = None
    ) -> TransactionOutcome:
        """
        Call transferFrom(address, address, uint256).

        Used for a withdraw workflow: the caller moves tokens from from_addr
        to to_addr, up to what from_addr has approved for the caller.
        """
        value = self.to_base_units(amount, caller_addr, contract_addr)
        return self._submit(
            functions.transfer_from(from_addr, to_addr, value), caller_addr, contract_addr, fee_limit, memo
        )

    def approve(
        self,
        spender_addr: str,
        amount: Amount,
        caller_addr: str,
        contract_addr: str,
        fee_limit: int,
        memo: Optional[str] = None
    ) -> TransactionOutcome:
        """
        Call approve(address, uint256).

        Allows spender_addr to withdraw from the caller's account, multiple
        times, up to amount. A second call overwrites the current allowance.
        """
        value = self.to_base_units(amount, caller_addr, contract_addr)
        return self._submit(functions.approve(spender_addr, value), caller_addr, contract_addr, fee_limit, memo)
