"""
Node client interface.

This module defines the operations the token client needs from a TRON node,
independent of the protocol used to reach it.
"""
from abc import ABC, abstractmethod

from ..abi import CallDescriptor
from ..models import ConstantCallResult, Transaction, TransactionOutcome
from .builder import TransactionBuilder


class NodeClient(ABC):
    """
    Abstract base class for node client implementations.

    Implementations own the connection to the node and the key material used
    for signing.
    """

    @abstractmethod
    def constant_call(self, caller_addr: str, contract_addr: str,
                      descriptor: CallDescriptor) -> ConstantCallResult:
        """
        Evaluate a contract function against current state without creating a transaction.

        Args:
            caller_addr: Address the call is made from
            contract_addr: Contract address
            descriptor: Function to call

        Returns:
            Raw constant-call result
        """
        pass

    @abstractmethod
    def trigger_call(self, caller_addr: str, contract_addr: str,
                     descriptor: CallDescriptor) -> TransactionBuilder:
        """
        Ask the node to build an unsigned transaction calling a contract function.

        Returns:
            Builder holding the unsigned transaction
        """
        pass

    @abstractmethod
    def sign_transaction(self, transaction: Transaction) -> Transaction:
        """
        Sign a transaction with the client's key material.

        Raises:
            SigningError: If no signer is bound or signing fails
        """
        pass

    @abstractmethod
    def broadcast_transaction(self, transaction: Transaction) -> TransactionOutcome:
        """Submit a signed transaction to the network."""
        pass

    def close(self) -> None:
        """Close any open connections or resources."""
        pass
