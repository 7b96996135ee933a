"""
Node client module for the TRC-20 SDK.

``NodeClient`` is the interface the token client depends on;
``HttpNodeClient`` binds it to the full-node HTTP API.
"""
from .builder import TransactionBuilder, validate_fee_limit
from .client import NodeClient
from .http_client import HttpNodeClient

__all__ = ['NodeClient', 'HttpNodeClient', 'TransactionBuilder', 'validate_fee_limit']
