"""
Shared helpers for the TRC-20 SDK tests.
"""
from .client_creator import (
    create_test_client, TEST_FULL_NODE_URL, TEST_PRIV_KEY, TEST_CALLER, TEST_CONTRACT,
    TEST_OWNER, TEST_SPENDER, TEST_RECIPIENT, TEST_FEE_LIMIT
)
from .fake_node import FakeNodeClient, UNSIGNED_TXID, REBUILT_TXID, FAKE_SIGNATURE

__all__ = [
    "create_test_client", "TEST_FULL_NODE_URL", "TEST_PRIV_KEY", "TEST_CALLER", "TEST_CONTRACT",
    "TEST_OWNER", "TEST_SPENDER", "TEST_RECIPIENT", "TEST_FEE_LIMIT",
    "FakeNodeClient", "UNSIGNED_TXID", "REBUILT_TXID", "FAKE_SIGNATURE",
]
