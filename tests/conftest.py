"""
Pytest fixtures for the TRC-20 SDK tests.
"""
import pytest
from eth_abi import encode

from trc20_sdk.config import NetworkConfig
from trc20_sdk.signer.local import LocalSigner
from tests.test_helpers import FakeNodeClient, create_test_client, TEST_PRIV_KEY


@pytest.fixture(autouse=True)
def _reset_network_cache():
    """Network presets are cached on the class; start every test from scratch."""
    NetworkConfig._networks_cache = None
    yield
    NetworkConfig._networks_cache = None


@pytest.fixture
def fake_node():
    """Recording node client with no canned results."""
    return FakeNodeClient()


@pytest.fixture
def signer():
    return LocalSigner(TEST_PRIV_KEY)


@pytest.fixture
def client(fake_node, signer):
    """Trc20Client wired to the recording node."""
    return create_test_client(node=fake_node, signer=signer)


@pytest.fixture
def token_results():
    """ABI-encoded constant results for a typical 6-decimal token."""
    return {
        "name": [encode(["string"], ["Tether USD"])],
        "symbol": [encode(["string"], ["USDT"])],
        "decimals": [encode(["uint8"], [6])],
        "totalSupply": [encode(["uint256"], [39_999_999_999_999_999])],
        "balanceOf": [encode(["uint256"], [1_234_567])],
        "allowance": [encode(["uint256"], [0])],
    }
