"""
Tests for the state-mutating operations of Trc20Client.
"""
import logging

import pytest
import requests
from eth_abi import encode
from hypothesis import given, settings, strategies as st

from trc20_sdk import functions
from trc20_sdk.abi import TypedValue
from trc20_sdk.exceptions import AmountError, NodeError, SigningError, TransactionError
from trc20_sdk.models import TransactionOutcome
from trc20_sdk.scaling import contract_decimals_scaler
from tests.test_helpers import (
    FakeNodeClient, create_test_client, REBUILT_TXID, FAKE_SIGNATURE,
    TEST_CALLER, TEST_CONTRACT, TEST_FEE_LIMIT, TEST_OWNER, TEST_RECIPIENT, TEST_SPENDER
)

PIPELINE = ["trigger_call", "transaction_id", "sign_transaction", "broadcast_transaction"]

WRITE_OPERATIONS = {
    "transfer": lambda c, **kw: c.transfer(
        TEST_RECIPIENT, 5, TEST_CALLER, TEST_CONTRACT, TEST_FEE_LIMIT, **kw),
    "transferFrom": lambda c, **kw: c.transfer_from(
        TEST_OWNER, TEST_RECIPIENT, 5, TEST_CALLER, TEST_CONTRACT, TEST_FEE_LIMIT, **kw),
    "approve": lambda c, **kw: c.approve(
        TEST_SPENDER, 5, TEST_CALLER, TEST_CONTRACT, TEST_FEE_LIMIT, **kw),
}


def test_transfer_end_to_end(client, fake_node):
    """transfer builds, signs and broadcasts once each, in order"""
    outcome = client.transfer(
        TEST_RECIPIENT, 5, TEST_CALLER, TEST_CONTRACT, fee_limit=10_000_000, memo="pay"
    )

    assert outcome is fake_node.outcome
    assert fake_node.call_names == PIPELINE

    caller, contract, descriptor = fake_node.calls_to("trigger_call")[0]
    assert caller == TEST_CALLER
    assert contract == TEST_CONTRACT
    assert descriptor.inputs == (
        TypedValue.address(TEST_RECIPIENT),
        TypedValue.uint256(5 * 10**18),
    )


def test_fee_limit_and_memo_applied_before_signing(client, fake_node):
    client.transfer(TEST_RECIPIENT, 5, TEST_CALLER, TEST_CONTRACT, fee_limit=10_000_000, memo="pay")

    (unsigned,) = fake_node.calls_to("sign_transaction")[0]
    assert unsigned.raw_data["fee_limit"] == 10_000_000
    assert unsigned.raw_data["data"] == "pay".encode().hex()
    assert unsigned.txid == REBUILT_TXID
    assert unsigned.signature == []

    (signed,) = fake_node.calls_to("broadcast_transaction")[0]
    assert signed.signature == [FAKE_SIGNATURE]
    assert signed.txid == REBUILT_TXID


def test_memo_is_optional(client, fake_node):
    client.transfer(TEST_RECIPIENT, 1, TEST_CALLER, TEST_CONTRACT, TEST_FEE_LIMIT)

    (unsigned,) = fake_node.calls_to("sign_transaction")[0]
    assert "data" not in unsigned.raw_data
    assert unsigned.raw_data["fee_limit"] == TEST_FEE_LIMIT


@pytest.mark.parametrize("function_name,expected_inputs", [
    ("transfer", (TypedValue.address(TEST_RECIPIENT), TypedValue.uint256(5 * 10**18))),
    ("transferFrom", (TypedValue.address(TEST_OWNER), TypedValue.address(TEST_RECIPIENT),
                      TypedValue.uint256(5 * 10**18))),
    ("approve", (TypedValue.address(TEST_SPENDER), TypedValue.uint256(5 * 10**18))),
])
def test_write_operations_descriptors(client, fake_node, function_name, expected_inputs):
    outcome = WRITE_OPERATIONS[function_name](client, memo="m")

    assert outcome is fake_node.outcome
    assert fake_node.call_names == PIPELINE
    _, _, descriptor = fake_node.calls_to("trigger_call")[0]
    assert descriptor.function_name == function_name
    assert descriptor.inputs == expected_inputs
    assert descriptor.signature == functions.STANDARD_FUNCTIONS[function_name]


def test_rejected_broadcast_returned_verbatim(fake_node, signer):
    """A broadcast the node did not accept is reported, not hidden"""
    fake_node.outcome = TransactionOutcome(
        result=False, txid=REBUILT_TXID, code="SIGERROR", message="Validate signature error"
    )
    client = create_test_client(node=fake_node, signer=signer)

    outcome = client.approve(TEST_SPENDER, 1, TEST_CALLER, TEST_CONTRACT, TEST_FEE_LIMIT)

    assert outcome.result is False
    assert outcome.code == "SIGERROR"


@pytest.mark.parametrize("function_name", sorted(WRITE_OPERATIONS))
def test_signing_failure_stops_before_broadcast(client, fake_node, function_name):
    fake_node.fail_on["sign_transaction"] = SigningError("No signer available")

    with pytest.raises(TransactionError) as exc_info:
        WRITE_OPERATIONS[function_name](client)

    assert exc_info.value.stage == "sign"
    assert isinstance(exc_info.value.__cause__, SigningError)
    assert "broadcast_transaction" not in fake_node.call_names


def test_build_failure_stops_pipeline(client, fake_node):
    fake_node.fail_on["trigger_call"] = NodeError("Contract validate error", code="CONTRACT_VALIDATE_ERROR")

    with pytest.raises(TransactionError) as exc_info:
        client.transfer(TEST_RECIPIENT, 5, TEST_CALLER, TEST_CONTRACT, TEST_FEE_LIMIT)

    assert exc_info.value.stage == "build"
    assert exc_info.value.__cause__.code == "CONTRACT_VALIDATE_ERROR"
    assert fake_node.call_names == ["trigger_call"]


def test_txid_refresh_failure_is_build_failure(client, fake_node):
    fake_node.fail_on["transaction_id"] = NodeError("Could not recompute transaction id")

    with pytest.raises(TransactionError) as exc_info:
        client.transfer(TEST_RECIPIENT, 5, TEST_CALLER, TEST_CONTRACT, TEST_FEE_LIMIT, memo="x")

    assert exc_info.value.stage == "build"
    assert "sign_transaction" not in fake_node.call_names


def test_broadcast_failure_is_reported_with_stage(client, fake_node):
    fake_node.fail_on["broadcast_transaction"] = NodeError("Node error on /wallet/broadcasttransaction")

    with pytest.raises(TransactionError, match=r"\[broadcast\]") as exc_info:
        client.transfer(TEST_RECIPIENT, 5, TEST_CALLER, TEST_CONTRACT, TEST_FEE_LIMIT)

    assert exc_info.value.stage == "broadcast"


@pytest.mark.parametrize("method", ["trigger_call", "sign_transaction", "broadcast_transaction"])
def test_transport_errors_pass_through(client, fake_node, method):
    error = requests.Timeout("read timed out")
    fake_node.fail_on[method] = error

    with pytest.raises(requests.Timeout) as exc_info:
        client.transfer(TEST_RECIPIENT, 5, TEST_CALLER, TEST_CONTRACT, TEST_FEE_LIMIT)

    assert exc_info.value is error


@pytest.mark.parametrize("method,stage", [
    ("trigger_call", "build"),
    ("sign_transaction", "sign"),
    ("broadcast_transaction", "broadcast"),
])
def test_transport_errors_are_logged_with_stage(client, fake_node, caplog, method, stage):
    error = requests.Timeout("read timed out")
    fake_node.fail_on[method] = error
    caplog.set_level(logging.ERROR, logger="trc20_sdk.client")

    with pytest.raises(requests.Timeout):
        client.transfer(TEST_RECIPIENT, 5, TEST_CALLER, TEST_CONTRACT, TEST_FEE_LIMIT)

    assert f"transport error during {stage}" in caplog.text
    if hasattr(error, "add_note"):
        assert error.__notes__ == [f"stage: {stage}"]


@pytest.mark.parametrize("fee_limit", [-1, 1.5, True, "100", None])
def test_invalid_fee_limit_is_build_failure(client, fake_node, fee_limit):
    with pytest.raises(TransactionError, match="fee_limit") as exc_info:
        client.transfer(TEST_RECIPIENT, 5, TEST_CALLER, TEST_CONTRACT, fee_limit=fee_limit)

    assert exc_info.value.stage == "build"
    assert fake_node.calls == []


def test_negative_amount_never_reaches_node(client, fake_node):
    with pytest.raises(AmountError):
        client.transfer(TEST_RECIPIENT, -5, TEST_CALLER, TEST_CONTRACT, TEST_FEE_LIMIT)
    assert fake_node.calls == []


def test_contract_decimals_scaler(signer):
    """The decimals-aware scaler reads decimals() before building"""
    node = FakeNodeClient(constant_results={"decimals": [encode(["uint8"], [6])]})
    client = create_test_client(node=node, signer=signer, amount_scaler=contract_decimals_scaler)

    client.transfer(TEST_RECIPIENT, "2.5", TEST_CALLER, TEST_CONTRACT, TEST_FEE_LIMIT)

    assert node.call_names == ["constant_call"] + PIPELINE
    _, _, descriptor = node.calls_to("trigger_call")[0]
    assert descriptor.inputs[1] == TypedValue.uint256(2_500_000)


AMOUNT_OPERATIONS = {
    "transfer": (
        lambda c, amount: c.transfer(TEST_RECIPIENT, amount, TEST_CALLER, TEST_CONTRACT, TEST_FEE_LIMIT),
        lambda value: functions.transfer(TEST_RECIPIENT, value),
    ),
    "transferFrom": (
        lambda c, amount: c.transfer_from(
            TEST_OWNER, TEST_RECIPIENT, amount, TEST_CALLER, TEST_CONTRACT, TEST_FEE_LIMIT),
        lambda value: functions.transfer_from(TEST_OWNER, TEST_RECIPIENT, value),
    ),
    "approve": (
        lambda c, amount: c.approve(TEST_SPENDER, amount, TEST_CALLER, TEST_CONTRACT, TEST_FEE_LIMIT),
        lambda value: functions.approve(TEST_SPENDER, value),
    ),
}


@pytest.mark.parametrize("function_name", sorted(AMOUNT_OPERATIONS))
@settings(max_examples=50)
@given(amount=st.integers(min_value=0, max_value=10**30))
def test_encoded_payload_is_deterministic(function_name, amount):
    """Same operation and arguments always give the same payload"""
    call, expected = AMOUNT_OPERATIONS[function_name]
    payloads = []
    for _ in range(2):
        node = FakeNodeClient()
        client = create_test_client(node=node, priv_key=None)
        call(client, amount)
        _, _, descriptor = node.calls_to("trigger_call")[0]
        payloads.append(descriptor.encode())

    assert payloads[0] == payloads[1]
    assert payloads[0] == expected(amount * 10**18).encode()
