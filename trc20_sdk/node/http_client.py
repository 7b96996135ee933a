"""
HTTP binding of the node client for the TRON full-node API.
"""
import logging
import urllib.parse
from typing import Any, Dict, Optional

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from ..abi import AbiType, CallDescriptor
from ..exceptions import AbiDecodingError, NodeError, SigningError
from ..models import ConstantCallResult, Transaction, TransactionOutcome
from ..signer import Signer
from .builder import TransactionBuilder
from .client import NodeClient

# Selector of Error(string), the standard revert payload
REVERT_SELECTOR = bytes.fromhex("08c379a0")


def validate_endpoint(url_name: str, url: str) -> None:
    """
    Require https:// for anything that is not localhost.

    Raises:
        ValueError: If the URL uses another scheme for a remote host
    """
    parsed = urllib.parse.urlparse(url)
    host = parsed.hostname or ''
    is_local = host in ('localhost', '127.0.0.1')
    if parsed.scheme != 'https' and not (is_local and parsed.scheme == 'http'):
        raise ValueError(f"{url_name} must use https:// for security (got: {url})")


def decode_node_message(message: Any) -> str:
    """Node error messages are usually hex-encoded UTF-8; fall back to the raw value."""
    if not isinstance(message, str):
        return "" if message is None else str(message)
    try:
        return bytes.fromhex(message).decode("utf-8")
    except (ValueError, UnicodeDecodeError):
        return message


def revert_reason(data: bytes) -> str:
    """Extract the reason string from Error(string) revert data."""
    if data[:4] == REVERT_SELECTOR:
        try:
            return AbiType.STRING.decode(data[4:])
        except AbiDecodingError:
            pass
    return "0x" + data.hex()


class HttpNodeClient(NodeClient):
    """
    Node client talking to a TRON full node over its HTTP API.

    Addresses are sent in base58check form (``visible: true``).
    """

    def __init__(
        self,
        full_node_url: str,
        signer: Optional[Signer] = None,
        api_key: Optional[str] = None,
        retry_count: int = 3,
        timeout: int = 30,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize the HTTP node client

        Args:
            full_node_url: Full node HTTP endpoint (e.g. "https://api.trongrid.io")
            signer: Signer used for state-mutating calls (optional for read-only use)
            api_key: TronGrid API key sent as TRON-PRO-API-KEY
            retry_count: Number of transport-level retries
            timeout: Timeout for HTTP requests in seconds
            logger: Optional logger instance

        Raises:
            ValueError: If the URL does not use https (unless it is localhost/127.0.0.1)
        """
        validate_endpoint("full_node_url", full_node_url)

        self.full_node_url = full_node_url.rstrip('/')
        self.signer = signer
        self.timeout = timeout
        self.logger = logger or logging.getLogger(__name__)

        self.session = requests.Session()
        if api_key:
            self.session.headers["TRON-PRO-API-KEY"] = api_key
        retries = Retry(
            total=retry_count,
            backoff_factor=0.5,
            status_forcelist=[500, 502, 503, 504],
            allowed_methods=["GET", "POST"],
            raise_on_status=False,
            connect=retry_count,
            read=retry_count,
            other=retry_count
        )
        self.session.mount("http://", HTTPAdapter(max_retries=retries))
        self.session.mount("https://", HTTPAdapter(max_retries=retries))

    def _post(self, path: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        """
        POST a JSON payload and return the decoded body.

        Transport errors from requests propagate unchanged.

        Raises:
            NodeError: If the body is not a JSON object or carries an Error field
        """
        self.logger.debug(f"POST {path}")
        response = self.session.post(
            f"{self.full_node_url}{path}",
            json=payload,
            timeout=self.timeout
        )
        response.raise_for_status()

        try:
            data = response.json()
        except ValueError as e:
            raise NodeError(f"Invalid JSON response from node: {e}")

        if not isinstance(data, dict):
            raise NodeError(f"Unexpected response from node: {data!r}")
        if "Error" in data:
            raise NodeError(f"Node error on {path}: {data['Error']}")
        return data

    @staticmethod
    def _check_result(data: Dict[str, Any], action: str) -> None:
        result = data.get("result") or {}
        if not result.get("result"):
            code = result.get("code")
            message = decode_node_message(result.get("message", ""))
            raise NodeError(f"{action} rejected by node: {code}: {message}", code=code)

    def _call_payload(self, caller_addr: str, contract_addr: str,
                      descriptor: CallDescriptor) -> Dict[str, Any]:
        self.logger.debug(
            f"Calling {descriptor.signature} (selector 0x{descriptor.selector.hex()}) on {contract_addr}"
        )
        return {
            "owner_address": caller_addr,
            "contract_address": contract_addr,
            "function_selector": descriptor.signature,
            "parameter": descriptor.encode_arguments().hex(),
            "visible": True,
        }

    def constant_call(self, caller_addr: str, contract_addr: str,
                      descriptor: CallDescriptor) -> ConstantCallResult:
        data = self._post(
            "/wallet/triggerconstantcontract",
            self._call_payload(caller_addr, contract_addr, descriptor)
        )
        self._check_result(data, f"Constant call {descriptor.signature}")

        try:
            results = [bytes.fromhex(item) for item in data.get("constant_result") or []]
        except (TypeError, ValueError) as e:
            raise AbiDecodingError(
                f"Constant call {descriptor.signature} returned a malformed result: {e}"
            ) from e

        ret = (data.get("transaction") or {}).get("ret") or [{}]
        if ret[0].get("ret") == "FAILED":
            reason = revert_reason(results[0]) if results else "no reason given"
            raise NodeError(f"Constant call {descriptor.signature} reverted: {reason}", code="REVERT")

        return ConstantCallResult(
            constant_result=results,
            energy_used=data.get("energy_used", 0)
        )

    def trigger_call(self, caller_addr: str, contract_addr: str,
                     descriptor: CallDescriptor) -> TransactionBuilder:
        payload = self._call_payload(caller_addr, contract_addr, descriptor)
        payload["call_value"] = 0
        data = self._post("/wallet/triggersmartcontract", payload)
        self._check_result(data, f"Trigger call {descriptor.signature}")

        if "transaction" not in data:
            raise NodeError(f"Trigger call {descriptor.signature} returned no transaction")
        transaction = Transaction.model_validate(data["transaction"])
        return TransactionBuilder(transaction, txid_resolver=self.transaction_id)

    def transaction_id(self, transaction: Transaction) -> str:
        """
        Have the node recompute the id of a transaction whose raw data changed.

        Raises:
            NodeError: If the node response carries no transaction id
        """
        data = self._post("/wallet/getsignweight", transaction.to_api())
        try:
            return data["transaction"]["transaction"]["txID"]
        except (KeyError, TypeError):
            result = data.get("result") or {}
            message = decode_node_message(result.get("message", ""))
            raise NodeError(f"Could not recompute transaction id: {message or data!r}",
                            code=result.get("code"))

    def sign_transaction(self, transaction: Transaction) -> Transaction:
        if self.signer is None:
            raise SigningError("No signer available")
        signature = self.signer.sign_digest(bytes.fromhex(transaction.txid))
        return transaction.model_copy(
            update={"signature": list(transaction.signature) + [signature.hex()]}
        )

    def broadcast_transaction(self, transaction: Transaction) -> TransactionOutcome:
        data = self._post("/wallet/broadcasttransaction", transaction.to_api())
        outcome = TransactionOutcome(
            result=bool(data.get("result", False)),
            txid=data.get("txid", transaction.txid),
            code=data.get("code", "SUCCESS"),
            message=decode_node_message(data.get("message", ""))
        )
        if outcome.result:
            self.logger.info(f"Transaction broadcast: {outcome.txid}")
        else:
            self.logger.warning(f"Broadcast of {outcome.txid} not accepted: {outcome.code} {outcome.message}")
        return outcome

    def close(self) -> None:
        self.session.close()
