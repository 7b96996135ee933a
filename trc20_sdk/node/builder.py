"""
Builder for unsigned transactions returned by the node.
"""
import copy
import logging
from typing import Callable, Optional

from ..exceptions import Trc20Error
from ..models import Transaction

logger = logging.getLogger(__name__)


def validate_fee_limit(fee_limit: int) -> int:
    """
    Check a fee limit, in sun, before it is applied to a transaction.

    Raises:
        ValueError: If fee_limit is not a non-negative integer
    """
    if isinstance(fee_limit, bool) or not isinstance(fee_limit, int) or fee_limit < 0:
        raise ValueError(f"fee_limit must be a non-negative integer, got {fee_limit!r}")
    return fee_limit


class TransactionBuilder:
    """
    Applies caller-side parameters to an unsigned transaction.

    The transaction id is a hash of the raw data, so changing the fee limit or
    memo invalidates it. ``build()`` then asks ``txid_resolver`` for the new id.
    """

    def __init__(self, transaction: Transaction,
                 txid_resolver: Optional[Callable[[Transaction], str]] = None):
        self._transaction = transaction
        self._raw_data = copy.deepcopy(transaction.raw_data)
        self._txid_resolver = txid_resolver
        self._modified = False

    @property
    def raw_data(self):
        return self._raw_data

    def set_fee_limit(self, fee_limit: int) -> "TransactionBuilder":
        """
        Set the maximum energy fee, in sun, the transaction may burn.

        Raises:
            ValueError: If fee_limit is not a non-negative integer
        """
        validate_fee_limit(fee_limit)
        if self._raw_data.get("fee_limit") != fee_limit:
            self._raw_data["fee_limit"] = fee_limit
            self._modified = True
        return self

    def set_memo(self, memo: Optional[str]) -> "TransactionBuilder":
        """Attach a memo; ``None`` or an empty string removes it."""
        if memo:
            data = memo.encode("utf-8").hex()
            if self._raw_data.get("data") != data:
                self._raw_data["data"] = data
                self._modified = True
        elif "data" in self._raw_data:
            del self._raw_data["data"]
            self._modified = True
        return self

    def build(self) -> Transaction:
        """
        Produce the unsigned transaction with the applied parameters.

        Raises:
            Trc20Error: If the raw data changed and no resolver is available
        """
        if not self._modified:
            return self._transaction.model_copy(deep=True)

        draft = Transaction(
            txID=self._transaction.txid,
            raw_data=copy.deepcopy(self._raw_data),
            signature=[],
            visible=self._transaction.visible,
        )
        if self._txid_resolver is None:
            raise Trc20Error("Transaction was modified but no transaction id resolver is available")

        txid = self._txid_resolver(draft)
        logger.debug(f"Transaction id recomputed: {self._transaction.txid} -> {txid}")
        return draft.model_copy(update={"txid": txid})
