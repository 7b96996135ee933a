"""
Data models for the TRC-20 SDK.
"""
from typing import Dict, Any, Optional, List
from pydantic import BaseModel, Field

from .exceptions import AbiDecodingError


class ConstantCallResult(BaseModel):
    """Result of a constant (read-only) contract call"""
    constant_result: List[bytes] = Field(default_factory=list)
    energy_used: int = 0

    def first_result_hex(self) -> str:
        """
        Return the first result slot as a ``0x``-prefixed hex string.

        Raises:
            AbiDecodingError: If the node returned no result slots
        """
        if not self.constant_result:
            raise AbiDecodingError("Constant call returned no result")
        return "0x" + self.constant_result[0].hex()


class Transaction(BaseModel):
    """A transaction as exchanged with the node's HTTP API"""
    txid: str = Field(..., alias="txID")
    raw_data: Dict[str, Any]
    raw_data_hex: Optional[str] = None
    signature: List[str] = Field(default_factory=list)
    visible: bool = True

    class Config:
        populate_by_name = True

    @property
    def is_signed(self) -> bool:
        return bool(self.signature)

    def to_api(self) -> Dict[str, Any]:
        """Serialize to the JSON body the node expects."""
        return self.model_dump(by_alias=True, exclude_none=True)


class TransactionOutcome(BaseModel):
    """Broadcast result returned by the node"""
    result: bool = False
    txid: Optional[str] = None
    code: str = "SUCCESS"
    message: str = ""

    class Config:
        populate_by_name = True
