"""
Call descriptors for the standard TRC-20 functions (TIP-20).

Each factory returns a fresh ``CallDescriptor`` whose inputs and outputs are in
the order of the standard's canonical signature. Amounts passed to the
state-mutating factories are base-unit values; scaling happens in the client.
"""
from .abi import AbiType, CallDescriptor, TypedValue

# Canonical signatures of the standard functions
STANDARD_FUNCTIONS = {
    "name": "name()",
    "symbol": "symbol()",
    "decimals": "decimals()",
    "totalSupply": "totalSupply()",
    "balanceOf": "balanceOf(address)",
    "allowance": "allowance(address,address)",
    "transfer": "transfer(address,uint256)",
    "transferFrom": "transferFrom(address,address,uint256)",
    "approve": "approve(address,uint256)",
}


def name() -> CallDescriptor:
    """function name() public view returns (string)"""
    return CallDescriptor("name", (), (AbiType.STRING,))


def symbol() -> CallDescriptor:
    """function symbol() public view returns (string)"""
    return CallDescriptor("symbol", (), (AbiType.STRING,))


def decimals() -> CallDescriptor:
    """function decimals() public view returns (uint8)"""
    return CallDescriptor("decimals", (), (AbiType.UINT8,))


def total_supply() -> CallDescriptor:
    """function totalSupply() public view returns (uint256)"""
    return CallDescriptor("totalSupply", (), (AbiType.UINT256,))


def balance_of(owner: str) -> CallDescriptor:
    """function balanceOf(address _owner) public view returns (uint256 balance)"""
    return CallDescriptor("balanceOf", (TypedValue.address(owner),), (AbiType.UINT256,))


def allowance(owner: str, spender: str) -> CallDescriptor:
    """function allowance(address _owner, address _spender) public view returns (uint256 remaining)"""
    return CallDescriptor(
        "allowance",
        (TypedValue.address(owner), TypedValue.address(spender)),
        (AbiType.UINT256,),
    )


def transfer(to: str, value: int) -> CallDescriptor:
    """function transfer(address _to, uint256 _value) public returns (bool success)"""
    return CallDescriptor(
        "transfer",
        (TypedValue.address(to), TypedValue.uint256(value)),
        (AbiType.BOOL,),
    )


def transfer_from(from_: str, to: str, value: int) -> CallDescriptor:
    """function transferFrom(address _from, address _to, uint256 _value) public returns (bool success)"""
    return CallDescriptor(
        "transferFrom",
        (TypedValue.address(from_), TypedValue.address(to), TypedValue.uint256(value)),
        (AbiType.BOOL,),
    )


def approve(spender: str, value: int) -> CallDescriptor:
    """function approve(address _spender, uint256 _value) public returns (bool success)"""
    return CallDescriptor(
        "approve",
        (TypedValue.address(spender), TypedValue.uint256(value)),
        (AbiType.BOOL,),
    )
