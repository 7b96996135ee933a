#!/usr/bin/env python3
"""
Example of using Trc20Client against the Nile testnet.
"""
import os

from trc20_sdk import Trc20Client, contract_decimals_scaler


def main():
    """
    Demonstrate usage of the Trc20Client.

    This example shows how to:
    1. Initialize the client from a network preset
    2. Read token metadata and balances with constant calls
    3. Transfer tokens, scaling the amount by the token's own decimals
    """
    PRIVATE_KEY = os.environ.get("PRIVATE_KEY")
    CONTRACT_ADDRESS = os.environ.get("TOKEN_CONTRACT")
    RECIPIENT = os.environ.get("RECIPIENT")

    if not PRIVATE_KEY or not CONTRACT_ADDRESS:
        print("ERROR: PRIVATE_KEY and TOKEN_CONTRACT environment variables are required")
        return

    with Trc20Client.of_nile(PRIVATE_KEY, amount_scaler=contract_decimals_scaler) as client:
        caller = client.address
        print(f"Signer address: {caller}")

        name = client.get_name(caller, CONTRACT_ADDRESS)
        symbol = client.get_symbol(caller, CONTRACT_ADDRESS)
        decimals = client.get_decimals(caller, CONTRACT_ADDRESS)
        balance = client.get_balance_of(caller, caller, CONTRACT_ADDRESS)
        print(f"{name} ({symbol}), {decimals} decimals")
        print(f"Balance: {balance / 10**decimals} {symbol}")

        if not RECIPIENT:
            return

        outcome = client.transfer(
            RECIPIENT, "1.5", caller, CONTRACT_ADDRESS,
            fee_limit=10_000_000, memo="example transfer"
        )
        if outcome.result:
            print(f"Transfer broadcast: {client.tx_url(outcome.txid)}")
        else:
            print(f"Transfer rejected: {outcome.code} {outcome.message}")


if __name__ == "__main__":
    main()
