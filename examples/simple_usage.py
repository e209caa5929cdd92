#!/usr/bin/env python3
"""
Simple example of using the BNB agent SDK.
"""
import os

from bnb_agent_sdk import AgentClient, OrchestrationError


def main():
    """
    Demonstrate basic usage of the AgentClient.

    This example shows how to:
    1. Build the client from environment variables
    2. Print the wallet summary for an agent prompt
    3. Read balances on two chains
    4. Transfer a small amount of native BNB
    """
    if not os.environ.get("BNB_PRIVATE_KEY"):
        print("ERROR: BNB_PRIVATE_KEY environment variable is required")
        return

    client = AgentClient.from_env()
    try:
        print(client.wallet_summary("bscTestnet"))

        for chain in ("bscTestnet", "opBNBTestnet"):
            balance = client.get_balance(chain)
            print(f"{chain}: {balance.amount} {balance.token} (via {balance.source})")

        recipient = os.environ.get("RECIPIENT")
        if recipient:
            result = client.transfer({
                "chain": "bscTestnet",
                "toAddress": recipient,
                "amount": "0.0001",
            })
            print(f"Transfer sent: {result.tx_hash}")
    except OrchestrationError as e:
        print(f"Error: {e}")
    finally:
        client.close()


if __name__ == "__main__":
    main()
