#!/usr/bin/env python3
"""
Bridge native BNB from BNB Smart Chain to opBNB and back.
"""
import os
import sys

from bnb_agent_sdk import (
    AgentClient, ChainExecutionError, InfrastructureError, ValidationError,
)


def main():
    if not os.environ.get("BNB_PRIVATE_KEY"):
        print("ERROR: BNB_PRIVATE_KEY environment variable is required")
        return 1

    amount = sys.argv[1] if len(sys.argv) > 1 else "0.001"
    client = AgentClient.from_env()
    try:
        # Self-bridge: no toAddress means the tokens arrive at our own address
        deposit = client.bridge({"fromChain": "bsc", "toChain": "opBNB", "amount": amount})
        print(f"Deposit via {deposit.entry_point}: {deposit.tx_hash}")
        print("Funds arrive on opBNB once the bridge relays the deposit.")

        withdrawal = client.bridge({"fromChain": "opBNB", "toChain": "bsc", "amount": amount})
        print(f"Withdrawal via {withdrawal.entry_point}: {withdrawal.tx_hash}")
        print(f"Delegation fee paid: {withdrawal.delegation_fee} wei")
    except ValidationError as e:
        print(f"Invalid request: {e}")
        return 1
    except ChainExecutionError as e:
        print(f"Transaction failed ({e.kind.value}): {e}")
        return 1
    except InfrastructureError as e:
        print(f"Network problem: {e}")
        return 1
    finally:
        client.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
