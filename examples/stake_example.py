#!/usr/bin/env python3
"""
Liquid staking on BSC: deposit BNB, request a withdrawal, claim matured requests.
"""
import os
import sys

from bnb_agent_sdk import AgentClient, OrchestrationError


def main():
    if not os.environ.get("BNB_PRIVATE_KEY"):
        print("ERROR: BNB_PRIVATE_KEY environment variable is required")
        return 1

    action = sys.argv[1] if len(sys.argv) > 1 else "claim"
    params = {"action": action}
    if len(sys.argv) > 2:
        params["amount"] = sys.argv[2]

    client = AgentClient.from_env()
    try:
        if action == "status":
            for request in client.staking.withdrawal_requests():
                state = "claimable" if request.claimable else "unbonding"
                print(f"#{request.index}: {request.amount_in_token} wei ({state})")
            return 0

        result = client.stake(params)
        print(result.message)
        for tx_hash in result.claim_tx_hashes or ([result.tx_hash] if result.tx_hash else []):
            print(f"  tx: {tx_hash}")
    except OrchestrationError as e:
        print(f"Error: {e}")
        return 1
    finally:
        client.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
