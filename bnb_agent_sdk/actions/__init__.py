"""
Value-moving operations built on the transaction pipeline.
"""
from .balance import BalanceReader
from .bridge import BridgeDirection, BridgeDirector, BridgeEntryPoint, ENTRY_POINTS, select_entry_point
from .deploy import ContractDeployer
from .faucet import FaucetAction, FaucetTransport
from .stake import StakeCoordinator
from .swap import SwapAction
from .transfer import TransferAction

__all__ = [
    "BalanceReader",
    "BridgeDirection",
    "BridgeDirector",
    "BridgeEntryPoint",
    "ENTRY_POINTS",
    "select_entry_point",
    "ContractDeployer",
    "FaucetAction",
    "FaucetTransport",
    "StakeCoordinator",
    "SwapAction",
    "TransferAction",
]
