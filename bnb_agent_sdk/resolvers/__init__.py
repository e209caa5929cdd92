"""
Address and token resolution.
"""
from .address import AddressResolver, ResolutionRequest, Strategy
from .names import NameService, SpaceIdNameService
from .token import TokenResolver, erc20_contract, read_decimals

__all__ = [
    "AddressResolver",
    "ResolutionRequest",
    "Strategy",
    "NameService",
    "SpaceIdNameService",
    "TokenResolver",
    "erc20_contract",
    "read_decimals",
]
