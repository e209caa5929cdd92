"""
Well-known addresses and protocol constants.
"""

# Placeholder understood by swap/bridge aggregators as "the chain's native coin"
NATIVE_TOKEN_ADDRESS = "0xEeeeeEeeeEeEeeEeEeEeeEEEeeeeEeeeeeeeEEeE"

# opBNB standard bridge
L1_BRIDGE_ADDRESS = "0xF05F0e4362859c3331Cb9395CBC201E3Fa6757Ea"
L2_BRIDGE_ADDRESS = "0x4000698e3De52120DE28181BaACda82B21568416"
# Token address the L2 bridge uses to mean "native BNB" on withdrawals
LEGACY_ERC20_ETH = "0xDeadDeAddeAddEAddeadDEaDDEAdDeaDDeAD0000"
BRIDGE_MIN_GAS_LIMIT = 1
BRIDGE_EXTRA_DATA = b""

# Lista DAO liquid staking on BSC
LISTA_STAKE_MANAGER_ADDRESS = "0x1adB950d8bB3dA4bE104211D5AB038628e477fE6"
SLIS_BNB_ADDRESS = "0xB0b84D294e0C75A6abe60171b70edEb2EFd14A1B"

# SPACE ID registry on BNB Smart Chain (ENS-compatible, serves .bnb names)
SPACE_ID_REGISTRY_ADDRESS = "0x08CEd32a7f3eeC915Ba84415e9C07a7286977956"

# Fixed gas settings used when sending "everything but gas"
NATIVE_TRANSFER_GAS = 21000
DEFAULT_GAS_PRICE = 3_000_000_000  # 3 gwei

NATIVE_DECIMALS = 18

NAME_SERVICE_TIMEOUT = 5.0
DEFAULT_SLIPPAGE = 0.05

# Symbols that an extraction step sometimes puts in an address field
COMMON_TOKEN_SYMBOLS = frozenset({
    "USDT", "USDC", "BNB", "TBNB", "ETH", "WETH", "BTC", "BTCB", "BUSD", "DAI",
    "WBNB", "CAKE", "TRON", "LINK", "OM", "UNI", "PEPE", "AAVE", "ATOM",
})

# BSC testnet tokens; the aggregator has no testnet coverage
TESTNET_TOKEN_ADDRESSES = {
    "BUSD": "0x48D87A2d14De41E2308A764905B93E05c9377cE1",
    "DAI": "0x46B48c1Ef4B5F15B7DdC415290CEC2f774cD1021",
    "ETH": "0x635780E5D02Ab29d7aE14d266936A38d3D5B0CC5",
    "USDC": "0x053Fc65249dF91a02Ddb294A081f774615aB45F4",
}

# Supported bridge pairs (from_chain, to_chain)
BRIDGE_L1_CHAIN = "bsc"
BRIDGE_L2_CHAIN = "opBNB"

STAKE_CHAIN = "bsc"
SWAP_CHAIN = "bsc"

# Tokens dispensed by the BSC testnet faucet
FAUCET_TOKENS = ("BNB", "BTC", "BUSD", "DAI", "ETH", "USDC")
FAUCET_DEFAULT_TOKEN = "BNB"
FAUCET_CHAIN = "bscTestnet"
