"""Protocol constants for the AMM facade.

Centralizes well-known addresses, integer bounds and pool parameters.
"""

# Null asset handle (never a valid token)
ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"

# Reserve slots are stored as uint112
UINT112_MAX = 2**112 - 1

# Every intermediate of the pricing formula must fit in uint256
UINT256_MAX = 2**256 - 1

# Shares permanently locked at the zero address on a pool's first mint
MINIMUM_LIQUIDITY = 1000

# Default fee: 997/1000 of the input counts towards the price (0.3% fee)
DEFAULT_FEE_NUMERATOR = 997
DEFAULT_FEE_DENOMINATOR = 1000

# Native currency uses 18 decimals
NATIVE_DECIMALS = 18
