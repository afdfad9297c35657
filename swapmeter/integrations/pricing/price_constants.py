from typing import Dict

from swapmeter.configuration.config import settings

BASE_URL: str = settings.PRICE_API_BASE_URL.rstrip("/")
TOKEN_PRICE_ENDPOINT: str = "tokens/price"

NATIVE_TOKEN_ZERO_ADDRESS: str = "0x0000000000000000000000000000000000000000"

RATE_LIMIT_WINDOW_SECONDS: float = 60.0
TOKEN_NOT_FOUND_DETAIL: str = "Token not found"

# Wrapped-native token contracts used as a pricing proxy for each chain's native coin.
# Keyed by canonical network id.
WRAPPED_NATIVE_ADDRESSES: Dict[str, str] = {
    "eth": "0xc02aaa39b223fe8d0a0e5c4f27ead9083c756cc2",  # WETH
    "bsc": "0xbb4cdb9cbd36b01bd1cbaebf2de08d9173bc095c",  # WBNB
    "polygon": "0x0d500b1d8e8ef31e21c99d1db9a6444d3adf1270",  # WMATIC
    "ftm": "0x21be370d5312f44cb42ce377bc9b8a0cef1a4c83",  # WFTM
    "avax": "0xb31f66aa3c1e785363f0875a1b74e27b85fd66c7",  # WAVAX
    "arb": "0x82af49447d8a07e3bd95bd0d56f35241523fbab1",  # WETH
    "op": "0x4200000000000000000000000000000000000006",  # WETH
    "base": "0x4200000000000000000000000000000000000006",  # WETH
    "zksync": "0x5aea5775959fbc2557cc8789bc1bf90a239d9a91",  # WETH
    "linea": "0xe5d7c2a44ffddf6b295a15c148167daaaf5cf34f",  # WETH
    "scroll": "0x5300000000000000000000000000000000000004",  # WETH
}
