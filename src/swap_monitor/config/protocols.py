"""
Uniswap V3 contract interface definitions for the swap price monitor.
"""

from typing import Any, Dict, List

from eth_utils import event_signature_to_log_topic, encode_hex

SWAP_EVENT_SIGNATURE = "Swap(address,address,int256,int256,uint160,uint128,int24)"

# Non-indexed Swap fields, in log data order
SWAP_DATA_TYPES = ["int256", "int256", "uint160", "uint128", "int24"]

SWAP_EVENT_TOPIC = encode_hex(event_signature_to_log_topic(SWAP_EVENT_SIGNATURE))

POOL_ABI: List[Dict[str, Any]] = [
    {
        "inputs": [],
        "name": "token0",
        "outputs": [{"internalType": "address", "name": "", "type": "address"}],
        "stateMutability": "view",
        "type": "function",
    },
    {
        "inputs": [],
        "name": "token1",
        "outputs": [{"internalType": "address", "name": "", "type": "address"}],
        "stateMutability": "view",
        "type": "function",
    },
]

ERC20_ABI: List[Dict[str, Any]] = [
    {
        "inputs": [],
        "name": "decimals",
        "outputs": [{"internalType": "uint8", "name": "", "type": "uint8"}],
        "stateMutability": "view",
        "type": "function",
    },
    {
        "inputs": [],
        "name": "symbol",
        "outputs": [{"internalType": "string", "name": "", "type": "string"}],
        "stateMutability": "view",
        "type": "function",
    },
]

