# PATH: tests/conftest.py
"""
Pytest configuration and fixtures for POOLSCAN tests.
"""

import sys
from pathlib import Path

import pytest

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from core.snapshot import parse_snapshot  # noqa: E402


def pytest_configure(config):
    """Configure pytest."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )


WETH = "0xc02aaa39b223fe8d0a0e5c4f27ead9083c756cc2"
USDC = "0xa0b86991c6218b36c1d19d4a2e9eb0ce3606eb48"
WMATIC = "0x0d500b1d8e8ef31e21c99d1db9a6444d3adf1270"


@pytest.fixture
def eth_document():
    """Single-token, single-pool document."""
    return {
        "tokens": [{"symbol": "ETH", "decimals": 18, "address": "0x1"}],
        "pools": [{
            "dexName": "UniV3",
            "chain": "eth",
            "token0": "0x1",
            "token1": "0x2",
            "reserve0": 1000000,
            "reserve1": 2000000,
            "fee": 3000,
        }],
    }


@pytest.fixture
def multi_document():
    """Three tokens, three pools across two chains."""
    return {
        "tokens": [
            {"symbol": "WETH", "decimals": 18, "address": WETH},
            {"symbol": "USDC", "decimals": 6, "address": USDC},
            {"symbol": "WMATIC", "decimals": 18, "address": WMATIC},
        ],
        "pools": [
            {
                "dexName": "Uniswap V3",
                "chain": "Ethereum",
                "token0": WETH,
                "token1": USDC,
                "reserve0": 1_000_000_000_000_000_000,
                "reserve1": 2_000_000_000,
                "fee": 3000,
            },
            {
                "dexName": "SushiSwap",
                "chain": "Ethereum",
                "token0": WETH,
                "token1": USDC,
                "reserve0": 900_000_000_000_000_000,
                "reserve1": 1_800_000_000,
                "fee": 3000,
            },
            {
                "dexName": "QuickSwap",
                "chain": "Polygon",
                "token0": WMATIC,
                "token1": USDC,
                "reserve0": 5_000_000_000_000_000_000,
                "reserve1": 8_000_000_000,
                "fee": 3000,
            },
        ],
    }


@pytest.fixture
def eth_snapshot(eth_document):
    return parse_snapshot(eth_document)


@pytest.fixture
def multi_snapshot(multi_document):
    return parse_snapshot(multi_document)


@pytest.fixture
def empty_snapshot():
    return parse_snapshot({"tokens": [], "pools": []})
