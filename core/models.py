# PATH: core/models.py
"""
Core data models for POOLSCAN.

SNAPSHOT CONTRACT
=================
A Snapshot is one point-in-time capture of tokens and pools.
- Built once per run by core.snapshot.parse_snapshot()
- Frozen: tokens and pools are tuples of frozen dataclasses
- Shared by reference across all engines; nothing mutates it
- Order of tokens/pools is the producer's order and is significant
  (TopPoolEngine and ScoringEngine break ties by snapshot position)

Field names are Python-side names. The producer's wire names
(dexName, camelCase) are mapped in core.snapshot only.
=================
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from core.constants import ADDRESS_DISPLAY_CHARS


def short_address(address: str) -> str:
    """Shorten an address for display: 0x1234...abcd."""
    if len(address) <= 2 * ADDRESS_DISPLAY_CHARS + 3:
        return address
    return f"{address[:ADDRESS_DISPLAY_CHARS]}...{address[-4:]}"


@dataclass(frozen=True)
class Token:
    """Token as emitted by the producer. Symbol is not unique across chains."""
    symbol: str
    decimals: int
    address: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "symbol": self.symbol,
            "decimals": self.decimals,
            "address": self.address,
        }


@dataclass(frozen=True)
class Pool:
    """Liquidity pool on a DEX. Reserves are raw on-chain integers."""
    dex_name: str
    chain: str
    token0: str
    token1: str
    reserve0: int
    reserve1: int
    fee: int

    @property
    def total_reserve(self) -> int:
        return self.reserve0 + self.reserve1

    def to_dict(self) -> Dict[str, Any]:
        """Serialize with the producer's wire field names."""
        return {
            "dexName": self.dex_name,
            "chain": self.chain,
            "token0": self.token0,
            "token1": self.token1,
            "reserve0": self.reserve0,
            "reserve1": self.reserve1,
            "fee": self.fee,
        }


@dataclass(frozen=True)
class Snapshot:
    """Immutable set of tokens and pools analysed in one run."""
    tokens: Tuple[Token, ...] = ()
    pools: Tuple[Pool, ...] = ()

    @property
    def token_count(self) -> int:
        return len(self.tokens)

    @property
    def pool_count(self) -> int:
        return len(self.pools)

    def token_by_address(self, address: str) -> Optional[Token]:
        """
        Look up a token by address (case-insensitive).

        Returns the first matching token in snapshot order, or None.
        """
        wanted = address.lower()
        for token in self.tokens:
            if token.address.lower() == wanted:
                return token
        return None

    def pair_label(self, pool: Pool) -> str:
        """Human label such as "WETH/USDC"; unknown tokens show a short address."""
        labels = []
        for address in (pool.token0, pool.token1):
            token = self.token_by_address(address)
            labels.append(token.symbol if token else short_address(address))
        return "/".join(labels)

    def pools_on_chain(self, chain: str) -> "Snapshot":
        """Return a new Snapshot holding only pools on `chain` (case-insensitive)."""
        wanted = chain.lower()
        return Snapshot(
            tokens=self.tokens,
            pools=tuple(p for p in self.pools if p.chain.lower() == wanted),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "tokens": [t.to_dict() for t in self.tokens],
            "pools": [p.to_dict() for p in self.pools],
        }


@dataclass(frozen=True)
class ScoredPool:
    """
    Score attached to a pool of the snapshot.

    Holds a reference to the snapshot's Pool, never a copy.
    `index` is the pool's position in Snapshot.pools.
    """
    score: float
    pool: Pool
    index: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "index": self.index,
            "score": self.score,
            "pool": self.pool.to_dict(),
        }


@dataclass(frozen=True)
class SkippedPool:
    """Pool left out of a ranking because its score call failed."""
    index: int
    pool: Pool
    reason: str
    code: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "index": self.index,
            "dexName": self.pool.dex_name,
            "chain": self.pool.chain,
            "reason": self.reason,
            "code": self.code,
        }
