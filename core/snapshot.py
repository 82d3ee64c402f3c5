# PATH: core/snapshot.py
"""
Snapshot parsing for POOLSCAN.

PARSE CONTRACT:
- parse_snapshot(document) -> Snapshot, or raises MalformedSnapshot
- All-or-nothing: no partial Snapshot is ever returned
- MalformedSnapshot.path names the offending field, e.g. "pools[3].reserve0"
- No I/O: the document is already in memory (the loader reads files)

WIRE FORMAT (fixed by the producer):
    tokens: [{symbol, decimals, address}]
    pools:  [{dexName, chain, token0, token1, reserve0, reserve1, fee}]

Unknown extra fields are ignored.
"""

import json
from typing import Any, Mapping

from core.constants import MAX_UINT32, MAX_UINT64
from core.exceptions import MalformedSnapshot
from core.logging import get_logger
from core.models import Pool, Snapshot, Token

logger = get_logger("poolscan.core.snapshot")

# wire name -> (python name, kind, upper bound)
TOKEN_FIELDS = (
    ("symbol", "symbol", "str", None),
    ("decimals", "decimals", "uint", MAX_UINT32),
    ("address", "address", "str", None),
)

POOL_FIELDS = (
    ("dexName", "dex_name", "str", None),
    ("chain", "chain", "str", None),
    ("token0", "token0", "str", None),
    ("token1", "token1", "str", None),
    ("reserve0", "reserve0", "uint", MAX_UINT64),
    ("reserve1", "reserve1", "uint", MAX_UINT64),
    ("fee", "fee", "uint", MAX_UINT64),
)


def _read_field(entry: Mapping[str, Any], wire_name: str, kind: str, bound, path: str) -> Any:
    if wire_name not in entry:
        raise MalformedSnapshot(path, "missing required field")

    value = entry[wire_name]

    if kind == "str":
        if not isinstance(value, str):
            raise MalformedSnapshot(
                path, f"expected string, got {type(value).__name__}"
            )
        return value

    # bool is an int subclass; the producer never sends booleans here
    if isinstance(value, bool) or not isinstance(value, int):
        raise MalformedSnapshot(
            path, f"expected unsigned integer, got {type(value).__name__}"
        )
    if value < 0:
        raise MalformedSnapshot(path, f"must be non-negative, got {value}")
    if value > bound:
        raise MalformedSnapshot(path, f"exceeds maximum {bound}")
    return value


def _parse_entries(document: Mapping[str, Any], key: str, fields, model):
    if key not in document:
        raise MalformedSnapshot(key, "missing required field")

    entries = document[key]
    if not isinstance(entries, list):
        raise MalformedSnapshot(key, f"expected list, got {type(entries).__name__}")

    parsed = []
    for i, entry in enumerate(entries):
        entry_path = f"{key}[{i}]"
        if not isinstance(entry, Mapping):
            raise MalformedSnapshot(
                entry_path, f"expected object, got {type(entry).__name__}"
            )
        kwargs = {
            py_name: _read_field(entry, wire_name, kind, bound, f"{entry_path}.{wire_name}")
            for wire_name, py_name, kind, bound in fields
        }
        parsed.append(model(**kwargs))
    return tuple(parsed)


def parse_snapshot(document: Any) -> Snapshot:
    """
    Parse a producer document into a Snapshot.

    Args:
        document: Mapping with "tokens" and "pools" lists

    Returns:
        Frozen Snapshot

    Raises:
        MalformedSnapshot: on the first structural problem found
    """
    if not isinstance(document, Mapping):
        raise MalformedSnapshot("$", f"expected object, got {type(document).__name__}")

    tokens = _parse_entries(document, "tokens", TOKEN_FIELDS, Token)
    pools = _parse_entries(document, "pools", POOL_FIELDS, Pool)

    logger.debug(
        "Snapshot parsed",
        extra={"context": {"token_count": len(tokens), "pool_count": len(pools)}},
    )
    return Snapshot(tokens=tokens, pools=pools)


def parse_snapshot_json(text: str) -> Snapshot:
    """Parse JSON text in the producer format. Invalid JSON is reported at path "$"."""
    try:
        document = json.loads(text)
    except json.JSONDecodeError as e:
        raise MalformedSnapshot("$", f"invalid JSON: {e.msg}", {"line": e.lineno, "column": e.colno}) from e
    except RecursionError as e:
        raise MalformedSnapshot("$", "invalid JSON: nesting too deep") from e
    return parse_snapshot(document)
