"""
Primitive value types shared by the genesis models.

Addresses are 20-byte identifiers written as lowercase ``0x`` hex strings.
Balances are arbitrary-precision non-negative integers that may be written
in decimal or ``0x`` hex and are always emitted in decimal.
"""
import re
from typing import Annotated, Any

from pydantic import BeforeValidator, Field, PlainSerializer

ADDRESS_LENGTH = 20
EMPTY_ADDRESS = "0x" + "00" * ADDRESS_LENGTH

UINT64_MAX = 2**64 - 1
INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1

_ADDRESS_RE = re.compile(r"^0[xX][0-9a-fA-F]{%d}$" % (ADDRESS_LENGTH * 2))
_HEX_RE = re.compile(r"^0[xX][0-9a-fA-F]+$")
_DEC_RE = re.compile(r"^[0-9]+$")


def parse_address(value: Any) -> str:
    """Return the canonical lowercase form of a 20-byte hex address.

    Raises:
        ValueError: If the value is not a ``0x`` string of 40 hex digits
    """
    if not isinstance(value, str) or not _ADDRESS_RE.match(value):
        raise ValueError(f"invalid address {value!r}: expected 0x followed by {ADDRESS_LENGTH * 2} hex digits")
    return "0x" + value[2:].lower()


def parse_big_int(value: Any) -> int:
    """Decode a non-negative integer given as an int, a decimal string or a 0x-hex string."""
    if isinstance(value, bool):
        raise ValueError(f"invalid integer {value!r}")
    if isinstance(value, int):
        if value < 0:
            raise ValueError(f"integer must be non-negative, got {value}")
        return value
    if isinstance(value, str):
        if _HEX_RE.match(value):
            return int(value[2:], 16)
        if _DEC_RE.match(value):
            return int(value, 10)
    raise ValueError(f"invalid integer {value!r}: expected decimal or 0x-prefixed hex")


def reject_bool(value: Any) -> Any:
    """Refuse JSON booleans before lax integer coercion turns them into 0 or 1."""
    if isinstance(value, bool):
        raise ValueError(f"invalid integer {value!r}")
    return value


def parse_hex_bytes(value: Any) -> bytes:
    """Decode a 0x-prefixed hex string into bytes."""
    if isinstance(value, (bytes, bytearray)):
        return bytes(value)
    if not isinstance(value, str) or not value.startswith(("0x", "0X")):
        raise ValueError(f"{value!r} is not a 0x-prefixed hex string")
    try:
        return bytes.fromhex(value[2:])
    except ValueError:
        raise ValueError(f"{value!r} is not a valid hex string")


def encode_hex_bytes(value: bytes) -> str:
    return "0x" + value.hex()


Address = Annotated[str, BeforeValidator(parse_address)]

BigInt = Annotated[
    int,
    BeforeValidator(parse_big_int),
    PlainSerializer(lambda v: str(v), return_type=str, when_used="json"),
]

Uint64 = Annotated[int, BeforeValidator(reject_bool), Field(ge=0, le=UINT64_MAX)]

Int64 = Annotated[int, BeforeValidator(reject_bool), Field(ge=INT64_MIN, le=INT64_MAX)]

HexBytes = Annotated[
    bytes,
    BeforeValidator(parse_hex_bytes),
    PlainSerializer(encode_hex_bytes, return_type=str, when_used="json"),
]
