from typing import Union

import base58
from eth_utils import is_hex, is_hex_address, to_checksum_address

from .errors import InvalidAddressFormat, InvalidHashFormat

ADDRESS_LENGTH = 20
HASH_LENGTH = 32
TRON_ADDRESS_PREFIX = 0x41

AddressLike = Union[str, bytes, bytearray]
NodeLike = Union[str, bytes, bytearray]


def tron_to_address_bytes(tron_addr: str) -> bytes:
    """
    Convert a Tron Base58Check address (T...) to its 20-byte EVM form
    by stripping the leading 0x41 version byte.
    """
    try:
        decoded = base58.b58decode_check(tron_addr)
    except ValueError as e:
        raise InvalidAddressFormat(f"Invalid Tron address: {tron_addr}") from e
    if len(decoded) != ADDRESS_LENGTH + 1 or decoded[0] != TRON_ADDRESS_PREFIX:
        raise InvalidAddressFormat(f"Invalid Tron address: {tron_addr}")
    return decoded[1:]


def parse_address(addr: AddressLike) -> bytes:
    if isinstance(addr, (bytes, bytearray)):
        if len(addr) != ADDRESS_LENGTH:
            raise InvalidAddressFormat(
                f"Address must be {ADDRESS_LENGTH} bytes, got {len(addr)}"
            )
        return bytes(addr)
    if not isinstance(addr, str):
        raise InvalidAddressFormat(f"Unsupported address type: {type(addr).__name__}")

    a = addr.strip()
    if a.startswith("T"):
        return tron_to_address_bytes(a)
    if not a.lower().startswith("0x"):
        a = "0x" + a
    if not is_hex_address(a):
        raise InvalidAddressFormat(f"Invalid address: {addr}")
    # mixed-case input is accepted without checksum validation
    return bytes.fromhex(a[2:])


def format_address(addr: AddressLike) -> str:
    return to_checksum_address("0x" + parse_address(addr).hex())


def to_node(value: NodeLike) -> bytes:
    """Parse a 32-byte tree node from raw bytes or 0x-prefixed hex."""
    if isinstance(value, (bytes, bytearray)):
        node = bytes(value)
    elif isinstance(value, str):
        v = value.strip()
        if not is_hex(v):
            raise InvalidHashFormat(f"Invalid hex hash: {value}")
        if v.lower().startswith("0x"):
            v = v[2:]
        try:
            node = bytes.fromhex(v)
        except ValueError as e:
            raise InvalidHashFormat(f"Invalid hex hash: {value}") from e
    else:
        raise InvalidHashFormat(f"Unsupported hash type: {type(value).__name__}")

    if len(node) != HASH_LENGTH:
        raise InvalidHashFormat(f"Hash must be {HASH_LENGTH} bytes, got {len(node)}")
    return node


def to_hex(node: bytes) -> str:
    return "0x" + bytes(node).hex()
