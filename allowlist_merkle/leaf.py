from typing import Callable

from eth_utils import keccak
from web3 import Web3

from .encoding import AddressLike, format_address, parse_address

HashFn = Callable[[bytes], bytes]


def address_payload(addr: AddressLike, padded: bool = False) -> bytes:
    """
    Bytes that get hashed into a leaf.

    packed: the raw 20 address bytes, keccak256(abi.encodePacked(addr))
    padded: left-padded to a 32-byte word, keccak256(abi.encode(addr))
    """
    b20 = parse_address(addr)
    if padded:
        return b"\x00" * 12 + b20
    return b20


def encode_leaf(addr: AddressLike, hash_fn: HashFn = keccak, padded: bool = False) -> bytes:
    return hash_fn(address_payload(addr, padded=padded))


def solidity_leaf(addr: AddressLike, padded: bool = False) -> bytes:
    """
    Match the contract-side leaf:
        keccak256(abi.encodePacked(msg.sender))
    or, with padded=True,
        keccak256(abi.encode(msg.sender))
    """
    checksum = format_address(addr)
    if padded:
        return bytes(Web3.solidity_keccak(['bytes32'], [address_payload(checksum, padded=True)]))
    return bytes(Web3.solidity_keccak(['address'], [checksum]))
