"""
Command line entry point.

Usage:
    allowlist-merkle root <allowlist>
    allowlist-merkle proof <allowlist> <address> [--solidity] [--json]
    allowlist-merkle verify --root ROOT (--address ADDR | --leaf LEAF) [PROOF ...]
    allowlist-merkle export <allowlist> [--out PATH] [--solidity]
"""
from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Sequence

from . import __version__
from .allowlist import Allowlist
from .config import HASH_FUNCTIONS, LEAF_ENCODINGS, Settings, load_settings
from .encoding import format_address
from .errors import AllowlistMerkleError
from .leaf import encode_leaf
from .report import build_report, print_report, save_json, solidity_proof_lines
from .verify import verify_proof

logger = logging.getLogger(__name__)

# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VERIFICATION_FAILED = 2


def setup_logging(level: str = "INFO", log_file: str | None = None) -> None:
    log_level = getattr(logging, level.upper(), logging.INFO)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=handlers,
        force=True,
    )


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="allowlist-merkle",
        description="Build allowlist Merkle roots and claim proofs.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--config", "-c", type=Path, default=None,
                        help="Path to JSON config file (default: ./.allowlist-merkle.json)")
    parser.add_argument("--env-file", type=Path, default=None,
                        help="Path to .env file (default: ./.env)")
    parser.add_argument("--log-level", default=None,
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                        help="Log level (overrides config)")
    parser.add_argument("--hash", dest="hash_name", default=None,
                        choices=sorted(HASH_FUNCTIONS),
                        help="Hash function for leaves and nodes (default: keccak256)")
    parser.add_argument("--leaf-encoding", default=None, choices=LEAF_ENCODINGS,
                        help="packed = keccak256(abi.encodePacked(addr)), "
                             "padded = keccak256(abi.encode(addr))")

    subparsers = parser.add_subparsers(dest="command", required=True)

    p_root = subparsers.add_parser("root", help="Print the Merkle root of an allowlist")
    p_root.add_argument("allowlist", type=Path)

    p_proof = subparsers.add_parser("proof", help="Print the proof for one address")
    p_proof.add_argument("allowlist", type=Path)
    p_proof.add_argument("address")
    p_proof.add_argument("--solidity", action="store_true", help="Print a Solidity bytes32[] literal")
    p_proof.add_argument("--json", dest="as_json", action="store_true", help="Print JSON")

    p_verify = subparsers.add_parser("verify", help="Check a proof against a root")
    p_verify.add_argument("--root", required=True)
    target = p_verify.add_mutually_exclusive_group(required=True)
    target.add_argument("--address")
    target.add_argument("--leaf")
    p_verify.add_argument("proof", nargs="*", help="Sibling hashes, leaf to root")

    p_export = subparsers.add_parser("export", help="Print all proofs and write them as JSON")
    p_export.add_argument("allowlist", type=Path)
    p_export.add_argument("--out", default=None, help="Output path (default: merkle_data.json)")
    p_export.add_argument("--solidity", action="store_true")

    return parser


def _settings_from_args(args: argparse.Namespace) -> Settings:
    settings = load_settings(args.config, args.env_file)
    if args.log_level:
        settings.log_level = args.log_level
    if args.hash_name:
        settings.hash_name = args.hash_name
    if args.leaf_encoding:
        settings.leaf_encoding = args.leaf_encoding
    return settings.validate()


def _load(path: Path, settings: Settings) -> Allowlist:
    return Allowlist.from_file(path, hash_fn=settings.hash_fn, padded=settings.padded)


def cmd_root(args: argparse.Namespace, settings: Settings) -> int:
    allowlist = _load(args.allowlist, settings)
    print(allowlist.hex_root)
    return EXIT_SUCCESS


def cmd_proof(args: argparse.Namespace, settings: Settings) -> int:
    allowlist = _load(args.allowlist, settings)
    proof = allowlist.hex_proof_for(args.address)
    address = format_address(args.address)

    if args.as_json:
        print(json.dumps({"address": address, "root": allowlist.hex_root, "proof": proof}, indent=2))
    else:
        print(f"Merkle Root: {allowlist.hex_root}")
        print(f"Address: {address}")
        print("Proof:", "[" + ", ".join(proof) + "]")
    if args.solidity:
        print("\n// Solidity")
        for line in solidity_proof_lines(address, proof):
            print(line)
    return EXIT_SUCCESS


def cmd_verify(args: argparse.Namespace, settings: Settings) -> int:
    if args.address:
        leaf = encode_leaf(args.address, hash_fn=settings.hash_fn, padded=settings.padded)
    else:
        leaf = args.leaf
    ok = verify_proof(leaf, args.proof, args.root, settings.hash_fn)
    print("valid" if ok else "invalid")
    return EXIT_SUCCESS if ok else EXIT_VERIFICATION_FAILED


def cmd_export(args: argparse.Namespace, settings: Settings) -> int:
    allowlist = _load(args.allowlist, settings)
    data = build_report(allowlist)
    print_report(data, solidity=args.solidity)
    save_json(data, args.out or settings.output)
    return EXIT_SUCCESS


COMMANDS = {
    "root": cmd_root,
    "proof": cmd_proof,
    "verify": cmd_verify,
    "export": cmd_export,
}


def main(argv: Sequence[str] | None = None) -> int:
    parser = create_parser()
    args = parser.parse_args(argv)

    try:
        settings = _settings_from_args(args)
        setup_logging(settings.log_level, settings.log_file)
    except (ValueError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    logger.debug("Settings: %s", settings)

    try:
        return COMMANDS[args.command](args, settings)
    except (AllowlistMerkleError, OSError) as e:
        logger.debug("Command %s failed", args.command, exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR


if __name__ == "__main__":
    sys.exit(main())
