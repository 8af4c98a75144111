import json
import logging
from typing import Any, Dict, List

from .allowlist import Allowlist
from .encoding import format_address, to_hex
from .verify import verify_proof

logger = logging.getLogger(__name__)


def build_report(allowlist: Allowlist) -> Dict[str, Any]:
    root = allowlist.root
    entries = []
    first_index: Dict[bytes, int] = {}
    for index, (addr, leaf) in enumerate(zip(allowlist.addresses, allowlist.leaves)):
        duplicate = leaf in first_index
        # duplicates resolve to the first occurrence's proof
        first = first_index.setdefault(leaf, index)
        proof = allowlist.tree.get_proof_by_index(first)
        entries.append({
            'index': index,
            'address': format_address(addr),
            'leaf': to_hex(leaf),
            'proof': [to_hex(p) for p in proof],
            'valid': verify_proof(leaf, proof, root, allowlist.hash_fn),
            'duplicate': duplicate,
        })

    return {
        'merkleRoot': to_hex(root),
        'count': len(allowlist),
        'leafEncoding': 'padded' if allowlist.padded else 'packed',
        'entries': entries,
    }


def solidity_proof_lines(address: str, proof: List[str]) -> List[str]:
    name = format_address(address).replace("0x", "").upper()
    lines = [f"PROOF_{name} = new bytes32[]({len(proof)});"]
    for i, p in enumerate(proof):
        lines.append(f"PROOF_{name}[{i}] = {p};")
    return lines


def print_report(data: Dict[str, Any], solidity: bool = False):
    print("=" * 80)
    print("ALLOWLIST MERKLE ROOT")
    print("=" * 80)
    print(f"Merkle Root: {data['merkleRoot']}")
    print(f"Address Count: {data['count']}")
    print(f"Leaf Encoding: {data['leafEncoding']}")
    print()
    print("=" * 80)
    print("ADDRESSES & PROOFS")
    print("=" * 80)

    for item in data['entries']:
        print(f"\n--- Address {item['index']} ---")
        print(f"Address: {item['address']}")
        if item['duplicate']:
            print("Duplicate: proof is shared with the first occurrence")
        print(f"Leaf: {item['leaf']}")
        print(f"Proof Valid: {item['valid']}")
        print(f"Proof: [{', '.join(item['proof'])}]")
        if solidity:
            print("\n// Solidity")
            for line in solidity_proof_lines(item['address'], item['proof']):
                print(line)


def save_json(data: Dict[str, Any], filename: str = 'merkle_data.json'):
    with open(filename, 'w') as f:
        json.dump(data, f, indent=2)
    logger.info("Merkle data saved to %s", filename)
    print(f"\nData saved to: {filename}")
