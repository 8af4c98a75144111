"""
Shared fixtures for allowlist tree tests.
"""
import hashlib
import json
import logging
import sys
from pathlib import Path

import pytest

_PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(_PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(_PROJECT_ROOT))

# Allowlist used by the free-claim proof script
ADDR_A = "0x6F836d79dB63044BBD34BeA6E7E9E6004987A75E"
ADDR_B = "0x30145D714Db337606c8f520bee9a3e3eAC910636"
ADDR_C = "0x2311C8A1C7A31694AdfF5E53A3dD5cd922d806Cb"
OUTSIDER = "0x70997970C51812dc3A010C7d01b50e0d17dc79C8"

TRON_ADDR = "TKWvD71EMFTpFVGZyqqX9fC6MQgcR9H76M"


@pytest.fixture
def addresses():
    return [ADDR_A, ADDR_B, ADDR_C]


@pytest.fixture
def stub_hash():
    """Non-keccak hash, to check the tree only uses what it is given."""
    def _hash(data: bytes) -> bytes:
        return hashlib.sha256(data).digest()
    return _hash


@pytest.fixture
def allowlist_json(tmp_path, addresses):
    path = tmp_path / "whitelist.json"
    path.write_text(json.dumps(addresses))
    return path


@pytest.fixture(autouse=True)
def _reset_logging():
    yield
    # the CLI installs handlers bound to the captured stderr of one test
    root = logging.getLogger()
    for handler in root.handlers[:]:
        root.removeHandler(handler)
