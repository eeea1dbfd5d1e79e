"""
Pytest configuration for linkgenesis tests.

This file helps pytest find and run tests correctly by setting up the Python path
and shared genesis fixtures.
"""

import os
import sys

import pytest

# Add the src directory to the Python path to help with imports
src_root = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if src_root not in sys.path:
    sys.path.insert(0, src_root)


ED25519_KEY = "0x724c2517228e6aa0fff68bf4020740055e2706df23da4fc9089f40b0b4452b72"


def make_validator(power=1, name="v1", coinbase="0x0000000000000000000000000000000000000001"):
    return {
        "pub_key": {"type": "PubKeyEd25519", "value": ED25519_KEY},
        "coinbase": coinbase,
        "power": power,
        "name": name,
    }


@pytest.fixture
def validator_data():
    return make_validator()


@pytest.fixture
def genesis_data(validator_data):
    """A minimal valid genesis document as a dict."""
    return {
        "genesis_time": "2019-09-25 19:00:00.000000 +0800 CST",
        "chain_id": "test-chain-QDKdJr",
        "validators": [validator_data],
    }
