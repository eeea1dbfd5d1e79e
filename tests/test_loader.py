"""
Tests for genesis loading and first-boot generation.
"""
import json

import pytest

from linkgenesis.core.alloc import TEST_ACCOUNTS, get_test_alloc_accounts
from linkgenesis.core.config import GenesisConfig
from linkgenesis.core.genesis import GenesisIOError, default_genesis_doc, init_files, load_genesis
from linkgenesis.core.models.params import default_consensus_params
from linkgenesis.core.privval import PrivValidator


@pytest.fixture
def node_config(tmp_path):
    return GenesisConfig(home=tmp_path / "node")


def test_default_genesis_doc_offline():
    pv = PrivValidator.generate()

    gen_doc = default_genesis_doc(pv.pub_key)

    assert gen_doc.chain_id.startswith("test-chain-")
    assert len(gen_doc.chain_id) == len("test-chain-") + 6
    assert gen_doc.genesis_time
    assert gen_doc.consensus_params == default_consensus_params()
    assert len(gen_doc.validators) == 1
    assert gen_doc.validators[0].pub_key == pv.pub_key
    assert gen_doc.validators[0].power == 10
    assert set(gen_doc.accounts) == set(get_test_alloc_accounts())

    gen_doc.validate_and_complete()


def test_default_genesis_doc_online():
    gen_doc = default_genesis_doc(PrivValidator.generate().pub_key, chain_id="linkchain", on_line=True)

    assert gen_doc.chain_id == "linkchain"
    assert gen_doc.accounts is None
    assert "accounts" not in json.loads(gen_doc.to_json())


def test_init_files_offline(node_config):
    gen_doc = init_files(node_config)

    assert node_config.genesis_path.exists()
    assert node_config.priv_validator_path.exists()
    assert len(list(node_config.keystore_path.iterdir())) == len(TEST_ACCOUNTS)

    pv = PrivValidator.load(str(node_config.priv_validator_path))
    assert gen_doc.validators[0].pub_key == pv.pub_key
    assert set(gen_doc.accounts) == set(get_test_alloc_accounts())


def test_init_files_keeps_existing_files(node_config):
    first = init_files(node_config)
    contents = node_config.genesis_path.read_text()

    second = init_files(node_config)

    assert second.chain_id == first.chain_id
    assert node_config.genesis_path.read_text() == contents


def test_init_files_online(tmp_path):
    cfg = GenesisConfig(home=tmp_path, chain_id="linkchain", on_line=True, utc_genesis_time=True)

    gen_doc = init_files(cfg)

    assert gen_doc.chain_id == "linkchain"
    assert gen_doc.genesis_time.endswith("Z")
    assert gen_doc.accounts is None
    assert not cfg.keystore_path.exists()


def test_load_genesis(node_config):
    init_files(node_config)

    assert load_genesis(cfg=node_config).to_dict() == load_genesis(node_config.genesis_path).to_dict()


def test_load_genesis_missing_file(node_config):
    with pytest.raises(GenesisIOError):
        load_genesis(cfg=node_config)
