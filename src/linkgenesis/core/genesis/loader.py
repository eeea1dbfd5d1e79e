"""
Loading and first-boot generation of the node's genesis file.

This module ties the genesis document to the node configuration: it finds
the configured genesis file, and on first boot creates the private
validator key, the test keystores and a default genesis file.
"""
import logging
import random
import string
from pathlib import Path
from typing import Optional, Union

from linkgenesis.core.alloc import get_alloc_accounts, get_test_alloc_accounts, write_test_keystores
from linkgenesis.core.config import GenesisConfig, config
from linkgenesis.core.models.genesis import GenesisDoc, current_genesis_time
from linkgenesis.core.models.params import default_consensus_params
from linkgenesis.core.models.validator import GenesisValidator, PubKey
from linkgenesis.core.privval import PrivValidator

logger = logging.getLogger(__name__)

DEFAULT_VALIDATOR_POWER = 10


def random_chain_id() -> str:
    suffix = "".join(random.choice(string.ascii_letters + string.digits) for _ in range(6))
    return f"test-chain-{suffix}"


def load_genesis(path: Optional[Union[str, Path]] = None, cfg: Optional[GenesisConfig] = None) -> GenesisDoc:
    """Load and validate the genesis file.

    Args:
        path: Genesis file, defaults to the configured genesis path
        cfg: Configuration to read the default path from, defaults to the global config
    """
    cfg = cfg or config
    return GenesisDoc.from_file(path or cfg.genesis_path)


def default_genesis_doc(pub_key: PubKey, chain_id: str = "", on_line: bool = False,
                        utc: Optional[bool] = None) -> GenesisDoc:
    """Build the genesis document written on first boot.

    The node's own key is the single validator. Off-line nodes pre-fund the
    test accounts; on-line nodes use the production alloc map, which is
    omitted from the file while it is empty.
    """
    accounts = get_alloc_accounts() if on_line else get_test_alloc_accounts()
    return GenesisDoc(
        genesis_time=current_genesis_time(utc),
        chain_id=chain_id or random_chain_id(),
        consensus_params=default_consensus_params(),
        validators=[GenesisValidator(pub_key=pub_key, power=DEFAULT_VALIDATOR_POWER)],
        accounts=accounts or None,
    )


def init_files(cfg: Optional[GenesisConfig] = None) -> GenesisDoc:
    """Initialise the node's home directory and return its validated genesis document.

    Existing files are kept: the private validator and genesis file are
    only generated when missing, and test keystores are only written for
    accounts that have none.
    """
    cfg = cfg or config

    if not cfg.on_line:
        write_test_keystores(cfg.keystore_path)

    pv = PrivValidator.load_or_generate(str(cfg.priv_validator_path))

    gen_file = cfg.genesis_path
    if gen_file.exists():
        logger.info(f"Found genesis file {gen_file}")
    else:
        gen_file.parent.mkdir(parents=True, exist_ok=True)
        gen_doc = default_genesis_doc(pv.pub_key, chain_id=cfg.chain_id, on_line=cfg.on_line,
                                      utc=cfg.utc_genesis_time)
        gen_doc.save_as(gen_file)
        logger.info(f"Generated genesis file {gen_file} (chain_id={gen_doc.chain_id})")

    return GenesisDoc.from_file(gen_file)
