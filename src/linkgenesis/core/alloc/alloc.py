"""
Pre-funded account tables for block zero.

``get_test_alloc_accounts()`` funds a fixed set of well-known test
addresses so integration tests can sign from known accounts; the matching
encrypted keystores and passwords are shipped as data in
``test_accounts.json``. ``get_alloc_accounts()`` is the production hook and
is empty until pre-funding is decided by configuration.
"""
import json
import logging
import os
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, List, Tuple

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator

from linkgenesis.core.models.account import Account
from linkgenesis.core.models.primitives import Address

logger = logging.getLogger(__name__)

TEST_ACCOUNTS_FILE = Path(__file__).with_name("test_accounts.json")

# 10^34, well above any realistic test expenditure
TEST_ALLOC_BALANCE = 10**34

WELL_KNOWN_TEST_ADDRESSES = (
    "0x54fb1c7d0f011dd63b08f85ed7b518ab82028100",
    "0xa73810e519e1075010678d706533486d8ecc8000",
)

KEYSTORE_DIR_MODE = 0o700
KEYSTORE_FILE_MODE = 0o644


class TestAccount(BaseModel):
    """A funded test account with its encrypted keystore and password."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    # keep pytest from collecting this as a test class
    __test__ = False

    address: Address = Field(..., description="Account address")
    password: str = Field(..., description="Keystore password")
    keystore: str = Field(..., description="Version 3 encrypted keystore as JSON text")

    @field_validator("keystore", mode="before")
    @classmethod
    def keystore_text(cls, value):
        # held as text so the shared table cannot be mutated through it
        if isinstance(value, dict):
            return json.dumps(value)
        return value

    def keystore_dict(self) -> dict:
        """Return a fresh decoded copy of the keystore."""
        return json.loads(self.keystore)

    def keystore_filename(self, created: datetime) -> str:
        """Keystore file name in the ``UTC--<time>--<address>`` convention."""
        stamp = created.strftime("%Y-%m-%dT%H-%M-%S.%f000Z")
        return f"UTC--{stamp}--{self.address[2:]}"


def _load_test_accounts() -> Tuple[TestAccount, ...]:
    with open(TEST_ACCOUNTS_FILE, "rb") as f:
        records = TypeAdapter(List[TestAccount]).validate_json(f.read())
    return tuple(records)


TEST_ACCOUNTS: Tuple[TestAccount, ...] = _load_test_accounts()


def get_test_accounts() -> Tuple[TestAccount, ...]:
    """Return the test-credential table in file order."""
    return TEST_ACCOUNTS


def get_test_alloc_accounts() -> Dict[str, Account]:
    """Return the test alloc map: every well-known and table address funded with 10^34."""
    accounts = {}
    for addr in WELL_KNOWN_TEST_ADDRESSES:
        accounts[addr] = Account(balance=TEST_ALLOC_BALANCE, nonce=0)
    for test_account in TEST_ACCOUNTS:
        accounts[test_account.address] = Account(balance=TEST_ALLOC_BALANCE, nonce=0)
    return accounts


def get_alloc_accounts() -> Dict[str, Account]:
    """Return the production alloc map.

    Empty: production pre-funding is carried out of band until an explicit
    configuration decision enables it.
    """
    return {}


def write_test_keystores(directory: Path) -> List[Path]:
    """Write a keystore file for each test account that has none in ``directory``.

    Args:
        directory: Keystore directory, created with mode 0700 if missing

    Returns:
        List[Path]: The files written by this call
    """
    directory = Path(directory)
    directory.mkdir(mode=KEYSTORE_DIR_MODE, parents=True, exist_ok=True)

    written = []
    for test_account in TEST_ACCOUNTS:
        if any(directory.glob(f"UTC--*Z--{test_account.address[2:]}")):
            logger.debug(f"Found keystore for {test_account.address}")
            continue
        path = directory / test_account.keystore_filename(datetime.now(timezone.utc))
        with open(path, "w") as f:
            f.write(test_account.keystore)
        os.chmod(path, KEYSTORE_FILE_MODE)
        logger.info(f"Generated keystore file {path}")
        written.append(path)
    return written
