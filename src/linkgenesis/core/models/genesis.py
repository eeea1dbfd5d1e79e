"""
Genesis document defining a chain's identity, consensus parameters,
initial validator set and pre-funded accounts.

A document is validated and completed exactly once, by ``from_json`` /
``from_file`` or by an explicit ``validate_and_complete()`` call, before it
is handed to any consumer.
"""
import json
import logging
import os
import tempfile
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from linkgenesis.core.config import config
from linkgenesis.core.models.account import Account
from linkgenesis.core.models.params import ConsensusParams, ConsensusParamsError, default_consensus_params
from linkgenesis.core.models.primitives import parse_address
from linkgenesis.core.models.validator import GenesisValidator

logger = logging.getLogger(__name__)

GENESIS_FILE_MODE = 0o644


class GenesisError(Exception):
    """Base exception for genesis document errors.

    ``path`` is set when the document was read from or written to a file.
    """

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.path = path

    def __str__(self) -> str:
        if self.path is not None:
            return f"error in genesis file {self.path}: {self.message}"
        return self.message


class MalformedGenesisError(GenesisError):
    """Exception raised when the bytes are not JSON or do not match the document shape."""

    pass


class MissingChainIDError(GenesisError):
    """Exception raised when chain_id is absent or empty."""

    pass


class NoValidatorsError(GenesisError):
    """Exception raised when the validator set is absent or empty."""

    pass


class ZeroPowerValidatorError(GenesisError):
    """Exception raised when a validator has zero voting power."""

    def __init__(self, index: int, validator: GenesisValidator):
        super().__init__(
            f"validator {index} ({validator.name or validator.pub_key}) has zero voting power"
        )
        self.index = index
        self.validator = validator


class BadConsensusParamsError(GenesisError):
    """Exception raised when consensus_params are rejected by the consensus layer."""

    pass


class GenesisIOError(GenesisError):
    """Exception raised when the genesis file cannot be read or written."""

    pass


def current_genesis_time(utc: Optional[bool] = None) -> str:
    """Render the current wall-clock time for an empty genesis_time.

    Local civil time by default, RFC3339 UTC when ``utc`` (or the
    ``utc_genesis_time`` setting) is true.
    """
    if utc is None:
        utc = config.utc_genesis_time
    if utc:
        return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")
    return datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S.%f %z %Z")


class GenesisDoc(BaseModel):
    """The initial-state manifest consumed by a node at first boot."""
    model_config = ConfigDict(extra="forbid", validate_assignment=True)

    genesis_time: str = Field("", description="Human-readable genesis time, filled when empty")
    chain_id: str = Field("", description="Canonical identifier of the network")
    consensus_params: Optional[ConsensusParams] = Field(None, description="Defaulted when absent")
    validators: List[GenesisValidator] = Field(default_factory=list, description="Initial validator set")
    accounts: Optional[Dict[str, Account]] = Field(None, description="Pre-funded accounts by address")

    @field_validator("validators", mode="before")
    @classmethod
    def null_validators(cls, value):
        return [] if value is None else value

    @field_validator("accounts")
    @classmethod
    def canonical_account_keys(cls, value):
        if value is None:
            return value
        canonical = {}
        for addr, account in value.items():
            key = parse_address(addr)
            if key in canonical:
                raise ValueError(f"duplicate account address {key}")
            canonical[key] = account
        return canonical

    def validate_and_complete(self, now: Optional[Callable[[], str]] = None) -> "GenesisDoc":
        """Check the document and fill in the defaults for absent values.

        Every check runs before anything is filled in, so a document that
        fails is left exactly as it was.

        Args:
            now: Clock used for an empty genesis_time, defaults to current_genesis_time

        Returns:
            GenesisDoc: self, for chaining

        Raises:
            MissingChainIDError: If chain_id is empty
            BadConsensusParamsError: If the supplied consensus params are invalid
            NoValidatorsError: If there are no validators
            ZeroPowerValidatorError: If any validator has zero power
        """
        if not self.chain_id:
            raise MissingChainIDError("genesis doc must include non-empty chain_id")

        if self.consensus_params is not None:
            try:
                self.consensus_params.validate()
            except ConsensusParamsError as e:
                raise BadConsensusParamsError(f"invalid consensus_params: {e}") from e

        if not self.validators:
            raise NoValidatorsError("the genesis file must have at least one validator")

        for i, validator in enumerate(self.validators):
            if validator.power == 0:
                raise ZeroPowerValidatorError(i, validator)

        if self.consensus_params is None:
            self.consensus_params = default_consensus_params()

        if not self.genesis_time:
            self.genesis_time = (now or current_genesis_time)()

        return self

    def to_dict(self) -> dict:
        """Convert the genesis document to a dictionary in file key order."""
        data = {
            "genesis_time": self.genesis_time,
            "chain_id": self.chain_id,
        }
        if self.consensus_params is not None:
            data["consensus_params"] = self.consensus_params.to_dict()
        data["validators"] = [validator.to_dict() for validator in self.validators]
        if self.accounts is not None:
            data["accounts"] = {addr: account.to_dict() for addr, account in self.accounts.items()}
        return data

    def to_json(self) -> str:
        """Serialize to two-space indented JSON with a trailing newline."""
        return json.dumps(self.to_dict(), indent=2, ensure_ascii=False) + "\n"

    @classmethod
    def from_dict(cls, data: dict) -> "GenesisDoc":
        """Create a GenesisDoc from a dictionary without completing it.

        Raises:
            MalformedGenesisError: If the data does not match the document shape
        """
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise MalformedGenesisError(f"malformed genesis doc: {e}") from e

    @classmethod
    def from_json(cls, data: Union[bytes, str]) -> "GenesisDoc":
        """Parse JSON and validate-and-complete the result."""
        try:
            gen_doc = cls.model_validate_json(data)
        except ValidationError as e:
            raise MalformedGenesisError(f"malformed genesis doc: {e}") from e
        return gen_doc.validate_and_complete()

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "GenesisDoc":
        """Read, parse and validate-and-complete a genesis file."""
        try:
            with open(path, "rb") as f:
                data = f.read()
        except OSError as e:
            raise GenesisIOError(f"couldn't read genesis file: {e}", path=str(path)) from e

        try:
            gen_doc = cls.from_json(data)
        except GenesisError as e:
            e.path = str(path)
            logger.error(f"{e}")
            raise

        logger.info(f"Loaded genesis file {path} (chain_id={gen_doc.chain_id}, validators={len(gen_doc.validators)})")
        return gen_doc

    def save_as(self, path: Union[str, Path]) -> None:
        """Write the document to ``path`` with mode 0644.

        The bytes go to a temporary file in the same directory which then
        replaces ``path``.
        """
        path = Path(path)
        data = self.to_json().encode("utf-8")
        tmp_name = None
        try:
            fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
            with os.fdopen(fd, "wb") as f:
                f.write(data)
                f.flush()
                os.fsync(f.fileno())
            os.chmod(tmp_name, GENESIS_FILE_MODE)
            os.replace(tmp_name, path)
            tmp_name = None
        except OSError as e:
            raise GenesisIOError(f"couldn't write genesis file: {e}", path=str(path)) from e
        finally:
            if tmp_name is not None and os.path.exists(tmp_name):
                os.remove(tmp_name)

        logger.info(f"Saved genesis file {path}")
