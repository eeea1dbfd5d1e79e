import os
import json
import logging
from pathlib import Path
from typing import Optional
from nacl.signing import SigningKey
from linkgenesis.core.config import config
from linkgenesis.core.models.primitives import encode_hex_bytes, parse_hex_bytes
from linkgenesis.core.models.validator import PubKey

logger = logging.getLogger(__name__)

PRIV_KEY_TYPE = "PrivKeyEd25519"
PRIV_VALIDATOR_FILE_MODE = 0o600


class PrivValidatorError(Exception):
    """Exception raised when a private validator file cannot be decoded."""

    pass


class PrivValidator:
    """The node's ed25519 consensus key, stored as a JSON file."""

    def __init__(self, signing_key: SigningKey):
        self.signing_key = signing_key
        self.verify_key = signing_key.verify_key

    @classmethod
    def generate(cls) -> "PrivValidator":
        key = SigningKey.generate()
        return cls(key)

    @classmethod
    def load(cls, path: Optional[str] = None) -> "PrivValidator":
        if path is None:
            path = str(config.priv_validator_path)
        with open(path, "r") as f:
            try:
                data = json.load(f)
            except ValueError as e:
                raise PrivValidatorError(f"malformed private validator file {path}: {e}") from e
        try:
            priv_key = data["priv_key"]
            if priv_key["type"] != PRIV_KEY_TYPE:
                raise PrivValidatorError(f"unsupported private key type {priv_key['type']}")
            signing_key = SigningKey(parse_hex_bytes(priv_key["value"]))
        except (KeyError, TypeError, ValueError) as e:
            raise PrivValidatorError(f"malformed private validator file {path}: {e}") from e
        return cls(signing_key)

    def save(self, path: Optional[str] = None):
        if path is None:
            path = str(config.priv_validator_path)
        os.makedirs(os.path.dirname(os.path.abspath(path)), exist_ok=True)
        # created 0600 so the seed is never readable by others
        fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, PRIV_VALIDATOR_FILE_MODE)
        os.fchmod(fd, PRIV_VALIDATOR_FILE_MODE)
        with os.fdopen(fd, "w") as f:
            json.dump({
                "pub_key": self.pub_key.model_dump(mode="json"),
                "priv_key": {
                    "type": PRIV_KEY_TYPE,
                    "value": encode_hex_bytes(self.signing_key.encode()),
                },
            }, f, indent=2)

    @classmethod
    def load_or_generate(cls, path: Optional[str] = None) -> "PrivValidator":
        """Load the key at ``path``, generating and saving a new one if it does not exist."""
        if path is None:
            path = str(config.priv_validator_path)
        if Path(path).exists():
            pv = cls.load(path)
            logger.info(f"Found private validator {path}")
        else:
            pv = cls.generate()
            pv.save(path)
            logger.info(f"Generated private validator {path}")
        return pv

    @property
    def pub_key(self) -> PubKey:
        return PubKey.ed25519(self.verify_key.encode())
