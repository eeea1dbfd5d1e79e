from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator

from linkgenesis.core.models.primitives import EMPTY_ADDRESS, Address, HexBytes, Int64


class KeyType(str, Enum):
    ED25519 = "PubKeyEd25519"
    SECP256K1 = "PubKeySecp256k1"


PUB_KEY_SIZES = {
    KeyType.ED25519: 32,
    # compressed point, prefixed with 0x02 or 0x03
    KeyType.SECP256K1: 33,
}


class PubKey(BaseModel):
    """A validator public key tagged with its signature scheme."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    type: KeyType = Field(..., description="Signature scheme of the key")
    value: HexBytes = Field(..., description="Raw public key bytes, 0x-hex in JSON")

    @model_validator(mode="after")
    def check_size(self) -> "PubKey":
        expected = PUB_KEY_SIZES[self.type]
        if len(self.value) != expected:
            raise ValueError(f"{self.type.value} must be {expected} bytes, got {len(self.value)}")
        return self

    @classmethod
    def ed25519(cls, raw: bytes) -> "PubKey":
        return cls(type=KeyType.ED25519, value=raw)

    @classmethod
    def secp256k1(cls, raw: bytes) -> "PubKey":
        return cls(type=KeyType.SECP256K1, value=raw)

    def __str__(self) -> str:
        return f"{self.type.value}{{0x{self.value.hex()}}}"


class GenesisValidator(BaseModel):
    """A validator authorized at block zero."""
    model_config = ConfigDict(extra="forbid")

    pub_key: PubKey = Field(..., description="Consensus public key")
    coinbase: Address = Field(EMPTY_ADDRESS, description="Address credited with rewards")
    power: Int64 = Field(0, description="Voting power, must be non-zero at genesis")
    name: str = Field("", description="Display name")

    def to_dict(self) -> dict:
        return {
            "pub_key": self.pub_key.model_dump(mode="json"),
            "coinbase": self.coinbase,
            "power": self.power,
            "name": self.name,
        }
