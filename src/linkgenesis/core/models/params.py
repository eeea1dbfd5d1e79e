"""
Consensus parameters carried by the genesis document.

The genesis layer treats these as an opaque bundle: it only needs
``default_consensus_params()`` and ``ConsensusParams.validate()``.
"""
from pydantic import BaseModel, ConfigDict, Field

from linkgenesis.core.models.primitives import Uint64

# Maximum permitted size of a block, 100MB.
MAX_BLOCK_SIZE_BYTES = 104857600


class ConsensusParamsError(ValueError):
    """Exception raised when consensus parameters are out of their allowed limits."""

    pass


class BlockSize(BaseModel):
    """Limits on the block size."""
    model_config = ConfigDict(extra="forbid")

    max_bytes: int = Field(22020096, description="Must not be 0 nor greater than 100MB")  # 21MB
    max_txs: int = Field(10000, description="Maximum number of transactions in a block")
    max_gas: Uint64 = Field(5000000000, description="Maximum gas per block")


class TxSize(BaseModel):
    """Limits on the transaction size."""
    model_config = ConfigDict(extra="forbid")

    max_bytes: int = Field(10240, description="Maximum transaction size")  # 10kB
    max_gas: Uint64 = Field(5000000000, description="Maximum gas per transaction")


class BlockGossip(BaseModel):
    model_config = ConfigDict(extra="forbid")

    block_part_size_bytes: int = Field(32 * 1024, description="Must not be 0")  # 32kB


class EvidenceParams(BaseModel):
    model_config = ConfigDict(extra="forbid")

    # only accept new evidence more recent than this, 27.8 hrs at 1block/s
    max_age: Uint64 = Field(100000, description="Maximum evidence age in blocks")


class ConsensusParams(BaseModel):
    """Consensus critical parameters that determine the validity of blocks."""
    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    block_size: BlockSize = Field(default_factory=BlockSize, alias="block_size_params")
    tx_size: TxSize = Field(default_factory=TxSize, alias="tx_size_params")
    block_gossip: BlockGossip = Field(default_factory=BlockGossip, alias="block_gossip_params")
    evidence: EvidenceParams = Field(default_factory=EvidenceParams, alias="evidence_params")

    def validate(self) -> None:
        """Ensure all values are within their allowed limits.

        Raises:
            ConsensusParamsError: If a limit is violated
        """
        if self.block_size.max_bytes <= 0:
            raise ConsensusParamsError(
                f"block_size_params.max_bytes must be greater than 0. Got {self.block_size.max_bytes}"
            )
        if self.block_gossip.block_part_size_bytes <= 0:
            raise ConsensusParamsError(
                "block_gossip_params.block_part_size_bytes must be greater than 0. "
                f"Got {self.block_gossip.block_part_size_bytes}"
            )

        # ensure blocks aren't too big
        if self.block_size.max_bytes > MAX_BLOCK_SIZE_BYTES:
            raise ConsensusParamsError(
                f"block_size_params.max_bytes is too big. {self.block_size.max_bytes} > {MAX_BLOCK_SIZE_BYTES}"
            )

    def to_dict(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)


def default_consensus_params() -> ConsensusParams:
    """Return a fresh ConsensusParams populated with the default limits."""
    return ConsensusParams()
