from pydantic import BaseModel, ConfigDict, Field

from linkgenesis.core.models.primitives import BigInt, Uint64


class Account(BaseModel):
    """Balance and nonce of a pre-funded address at block zero."""
    model_config = ConfigDict(extra="forbid")

    balance: BigInt = Field(..., description="Balance in the smallest unit, decimal or 0x-hex")
    nonce: Uint64 = Field(0, description="Account nonce")

    def to_dict(self) -> dict:
        return {
            "balance": str(self.balance),
            "nonce": self.nonce,
        }
