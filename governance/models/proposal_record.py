from pydantic import BaseModel, ConfigDict, Field

from governance.enums.proposal_status import ProposalStatus
from utils.formatter_utils import to_hex_data


class ProposalRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int = Field(ge=1)
    proposer: str
    title: str
    description: str
    encoded_action: bytes
    status: ProposalStatus = ProposalStatus.CREATED
    created_at: int

    @property
    def is_executed(self) -> bool:
        return self.status == ProposalStatus.EXECUTED

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "proposer": self.proposer,
            "title": self.title,
            "description": self.description,
            "encoded_action": to_hex_data(self.encoded_action),
            "status": int(self.status),
            "created_at": self.created_at,
        }
