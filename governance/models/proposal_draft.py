from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, Field

from governance.models.encoded_action import EncodedAction


class ProposalAction(BaseModel):
    """One action added to a proposal draft."""

    model_config = ConfigDict(frozen=True)

    id: str
    template_id: str
    template_name: str
    parameters: Dict[str, Any] = Field(default_factory=dict)
    encoded: EncodedAction


class SubmissionRequest(BaseModel):
    """What the transaction-broadcasting collaborator receives for a new proposal."""

    model_config = ConfigDict(frozen=True)

    proposer: str
    title: str
    description: str
    encoded_action: bytes
