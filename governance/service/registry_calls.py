from constants.contract_function_selectors import CREATE_PROPOSAL_SIGNATURE, MARK_AS_EXECUTED_SIGNATURE
from governance.models.proposal_draft import SubmissionRequest
from governance.service.action_encoder import encode_function_call


def encode_create_proposal(request: SubmissionRequest) -> bytes:
    """Call data for ProposalFactory.createProposal, signed and sent by the proposer."""
    return encode_function_call(
        CREATE_PROPOSAL_SIGNATURE,
        ["string", "string", "bytes"],
        [request.title, request.description, request.encoded_action],
    )


def encode_mark_as_executed(proposal_id: int) -> bytes:
    return encode_function_call(MARK_AS_EXECUTED_SIGNATURE, ["uint256"], [proposal_id])
