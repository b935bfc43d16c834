from eth_utils import encode_hex, function_signature_to_4byte_selector

# Canonical signatures of the calls a governance action can encode
TRANSFER_SIGNATURE = "transfer(address,uint256)"
SET_PARAMETER_SIGNATURE = "setParameter(string,uint256)"
UPGRADE_TO_SIGNATURE = "upgradeTo(address)"
GRANT_ROLE_SIGNATURE = "grantRole(bytes32,address)"
REVOKE_ROLE_SIGNATURE = "revokeRole(bytes32,address)"

GOVERNANCE_ACTION_SIGNATURES = (
    TRANSFER_SIGNATURE,
    SET_PARAMETER_SIGNATURE,
    UPGRADE_TO_SIGNATURE,
    GRANT_ROLE_SIGNATURE,
    REVOKE_ROLE_SIGNATURE,
)

# Proposal registry (ProposalFactory) entry points
CREATE_PROPOSAL_SIGNATURE = "createProposal(string,string,bytes)"
MARK_AS_EXECUTED_SIGNATURE = "markAsExecuted(uint256)"

PROPOSAL_FACTORY_SIGNATURES = (
    CREATE_PROPOSAL_SIGNATURE,
    MARK_AS_EXECUTED_SIGNATURE,
    "getProposal(uint256)",
    "getMultipleProposals(uint256[])",
    "getProposerProposals(address)",
    "getProposalCount()",
)


def selector_for(signature: str) -> bytes:
    """
    Returns the 4-byte selector of a canonical function signature,
    i.e. keccak256(signature)[:4].
    """
    return function_signature_to_4byte_selector(signature)


# Selectors known by heart, kept to cross-check the derived table
# ERC-20 transfer, EIP-1967 upgradeTo and OpenZeppelin AccessControl
WELL_KNOWN_SELECTORS = {
    "0xa9059cbb": TRANSFER_SIGNATURE,
    "0x3659cfe6": UPGRADE_TO_SIGNATURE,
    "0x2f2ff15d": GRANT_ROLE_SIGNATURE,
    "0xd547741f": REVOKE_ROLE_SIGNATURE,
}

GOVERNANCE_ACTION_SELECTORS = {
    encode_hex(selector_for(signature)): signature for signature in GOVERNANCE_ACTION_SIGNATURES
}

PROPOSAL_FACTORY_SELECTORS = {
    encode_hex(selector_for(signature)): signature for signature in PROPOSAL_FACTORY_SIGNATURES
}

# Combined dictionary for easy lookup
ALL_FUNCTION_SELECTORS = {
    **GOVERNANCE_ACTION_SELECTORS,
    **PROPOSAL_FACTORY_SELECTORS,
}


# Helper function to get function signature from selector
def get_function_signature(selector: str) -> str:
    """
    Get function signature from selector

    Args:
        selector: Function selector (e.g., "0xa9059cbb")

    Returns:
        Function signature or "Unknown" if not found
    """
    return ALL_FUNCTION_SELECTORS.get(selector.lower(), "Unknown")
