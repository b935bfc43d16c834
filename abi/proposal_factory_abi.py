# --- PROPOSAL FACTORY (on-chain proposal registry) ---
_PROPOSAL_TUPLE = {
    "components": [
        {"internalType": "uint256", "name": "id", "type": "uint256"},
        {"internalType": "address", "name": "proposer", "type": "address"},
        {"internalType": "string", "name": "title", "type": "string"},
        {"internalType": "string", "name": "description", "type": "string"},
        {"internalType": "bytes", "name": "encodedAction", "type": "bytes"},
        {"internalType": "enum ProposalFactory.ProposalStatus", "name": "status", "type": "uint8"},
        {"internalType": "uint256", "name": "createdAt", "type": "uint256"}
    ],
    "internalType": "struct ProposalFactory.Proposal",
    "name": "",
    "type": "tuple"
}

PROPOSAL_FACTORY_ABI = [
    {
        "inputs": [
            {"internalType": "string", "name": "title", "type": "string"},
            {"internalType": "string", "name": "description", "type": "string"},
            {"internalType": "bytes", "name": "encodedAction", "type": "bytes"}
        ],
        "name": "createProposal",
        "outputs": [{"internalType": "uint256", "name": "", "type": "uint256"}],
        "stateMutability": "nonpayable",
        "type": "function"
    },
    {
        "inputs": [{"internalType": "uint256", "name": "proposalId", "type": "uint256"}],
        "name": "markAsExecuted",
        "outputs": [],
        "stateMutability": "nonpayable",
        "type": "function"
    },
    {
        "inputs": [{"internalType": "uint256", "name": "proposalId", "type": "uint256"}],
        "name": "getProposal",
        "outputs": [_PROPOSAL_TUPLE],
        "stateMutability": "view",
        "type": "function"
    },
    {
        "inputs": [{"internalType": "uint256[]", "name": "proposalIds", "type": "uint256[]"}],
        "name": "getMultipleProposals",
        "outputs": [{**_PROPOSAL_TUPLE, "internalType": "struct ProposalFactory.Proposal[]", "type": "tuple[]"}],
        "stateMutability": "view",
        "type": "function"
    },
    {
        "inputs": [{"internalType": "address", "name": "proposer", "type": "address"}],
        "name": "getProposerProposals",
        "outputs": [{"internalType": "uint256[]", "name": "", "type": "uint256[]"}],
        "stateMutability": "view",
        "type": "function"
    },
    {
        "inputs": [],
        "name": "getProposalCount",
        "outputs": [{"internalType": "uint256", "name": "", "type": "uint256"}],
        "stateMutability": "view",
        "type": "function"
    },
    {
        "anonymous": False,
        "inputs": [
            {"indexed": True, "internalType": "uint256", "name": "proposalId", "type": "uint256"},
            {"indexed": True, "internalType": "address", "name": "proposer", "type": "address"},
            {"indexed": False, "internalType": "string", "name": "title", "type": "string"},
            {"indexed": False, "internalType": "string", "name": "description", "type": "string"},
            {"indexed": False, "internalType": "bytes", "name": "encodedAction", "type": "bytes"}
        ],
        "name": "ProposalCreated",
        "type": "event"
    },
    {
        "anonymous": False,
        "inputs": [
            {"indexed": True, "internalType": "uint256", "name": "proposalId", "type": "uint256"},
            {"indexed": True, "internalType": "address", "name": "executor", "type": "address"}
        ],
        "name": "ProposalExecuted",
        "type": "event"
    }
]
