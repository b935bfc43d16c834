from enum import IntEnum


class ProposalStatus(IntEnum):
    # Values match the on-chain ProposalFactory.ProposalStatus enum
    CREATED = 0
    EXECUTED = 1

    @property
    def label(self) -> str:
        return self.name.capitalize()
