from typing import List, Sequence, Tuple

from governance.exceptions import ProposalNotFound
from governance.ledger.proposal_ledger import ProposalLedger
from governance.models.proposal_record import ProposalRecord


class ProposalQuery:
    """Read-only view over a ProposalLedger."""

    def __init__(self, ledger: ProposalLedger):
        self._ledger = ledger

    def get(self, proposal_id: int) -> ProposalRecord:
        record = self._ledger.lookup(proposal_id)
        if record is None:
            raise ProposalNotFound(proposal_id)
        return record

    def get_many(self, proposal_ids: Sequence[int]) -> List[ProposalRecord]:
        """
        Returns records in the order requested. All or nothing: the first
        unknown id raises ProposalNotFound and no records are returned.
        """
        records = self._ledger.lookup_many(proposal_ids)
        for proposal_id, record in zip(proposal_ids, records):
            if record is None:
                raise ProposalNotFound(proposal_id)
        return records

    def by_proposer(self, proposer: str) -> Tuple[int, ...]:
        """Ids created by `proposer`, oldest first."""
        return self._ledger.proposer_ids(proposer)

    def count(self) -> int:
        return len(self._ledger)
