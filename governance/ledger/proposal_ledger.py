import threading
import time
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Tuple

from governance.enums.proposal_status import ProposalStatus
from governance.exceptions import AlreadyExecuted, InvalidInput, ProposalNotFound, Unauthorized
from governance.models.encoded_action import EncodedAction
from governance.models.proposal_record import ProposalRecord
from utils.formatter_utils import to_bytes_data, to_normalized_address
from utils.logger_utils import get_logger

logger = get_logger("Proposal Ledger")

EncodedActionLike = EncodedAction | bytes | str


class ProposalLedger:
    """
    Append-only registry of proposals, keyed by a dense 1-based id.

    All writes (create, mark_executed) go through one lock, so two creates can
    never draw the same id and two executions of the same proposal can never
    both succeed. Records are immutable: a status change swaps in a new
    record, which means readers only ever see fully built records.
    """

    def __init__(self, clock: Optional[Callable[[], float]] = None):
        self._clock = clock or time.time
        self._lock = threading.Lock()
        self._records: Dict[int, ProposalRecord] = {}
        self._by_proposer: Dict[str, List[int]] = {}
        self._next_id = 1
        self._last_created_at = 0

    @classmethod
    def from_records(cls, records: Iterable[ProposalRecord], clock: Optional[Callable[[], float]] = None) -> "ProposalLedger":
        """
        Rebuilds a ledger from previously stored records.

        Raises:
            ValueError: If ids are not exactly 1..N, timestamps go backwards,
                or a record breaks the rules `create` enforces.
        """
        ledger = cls(clock=clock)
        for expected_id, record in enumerate(sorted(records, key=lambda r: r.id), start=1):
            if record.id != expected_id:
                raise ValueError(f"Proposal ids must be dense: expected {expected_id}, got {record.id}")
            try:
                proposer, _ = cls.check_submission(record.proposer, record.title, record.description, record.encoded_action)
            except InvalidInput as e:
                raise ValueError(f"Proposal {record.id} is invalid: {e}") from e
            if proposer != record.proposer:
                raise ValueError(f"Proposal {record.id} proposer is not a checksum address: {record.proposer}")
            if record.created_at < ledger._last_created_at:
                raise ValueError(f"Proposal {record.id} is older than the proposal before it")
            ledger._store(record)
            ledger._next_id = record.id + 1
            ledger._last_created_at = record.created_at
        return ledger

    @staticmethod
    def check_submission(proposer: str, title: str, description: str, encoded_action: EncodedActionLike) -> Tuple[str, bytes]:
        """
        Applies the ledger's input rules without touching state.

        Returns:
            The checksum proposer address and the call data as bytes.

        Raises:
            InvalidInput: On an empty title, description or action, or a malformed proposer.
        """
        if not title:
            raise InvalidInput("Title cannot be empty")
        if not description:
            raise InvalidInput("Description cannot be empty")

        if isinstance(encoded_action, EncodedAction):
            data = encoded_action.data
        else:
            try:
                data = to_bytes_data(encoded_action)
            except ValueError as e:
                raise InvalidInput(f"Encoded action is not valid hex data: {e}") from e
        if not data:
            raise InvalidInput("Encoded action cannot be empty")

        normalized_proposer = to_normalized_address(proposer)
        if normalized_proposer is None:
            raise InvalidInput(f"Invalid proposer address: {proposer}")
        return normalized_proposer, data

    def create(self, proposer: str, title: str, description: str, encoded_action: EncodedActionLike) -> int:
        proposer, data = self.check_submission(proposer, title, description, encoded_action)

        with self._lock:
            proposal_id = self._next_id
            created_at = max(int(self._clock()), self._last_created_at)
            record = ProposalRecord(
                id=proposal_id,
                proposer=proposer,
                title=title,
                description=description,
                encoded_action=data,
                status=ProposalStatus.CREATED,
                created_at=created_at,
            )
            self._store(record)
            self._next_id = proposal_id + 1
            self._last_created_at = created_at

        logger.info(f"Proposal {proposal_id} created by {proposer}: {title!r}")
        return proposal_id

    def mark_executed(self, proposal_id: int, caller: str) -> None:
        """
        The only transition a proposal has: Created -> Executed, by its proposer.

        Raises:
            ProposalNotFound: Unknown id.
            Unauthorized: Caller is not the proposer (checked before status).
            AlreadyExecuted: The proposal was executed before.
        """
        with self._lock:
            record = self.check_execution(proposal_id, caller)
            self._records[proposal_id] = record.model_copy(update={"status": ProposalStatus.EXECUTED})

        logger.info(f"Proposal {proposal_id} marked as executed by {record.proposer}")

    def check_execution(self, proposal_id: int, caller: str) -> ProposalRecord:
        """Applies the execution rules to the current record without changing it."""
        record = self._records.get(proposal_id)
        if record is None:
            raise ProposalNotFound(proposal_id)
        if to_normalized_address(caller) != record.proposer:
            raise Unauthorized("Only proposer can execute this action")
        if record.status == ProposalStatus.EXECUTED:
            raise AlreadyExecuted("Proposal already executed")
        return record

    # --- Read primitives used by ProposalQuery ---

    def lookup(self, proposal_id: int) -> Optional[ProposalRecord]:
        return self._records.get(proposal_id)

    def lookup_many(self, proposal_ids: Sequence[int]) -> List[Optional[ProposalRecord]]:
        with self._lock:
            return [self._records.get(proposal_id) for proposal_id in proposal_ids]

    def proposer_ids(self, proposer: str) -> Tuple[int, ...]:
        normalized = to_normalized_address(proposer)
        if normalized is None:
            return ()
        with self._lock:
            return tuple(self._by_proposer.get(normalized, ()))

    def records(self) -> Tuple[ProposalRecord, ...]:
        """All records in id order."""
        with self._lock:
            return tuple(self._records[proposal_id] for proposal_id in range(1, self._next_id))

    def __len__(self) -> int:
        return self._next_id - 1

    def _store(self, record: ProposalRecord) -> None:
        self._records[record.id] = record
        self._by_proposer.setdefault(record.proposer, []).append(record.id)
