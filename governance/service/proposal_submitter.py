import asyncio
from typing import Awaitable, Callable, Optional

from config.settings import settings
from governance.exceptions import TransientSubmissionError
from governance.ledger.proposal_ledger import ProposalLedger
from governance.models.proposal_draft import SubmissionRequest
from governance.service.registry_calls import encode_create_proposal, encode_mark_as_executed
from utils.async_utils import async_retry
from utils.logger_utils import get_logger

logger = get_logger("Proposal Submitter")

# (sender address, registry call data) -> transaction hash, resolved once the transaction is confirmed
Broadcaster = Callable[[str, bytes], Awaitable[str]]

RETRYABLE_ERRORS = (TransientSubmissionError, ConnectionError, asyncio.TimeoutError)


class ProposalSubmitter:
    """
    Brackets the ledger's state transitions with the on-chain round trip.

    Inputs are checked against the ledger rules first, so nothing is broadcast
    that the registry would reject. The broadcaster is retried on transient
    failures; the ledger is only updated after it confirms. Cancelling the
    awaiting task cancels the round trip and leaves the ledger untouched.
    """

    def __init__(
        self,
        ledger: ProposalLedger,
        broadcaster: Broadcaster,
        max_retries: Optional[int] = None,
        initial_delay: Optional[float] = None,
        backoff_factor: Optional[float] = None,
    ):
        self._ledger = ledger
        self._broadcaster = broadcaster
        retry = async_retry(
            max_retries=settings.submission.max_retries if max_retries is None else max_retries,
            initial_delay=settings.submission.initial_delay if initial_delay is None else initial_delay,
            backoff_factor=settings.submission.backoff_factor if backoff_factor is None else backoff_factor,
            exceptions=RETRYABLE_ERRORS,
        )
        self._send = retry(self._broadcast)

    async def submit(self, request: SubmissionRequest) -> int:
        """Broadcasts createProposal and, once confirmed, records the proposal. Returns its id."""
        self._ledger.check_submission(request.proposer, request.title, request.description, request.encoded_action)

        tx_hash = await self._send(request.proposer, encode_create_proposal(request))
        proposal_id = self._ledger.create(request.proposer, request.title, request.description, request.encoded_action)
        logger.info(f"Proposal {proposal_id} confirmed in transaction {tx_hash}")
        return proposal_id

    async def execute(self, proposal_id: int, caller: str) -> str:
        """Broadcasts markAsExecuted and, once confirmed, moves the proposal to Executed."""
        self._ledger.check_execution(proposal_id, caller)

        tx_hash = await self._send(caller, encode_mark_as_executed(proposal_id))
        self._ledger.mark_executed(proposal_id, caller)
        logger.info(f"Execution of proposal {proposal_id} confirmed in transaction {tx_hash}")
        return tx_hash

    async def _broadcast(self, sender: str, call_data: bytes) -> str:
        return await self._broadcaster(sender, call_data)
