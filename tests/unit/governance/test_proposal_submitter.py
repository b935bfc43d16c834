import asyncio
from unittest.mock import AsyncMock

import pytest
from eth_abi import decode

from constants.contract_function_selectors import CREATE_PROPOSAL_SIGNATURE, MARK_AS_EXECUTED_SIGNATURE, selector_for
from governance.enums.proposal_status import ProposalStatus
from governance.exceptions import InvalidInput, TransientSubmissionError, Unauthorized
from governance.ledger.proposal_ledger import ProposalLedger
from governance.models.proposal_draft import SubmissionRequest
from governance.service.proposal_submitter import ProposalSubmitter

PROPOSER = "0x1111111111111111111111111111111111111111"
OTHER = "0x2222222222222222222222222222222222222222"

REQUEST = SubmissionRequest(
    proposer=PROPOSER,
    title="Test Proposal",
    description="This is a test proposal",
    encoded_action=bytes.fromhex("1234567890abcdef"),
)


def make_submitter(ledger, broadcaster, max_retries=2):
    return ProposalSubmitter(ledger, broadcaster, max_retries=max_retries, initial_delay=0, backoff_factor=1)


@pytest.mark.asyncio
async def test_submit_broadcasts_then_records():
    ledger = ProposalLedger()
    broadcaster = AsyncMock(return_value="0xtx")

    proposal_id = await make_submitter(ledger, broadcaster).submit(REQUEST)

    assert proposal_id == 1
    assert ledger.lookup(1).title == "Test Proposal"
    sender, call_data = broadcaster.await_args.args
    assert sender == PROPOSER
    assert call_data[:4] == selector_for(CREATE_PROPOSAL_SIGNATURE)
    assert decode(["string", "string", "bytes"], call_data[4:]) == (
        "Test Proposal",
        "This is a test proposal",
        bytes.fromhex("1234567890abcdef"),
    )


@pytest.mark.asyncio
async def test_submit_retries_transient_failures():
    ledger = ProposalLedger()
    broadcaster = AsyncMock(side_effect=[TransientSubmissionError("nonce too low"), ConnectionError(), "0xtx"])

    assert await make_submitter(ledger, broadcaster).submit(REQUEST) == 1
    assert broadcaster.await_count == 3


@pytest.mark.asyncio
async def test_submit_gives_up_after_max_retries():
    ledger = ProposalLedger()
    broadcaster = AsyncMock(side_effect=TransientSubmissionError("node unavailable"))

    with pytest.raises(TransientSubmissionError):
        await make_submitter(ledger, broadcaster, max_retries=2).submit(REQUEST)

    assert broadcaster.await_count == 3
    assert len(ledger) == 0


@pytest.mark.asyncio
async def test_non_transient_failure_is_not_retried():
    ledger = ProposalLedger()
    broadcaster = AsyncMock(side_effect=RuntimeError("reverted"))

    with pytest.raises(RuntimeError):
        await make_submitter(ledger, broadcaster).submit(REQUEST)

    assert broadcaster.await_count == 1
    assert len(ledger) == 0


@pytest.mark.asyncio
async def test_invalid_request_is_never_broadcast():
    ledger = ProposalLedger()
    broadcaster = AsyncMock(return_value="0xtx")
    request = REQUEST.model_copy(update={"title": ""})

    with pytest.raises(InvalidInput, match="Title cannot be empty"):
        await make_submitter(ledger, broadcaster).submit(request)

    broadcaster.assert_not_awaited()


@pytest.mark.asyncio
async def test_cancelled_submission_leaves_ledger_untouched():
    ledger = ProposalLedger()
    started = asyncio.Event()

    async def hanging_broadcaster(sender, call_data):
        started.set()
        await asyncio.Event().wait()

    task = asyncio.create_task(make_submitter(ledger, hanging_broadcaster).submit(REQUEST))
    await started.wait()
    task.cancel()

    with pytest.raises(asyncio.CancelledError):
        await task
    assert len(ledger) == 0


@pytest.mark.asyncio
async def test_execute_marks_proposal_after_confirmation():
    ledger = ProposalLedger()
    ledger.create(PROPOSER, "Title", "Description", "0x01")
    broadcaster = AsyncMock(return_value="0xexec")

    tx_hash = await make_submitter(ledger, broadcaster).execute(1, PROPOSER)

    assert tx_hash == "0xexec"
    assert ledger.lookup(1).status == ProposalStatus.EXECUTED
    _, call_data = broadcaster.await_args.args
    assert call_data[:4] == selector_for(MARK_AS_EXECUTED_SIGNATURE)
    assert decode(["uint256"], call_data[4:]) == (1,)


@pytest.mark.asyncio
async def test_execute_by_non_proposer_is_never_broadcast():
    ledger = ProposalLedger()
    ledger.create(PROPOSER, "Title", "Description", "0x01")
    broadcaster = AsyncMock(return_value="0xexec")

    with pytest.raises(Unauthorized):
        await make_submitter(ledger, broadcaster).execute(1, OTHER)

    broadcaster.assert_not_awaited()
    assert ledger.lookup(1).status == ProposalStatus.CREATED
