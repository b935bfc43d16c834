import threading
from concurrent.futures import ThreadPoolExecutor

import pytest

from governance.enums.proposal_status import ProposalStatus
from governance.exceptions import AlreadyExecuted, InvalidInput, ProposalNotFound, Unauthorized
from governance.ledger.proposal_ledger import ProposalLedger
from governance.models.encoded_action import EncodedAction
from governance.models.proposal_record import ProposalRecord

ADDR1 = "0x1111111111111111111111111111111111111111"
ADDR2 = "0x2222222222222222222222222222222222222222"
ACTION = "0x1234567890abcdef"


class FakeClock:
    def __init__(self, *times):
        self._times = list(times)

    def __call__(self):
        return self._times.pop(0) if len(self._times) > 1 else self._times[0]


@pytest.fixture
def ledger():
    return ProposalLedger(clock=FakeClock(1_700_000_000))


def test_create_proposal(ledger):
    proposal_id = ledger.create(ADDR1, "Test Proposal", "This is a test proposal", ACTION)

    assert proposal_id == 1
    record = ledger.lookup(1)
    assert record.proposer == ADDR1
    assert record.title == "Test Proposal"
    assert record.description == "This is a test proposal"
    assert record.encoded_action == bytes.fromhex("1234567890abcdef")
    assert record.status == ProposalStatus.CREATED
    assert record.created_at == 1_700_000_000


def test_ids_are_sequential_from_one(ledger):
    ids = [ledger.create(ADDR1, f"Proposal {n}", "Description", ACTION) for n in range(5)]
    assert ids == [1, 2, 3, 4, 5]
    assert len(ledger) == 5


@pytest.mark.parametrize(
    "title, description, action, message",
    [
        ("", "Description", "0x1234", "Title cannot be empty"),
        ("Title", "", "0x1234", "Description cannot be empty"),
        ("Title", "Description", "0x", "Encoded action cannot be empty"),
        ("Title", "Description", b"", "Encoded action cannot be empty"),
    ],
)
def test_create_rejects_empty_input(ledger, title, description, action, message):
    with pytest.raises(InvalidInput, match=message):
        ledger.create(ADDR1, title, description, action)
    assert len(ledger) == 0


def test_create_rejects_malformed_input(ledger):
    with pytest.raises(InvalidInput):
        ledger.create("not-an-address", "Title", "Description", ACTION)
    with pytest.raises(InvalidInput):
        ledger.create(ADDR1, "Title", "Description", "0xnothex")
    assert len(ledger) == 0


def test_create_accepts_encoded_action_model(ledger):
    encoded = EncodedAction(template_id="contract-upgrade", data=b"\x36\x59\xcf\xe6")
    proposal_id = ledger.create(ADDR1, "Upgrade", "Move to v2", encoded)
    assert ledger.lookup(proposal_id).encoded_action == encoded.data


def test_proposer_can_mark_executed(ledger):
    ledger.create(ADDR1, "Test Proposal", "This is a test proposal", ACTION)

    ledger.mark_executed(1, ADDR1)

    assert ledger.lookup(1).status == ProposalStatus.EXECUTED


def test_mark_executed_matches_proposer_case_insensitively():
    ledger = ProposalLedger()
    proposer = "0xabcdefabcdefabcdefabcdefabcdefabcdefabcd"
    ledger.create(proposer, "Title", "Description", ACTION)
    ledger.mark_executed(1, proposer.upper().replace("0X", "0x"))
    assert ledger.lookup(1).is_executed


def test_non_proposer_cannot_mark_executed(ledger):
    ledger.create(ADDR1, "Test Proposal", "This is a test proposal", ACTION)

    with pytest.raises(Unauthorized, match="Only proposer can execute this action"):
        ledger.mark_executed(1, ADDR2)
    assert ledger.lookup(1).status == ProposalStatus.CREATED


def test_non_proposer_is_unauthorized_even_after_execution(ledger):
    ledger.create(ADDR1, "Test Proposal", "This is a test proposal", ACTION)
    ledger.mark_executed(1, ADDR1)

    with pytest.raises(Unauthorized):
        ledger.mark_executed(1, ADDR2)


def test_mark_executed_unknown_proposal(ledger):
    with pytest.raises(ProposalNotFound) as exc_info:
        ledger.mark_executed(999, ADDR1)
    assert exc_info.value.proposal_id == 999


def test_second_execution_fails(ledger):
    ledger.create(ADDR1, "Test Proposal", "This is a test proposal", ACTION)
    ledger.mark_executed(1, ADDR1)

    with pytest.raises(AlreadyExecuted, match="Proposal already executed"):
        ledger.mark_executed(1, ADDR1)
    assert ledger.lookup(1).status == ProposalStatus.EXECUTED


def test_created_at_never_goes_backwards():
    ledger = ProposalLedger(clock=FakeClock(200, 100, 300))

    for n in range(3):
        ledger.create(ADDR1, f"Proposal {n}", "Description", ACTION)

    assert [record.created_at for record in ledger.records()] == [200, 200, 300]


def test_concurrent_creates_get_unique_dense_ids():
    ledger = ProposalLedger()
    count = 200

    with ThreadPoolExecutor(max_workers=16) as executor:
        ids = list(executor.map(lambda n: ledger.create(ADDR1, f"P{n}", "Description", ACTION), range(count)))

    assert sorted(ids) == list(range(1, count + 1))
    assert len(ledger) == count
    assert [record.id for record in ledger.records()] == list(range(1, count + 1))


def test_concurrent_executions_only_one_succeeds():
    ledger = ProposalLedger()
    ledger.create(ADDR1, "Title", "Description", ACTION)
    barrier = threading.Barrier(8)
    outcomes = []
    outcomes_lock = threading.Lock()

    def execute():
        barrier.wait()
        try:
            ledger.mark_executed(1, ADDR1)
            result = "ok"
        except AlreadyExecuted:
            result = "already"
        with outcomes_lock:
            outcomes.append(result)

    threads = [threading.Thread(target=execute) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert outcomes.count("ok") == 1
    assert outcomes.count("already") == 7


def _record(**overrides):
    fields = {
        "id": 1,
        "proposer": ADDR1,
        "title": "Title",
        "description": "Description",
        "encoded_action": b"\x01",
        "created_at": 1,
    }
    fields.update(overrides)
    return ProposalRecord(**fields)


def test_from_records_restores_state():
    ledger = ProposalLedger.from_records([_record(id=2, created_at=5), _record(id=1)])

    assert [record.id for record in ledger.records()] == [1, 2]
    assert ledger.create(ADDR2, "Next", "Description", ACTION) == 3


@pytest.mark.parametrize(
    "overrides, message",
    [
        ({"title": ""}, "Title cannot be empty"),
        ({"description": ""}, "Description cannot be empty"),
        ({"encoded_action": b""}, "Encoded action cannot be empty"),
        ({"proposer": "not-an-address"}, "Invalid proposer address"),
        ({"proposer": "0xabcdefabcdefabcdefabcdefabcdefabcdefabcd"}, "not a checksum address"),
    ],
)
def test_from_records_rejects_records_create_would_refuse(overrides, message):
    with pytest.raises(ValueError, match=message):
        ProposalLedger.from_records([_record(**overrides)])


def test_from_records_rejects_gaps_and_backwards_time():
    with pytest.raises(ValueError, match="dense"):
        ProposalLedger.from_records([_record(id=2)])
    with pytest.raises(ValueError, match="older"):
        ProposalLedger.from_records([_record(id=1, created_at=10), _record(id=2, created_at=5)])
