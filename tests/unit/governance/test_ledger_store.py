import orjson
import pytest

from governance.enums.proposal_status import ProposalStatus
from governance.ledger.ledger_store import SNAPSHOT_VERSION, load_ledger, save_ledger
from governance.ledger.proposal_ledger import ProposalLedger

ADDR1 = "0x1111111111111111111111111111111111111111"
ADDR2 = "0x2222222222222222222222222222222222222222"


@pytest.fixture
def state_file(tmp_path):
    return tmp_path / "state" / "proposals.json"


def test_missing_snapshot_gives_empty_ledger(state_file):
    ledger = load_ledger(state_file)
    assert len(ledger) == 0


def test_snapshot_round_trip_keeps_ids_status_and_next_id(state_file):
    ledger = ProposalLedger(clock=lambda: 1_700_000_000)
    ledger.create(ADDR1, "First", "First proposal", "0xa9059cbb")
    ledger.create(ADDR2, "Second", "Second proposal", "0x3659cfe6")
    ledger.mark_executed(1, ADDR1)

    save_ledger(ledger, state_file)
    restored = load_ledger(state_file, clock=lambda: 1_700_000_100)

    assert restored.records() == ledger.records()
    assert restored.lookup(1).status == ProposalStatus.EXECUTED
    assert restored.proposer_ids(ADDR2) == (2,)
    assert restored.create(ADDR1, "Third", "Third proposal", "0x01") == 3


def test_snapshot_is_plain_json(state_file):
    ledger = ProposalLedger(clock=lambda: 42)
    ledger.create(ADDR1, "Title", "Description", b"\xde\xad")

    save_ledger(ledger, state_file)
    payload = orjson.loads(state_file.read_bytes())

    assert payload["version"] == SNAPSHOT_VERSION
    assert payload["proposals"] == [
        {
            "id": 1,
            "proposer": ADDR1,
            "title": "Title",
            "description": "Description",
            "encoded_action": "0xdead",
            "status": 0,
            "created_at": 42,
        }
    ]
    assert not state_file.with_suffix(".json.tmp").exists()


def test_invalid_json_is_rejected(state_file):
    state_file.parent.mkdir(parents=True)
    state_file.write_text("{not json")
    with pytest.raises(ValueError, match="not valid JSON"):
        load_ledger(state_file)


def test_unknown_version_is_rejected(state_file):
    state_file.parent.mkdir(parents=True)
    state_file.write_bytes(orjson.dumps({"version": 99, "proposals": []}))
    with pytest.raises(ValueError, match="Unsupported ledger snapshot version"):
        load_ledger(state_file)


def test_gap_in_ids_is_rejected(state_file):
    proposal = {
        "id": 2,
        "proposer": ADDR1,
        "title": "Title",
        "description": "Description",
        "encoded_action": "0x01",
        "status": 0,
        "created_at": 1,
    }
    state_file.parent.mkdir(parents=True)
    state_file.write_bytes(orjson.dumps({"version": SNAPSHOT_VERSION, "proposals": [proposal]}))
    with pytest.raises(ValueError, match="dense"):
        load_ledger(state_file)


def test_malformed_proposal_is_rejected(state_file):
    state_file.parent.mkdir(parents=True)
    state_file.write_bytes(orjson.dumps({"version": SNAPSHOT_VERSION, "proposals": [{"id": 1}]}))
    with pytest.raises(ValueError):
        load_ledger(state_file)


def test_snapshot_record_breaking_ledger_rules_is_rejected(state_file):
    proposal = {
        "id": 1,
        "proposer": ADDR1,
        "title": "",
        "description": "Description",
        "encoded_action": "0x01",
        "status": 0,
        "created_at": 1,
    }
    state_file.parent.mkdir(parents=True)
    state_file.write_bytes(orjson.dumps({"version": SNAPSHOT_VERSION, "proposals": [proposal]}))
    with pytest.raises(ValueError, match="Title cannot be empty"):
        load_ledger(state_file)
