from pathlib import Path
from typing import Callable, Optional

import orjson

from governance.ledger.proposal_ledger import ProposalLedger
from governance.models.proposal_record import ProposalRecord
from utils.formatter_utils import to_bytes_data
from utils.logger_utils import get_logger

logger = get_logger("Ledger Store")

SNAPSHOT_VERSION = 1


def save_ledger(ledger: ProposalLedger, path: str | Path) -> None:
    """
    Writes every record to a JSON snapshot. The file is replaced atomically
    so a crash mid-write leaves the previous snapshot intact.
    """
    path = Path(path)
    records = ledger.records()
    payload = {
        "version": SNAPSHOT_VERSION,
        "proposals": [record.to_dict() for record in records],
    }
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = path.with_suffix(path.suffix + ".tmp")
    tmp_path.write_bytes(orjson.dumps(payload, option=orjson.OPT_INDENT_2))
    tmp_path.replace(path)
    logger.debug(f"Saved {len(records)} proposal(s) to {path}")


def load_ledger(path: str | Path, clock: Optional[Callable[[], float]] = None) -> ProposalLedger:
    """
    Loads a snapshot written by save_ledger. A missing file yields an empty ledger.

    Raises:
        ValueError: If the snapshot is malformed or its ids are not dense.
    """
    path = Path(path)
    if not path.exists():
        logger.info(f"No ledger snapshot at {path}, starting empty")
        return ProposalLedger(clock=clock)

    try:
        payload = orjson.loads(path.read_bytes())
    except orjson.JSONDecodeError as e:
        raise ValueError(f"Ledger snapshot {path} is not valid JSON: {e}") from e

    if not isinstance(payload, dict):
        raise ValueError(f"Ledger snapshot {path} must contain a JSON object")

    version = payload.get("version")
    if version != SNAPSHOT_VERSION:
        raise ValueError(f"Unsupported ledger snapshot version: {version}")

    try:
        records = [
            ProposalRecord(**{**item, "encoded_action": to_bytes_data(item["encoded_action"])})
            for item in payload.get("proposals", [])
        ]
    except (KeyError, TypeError) as e:
        raise ValueError(f"Ledger snapshot {path} has a malformed proposal: {e}") from e
    ledger = ProposalLedger.from_records(records, clock=clock)
    logger.debug(f"Loaded {len(ledger)} proposal(s) from {path}")
    return ledger
