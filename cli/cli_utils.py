from contextlib import contextmanager
from typing import Dict, Iterator, Tuple

import click
import orjson

from config.settings import settings
from governance.exceptions import GovernanceError, ValidationError
from governance.ledger.ledger_store import load_ledger, save_ledger
from governance.ledger.proposal_ledger import ProposalLedger

state_file_option = click.option(
    "--state-file",
    default=settings.ledger.state_file,
    show_default=True,
    type=click.Path(dir_okay=False),
    help="Path of the ledger snapshot file. The file is read, changed and rewritten without a lock, "
    "so only one process may use it at a time.",
)

parameter_option = click.option(
    "-p",
    "--param",
    "params",
    multiple=True,
    type=str,
    help="Action parameter as key=value. Repeat for each field.",
)


def parse_parameters(params: Tuple[str, ...]) -> Dict[str, str]:
    parameters: Dict[str, str] = {}
    for item in params:
        key, sep, value = item.partition("=")
        if not sep or not key.strip():
            raise click.BadParameter(f"expected key=value, got {item!r}", param_hint="--param")
        parameters[key.strip()] = value
    return parameters


_INT64_LIMIT = 2**63


def to_json_compatible(value):
    """orjson only serializes 64-bit integers; wider ones (uint256 words) are rendered as text."""
    if isinstance(value, dict):
        return {key: to_json_compatible(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_json_compatible(item) for item in value]
    if isinstance(value, int) and not isinstance(value, bool) and abs(value) >= _INT64_LIMIT:
        return str(value)
    return value


def echo_json(payload) -> None:
    click.echo(orjson.dumps(to_json_compatible(payload), option=orjson.OPT_INDENT_2).decode("utf-8"))


@contextmanager
def domain_errors() -> Iterator[None]:
    """Renders domain errors as a one-line CLI error (exit status 1)."""
    try:
        yield
    except ValidationError as e:
        lines = [f"Invalid parameters for template '{e.template_id}':"]
        lines.extend(f"  {error.field_id}: {error.message}" for error in e.errors)
        raise click.ClickException("\n".join(lines)) from e
    except GovernanceError as e:
        raise click.ClickException(str(e)) from e


@contextmanager
def open_ledger(state_file: str, save: bool = False) -> Iterator[ProposalLedger]:
    """
    Loads the snapshot, yields the ledger and, when `save` is set, writes it back.
    Single-process only: no file lock is held between the load and the save.
    """
    try:
        ledger = load_ledger(state_file)
    except ValueError as e:
        raise click.ClickException(str(e)) from e
    yield ledger
    if save:
        save_ledger(ledger, state_file)
