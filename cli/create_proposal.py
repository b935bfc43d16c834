from typing import Optional, Tuple

import click

from cli.cli_utils import domain_errors, open_ledger, parameter_option, parse_parameters, state_file_option
from governance.service.proposal_builder import ProposalBuilder
from utils.logger_utils import get_logger

logger = get_logger("Create Proposal CLI")


@click.command()
@click.option("--proposer", required=True, type=str, help="Address of the account creating the proposal.")
@click.option("--title", required=True, type=str, help="Proposal title.")
@click.option("--description", required=True, type=str, help="Proposal description.")
@click.option("-t", "--template-id", default=None, type=str, help="Template of the proposal action.")
@parameter_option
@click.option(
    "--encoded-action",
    default=None,
    type=str,
    help="Pre-encoded call data (0x...). Used instead of --template-id/--param.",
)
@state_file_option
def create_proposal(
    proposer: str,
    title: str,
    description: str,
    template_id: Optional[str],
    params: Tuple[str, ...],
    encoded_action: Optional[str],
    state_file: str,
):
    """
    Records a new proposal in the ledger and prints its id.

    The ledger file is not locked: two concurrent runs against the same
    --state-file can assign the same id and one of the writes is lost.
    """
    if (template_id is None) == (encoded_action is None):
        raise click.UsageError("Provide exactly one of --template-id or --encoded-action.")

    with domain_errors(), open_ledger(state_file, save=True) as ledger:
        if template_id is not None:
            encoded_action = ProposalBuilder().add_action(template_id, parse_parameters(params)).encoded

        proposal_id = ledger.create(proposer, title, description, encoded_action)

    logger.info(f"Proposal {proposal_id} saved to {state_file}")
    click.echo(proposal_id)
