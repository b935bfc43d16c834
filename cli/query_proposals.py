from typing import Optional, Tuple

import click

from cli.cli_utils import domain_errors, echo_json, open_ledger, state_file_option
from governance.ledger.proposal_query import ProposalQuery
from utils.formatter_utils import format_address


@click.command()
@click.option("-i", "--proposal-id", "proposal_ids", required=True, multiple=True, type=int, help="Proposal id. Repeat to fetch several.")
@state_file_option
def get_proposal(proposal_ids: Tuple[int, ...], state_file: str):
    """
    Prints one or more proposals as JSON. Fails if any id is unknown.
    """
    with domain_errors(), open_ledger(state_file) as ledger:
        records = ProposalQuery(ledger).get_many(list(proposal_ids))
    echo_json([record.to_dict() for record in records])


@click.command()
@click.option("--proposer", default=None, type=str, help="Only list proposals created by this address.")
@state_file_option
def list_proposals(proposer: Optional[str], state_file: str):
    """
    Lists proposals (id, status, proposer, title) and the total count.
    """
    with open_ledger(state_file) as ledger:
        query = ProposalQuery(ledger)
        ids = query.by_proposer(proposer) if proposer else tuple(range(1, query.count() + 1))
        records = query.get_many(list(ids))

    for record in records:
        click.echo(f"{record.id:>5}  {record.status.label:<9} {format_address(record.proposer)}  {record.title}")
    click.echo(f"Total proposals: {query.count()}")
