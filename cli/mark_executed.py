import click

from cli.cli_utils import domain_errors, open_ledger, state_file_option


@click.command()
@click.option("-i", "--proposal-id", required=True, type=click.IntRange(min=1), help="Id of the proposal.")
@click.option("--caller", required=True, type=str, help="Address of the account marking the proposal.")
@state_file_option
def mark_executed(proposal_id: int, caller: str, state_file: str):
    """
    Marks a proposal as executed. Only its proposer may do this, and only once.

    The ledger file is not locked, so do not run this next to another
    command that writes the same --state-file.
    """
    with domain_errors(), open_ledger(state_file, save=True) as ledger:
        ledger.mark_executed(proposal_id, caller)
    click.echo(f"Proposal {proposal_id} marked as executed")
