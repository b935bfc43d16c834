import click

from cli.create_proposal import create_proposal
from cli.decode_action import decode_action
from cli.encode_action import encode_action
from cli.list_templates import list_templates
from cli.mark_executed import mark_executed
from cli.query_proposals import get_proposal, list_proposals


@click.group()
@click.version_option(version="0.1.0")
@click.pass_context
def cli(ctx):
    pass


# Action templates
cli.add_command(list_templates, "list_templates")

# Call data
cli.add_command(encode_action, "encode_action")
cli.add_command(decode_action, "decode_action")

# Proposal lifecycle
cli.add_command(create_proposal, "create_proposal")
cli.add_command(mark_executed, "mark_executed")

# Queries
cli.add_command(get_proposal, "get_proposal")
cli.add_command(list_proposals, "list_proposals")
