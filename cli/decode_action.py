import click

from cli.cli_utils import echo_json
from utils.web3_utils import decode_call_data


@click.command()
@click.argument("data", type=str)
def decode_action(data: str):
    """
    Decodes hex call data back into its function name and arguments.
    """
    try:
        decoded = decode_call_data(data)
    except ValueError as e:
        raise click.ClickException(str(e)) from e
    echo_json({"function": decoded.function, "arguments": decoded.arguments})
