import warnings
from typing import Tuple

import click

from cli.cli_utils import domain_errors, parameter_option, parse_parameters
from governance.exceptions import EncodingFallback
from governance.service.action_encoder import action_encoder
from utils.logger_utils import get_logger

logger = get_logger("Encode Action CLI")


@click.command()
@click.option("-t", "--template-id", required=True, type=str, help="Template id, e.g. treasury-transfer.")
@parameter_option
def encode_action(template_id: str, params: Tuple[str, ...]):
    """
    Validates the parameters of one action and prints its call data as hex.
    """
    parameters = parse_parameters(params)
    with domain_errors(), warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always", EncodingFallback)
        encoded = action_encoder.encode(template_id, parameters)

    if any(issubclass(warning.category, EncodingFallback) for warning in caught):
        click.echo(f"Warning: unknown template '{template_id}', parameters encoded as raw JSON text.", err=True)
    click.echo(encoded.hex())
