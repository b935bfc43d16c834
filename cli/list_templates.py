import click

from cli.cli_utils import echo_json
from governance.enums.template_category import TemplateCategory
from governance.templates.template_catalog import catalog


@click.command()
@click.option(
    "-c",
    "--category",
    default=None,
    type=click.Choice([category.value for category in TemplateCategory]),
    help="Only show templates of this category.",
)
@click.option("--json", "as_json", is_flag=True, default=False, help="Print the full template schemas as JSON.")
def list_templates(category: str | None, as_json: bool):
    """
    Lists the proposal action templates, grouped by category.
    """
    grouped = catalog.templates_by_category()
    if category is not None:
        grouped = {key: value for key, value in grouped.items() if key.value == category}

    if as_json:
        echo_json([template.model_dump(mode="json") for templates in grouped.values() for template in templates])
        return

    for template_category, templates in grouped.items():
        click.echo(f"{template_category.label}:")
        for template in templates:
            click.echo(f"  {template.id:<20} {template.name} ({len(template.fields)} parameters)")
