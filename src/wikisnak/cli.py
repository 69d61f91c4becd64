"""Command line interface for wikisnak."""

import json
import logging
from typing import Any, Optional

import click
import yaml
from click_default_group import DefaultGroup

from wikisnak import __version__
from wikisnak.options import SimplifySnakOptions
from wikisnak.parse_snak import PARSERS, TIME_CONVERTERS, parse_snak
from wikisnak.simplify import simplify_snak, simplify_snaks

__all__ = [
    "main",
]

logger = logging.getLogger(__name__)


def dump(obj: Any, format="yaml") -> None:
    """
    Dump an object to stdout.

    :param obj:
    :param format:
    :return:
    """
    if format is None or format == "yaml":
        set = yaml.dump(obj, sort_keys=False)
    elif format == "json":
        set = json.dumps(obj, indent=2)
    else:
        raise ValueError(f"Unknown format {format}")
    click.echo(set)


def simplify_document(doc: Any, datatype: Optional[str], options: SimplifySnakOptions) -> Any:
    """
    Simplify a JSON document holding a data value, a snak or a list of snaks.

    :param doc:
    :param datatype: overrides the datatype of the data value, or of every snak
    :param options:
    :return:
    """
    if isinstance(doc, list):
        if datatype:
            doc = [{**snak, "datatype": datatype} for snak in doc]
        return simplify_snaks(doc, options)
    if not isinstance(doc, dict):
        raise ValueError(
            f"Expected a data value, a snak or a list of snaks, got {type(doc).__name__}"
        )
    if "snaktype" in doc:
        if datatype:
            doc = {**doc, "datatype": datatype}
        return simplify_snak(doc, options)
    return parse_snak(datatype, doc, options)


output_format_option = click.option(
    "-t",
    "--output-format",
    type=click.Choice(["yaml", "json"]),
    default="yaml",
    show_default=True,
    help="Output format for results.",
)


@click.group(
    cls=DefaultGroup,
    default="simplify",
    default_if_no_args=True,
)
@click.option("-v", "--verbose", count=True)
@click.option("-q", "--quiet", is_flag=True)
@click.version_option(__version__)
def main(verbose: int, quiet: bool):
    """
    CLI for wikisnak.

    :param verbose: Verbosity while running.
    :param quiet: Boolean to be quiet or verbose.
    """
    logging.basicConfig()
    logger = logging.root
    if verbose >= 2:
        logger.setLevel(level=logging.DEBUG)
    elif verbose == 1:
        logger.setLevel(level=logging.INFO)
    else:
        logger.setLevel(level=logging.WARNING)
    if quiet:
        logger.setLevel(level=logging.ERROR)
    logger.info(f"Logger {logger.name} set to level {logger.level}")


@main.command()
@click.argument("input", type=click.File("r"), default="-")
@click.option(
    "-d", "--datatype", help="Datatype of the value, or of every snak, e.g. wikibase-item."
)
@click.option(
    "--rich/--no-rich",
    default=False,
    show_default=True,
    help="Keep the full structure of values.",
)
@click.option("--entity-prefix", help="Prefix for entity ids, e.g. wd.")
@click.option(
    "--time-converter",
    type=click.Choice(list(TIME_CONVERTERS)),
    default="iso",
    show_default=True,
    help="Conversion applied to time values.",
)
@click.option(
    "--keep-types/--no-keep-types",
    default=False,
    show_default=True,
    help="Wrap simplified snaks with their datatype.",
)
@output_format_option
def simplify(input, datatype, rich, entity_prefix, time_converter, keep_types, output_format):
    """
    Simplify a data value, a snak, or a list of snaks.

    Reads JSON from INPUT (stdin by default).

    Example:

        echo '{"type": "string", "value": "foo"}' | wikisnak simplify
    """
    options = SimplifySnakOptions(
        keep_rich_values=rich,
        entity_prefix=entity_prefix,
        time_converter=time_converter,
        keep_types=keep_types,
    )
    try:
        doc = json.load(input)
    except json.JSONDecodeError as e:
        raise click.ClickException(f"Could not parse JSON input: {e}") from e
    logger.debug(f"Simplifying {doc}")
    try:
        result = simplify_document(doc, datatype, options)
    except KeyError as e:
        raise click.ClickException(f"Missing field {e} in {doc}") from e
    except (AttributeError, TypeError, ValueError) as e:
        raise click.ClickException(str(e)) from e
    dump(result, output_format)


@main.command()
def datatypes():
    """List the datatypes that can be simplified."""
    for datatype in PARSERS:
        click.echo(datatype)


if __name__ == "__main__":
    main()
