import json
import logging
import sys
from pathlib import Path

import click

from .cli_utils import reconstruct_command_line
from .pipeline import (
    DeclarationTable,
    DocumentFormatError,
    ReferenceMode,
    ResolverConfig,
    SchemaResolutionError,
    SchemaResolver,
    SyntaxDocumentParser,
    signature_to_dict,
)

logger = logging.getLogger(__name__)


@click.command()
@click.option("--config", "-c", default=None, type=click.Path(exists=True, resolve_path=True))
@click.option("--function", "-f", "functions", multiple=True, help="Only resolve the named function (repeatable)")
@click.option(
    "--mode",
    "-m",
    default=None,
    type=click.Choice([mode.value for mode in ReferenceMode]),
    help="How named types are referenced (overrides config file if set)",
)
@click.option(
    "--resolve-type-aliases",
    is_flag=True,
    default=False,
    help="Resolve references to type aliases instead of rejecting them",
)
@click.option("--indent", default=2, type=int, show_default=True)
@click.option("--verbose", "-v", is_flag=True, default=False, help="Log resolution details")
@click.argument("path", type=click.Path(exists=True, resolve_path=True))
@click.argument("output", default="-", type=click.Path(allow_dash=True))
def signature_to_schema(config, functions, mode, resolve_type_aliases, indent, verbose, path, output):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    with open(path) as f:
        try:
            document = json.load(f)
        except (json.JSONDecodeError, RecursionError) as e:
            raise click.ClickException(f"Invalid syntax document: {e}") from e

    if config is not None:
        with open(config) as f:
            config = ResolverConfig.from_dict(json.load(f))
    else:
        config = ResolverConfig()

    # CLI flags override the config file
    if mode is not None:
        config.reference_mode = ReferenceMode(mode)
    if resolve_type_aliases:
        config.resolve_type_aliases = True

    try:
        syntax = SyntaxDocumentParser().parse(document, source_file=Path(path).name)
    except DocumentFormatError as e:
        raise click.ClickException(f"Invalid syntax document: {e}") from e

    resolver = SchemaResolver(DeclarationTable(syntax.declarations), config)

    result = {}
    if config.add_generation_comment:
        result["$comment"] = f"Generated by {reconstruct_command_line(signature_to_schema)}"
    result["functions"] = {}

    failures = 0
    for function in syntax.functions:
        if functions and function.name not in functions:
            continue
        if function.name in config.ignore_functions:
            logger.debug("Skipping ignored function %s", function.name)
            continue
        # One failing signature does not affect the others
        try:
            signature = resolver.resolve_signature(function)
        except SchemaResolutionError as e:
            failures += 1
            click.echo(f"error: {function.name}: {e}", err=True)
            continue
        result["functions"][function.name] = signature_to_dict(signature)

    out = json.dumps(result, indent=indent or None)
    with click.open_file(output, "w") as f:
        f.write(out + "\n")

    if failures:
        click.echo(f"{failures} function(s) could not be resolved", err=True)
        sys.exit(1)
