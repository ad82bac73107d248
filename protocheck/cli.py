"""Command-line interface for protocheck."""

import logging
import sys

import click

from .output.formatter import format_document_report, format_handler_table
from .schema.errors import IngestionError, SchemaLoadError, SchemaValidationError
from .validators.runner import verify_file


def _load_report(model_file: str, components: list[str] | None):
    """Verify a file, exiting with status 2 on load or schema errors."""
    try:
        return verify_file(model_file, components)
    except SchemaLoadError as e:
        click.echo(f"Error loading file: {e}", err=True)
        sys.exit(2)
    except SchemaValidationError as e:
        click.echo(f"Schema validation error: {e}", err=True)
        for err in e.errors:
            click.echo(f"  - {err['loc']}: {err['msg']}", err=True)
        sys.exit(2)
    except IngestionError as e:
        click.echo(f"Ingestion error: {e}", err=True)
        sys.exit(2)


@click.group()
@click.version_option(package_name="protocheck")
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    default=False,
    help="Log analysis stages to stderr",
)
def main(verbose: bool):
    """protocheck: static verification of management protocol fault handlers."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


@main.command()
@click.argument("model_file", type=click.Path(exists=True))
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    envvar="PROTOCHECK_FORMAT",
    help="Output format (defaults to PROTOCHECK_FORMAT env var, then text)",
)
@click.option(
    "--strict",
    is_flag=True,
    default=False,
    help="Treat warnings as errors",
)
@click.option(
    "--component",
    "components",
    multiple=True,
    help="Only verify this component (may be repeated)",
)
def verify(model_file: str, output_format: str, strict: bool, components: tuple[str, ...]):
    """Verify the management protocols in a YAML file.

    MODEL_FILE is the path to a YAML protocol document.

    Exit codes:
      0 - Verification passed
      1 - Verification failed (errors found)
      2 - File, schema or ingestion error
    """
    report = _load_report(model_file, list(components) or None)

    output = format_document_report(report, output_format)  # type: ignore
    click.echo(output)

    if report.has_errors:
        sys.exit(1)
    elif strict and report.has_warnings:
        sys.exit(1)
    else:
        sys.exit(0)


@main.command()
@click.argument("model_file", type=click.Path(exists=True))
@click.argument("component")
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    envvar="PROTOCHECK_FORMAT",
    help="Output format",
)
def handlers(model_file: str, component: str, output_format: str):
    """Show which state handles the loss of each requirement.

    MODEL_FILE is the path to a YAML protocol document and COMPONENT the
    component to inspect.

    Exit codes:
      0 - Table printed, component has no errors
      1 - Table printed, but the component has errors
      2 - File, schema or ingestion error
    """
    report = _load_report(model_file, [component])
    component_report = report.components[0]

    if component_report.fault_handling is None:
        for issue in component_report.result.errors:
            click.echo(f"Ingestion error: {issue.message}", err=True)
        sys.exit(2)

    click.echo(format_handler_table(component_report, output_format))  # type: ignore

    if component_report.result.has_errors:
        click.echo(
            f"Warning: {component} has {len(component_report.result.errors)} error(s); "
            "do not rely on these routes at runtime",
            err=True,
        )
        sys.exit(1)
    sys.exit(0)


if __name__ == "__main__":
    main()
