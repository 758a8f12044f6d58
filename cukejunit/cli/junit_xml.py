from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional

import typer
from dotenv import load_dotenv

from cukejunit.formatter.api import convert_envelopes
from cukejunit.formatter.config import FormatterOptions
from cukejunit.messages.ndjson import MessageParseError, read_envelopes
from cukejunit.query.errors import CorrelationError
from cukejunit.query.lineage import (
    DEFAULT_NAMING_STRATEGY,
    NamingStrategy,
    NamingStrategyExampleName,
    NamingStrategyFeatureName,
    NamingStrategyLength,
)
from cukejunit.report.errors import ReportStateError

logger = logging.getLogger(__name__)

app = typer.Typer(
    add_completion=False,
    help="Converts Cucumber messages (NDJSON) to a JUnit XML report.",
)


def setup_logging(verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
    )


@app.command()
def main(
    source: str = typer.Argument(
        ..., help="NDJSON file with Cucumber messages, or '-' for stdin"
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Destination file or directory. Omit to write to stdout.",
    ),
    suite_name: Optional[str] = typer.Option(None, help="Test suite name"),
    test_class_name: Optional[str] = typer.Option(
        None, help="Classname used for every test case"
    ),
    naming_length: Optional[NamingStrategyLength] = typer.Option(
        None, help="Include every ancestor in test names (long) or only the last"
    ),
    feature_name: Optional[NamingStrategyFeatureName] = typer.Option(
        None, help="Include the feature name in long test names"
    ),
    example_naming_strategy: Optional[NamingStrategyExampleName] = typer.Option(
        None, "--example-naming-strategy", "-e", help="How to name example rows"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
) -> None:
    load_dotenv()
    setup_logging(verbose)

    reading_stdin = source == "-"
    if reading_stdin and output is not None and output.is_dir():
        raise typer.BadParameter(
            f"'{output}': when reading from standard input, "
            "output can not be a directory",
            param_hint="--output",
        )
    if not reading_stdin and not Path(source).is_file():
        raise typer.BadParameter(f"could not read '{source}'", param_hint="SOURCE")

    options = _resolve_options(
        suite_name=suite_name,
        test_class_name=test_class_name,
        naming_length=naming_length,
        feature_name=feature_name,
        example_name=example_naming_strategy,
    )
    try:
        if reading_stdin:
            content = convert_envelopes(read_envelopes(sys.stdin), options)
        else:
            with Path(source).open(encoding="utf-8") as handle:
                content = convert_envelopes(read_envelopes(handle), options)
    except (CorrelationError, MessageParseError, ReportStateError) as exc:
        typer.echo(f"error: {exc}", err=True)
        raise typer.Exit(code=1)

    if output is None:
        typer.echo(content, nl=False)
        return
    destination = _output_path(source, output)
    destination.parent.mkdir(parents=True, exist_ok=True)
    destination.write_text(content, encoding="utf-8")
    logger.info("junit report written to %s", destination)


def _resolve_options(
    *,
    suite_name: Optional[str],
    test_class_name: Optional[str],
    naming_length: Optional[NamingStrategyLength],
    feature_name: Optional[NamingStrategyFeatureName],
    example_name: Optional[NamingStrategyExampleName],
) -> FormatterOptions:
    env = FormatterOptions.from_env()
    strategy = env.test_naming_strategy
    if naming_length or feature_name or example_name:
        base = strategy or DEFAULT_NAMING_STRATEGY
        strategy = NamingStrategy(
            length=naming_length or base.length,
            feature_name=feature_name or base.feature_name,
            example_name=example_name or base.example_name,
        )
    return FormatterOptions(
        suite_name=suite_name or env.suite_name,
        test_class_name=test_class_name or env.test_class_name,
        test_naming_strategy=strategy,
    )


def _output_path(source: str, output: Path) -> Path:
    if not output.is_dir():
        return output
    name = Path(source).name
    stem = name.rsplit(".", 1)[0] if "." in name else name
    candidate = output / f"{stem}.xml"
    counter = 1
    # Never overwrite a file whose name was derived here.
    while candidate.exists():
        candidate = output / f"{stem}.{counter}.xml"
        counter += 1
    return candidate


if __name__ == "__main__":
    app()
