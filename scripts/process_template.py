#!/usr/bin/env python3
"""
Template Processing CLI

Runs an HTML template and a YAML/JSON data file through the transformation
pipeline and writes the result in any supported export format.

Usage:
    # Render to stdout
    python scripts/process_template.py process profile.html data.yaml

    # Render to Markdown with {{name}} tokens, keeping empty sections
    python scripts/process_template.py process profile.html data.yaml \\
        -f markdown -p delimiters_double_braces --keep-empty-sections -o profile.md

    # Structured export with a session log under $LOGS_PATH
    python scripts/process_template.py process profile.html data.yaml -f json --log

    # List export formats and presets
    python scripts/process_template.py formats
    python scripts/process_template.py presets
"""

import json
import os
from pathlib import Path
from typing import List, Optional

import typer
from dotenv import load_dotenv
from typing_extensions import Annotated

from vellum.contexts.exporting import UnsupportedExportFormatError, get_supported_export_formats
from vellum.contexts.exporting.tree import tree_to_dicts
from vellum.contexts.templating import (
    InvalidTemplateOptionsError,
    TemplateProcessingError,
    TemplateProcessor,
    load_processor_presets,
    load_template_data,
    resolve_options,
)
from vellum.contexts.templating.logger import _log_info, _log_success, setup_templating_logger
from vellum.utils.timestamp import session_stamp

load_dotenv()
LOGS_PATH = Path(os.getenv("LOGS_PATH", "outs/logs"))


app = typer.Typer(
    help="Process marker-language HTML templates with template data",
    add_completion=False,
)


@app.command("process")
def process_command(
    template_file: Annotated[
        Path,
        typer.Argument(
            help="HTML template file",
            exists=True,
            dir_okay=False,
            resolve_path=True,
        ),
    ],
    data_file: Annotated[
        Path,
        typer.Argument(
            help="Template data file (.yaml, .yml or .json)",
            exists=True,
            dir_okay=False,
            resolve_path=True,
        ),
    ],
    output_file: Annotated[
        Optional[Path],
        typer.Option("--output", "-o", help="Output file (defaults to stdout)", dir_okay=False),
    ] = None,
    fmt: Annotated[
        str,
        typer.Option("--format", "-f", help="Export format (see 'formats' command)"),
    ] = "html",
    presets: Annotated[
        Optional[List[str]],
        typer.Option("--preset", "-p", help="Processor preset to apply (repeatable, later wins)"),
    ] = None,
    no_loops: Annotated[
        bool,
        typer.Option("--no-loops", help="Skip loop expansion"),
    ] = False,
    no_placeholders: Annotated[
        bool,
        typer.Option("--no-placeholders", help="Skip top-level placeholder resolution"),
    ] = False,
    keep_empty_sections: Annotated[
        bool,
        typer.Option("--keep-empty-sections", help="Do not prune empty sections"),
    ] = False,
    log: Annotated[
        bool,
        typer.Option("--log", help="Write a DEBUG log file under $LOGS_PATH"),
    ] = False,
    log_dir: Annotated[
        Optional[Path],
        typer.Option("--log-dir", help="Write a DEBUG log file to this directory", file_okay=False),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Show per-stage decisions on the console"),
    ] = False,
):
    """
    Process a template with data and export the result.

    Examples:\n
        $ process_template.py process profile.html data.yaml -o profile_filled.html

        $ process_template.py process profile.html data.json -f text
    """
    if log and log_dir is None:
        log_dir = LOGS_PATH / f"process_{session_stamp()}"

    log_file = setup_templating_logger(
        log_dir=log_dir,
        template_name=template_file.name,
        console_level="DEBUG" if verbose else "INFO",
    )

    overrides = {}
    if no_loops:
        overrides["process_loops"] = False
    if no_placeholders:
        overrides["process_placeholders"] = False
    if keep_empty_sections:
        overrides["remove_empty_sections"] = False

    try:
        options = resolve_options(presets or [], overrides)
    except (ValueError, InvalidTemplateOptionsError) as e:
        typer.secho(f"Error: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    if fmt not in get_supported_export_formats():
        typer.secho(
            f"Error: unsupported format '{fmt}'. "
            f"Supported: {', '.join(get_supported_export_formats())}",
            fg=typer.colors.RED,
            err=True,
        )
        raise typer.Exit(code=1)

    processor = TemplateProcessor(options)
    _log_info(f"Processing {template_file.name} with {data_file.name}")

    try:
        data = load_template_data(data_file)
        html = processor.process(
            template_file.read_text(encoding="utf-8"), data, template_name=template_file.name
        )
        exported = processor.export(html, fmt)
    except (ValueError, TemplateProcessingError, UnsupportedExportFormatError) as e:
        typer.secho(f"Error: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    if fmt == "ast":
        exported = tree_to_dicts(exported)
    if not isinstance(exported, str):
        exported = json.dumps(exported, indent=2, ensure_ascii=False)

    if output_file is None:
        typer.echo(exported)
    else:
        output_file.parent.mkdir(parents=True, exist_ok=True)
        output_file.write_text(exported, encoding="utf-8")
        _log_success(f"Wrote {fmt} output to {output_file}")

    if log_file:
        _log_info(f"Log written to {log_file}")


@app.command("formats")
def formats_command():
    """List supported export formats."""
    for name in get_supported_export_formats():
        typer.echo(name)


@app.command("presets")
def presets_command():
    """List available processor presets and their options."""
    for name, config in load_processor_presets().items():
        typer.secho(name, bold=True)
        for key, value in config.items():
            typer.echo(f"  {key}: {value}")


if __name__ == "__main__":
    app()
