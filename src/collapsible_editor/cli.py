"""Command-line interface for collapsible-editor.

Replays an event script and shows or exports the resulting document.
"""

import logging
from pathlib import Path
from typing import Annotated

import typer

from . import __version__
from .config import EditorConfig
from .controller import EditController
from .events import EventReplay
from .export import export_markdown, format_deletion_log, write_markdown
from .rendering import render_html, render_state, render_terminal

app = typer.Typer(
    name="collapsible",
    help="Replay editing sessions with non-destructive deletions.",
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"collapsible version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-v",
            help="Show version and exit.",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
    verbose: Annotated[bool, typer.Option("--verbose", help="Enable debug logging.")] = False,
) -> None:
    """Replay editing sessions with non-destructive deletions."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")


def _replay(script: Path, config: Path | None) -> EditController:
    """Load the configuration and replay a script, reporting failed events."""
    editor_config = EditorConfig.from_yaml(config) if config else EditorConfig()
    controller = EditController(config=editor_config)
    fmt = "json" if script.suffix.lower() == ".json" else "yaml"
    results = EventReplay(controller).apply_event_file(script, format=fmt)
    for r in results:
        if not r.success:
            typer.echo(f"  Failed: {r.message}", err=True)
    return controller


@app.command()
def export(
    script: Annotated[Path, typer.Argument(help="Path to YAML/JSON event script")],
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Output file or directory (stdout if omitted)",
        ),
    ] = None,
    config: Annotated[
        Path | None, typer.Option("--config", "-c", help="YAML editor configuration")
    ] = None,
) -> None:
    """Export the replayed document to Markdown with footnotes."""
    try:
        controller = _replay(script, config)
        content = export_markdown(controller.state, controller.config)
        if output is None:
            typer.echo(content, nl=False)
        else:
            target = write_markdown(controller.state, output, controller.config)
            typer.echo(f"Exported {len(controller.store)} deletions to {target}")
    except Exception as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)


@app.command()
def show(
    script: Annotated[Path, typer.Argument(help="Path to YAML/JSON event script")],
    config: Annotated[
        Path | None, typer.Option("--config", "-c", help="YAML editor configuration")
    ] = None,
    color: Annotated[bool, typer.Option("--color/--no-color", help="Use ANSI styles")] = True,
) -> None:
    """Show the replayed document with deletions folded."""
    try:
        controller = _replay(script, config)
        segments = render_state(controller.state, controller.config)
        typer.echo(render_terminal(segments, color=color))
    except Exception as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)


@app.command()
def log(
    script: Annotated[Path, typer.Argument(help="Path to YAML/JSON event script")],
    config: Annotated[
        Path | None, typer.Option("--config", "-c", help="YAML editor configuration")
    ] = None,
) -> None:
    """List the recorded deletions."""
    try:
        controller = _replay(script, config)
        typer.echo(format_deletion_log(controller.state.deletions))
    except Exception as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)


@app.command()
def html(
    script: Annotated[Path, typer.Argument(help="Path to YAML/JSON event script")],
    output: Annotated[
        Path | None, typer.Option("--output", "-o", help="Output file (stdout if omitted)")
    ] = None,
    config: Annotated[
        Path | None, typer.Option("--config", "-c", help="YAML editor configuration")
    ] = None,
) -> None:
    """Render the replayed document as an HTML preview fragment."""
    try:
        controller = _replay(script, config)
        fragment = render_html(render_state(controller.state, controller.config))
        if output is None:
            typer.echo(fragment)
        else:
            output.write_text(fragment, encoding="utf-8")
            typer.echo(f"Wrote preview to {output}")
    except Exception as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
