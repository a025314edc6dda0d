"""
Command line interface for Docklett.

    docklett build.docklett                  # print the rendered Dockerfile
    docklett -F build.docklett -o Dockerfile # write it to a file
    docklett --tokens build.docklett         # dump the token stream
    docklett --ast build.docklett            # dump the syntax tree

Diagnostics go to stderr. The exit status is 1 when the file cannot be
read or has scan, parse or runtime errors.

Author: xwest
"""

import logging
from pathlib import Path
from typing import List, Optional

import click
from rich.console import Console
from rich.markup import escape

from . import __version__
from .compiler import Compiler
from .lexer.errors import Diagnostic
from .parser.printer import TreePrinter

logger = logging.getLogger(__name__)

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


def render_diagnostic(console: Console, diagnostic: Diagnostic, source_lines: List[str]):
    """Print one diagnostic with the offending source line and a caret under it."""
    code = f"[{diagnostic.code}]" if diagnostic.code else ""
    console.print(f"[bold red]{diagnostic.severity}{escape(code)}[/bold red]: {escape(diagnostic.message)}")

    location = diagnostic.location
    if location is None:
        return

    console.print(f"  [blue]-->[/blue] {escape(str(location))}")

    if 1 <= location.line <= len(source_lines):
        gutter = " " * len(str(location.line))
        text = source_lines[location.line - 1].rstrip("\r\n")
        lexeme = (diagnostic.lexeme or "").split("\n")[0]
        caret_width = max(1, len(lexeme))
        console.print(f"  {gutter} [blue]|[/blue]")
        console.print(f"  [blue]{location.line} |[/blue] {escape(text)}")
        console.print(f"  {gutter} [blue]|[/blue] {' ' * (location.column - 1)}[red]{'^' * caret_width}[/red]")

    if diagnostic.help_text:
        console.print(f"  [cyan]help[/cyan]: {escape(diagnostic.help_text)}")

    for suggestion in diagnostic.suggestions or []:
        console.print(f"    - {escape(suggestion)}")


@click.command()
@click.argument("path", required=False, metavar="FILE")
@click.option("--file", "-F", "file_option", help="Path to Dockerfile or Docklett file")
@click.option("--tokens", "show_tokens", is_flag=True, help="Print the token stream and exit")
@click.option("--ast", "show_ast", is_flag=True, help="Print the syntax tree and exit")
@click.option("--output", "-o", type=click.Path(dir_okay=False), help="Write the rendered Dockerfile here")
@click.option("--log-level", default="WARNING", envvar="DOCKLETT_LOG_LEVEL",
              type=click.Choice(LOG_LEVELS, case_sensitive=False), show_default=True,
              help="Logging verbosity")
@click.version_option(__version__, prog_name="docklett")
def main(path: Optional[str], file_option: Optional[str], show_tokens: bool,
         show_ast: bool, output: Optional[str], log_level: str):
    """Render a Docklett file into a plain Dockerfile."""
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format="%(levelname)s %(name)s: %(message)s",
        force=True,
    )

    source_path = file_option or path
    if not source_path:
        raise click.ClickException("file path is required")
    if not Path(source_path).is_file():
        raise click.ClickException(f"file does not exist: {source_path}")

    try:
        source = Path(source_path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise click.ClickException(f"cannot read {source_path}: {e}")

    console = Console(stderr=True, highlight=False)
    source_lines = source.split("\n")
    compiler = Compiler()

    if show_tokens or show_ast:
        result = compiler.compile(source, source_path)
        if show_tokens:
            for token in result.tokens:
                click.echo(f"{token.location} {token}")
        if show_ast and not result.has_errors():
            click.echo(TreePrinter().print_program(result.statements), nl=False)

        for diagnostic in result.diagnostics:
            render_diagnostic(console, diagnostic, source_lines)
        if result.has_errors():
            raise SystemExit(1)
        return

    result = compiler.run(source, source_path)

    if not result.succeeded:
        for diagnostic in result.diagnostics:
            render_diagnostic(console, diagnostic, source_lines)
        count = len(result.diagnostics)
        console.print(f"[bold red]Compilation failed[/bold red] with {count} error{'s' if count != 1 else ''}")
        raise SystemExit(1)

    if output:
        Path(output).write_text(result.render(), encoding="utf-8")
        logger.info("wrote %d instructions to %s", len(result.instructions), output)
    else:
        click.echo(result.render(), nl=False)


if __name__ == "__main__":
    main()
