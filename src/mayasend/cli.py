"""mayasend CLI."""

import logging
import sys
from pathlib import Path
from typing import Annotated

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from mayasend.builder import infer_language
from mayasend.client import MayaClient
from mayasend.config import MayasendConfig, get_config_template, load_config
from mayasend.display import (
    ConsoleDisplay,
    ConsoleNotifier,
    FileContentReader,
    TextContentReader,
    TmuxDisplay,
)
from mayasend.display.base import Display
from mayasend.transport.base import ConnectionTarget
from mayasend.types import Payload

app = typer.Typer(help="mayasend - Run MEL and Python in a live Maya session")
console = Console()

CONFIG_FILE = "mayasend.yaml"
QUIT_COMMANDS = {":q", ":quit", "exit"}


def setup_logging(verbose: bool = False):
    """Configure logging with rich handler."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True)],
    )


def get_config(
    config_path: Path | None,
    host: str | None,
    port: int | None,
    socket_path: str | None,
) -> MayasendConfig:
    """Load config and apply command-line overrides."""
    path = config_path or Path(CONFIG_FILE)
    if config_path is not None and not config_path.exists():
        console.print(f"[red]Error:[/red] {config_path} not found.")
        raise typer.Exit(1)

    try:
        config = load_config(path)
    except (ValidationError, ValueError) as e:
        console.print(f"[red]Error:[/red] Invalid configuration in {path}:\n{escape(str(e))}")
        raise typer.Exit(1)

    if host is not None:
        config.port.host = host
    if port is not None:
        config.port.port = port
    if socket_path is not None:
        config.port.socket_path = socket_path
    return config


def get_display(config: MayasendConfig) -> Display:
    """Use a tmux pane for the log when running inside tmux."""
    tmux = TmuxDisplay(config.log.tail_command, config.log.split_vertical)
    if tmux.is_available():
        return tmux
    return ConsoleDisplay(console)


def get_client(config: MayasendConfig) -> MayaClient:
    return MayaClient(config, get_display(config), ConsoleNotifier(console))


def parse_lines(lines: str) -> tuple[int, int]:
    """Parse an inclusive line range like 3:10 or a single line like 7."""
    start_str, _, end_str = lines.partition(":")
    try:
        start = int(start_str)
        end = int(end_str) if end_str else start
    except ValueError:
        raise typer.BadParameter(f"Invalid line range: {lines}. Use START:END.")
    return start, end


ConfigOption = Annotated[
    Path | None, typer.Option("--config", "-c", help="Config file (default: ./mayasend.yaml)")
]
HostOption = Annotated[str | None, typer.Option("--host", help="Command port host")]
PortOption = Annotated[int | None, typer.Option("--port", "-p", help="Command port number")]
SocketOption = Annotated[
    str | None, typer.Option("--socket", help="Unix socket path of the command port")
]
VerboseOption = Annotated[bool, typer.Option("--verbose", "-v", help="Enable verbose logging")]


@app.command()
def init():
    """Write a mayasend.yaml in the current directory."""
    config_file = Path(CONFIG_FILE)

    if config_file.exists():
        console.print(f"[yellow]Warning:[/yellow] {CONFIG_FILE} already exists.")
        if not typer.confirm("Overwrite?"):
            raise typer.Exit(0)

    config_file.write_text(get_config_template())
    console.print(f"[green]Wrote {CONFIG_FILE}.[/green]")
    console.print("\nIn Maya, open the command port it points at, for example:")
    console.print('  commandPort -name ":7001" -sourceType "mel";', markup=False)


@app.command()
def run(
    file: str = typer.Argument(..., help="Script to run, or - for stdin"),
    lines: str | None = typer.Option(None, "--lines", "-l", help="Inclusive line range, e.g. 3:10"),
    lang: str = typer.Option("", "--lang", help="mel or python (default: from suffix)"),
    config_path: ConfigOption = None,
    host: HostOption = None,
    port: PortOption = None,
    socket_path: SocketOption = None,
    verbose: VerboseOption = False,
):
    """Run a MEL or Python script in Maya."""
    setup_logging(verbose)
    config = get_config(config_path, host, port, socket_path)

    if file == "-":
        reader = TextContentReader(sys.stdin.read())
    else:
        path = Path(file)
        if not path.is_file():
            console.print(f"[red]Error:[/red] {file} not found.")
            raise typer.Exit(1)
        reader = FileContentReader(path)
        lang = lang or infer_language(path)

    payload = Payload.lines(*parse_lines(lines)) if lines else Payload.content()

    with get_client(config) as client:
        result = client.run(payload, lang, reader)
    if not result.ok:
        raise typer.Exit(1)


@app.command()
def send(
    command: str = typer.Argument(..., help="Command to run, e.g. 'polyCube;'"),
    lang: str = typer.Option("", "--lang", help="mel or python (default: from config)"),
    config_path: ConfigOption = None,
    host: HostOption = None,
    port: PortOption = None,
    socket_path: SocketOption = None,
    verbose: VerboseOption = False,
):
    """Run a single command in Maya."""
    setup_logging(verbose)
    config = get_config(config_path, host, port, socket_path)

    with get_client(config) as client:
        result = client.run(Payload.literal(command), lang)
    if not result.ok:
        raise typer.Exit(1)


@app.command()
def query(
    keyword: str = typer.Argument(..., help="Procedure, command or $variable name"),
    open_reference: bool = typer.Option(
        True, "--open/--no-open", help="Open the defining file when there is one"
    ),
    config_path: ConfigOption = None,
    host: HostOption = None,
    port: PortOption = None,
    socket_path: SocketOption = None,
    verbose: VerboseOption = False,
):
    """Ask Maya what a name is (whatIs)."""
    setup_logging(verbose)
    config = get_config(config_path, host, port, socket_path)

    with get_client(config) as client:
        result = client.query(keyword, open_reference=open_reference)
        if result.ok and not result.info:
            console.print(f"[yellow]No answer for {keyword} in the log.[/yellow]")
    if not result.ok:
        raise typer.Exit(1)


@app.command()
def shell(
    lang: str = typer.Option("", "--lang", help="mel or python (default: from config)"),
    config_path: ConfigOption = None,
    host: HostOption = None,
    port: PortOption = None,
    socket_path: SocketOption = None,
    verbose: VerboseOption = False,
):
    """Send commands interactively, keeping one log for the whole session.

    Each line is run as a command. ``?name`` queries a name, ``:reset``
    starts a new log and ``:q`` exits.
    """
    setup_logging(verbose)
    config = get_config(config_path, host, port, socket_path)
    target = ConnectionTarget.from_config(config.port)
    console.print(f"[bold]mayasend[/bold] -> {target.describe()}  ([dim]:q to quit[/dim])")

    with get_client(config) as client:
        while True:
            try:
                line = console.input("[cyan]>[/cyan] ")
            except (EOFError, KeyboardInterrupt):
                console.print()
                break

            line = line.strip()
            if not line:
                continue
            if line in QUIT_COMMANDS:
                break
            if line == ":reset":
                client.reset_log()
            elif line.startswith("?"):
                client.query(line[1:].strip())
            else:
                client.run(Payload.literal(line), lang)


@app.command()
def status(
    config_path: ConfigOption = None,
    host: HostOption = None,
    port: PortOption = None,
    socket_path: SocketOption = None,
):
    """Show the resolved connection and log settings."""
    config = get_config(config_path, host, port, socket_path)
    target = ConnectionTarget.from_config(config.port)
    display = get_display(config)

    timeout = "none" if target.timeout is None else f"{target.timeout:g}s"
    console.print(f"[bold]Command port:[/bold] {target.describe()}")
    console.print(f"[bold]Timeout:[/bold] {timeout}")
    console.print(f"[bold]Default language:[/bold] {config.run.default_language}")
    console.print(f"[bold]Log display:[/bold] {'on' if config.log.show else 'off'}")
    console.print(f"[bold]Display:[/bold] {type(display).__name__}")
    console.print(f"[bold]Refresh wait:[/bold] {config.log.refresh_wait_seconds:g}s")


if __name__ == "__main__":
    app()
