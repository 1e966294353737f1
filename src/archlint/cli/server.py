"""CLI command: archlint server — expose the scan tool over HTTP."""

from __future__ import annotations

import click
from rich.console import Console

from archlint.config import ArchLintConfig

console = Console(stderr=True)


@click.command()
@click.option(
    "--port",
    type=int,
    default=None,
    help="Port to listen on (default: 8471).",
)
def server(port: int | None) -> None:
    """Start the archlint HTTP API."""
    try:
        import uvicorn
    except ImportError:
        console.print(
            "[red]Web dependencies not installed.[/red]\n"
            "Install with: pip install archlint[web]"
        )
        raise SystemExit(1)

    config = ArchLintConfig.load()
    if port is not None:
        config.web_port = port

    console.print(
        f"[bold]archlint[/bold] API starting on "
        f"[cyan]http://{config.web_host}:{config.web_port}[/cyan]"
    )

    from archlint.web.app import create_app

    uvicorn.run(
        create_app(config),
        host=config.web_host,
        port=config.web_port,
        log_level="info",
    )
