"""CLI entry point for music-gateway."""

import sys
from datetime import datetime

import uvicorn
from rich.console import Console

from app import create_app
from core.config import CONFIG_FILE, load_config
from ui.dashboard import Dashboard
from ui.log_utils import clear_logs, write_cli_log

console = Console()


def main():
    """Main CLI entry point."""
    config = load_config()

    # Handle CLI arguments
    if len(sys.argv) > 1:
        arg = sys.argv[1]

        if arg == "--config":
            console.print(f"[bold]Config:[/bold] {CONFIG_FILE}")
            return

        if arg in ("--help", "-h"):
            _print_help()
            return

        console.print(f"[red][ERROR][/red] Unknown argument: {arg}")
        _print_help()
        sys.exit(2)

    # Clear previous logs and start dashboard
    clear_logs()
    dashboard = Dashboard(config)

    app = create_app(config, dashboard)

    uvicorn_config = uvicorn.Config(
        app,
        host=config.server.host,
        port=config.server.port,
        log_level="debug" if config.server.debug else "warning",
        timeout_keep_alive=config.limits.keep_alive_timeout,
    )
    server = uvicorn.Server(uvicorn_config)

    dashboard.start()
    start_time = datetime.now()
    write_cli_log("STARTUP", "Gateway started", port=config.server.port)
    try:
        server.run()
    finally:
        duration = datetime.now() - start_time
        write_cli_log("SHUTDOWN", "Gateway stopped", duration=str(duration))
        dashboard.stop()


def _print_help():
    """Print help message."""
    help_text = """
[bold cyan]Music Gateway[/bold cyan]

Relays Kuwo audio streams and music API calls (GD Studio, Kugou) with open CORS.

[bold]Usage:[/bold]
    music-gateway              Start with live dashboard
    music-gateway --config     Show config location
    music-gateway --help       Show this help

[bold]Query parameters:[/bold]
    target=<url>               Relay an audio file from *.kuwo.cn (Range supported)
    api=kugou&type=<op>        Call the Kugou API (search, song, url, lyric, ...)
    types=<op>                 Call the GD Studio API (default backend)
"""
    console.print(help_text)


if __name__ == "__main__":
    main()
