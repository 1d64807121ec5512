"""Real-time CLI dashboard for gateway monitoring."""

from datetime import datetime
from threading import Lock

from rich.console import Console
from rich.layout import Layout
from rich.live import Live
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.config import Config
from ui.log_utils import shorten_url, write_cli_log

console = Console()


class RequestInfo:
    """Info about a single relayed request."""

    def __init__(self, route: str, url: str, detail: str, timestamp: datetime):
        self.route = route
        self.url = shorten_url(url)
        self.detail = detail
        self.timestamp = timestamp


class Dashboard:
    """Real-time dashboard showing audio relays and API calls."""

    def __init__(self, config: Config):
        self.config = config
        self._lock = Lock()
        self._recent: list[RequestInfo] = []
        self._max_recent = 8
        self._request_count = {"audio": 0, "api": 0, "rejected": 0}
        self._errors: list[str] = []
        self._live: Live | None = None

    def start(self) -> "Dashboard":
        """Start the live dashboard."""
        self._live = Live(
            self._build_layout(),
            console=console,
            refresh_per_second=4,
            screen=False,
        )
        self._live.start()
        return self

    def stop(self) -> None:
        """Stop the live dashboard."""
        if self._live:
            self._live.stop()

    def log_audio(self, url: str, method: str, *, byte_range: str | None = None) -> None:
        """Log a request relayed to the audio host."""
        with self._lock:
            self._request_count["audio"] += 1
            detail = method + (f" {byte_range}" if byte_range else "")
            self._remember(RequestInfo("audio", url, detail, datetime.now()))
            write_cli_log("AUDIO", url, method=method, range=byte_range or "-")

    def log_backend(self, backend: str, url: str) -> None:
        """Log a request translated for an API backend."""
        with self._lock:
            self._request_count["api"] += 1
            self._remember(RequestInfo(backend, url, "GET", datetime.now()))
            write_cli_log("API", url, backend=backend)

    def log_rejected(self, status: int, reason: str) -> None:
        """Log a request answered locally with a client error."""
        with self._lock:
            self._request_count["rejected"] += 1
            self._refresh()
            write_cli_log("REJECTED", reason, status=status)

    def log_error(self, route: str, status: int, message: str) -> None:
        """Log an upstream error."""
        with self._lock:
            truncated = message[:50] + "..." if len(message) > 50 else message
            self._errors.insert(0, f"{route} {status}: {truncated}")
            self._errors = self._errors[:3]
            self._refresh()
            write_cli_log("ERROR", message, route=route, status=status)

    def _remember(self, info: RequestInfo) -> None:
        self._recent.insert(0, info)
        self._recent = self._recent[: self._max_recent]
        self._refresh()

    def _refresh(self) -> None:
        """Refresh the display."""
        if self._live:
            self._live.update(self._build_layout())

    def _build_layout(self) -> Layout:
        """Build the dashboard layout."""
        layout = Layout()

        layout.split_column(
            Layout(name="header", size=3),
            Layout(name="body"),
            Layout(name="footer", size=4),
        )

        layout["header"].update(self._build_header())
        layout["body"].update(self._build_requests_panel())
        layout["footer"].update(self._build_footer())

        return layout

    def _build_header(self) -> Panel:
        """Build header with stats."""
        stats = Text()
        stats.append("Music Gateway", style="bold cyan")
        stats.append("  |  ")
        stats.append(f"Audio: {self._request_count['audio']}", style="green")
        stats.append("  |  ")
        stats.append(f"API: {self._request_count['api']}", style="blue")
        stats.append("  |  ")
        stats.append(f"Rejected: {self._request_count['rejected']}", style="yellow")
        stats.append("  |  ")
        stats.append(f"Port: {self.config.server.port}", style="dim")

        return Panel(stats, style="cyan")

    def _build_requests_panel(self) -> Panel:
        """Build the recent requests panel."""
        if self._recent:
            table = Table(show_header=True, header_style="bold", expand=True, box=None)
            table.add_column("Time", style="dim", width=8)
            table.add_column("Route", width=10)
            table.add_column("Upstream", ratio=3)
            table.add_column("Detail", ratio=1)

            for info in self._recent:
                table.add_row(
                    info.timestamp.strftime("%H:%M:%S"),
                    info.route,
                    info.url,
                    info.detail,
                )

            content = table
        else:
            content = Text("Waiting for requests...", style="dim")

        return Panel(content, title="[blue]Recent Requests[/blue]", border_style="blue")

    def _build_footer(self) -> Panel:
        """Build footer with errors and help."""
        if self._errors:
            error_text = Text()
            for err in self._errors:
                error_text.append("! ", style="red bold")
                error_text.append(err + "\n", style="red")
            content = error_text
        else:
            content = Text(
                f"Listening on http://{self.config.server.host}:{self.config.server.port}/",
                style="dim",
            )

        return Panel(content, title="[dim]Status[/dim]", border_style="dim")
