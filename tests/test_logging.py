"""Tests for the CLI log file and the dashboard logger."""

from unittest.mock import patch

from core.config import Config
from ui.dashboard import Dashboard
from ui.log_utils import clear_logs, shorten_url, write_cli_log


class TestWriteCliLog:
    """Tests for write_cli_log."""

    def test_appends_lines(self, tmp_path):
        log_file = tmp_path / "logs" / "gateway.log"
        write_cli_log("STARTUP", "Gateway started", log_file=log_file, port=8080)
        write_cli_log("API", "https://kugo.520me.cf/search", log_file=log_file, backend="kugou")
        lines = log_file.read_text().splitlines()
        assert len(lines) == 2
        assert lines[0].endswith("STARTUP: Gateway started port=8080")
        assert "backend=kugou" in lines[1]

    def test_long_values_are_truncated(self, tmp_path):
        log_file = tmp_path / "gateway.log"
        write_cli_log("ERROR", "x" * 500, log_file=log_file)
        line = log_file.read_text()
        assert "x" * 200 + "..." in line
        assert "x" * 201 not in line

    def test_clear_logs(self, tmp_path):
        log_file = tmp_path / "gateway.log"
        clear_logs(log_file)
        write_cli_log("INFO", "hello", log_file=log_file)
        clear_logs(log_file)
        assert not log_file.exists()


class TestShortenUrl:
    """Tests for shorten_url."""

    def test_short_urls_are_unchanged(self):
        assert shorten_url("http://m.kuwo.cn/a.mp3") == "http://m.kuwo.cn/a.mp3"

    def test_long_urls_are_cut(self):
        url = "http://m.kuwo.cn/" + "a" * 100
        assert len(shorten_url(url)) == 60
        assert shorten_url(url).endswith("...")


class TestDashboard:
    """Tests for Dashboard as a RequestLogger."""

    def test_counts_requests(self):
        dashboard = Dashboard(Config())
        with patch("ui.dashboard.write_cli_log") as mock_log:
            dashboard.log_audio("http://m.kuwo.cn/a.mp3", "GET", byte_range="bytes=0-")
            dashboard.log_backend("kugou", "https://kugo.520me.cf/search?keywords=a")
            dashboard.log_rejected(400, "Invalid target")
            dashboard.log_error("kugou", 500, "connection refused")

        assert dashboard._request_count == {"audio": 1, "api": 1, "rejected": 1}
        assert dashboard._errors == ["kugou 500: connection refused"]
        assert [c.args[0] for c in mock_log.call_args_list] == ["AUDIO", "API", "REJECTED", "ERROR"]

    def test_keeps_recent_requests_bounded(self):
        dashboard = Dashboard(Config())
        with patch("ui.dashboard.write_cli_log"):
            for i in range(20):
                dashboard.log_backend("gdstudio", f"https://music-api.gdstudio.xyz/api.php?id={i}")
        assert len(dashboard._recent) == 8
        assert dashboard._recent[0].url.endswith("id=19")

    def test_layout_renders_without_live(self):
        dashboard = Dashboard(Config())
        with patch("ui.dashboard.write_cli_log"):
            dashboard.log_audio("http://m.kuwo.cn/a.mp3", "HEAD")
        assert dashboard._build_layout() is not None
