"""Tests for the command-line interface."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from urltomarkdown import ConversionOptions, Outcome
from urltomarkdown.cli import create_parser, main


@pytest.fixture
def mock_service():
    """Patch UrlToMarkdown with an async context manager mock."""
    service = MagicMock()
    service.convert_url = AsyncMock(return_value=Outcome.success("# Page\n", title="Page"))
    service.convert_batch = AsyncMock(return_value=Outcome.success("========= a\n\nA\n"))

    with patch("urltomarkdown.cli.UrlToMarkdown") as service_cls:
        service_cls.return_value.__aenter__ = AsyncMock(return_value=service)
        service_cls.return_value.__aexit__ = AsyncMock(return_value=None)
        yield service


class TestParser:
    def test_requires_url(self):
        with pytest.raises(SystemExit):
            create_parser().parse_args([])

    def test_flags(self):
        args = create_parser().parse_args(["https://example.com", "--title", "--no-links", "--no-clean"])
        assert args.urls == ["https://example.com"]
        assert args.title and args.no_links and args.no_clean


class TestMain:
    def test_single_url(self, mock_service, capsys):
        exit_code = main(["https://example.com", "--title", "--quiet"])

        assert exit_code == 0
        assert capsys.readouterr().out == "# Page\n"
        mock_service.convert_url.assert_awaited_once_with(
            "https://example.com",
            ConversionOptions(inline_title=True),
        )

    def test_batch(self, mock_service, capsys):
        exit_code = main(["https://a.example.com", "https://b.example.com", "--no-clean", "-q"])

        assert exit_code == 0
        assert capsys.readouterr().out == "========= a\n\nA\n"
        mock_service.convert_batch.assert_awaited_once_with(
            ["https://a.example.com", "https://b.example.com"],
            ConversionOptions(improve_readability=False),
        )

    def test_failure_exit_code(self, mock_service, capsys):
        mock_service.convert_url.return_value = Outcome.failure(504)

        exit_code = main(["https://example.com", "-q"])

        assert exit_code == 1
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "504" in captured.err

    def test_timeout_flag(self, mock_service):
        with patch("urltomarkdown.cli.UrlToMarkdown") as service_cls:
            service_cls.return_value.__aenter__ = AsyncMock(return_value=mock_service)
            service_cls.return_value.__aexit__ = AsyncMock(return_value=None)
            main(["https://example.com", "--timeout", "3", "-q"])

        config = service_cls.call_args.args[0]
        assert config.network.timeout == 3
        assert config.log_level == "ERROR"

    @pytest.mark.parametrize("timeout", ["0", "-5"])
    def test_non_positive_timeout_rejected(self, mock_service, capsys, timeout):
        with patch("urltomarkdown.cli.UrlToMarkdown") as service_cls:
            exit_code = main(["https://example.com", "--timeout", timeout, "-q"])

        assert exit_code == 1
        assert "Configuration error" in capsys.readouterr().err
        service_cls.assert_not_called()
        mock_service.convert_url.assert_not_awaited()
