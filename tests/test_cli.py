"""Tests for the command line interface."""

import pytest
from decimal import Decimal
from unittest.mock import patch

from proposalgen.cli import main, parse_amount
from proposalgen.core.config import get_settings
from proposalgen.core.settings_store import settings_store
from proposalgen.models import BusinessSettings
from proposalgen.services.extraction import transcript_extractor


@pytest.fixture(autouse=True)
def no_log_handlers():
    """Leave logging to pytest; capsys swaps stdout per test."""
    with patch("proposalgen.cli.setup_logging"):
        yield


@pytest.fixture
def transcript_file(tmp_path, sample_transcript):
    path = tmp_path / "meeting.txt"
    path.write_text(sample_transcript, encoding="utf-8")
    return path


@pytest.fixture
def configured_business():
    settings_store.save(BusinessSettings(name="Mason Price Design", email="mason@example.com"))


class TestParseAmount:
    """Tests for --total parsing."""

    @pytest.mark.parametrize("raw", ["8500", "8,500", "$8,500", " 8500 "])
    def test_accepts_formatted_amounts(self, raw):
        assert parse_amount(raw) == Decimal("8500")

    @pytest.mark.parametrize("raw", ["abc", "0", "-5"])
    def test_rejects_invalid(self, raw):
        with pytest.raises(Exception):
            parse_amount(raw)


class TestGenerate:
    """Tests for `proposalgen generate`."""

    def test_writes_markdown(self, transcript_file, configured_business, sample_completion,
                             isolated_files, capsys):
        with patch.object(transcript_extractor, "_complete", return_value=sample_completion):
            code = main(["generate", str(transcript_file), "--total", "8500"])

        assert code == 0
        files = list((isolated_files / "output").glob("proposal-sunrise-bakery-*.md"))
        assert len(files) == 1
        md = files[0].read_text(encoding="utf-8")
        assert "**From:** Mason Price Design" in md
        assert "**Total Investment: $8,500**" in md
        assert "Markdown saved to:" in capsys.readouterr().out

    def test_missing_api_key_exits(self, transcript_file, monkeypatch):
        monkeypatch.setattr(get_settings(), "OPENAI_API_KEY", "")

        with pytest.raises(SystemExit) as exc_info:
            main(["generate", str(transcript_file), "--total", "8500"])

        assert exc_info.value.code == 1

    def test_empty_transcript_exits(self, tmp_path):
        empty = tmp_path / "empty.txt"
        empty.write_text("   \n", encoding="utf-8")

        with pytest.raises(SystemExit) as exc_info:
            main(["generate", str(empty), "--total", "8500"])

        assert exc_info.value.code == 1

    def test_extraction_error_returns_nonzero(self, transcript_file, configured_business, capsys):
        with patch.object(transcript_extractor, "_complete", return_value="not json"):
            code = main(["generate", str(transcript_file), "--total", "8500"])

        assert code == 1
        assert "Error:" in capsys.readouterr().err

    def test_missing_file(self, tmp_path, capsys):
        code = main(["generate", str(tmp_path / "nope.txt"), "--total", "8500"])

        assert code == 1
        assert "file not found" in capsys.readouterr().err


class TestSummary:
    """Tests for `proposalgen summary`."""

    def test_prints_counts(self, transcript_file, sample_completion, capsys):
        with patch.object(transcript_extractor, "_complete", return_value=sample_completion):
            code = main(["summary", str(transcript_file)])

        out = capsys.readouterr().out
        assert code == 0
        assert "Client: Sunrise Bakery" in out
        assert "Deliverables: 3" in out
        assert "Timeline phases: 5" in out


class TestRender:
    """Tests for `proposalgen render`."""

    def test_renders_beside_markdown(self, tmp_path):
        from proposalgen.integrations.pdf import pdf_renderer

        source = tmp_path / "proposal-edited.md"
        source.write_text("# Web Design Proposal\n", encoding="utf-8")

        def write(html, path):
            path.write_bytes(b"%PDF-1.4")

        with patch.object(pdf_renderer, "_write_pdf", side_effect=write):
            code = main(["render", str(source)])

        assert code == 0
        assert (tmp_path / "proposal-edited.pdf").exists()


class TestSetup:
    """Tests for `proposalgen setup`."""

    def test_saves_answers(self, monkeypatch):
        answers = iter(["Mason Price Design", "mason@example.com", ""])
        monkeypatch.setattr("builtins.input", lambda prompt: next(answers))

        assert main(["setup"]) == 0

        saved = settings_store.load()
        assert saved.name == "Mason Price Design"
        assert saved.email == "mason@example.com"
        assert saved.phone == ""
