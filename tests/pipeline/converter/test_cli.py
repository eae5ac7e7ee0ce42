"""Tests for the converter CLI entrypoint and its helpers."""

import logging
from pathlib import Path

import pytest

from slashport.config import EXIT_FATAL, EXIT_INTERRUPTED, EXIT_OK
from slashport.pipeline.converter import CompletionClient, ConversionStats
from slashport.pipeline.converter import cli


@pytest.fixture(autouse=True)
def restore_root_logging():
    handlers, level = logging.root.handlers[:], logging.root.level
    yield
    for handler in logging.root.handlers[:]:
        if handler not in handlers:
            logging.root.removeHandler(handler)
            handler.close()
    for handler in handlers:
        if handler not in logging.root.handlers:
            logging.root.addHandler(handler)
    logging.root.setLevel(level)


@pytest.fixture
def dirs(tmp_path: Path, monkeypatch):
    # main() would otherwise replace the caplog handler on the root logger.
    monkeypatch.setattr(cli, "configure_logging", lambda *a, **k: None)
    source = tmp_path / "prefix"
    source.mkdir()
    return source, tmp_path / "slash"


def run_args(source: Path, output: Path, *extra: str) -> list[str]:
    return [
        "--source",
        str(source),
        "--output",
        str(output),
        "--delay",
        "0",
        "--api-key",
        "test-key",
        *extra,
    ]


def test_help_exits_successfully(capsys):
    with pytest.raises(SystemExit) as exc:
        cli.parse_arguments(["--help"])
    assert exc.value.code == 0
    assert "--endpoint" in capsys.readouterr().out


def test_parse_arguments_maps_flags():
    ns = cli.parse_arguments(
        ["-m", "gpt-4", "-e", "http://x/v1", "-k", "key", "-d", "2000", "-x", ".ts"]
    )
    assert ns.model == "gpt-4"
    assert ns.base_url == "http://x/v1"
    assert ns.api_key == "key"
    assert ns.delay_ms == 2000
    assert ns.extension == ".ts"
    assert ns.source_dir is None


def test_missing_api_key_is_fatal(dirs, caplog):
    source, output = dirs
    code = cli.main(["--source", str(source), "--output", str(output)])
    assert code == EXIT_FATAL
    assert "API key not found" in caplog.text
    assert not output.exists()


def test_invalid_config_is_fatal(dirs):
    source, output = dirs
    assert cli.main(run_args(source, output, "--max-size", "0")) == EXIT_FATAL


def test_missing_source_dir_is_fatal(tmp_path: Path, monkeypatch, caplog):
    monkeypatch.setattr(cli, "configure_logging", lambda *a, **k: None)
    code = cli.main(run_args(tmp_path / "missing", tmp_path / "out"))
    assert code == EXIT_FATAL
    assert "Source directory not found" in caplog.text


def test_full_run_writes_outputs(dirs, monkeypatch, capsys):
    source, output = dirs
    (source / "ping.js").write_text("ping()", encoding="utf-8")
    (source / "fun").mkdir()
    (source / "fun" / "joke.js").write_text("joke()", encoding="utf-8")
    seen = []

    async def fake_complete(self, session, messages):
        seen.append(self.config.model)
        return "```js\n// converted\n" + messages[1]["content"][-6:] + "\n```"

    monkeypatch.setattr(CompletionClient, "complete", fake_complete)

    code = cli.main(run_args(source, output, "--model", "gpt-x"))

    assert code == EXIT_OK
    assert seen == ["gpt-x", "gpt-x"]
    assert (output / "ping.js").read_text(encoding="utf-8") == "// converted\nping()"
    assert (output / "fun" / "joke.js").read_text(encoding="utf-8") == "// converted\njoke()"
    out = capsys.readouterr().out
    assert "Created output directory" in out
    assert "Converted: 2" in out
    assert "Total processed: 2 files" in out


def test_run_with_no_files_warns(dirs, capsys):
    source, output = dirs
    assert cli.main(run_args(source, output)) == EXIT_OK
    assert "No .js files found" in capsys.readouterr().out


def test_keyboard_interrupt(dirs, monkeypatch):
    source, output = dirs

    def interrupted(coro):
        coro.close()
        raise KeyboardInterrupt

    monkeypatch.setattr(cli.asyncio, "run", interrupted)
    assert cli.main(run_args(source, output)) == EXIT_INTERRUPTED


def test_configure_logging_with_file(tmp_path: Path):
    log_file = tmp_path / "logs" / "slashport.log"
    cli.configure_logging("DEBUG", log_file)
    logging.getLogger("slashport.test").info("hello file")
    for handler in logging.root.handlers:
        handler.flush()
    assert "hello file" in log_file.read_text(encoding="utf-8")
    assert logging.root.level == logging.DEBUG


def test_configure_logging_reports_unwritable_file(tmp_path: Path, monkeypatch, capsys):
    class BadFileHandler(logging.FileHandler):
        def __init__(self, *a, **k):
            raise OSError("read-only")

    monkeypatch.setattr(logging, "FileHandler", BadFileHandler)
    cli.configure_logging("INFO", tmp_path / "x.log")
    assert "Could not open log file" in capsys.readouterr().err
    assert len(logging.root.handlers) == 1


def test_log_processing_summary(caplog):
    caplog.set_level(logging.INFO)
    cli.log_processing_summary(ConversionStats(success=2, failed=1, skipped=3))
    assert "total=6 success=2 skipped=3 failed=1" in caplog.text


def test_bracketed_paths_are_printed_literally(dirs, capsys):
    source, _ = dirs
    output = source.parent / "out[/x]"
    code = cli.main(run_args(source, output, "--extension", "[b].js"))
    assert code == EXIT_OK
    assert output.is_dir()
    out = capsys.readouterr().out
    assert "Created output directory" in out
    assert "No [b].js files found" in out
