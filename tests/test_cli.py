import json
import threading
import time
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from pdf2key import cli
from pdf2key.core.status import StatusSink
from pdf2key.keynote.assembler import PresentationAssembler
from pdf2key.keynote.runner import ExitResult
from pdf2key.pipeline.coordinator import ConversionOrchestrator


def _use_runner(monkeypatch: pytest.MonkeyPatch, tmp_path: Path, runner) -> None:
    def factory(**kwargs):
        return ConversionOrchestrator(
            assembler=PresentationAssembler(runner=runner),
            temp_root=tmp_path / "work",
            keep_workspace=False,
            **kwargs,
        )

    monkeypatch.setattr(cli, "ConversionOrchestrator", factory)


def test_convert_json_success(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path, make_pdf, fake_runner, capsys
) -> None:
    _use_runner(monkeypatch, tmp_path, fake_runner)
    source = make_pdf(sizes=[(612, 792)] * 2)

    code = cli.main(["convert", str(source), "--dpi", "72", "--json"])

    assert code == 0
    status = json.loads(capsys.readouterr().out)
    assert status["state"] == "succeeded"
    assert status["progress"] == 1.0
    assert status["message"] == "Done!"
    assert len(fake_runner.scripts) == 1
    assert str(source.with_suffix(".key")) in fake_runner.scripts[0]


def test_convert_reports_failure(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path, make_pdf, capsys
) -> None:
    runner = MagicMock()
    runner.run.return_value = ExitResult(
        returncode=1, stderr="Not authorized to send Apple events to Keynote."
    )
    _use_runner(monkeypatch, tmp_path, runner)

    code = cli.main(["convert", str(make_pdf()), "--dpi", "72"])

    assert code == 1
    assert "Conversion failed" in capsys.readouterr().out


def test_convert_json_failure(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path, make_pdf, make_runner, capsys
) -> None:
    _use_runner(monkeypatch, tmp_path, make_runner(returncode=1, stderr="denied"))

    code = cli.main(["convert", str(make_pdf()), "--dpi", "72", "--json"])

    assert code == 1
    status = json.loads(capsys.readouterr().out)
    assert status["state"] == "failed"
    assert status["progress"] < 1.0
    assert "denied" in status["error"]


def test_convert_reveals_output(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path, make_pdf, fake_runner
) -> None:
    _use_runner(monkeypatch, tmp_path, fake_runner)
    reveal = MagicMock()
    monkeypatch.setattr(cli, "reveal_in_finder", reveal)
    destination = tmp_path / "out" / "talk"

    code = cli.main(
        ["convert", str(make_pdf()), "-o", str(destination), "--dpi", "72", "--reveal"]
    )

    assert code == 0
    reveal.assert_called_once_with(destination.with_name("talk.key").resolve())


def test_convert_rejects_non_pdf(tmp_path: Path, capsys) -> None:
    source = tmp_path / "notes.txt"
    source.write_text("hello")

    code = cli.main(["convert", str(source)])

    assert code == 2
    assert ".pdf" in capsys.readouterr().err


def test_pages_json(make_pdf, capsys) -> None:
    source = make_pdf(sizes=[(612, 792), (960, 540)])

    code = cli.main(["pages", str(source), "--json"])

    assert code == 0
    data = json.loads(capsys.readouterr().out)
    assert data["page_count"] == 2
    assert [page["index"] for page in data["pages"]] == [0, 1]
    assert data["pages"][1]["width_pt"] == pytest.approx(960)


def test_pages_unreadable(tmp_path: Path) -> None:
    broken = tmp_path / "broken.pdf"
    broken.write_bytes(b"not a pdf at all")

    assert cli.main(["pages", str(broken)]) == 1


def test_no_command_prints_help(capsys) -> None:
    assert cli.main([]) == 0
    assert "convert" in capsys.readouterr().out


class SlowFinishSink(StatusSink):
    """Sink that leaves a gap between clearing the flag and the terminal write."""

    def _finish(self, **fields):
        with self._lock:
            self._converting = False
        time.sleep(0.3)
        super()._finish(**fields)


@pytest.mark.parametrize("show_progress", [False, True])
def test_wait_for_completion_returns_terminal_status(show_progress: bool) -> None:
    sink = SlowFinishSink()
    sink.try_begin()
    sink.update("Creating presentation in Keynote...", 0.8, "assembling")
    timer = threading.Timer(0.05, sink.succeed)
    timer.start()
    try:
        status = cli.wait_for_completion(
            sink, show_progress=show_progress, interval=0.01
        )
    finally:
        timer.join()

    assert status.is_terminal
    assert status.is_success
    assert status.progress == 1.0
