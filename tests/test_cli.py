"""Tests for the command line front end."""

import logging
from pathlib import Path

import pytest

from chain.cli import build_parser, main


@pytest.fixture(autouse=True)
def isolated(monkeypatch: pytest.MonkeyPatch):
    """Clear CHAIN_* variables and undo the logging setup main() performs."""
    for name in ["CHAIN_DATA_DIR", "CHAIN_TASK_FILE", "CHAIN_LOG_LEVEL", "CHAIN_HISTORY_DAYS"]:
        monkeypatch.delenv(name, raising=False)

    root = logging.getLogger()
    saved_handlers = list(root.handlers)
    saved_level = root.level
    yield
    for h in list(root.handlers):
        if h not in saved_handlers:
            root.removeHandler(h)
            h.close()
    for h in saved_handlers:
        if h not in root.handlers:
            root.addHandler(h)
    root.setLevel(saved_level)
    logging.captureWarnings(False)


@pytest.fixture
def run(tmp_path: Path, capsys: pytest.CaptureFixture):
    """Run the CLI against tmp_path and return (exit code, stdout)."""

    def _run(*argv: str) -> tuple[int, str]:
        capsys.readouterr()
        code = main(["--data-dir", str(tmp_path), *argv])
        return code, capsys.readouterr().out

    return _run


def task_file(tmp_path: Path) -> Path:
    return tmp_path / "taskdata.json"


class TestNew:
    """Tests for `chain new`."""

    def test_creates_task(self, run, tmp_path: Path) -> None:
        code, out = run("new", "Stretch")

        assert code == 0
        assert "new task: Stretch" in out
        assert task_file(tmp_path).exists()

    def test_empty_description(self, run, tmp_path: Path) -> None:
        code, out = run("new", "")

        assert code == 1
        assert "error: Task description can't be empty" in out
        assert not task_file(tmp_path).exists()

    def test_writes_log_file(self, run, tmp_path: Path) -> None:
        run("new", "Stretch")

        assert (tmp_path / "chain.log").exists()


class TestToday:
    """Tests for `chain today`."""

    def test_empty(self, run) -> None:
        code, out = run("today")

        assert code == 0
        assert "Task status for" in out

    def test_lists_tasks_in_order(self, run) -> None:
        run("new", "Stretch")
        run("new", "Read")

        _, out = run("today")

        lines = [line for line in out.splitlines() if line.startswith("[")]
        assert lines == [
            "[ ] 0   Stretch --:--   (next)",
            "[ ] 1   Read    --:--",
        ]

    def test_does_not_write(self, run, tmp_path: Path) -> None:
        run("today")

        assert not task_file(tmp_path).exists()


class TestDone:
    """Tests for `chain done`."""

    def test_marks_complete(self, run) -> None:
        run("new", "Stretch")

        code, out = run("done", "0")

        assert code == 0
        assert 'Completed "Stretch"' in out
        assert "[x] 0   Stretch" in out

    def test_with_remark_persists(self, run, tmp_path: Path) -> None:
        run("new", "Stretch")
        run("done", "0", "--remark", "felt loose")

        assert "felt loose" in task_file(tmp_path).read_text()

    def test_twice(self, run) -> None:
        run("new", "Stretch")
        run("done", "0")

        code, out = run("done", "0")

        assert code == 1
        assert "error: Task was already completed" in out

    def test_missing_task(self, run) -> None:
        code, out = run("done", "3")

        assert code == 1
        assert "error: Couldn't find task" in out


class TestMove:
    """Tests for `chain move`."""

    def test_reorders(self, run) -> None:
        for name in ["A", "B", "C"]:
            run("new", name)

        code, out = run("move", "2", "0")

        assert code == 0
        assert 'Bumping "C" to position 0' in out
        _, out = run("today")
        rows = [line.split()[3] for line in out.splitlines() if line.startswith("[")]
        assert rows == ["C", "A", "B"]

    def test_same_index(self, run) -> None:
        run("new", "A")

        code, out = run("move", "0", "0")

        assert code == 1
        assert "error: Can't move task to its own index" in out

    def test_rejected_move_not_stored(self, run, tmp_path: Path) -> None:
        run("new", "A")
        before = task_file(tmp_path).read_text()

        run("move", "0", "5")

        assert task_file(tmp_path).read_text() == before


class TestRemark:
    """Tests for `chain remark`."""

    def test_adds_remark(self, run, tmp_path: Path) -> None:
        run("new", "Read")

        code, out = run("remark", "0", "finished the book")

        assert code == 0
        assert 'Remark added to "Read"' in out
        assert "finished the book" in task_file(tmp_path).read_text()


class TestHistory:
    """Tests for `chain history`."""

    def test_completed_today(self, run) -> None:
        run("new", "A")
        run("done", "0")

        code, out = run("history")

        assert code == 0
        lines = out.splitlines()
        assert len(lines) == 2
        assert lines[1].startswith("0   A   |")
        assert lines[1].endswith("|o")

    def test_default_window_length(self, run) -> None:
        run("new", "A")

        _, out = run("history")

        assert out.splitlines()[0].count("|") == 7

    def test_explicit_range(self, run) -> None:
        run("new", "A")

        _, out = run("history", "2026-03-01", "2026-03-03")

        assert out.splitlines()[0].strip() == "|01  |02  |03"

    def test_start_after_end(self, run) -> None:
        with pytest.raises(SystemExit) as exc:
            run("history", "2026-03-05", "2026-03-01")

        assert exc.value.code == 2

    def test_bad_date(self, run) -> None:
        with pytest.raises(SystemExit):
            run("history", "March 1st")


class TestErrors:
    """Tests for load and store failures."""

    def test_corrupt_data(self, run, tmp_path: Path) -> None:
        task_file(tmp_path).write_text("{oops")

        code, out = run("today")

        assert code == 1
        assert "error: Couldn't parse" in out

    def test_store_failure(self, run, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / "blocker").write_text("")
        monkeypatch.setenv("CHAIN_TASK_FILE", "blocker/taskdata.json")

        code, out = run("new", "A")

        assert code == 1
        assert "error: Can't store task data to disk" in out


class TestParser:
    """Tests for argument parsing."""

    def test_command_required(self) -> None:
        with pytest.raises(SystemExit):
            build_parser().parse_args([])

    @pytest.mark.parametrize(
        "argv,mutates",
        [
            (["new", "x"], True),
            (["today"], False),
            (["move", "0", "1"], True),
            (["done", "0"], True),
            (["remark", "0", "x"], True),
            (["history"], False),
            (["interactive"], False),
        ],
    )
    def test_only_mutating_commands_store(self, argv: list[str], mutates: bool) -> None:
        assert build_parser().parse_args(argv).mutates is mutates
