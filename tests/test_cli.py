from __future__ import annotations

from typer.testing import CliRunner

from freecell.cli.main import _append_event, _handle_command, app
from freecell.session import GameSession

runner = CliRunner()


def test_codes_prints_deal_columns() -> None:
    result = runner.invoke(app, ["codes", "1"])

    assert result.exit_code == 0
    lines = result.output.splitlines()
    assert lines[0] == "1: JD KD 2S 4C 3S 6D 6S"
    assert lines[7] == "8: 5H 3H 3C 7S 7D TC"


def test_codes_clamps_game_number() -> None:
    low = runner.invoke(app, ["codes", "0"])
    one = runner.invoke(app, ["codes", "1"])
    assert low.exit_code == 0
    assert low.output == one.output


def test_show_renders_board() -> None:
    result = runner.invoke(app, ["show", "164"])

    assert result.exit_code == 0
    assert "FreeCell #164" in result.output
    assert "4♦" in result.output


def test_autoplay_reports_count() -> None:
    result = runner.invoke(app, ["autoplay", "1"])

    assert result.exit_code == 0
    assert "0 automatic move(s)." in result.output


def test_play_accepts_moves_and_quits() -> None:
    result = runner.invoke(app, ["play", "1"], input="t6 f\nt6 f\nu\nbogus move\nq\n")

    assert result.exit_code == 0
    assert "Illegal" not in result.output
    assert "unknown pile" in result.output


def test_handle_command_moves_and_undoes() -> None:
    session = GameSession.start(1)
    events: list[str] = []

    assert _handle_command(session, "t6 f", events)
    assert _handle_command(session, "t6 f", events)
    assert len(session.history) == 5
    assert any(line.startswith("auto:") for line in events)

    assert _handle_command(session, "u", events)
    assert len(session.history) == 4
    assert not _handle_command(session, "q", events)


def test_handle_command_new_game_without_progress() -> None:
    session = GameSession.start(1)
    events: list[str] = []
    assert _handle_command(session, "n 617", events)
    assert session.game_number == 617
    assert events == ["new game #617"]


def test_event_log_is_bounded() -> None:
    log: list[str] = []
    for idx in range(30):
        _append_event(log, str(idx))
    assert len(log) == 12
    assert log[-1] == "29"


def test_handle_command_reports_illegal_moves() -> None:
    session = GameSession.start(1)
    events: list[str] = []

    assert _handle_command(session, "t1 t2", events)
    assert session.history == ()
    assert events == []


def test_play_reports_illegal_moves() -> None:
    result = runner.invoke(app, ["play", "1"], input="t1 t2\nq\n")

    assert result.exit_code == 0
    assert "Illegal move: cannot move from tableau 1 to tableau 2." in result.output
