# tests/test_cli.py
"""Command-line entry point tests.

`load_dataset` is replaced by the small in-memory catalog and
`curses.wrapper` by a stub, so no terminal is needed.
"""

import unicodedata
from unittest.mock import MagicMock

import pytest

from ubrowse import cli
from ubrowse.core import BlockCatalog, CharacterIndex, Mode, NameSearch, Outcome
from ubrowse.ui.DrawScreen import DrawScreen
from ubrowse.ui.InputTranslator import InputTranslator


@pytest.fixture(autouse=True)
def isolated_home(tmp_path, monkeypatch):
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.delenv("UBROWSE_CONFIG", raising=False)
    monkeypatch.delenv("UBROWSE_KEYTRACE", raising=False)
    monkeypatch.setattr(cli, "setup_logging", MagicMock())


@pytest.fixture
def fake_wrapper(monkeypatch, small_dataset):
    monkeypatch.setattr(cli, "load_dataset", lambda: small_dataset)
    wrapper = MagicMock(return_value=Outcome.QUIT)
    monkeypatch.setattr(cli.curses, "wrapper", wrapper)
    return wrapper


def test_version_flag(capsys):
    assert cli.main(["--version"]) == 0
    out = capsys.readouterr().out
    assert out.startswith("ubrowse ")
    assert f"Unicode version {unicodedata.unidata_version}" in out


def test_start_value_is_resolved(fake_wrapper):
    assert cli.main(["U+0045"]) == 0
    session_args = fake_wrapper.call_args.args[1]
    assert session_args["leading_index"] == 3
    assert session_args["show_combining"] is True
    # The default accent U+00B7 snaps to the nearest entry of the small catalog.
    assert session_args["accent"] == 0x0045


def test_noaccent_and_accent_options(fake_wrapper):
    assert cli.main(["-A", "--accent", "*"]) == 0
    session_args = fake_wrapper.call_args.args[1]
    assert session_args["show_combining"] is False
    assert session_args["accent"] == ord("*")


def test_invalid_start_exits_with_status_one(fake_wrapper, capsys):
    assert cli.main(["nothing like this"]) == 1
    assert 'Invalid start value: "nothing like this"' in capsys.readouterr().err
    fake_wrapper.assert_not_called()


def test_invalid_accent_exits_with_status_one(fake_wrapper, capsys):
    assert cli.main(["--accent", "not hex"]) == 1
    assert "invalid accent character value" in capsys.readouterr().err


def test_columns_come_from_config(fake_wrapper, tmp_path):
    config_dir = tmp_path / ".config" / "ubrowse"
    config_dir.mkdir(parents=True)
    (config_dir / "config.toml").write_text("[display]\ncolumns = 3\n", encoding="utf-8")
    cli.main([])
    assert fake_wrapper.call_args.args[1]["column_count"] == 3


def test_hard_quit_raises_system_exit(fake_wrapper):
    fake_wrapper.return_value = Outcome.HARD_QUIT
    with pytest.raises(SystemExit) as exc:
        cli.main([])
    assert exc.value.code == 0


def test_event_loop_runs_until_quit(small_session, fake_surface, mock_stdscr):
    mock_stdscr.get_wch.side_effect = ["+", "\x0c", "q"]
    translator = InputTranslator(lambda: (7, 80))
    screen = MagicMock(spec=DrawScreen)

    outcome = cli.event_loop(mock_stdscr, translator, small_session, screen)

    assert outcome is Outcome.QUIT
    assert screen.draw.call_count == 3
    screen.request_full_redraw.assert_called_once_with()
    assert small_session.mode is Mode.MAIN


def test_run_browser_sets_up_terminal(monkeypatch, mock_stdscr, small_dataset):
    for name in ("raw", "noecho", "nonl"):
        monkeypatch.setattr(cli.curses, name, MagicMock())
    mock_stdscr.get_wch.side_effect = ["\x03"]
    index = CharacterIndex(small_dataset)
    outcome = cli.run_browser(
        mock_stdscr,
        {"index": index, "search": NameSearch(small_dataset), "blocks": BlockCatalog(index)},
    )
    assert outcome is Outcome.HARD_QUIT
    mock_stdscr.keypad.assert_called_once_with(True)
    cli.curses.raw.assert_called_once_with()
