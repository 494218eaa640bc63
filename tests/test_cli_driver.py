import cli_driver


def feed(monkeypatch, *answers):
    answers = iter(answers)
    monkeypatch.setattr("builtins.input", lambda prompt="": next(answers))


def test_quit(monkeypatch, capsys):
    feed(monkeypatch, "q")
    assert cli_driver.main(["--seed", "1"]) == 0
    out = capsys.readouterr().out
    assert "Score: 0" in out
    assert "Quitting game." in out


def test_invalid_input_is_ignored(monkeypatch, capsys):
    feed(monkeypatch, "x", "up", "Q")
    cli_driver.main(["--seed", "1"])
    out = capsys.readouterr().out
    assert out.count("Invalid input. Use W, A, S, D.") == 2


def test_moves_and_restart(monkeypatch, capsys):
    feed(monkeypatch, "a", "d", "w", "s", "r", "q")
    cli_driver.main(["--seed", "8"])
    out = capsys.readouterr().out
    # initial board, four moves and the restart
    assert out.count("Status: IN_PROGRESS") == 6
    assert "Final score:" in out


def test_game_ends_when_won(capsys):
    # every starting tile already reaches a win tile of 2
    assert cli_driver.main(["--seed", "2", "--win-tile", "2"]) == 0
    out = capsys.readouterr().out
    assert "YOU WON!" in out
    assert "Congratulations! You reached the 2 tile!" in out
