import builtins
import logging
import spcalc


def feed(monkeypatch, *lines):
    """Make input() return the given lines, then hit end of input."""
    lines = iter(lines)

    def fake_input(prompt=""):
        try:
            return next(lines)
        except StopIteration:
            raise EOFError

    monkeypatch.setattr(builtins, "input", fake_input)


def test_one_shot(capsys):
    assert spcalc.main(["2", "+", "3", "*", "4"]) == 0
    out, err = capsys.readouterr()
    assert out == "14\n"
    assert err == ""


def test_one_shot_single_argument(capsys):
    assert spcalc.main(["1 / 4"]) == 0
    assert capsys.readouterr().out == "0.25\n"


def test_one_shot_error(capsys):
    assert spcalc.main(["5", "/", "0"]) == 1
    out, err = capsys.readouterr()
    assert out == ""
    assert err == "error: division by zero\n"


def test_repl(monkeypatch, capsys):
    feed(monkeypatch, "2 + 3", "", "  4 / 2  ", "3 .. 4 + 5", "3 +", "quit", "1 + 1")
    assert spcalc.main([]) == 0
    out, err = capsys.readouterr()
    # nothing after quit is evaluated
    assert out == "Result: 5\nResult: 2\n"
    assert "Valid operators are + - * /" in err
    assert "error: invalid operator: ..\n" in err
    assert "error: missing final operand\n" in err
    assert err.endswith("Goodbye!\n")


def test_repl_quiet(monkeypatch, capsys):
    feed(monkeypatch, "quit")
    spcalc.main(["--quiet"])
    assert capsys.readouterr().err == "Goodbye!\n"


def test_repl_quit_must_be_exact(monkeypatch, capsys):
    feed(monkeypatch, "  quit ", "1 + 1", "quit")
    spcalc.main(["-q"])
    out, err = capsys.readouterr()
    assert out == "Result: 2\n"
    assert err == "error: invalid operand: quit\nGoodbye!\n"


def test_repl_eof(monkeypatch, capsys):
    feed(monkeypatch, "1 - 2")
    assert spcalc.main(["-q"]) == 0
    out, err = capsys.readouterr()
    assert out == "Result: -1\n"
    assert err == "\ncaught EOF\nGoodbye!\n"


def test_repl_interrupt(monkeypatch, capsys):
    def interrupted(prompt=""):
        raise KeyboardInterrupt

    monkeypatch.setattr(builtins, "input", interrupted)
    assert spcalc.main(["-q"]) == 0
    assert capsys.readouterr().err == "\ninterrupted\nGoodbye!\n"


def test_debug_flag(monkeypatch, capsys):
    calls = []
    monkeypatch.setattr(logging, "basicConfig", lambda **kw: calls.append(kw))
    spcalc.main(["-d", "1", "+", "1"])
    assert calls == [{"level": logging.DEBUG}]
    assert capsys.readouterr().out == "2\n"
