"""
Tests for the ``ct`` command-line driver.
"""
import ct


def write_script(tmp_path, source: str) -> str:
    path = tmp_path / "script.ct"
    path.write_text(source, encoding="utf-8")
    return str(path)


def test_no_arguments_prints_placeholder(capsys):
    assert ct.main(["ct"]) == 0
    out = capsys.readouterr().out
    assert "Command line interpreter is not yet implemented." in out
    assert "Usage:" in out


def test_help(capsys):
    assert ct.main(["ct", "--help"]) == 0
    assert "ct <script.ct>" in capsys.readouterr().out


def test_too_many_arguments(capsys):
    assert ct.main(["ct", "a.ct", "b.ct"]) == 1
    assert "Usage:" in capsys.readouterr().out


def test_run_script(tmp_path, capsys):
    path = write_script(tmp_path, 'let name = "ct"; print("hello {}", name);')
    assert ct.main(["ct", path]) == 0
    assert capsys.readouterr().out == "hello ct"


def test_fatal_diagnostic(tmp_path, capsys):
    path = write_script(tmp_path, "let x = 1;\ny;\n")
    assert ct.main(["ct", path]) == 1
    out = capsys.readouterr().out
    assert out.startswith("UndefinedVariableException: Unknown variable 'y' on line 2")


def test_missing_script(tmp_path, capsys):
    assert ct.main(["ct", str(tmp_path / "nope.ct")]) == 1
    assert "No such file" in capsys.readouterr().out


def test_debug_output(tmp_path, capsys, monkeypatch):
    monkeypatch.setenv("CTDEBUG", "1")
    path = write_script(tmp_path, "let x = 1;")
    assert ct.main(["ct", path]) == 0
    out = capsys.readouterr().out
    assert "Tokens:" in out
    assert "AST:" in out


def test_max_depth_from_environment(tmp_path, capsys, monkeypatch):
    monkeypatch.setenv("CTMAXDEPTH", "5")
    path = write_script(tmp_path, "let down(n) { return down(n + 1); } down(0);")
    assert ct.main(["ct", path]) == 1
    assert "Maximum call depth of 5 exceeded" in capsys.readouterr().out


def test_invalid_max_depth_falls_back(monkeypatch, capsys):
    monkeypatch.setenv("CTMAXDEPTH", "deep")
    assert ct.max_depth() == ct.DEFAULT_MAX_DEPTH
    assert "Ignoring invalid CTMAXDEPTH" in capsys.readouterr().out
