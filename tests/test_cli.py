"""
Command-line driver: in-place rewrite, backups, errors and stdin filtering.
"""

import io
import sys

from insertdox import cli

SOURCE = "int twice(int v)\n{\n\treturn v * 2;\n}\n"


def test_file_is_rewritten_with_backup(tmp_path):
    path = tmp_path / "twice.c"
    path.write_text(SOURCE)

    assert cli.main([str(path)]) == 0

    assert (tmp_path / "twice.c.bak").read_text() == SOURCE
    assert not (tmp_path / "twice.c.tmp").exists()
    output = path.read_text()
    assert output.startswith("/**\n\t@file twice.c\n")
    assert "\n\t@param[in] \tv \tint\n" in output
    assert output.endswith(SOURCE)


def test_line_endings_are_preserved(tmp_path):
    path = tmp_path / "dos.c"
    path.write_bytes(b"int x;\r\nint y;\r\n")
    assert cli.main([str(path)]) == 0
    assert path.read_bytes().endswith(b"int x;\r\nint y;\r\n")


def test_missing_input_is_reported(tmp_path, capsys):
    status = cli.main([str(tmp_path / "absent.c")])
    assert status == cli.EXIT_READ
    assert "### error: unable to open" in capsys.readouterr().err


def test_other_files_are_still_processed(tmp_path):
    good = tmp_path / "good.c"
    good.write_text(SOURCE)
    status = cli.main([str(tmp_path / "absent.c"), str(good)])
    assert status == cli.EXIT_READ
    assert (tmp_path / "good.c.bak").exists()


def test_missing_boilerplate_aborts(tmp_path, capsys):
    path = tmp_path / "twice.c"
    path.write_text(SOURCE)
    status = cli.main(["-b", str(tmp_path / "legal.txt"), str(path)])
    assert status == cli.EXIT_BOILERPLATE
    assert path.read_text() == SOURCE
    assert not (tmp_path / "twice.c.tmp").exists()
    assert not (tmp_path / "twice.c.bak").exists()
    assert "### error: unable to open" in capsys.readouterr().err


def test_prototypes_flag_and_config(tmp_path):
    legal = tmp_path / "legal.txt"
    legal.write_text("\tAll rights reserved.\n")
    config = tmp_path / "insertdox.yaml"
    config.write_text("boilerplate: legal.txt\n")
    path = tmp_path / "twice.c"
    path.write_text(SOURCE)

    assert cli.main(["--config", str(config), "-p", str(path)]) == 0

    output = path.read_text()
    assert "\tAll rights reserved.\n" in output
    assert output.endswith("*/\nint twice(int v);\n\n")


def test_invalid_config(tmp_path, capsys):
    config = tmp_path / "insertdox.yaml"
    config.write_text("colour: blue\n")
    assert cli.main(["--config", str(config)]) == cli.EXIT_CONFIG
    assert "unknown setting" in capsys.readouterr().err


def test_verbose_reports_files(tmp_path, capsys):
    path = tmp_path / "twice.c"
    path.write_text(SOURCE)
    assert cli.main(["--verbose", str(path)]) == 0
    err = capsys.readouterr().err
    assert "Annotated:" in err
    assert "Summary: annotated 1 of 1 files" in err


def test_stdin_to_stdout(monkeypatch):
    stdout = io.StringIO()
    monkeypatch.setattr(sys, "stdin", io.StringIO("int x;\n"))
    monkeypatch.setattr(sys, "stdout", stdout)
    assert cli.main([]) == 0
    assert stdout.getvalue().startswith("/**\n\t@file <unknown>\n")
    assert stdout.getvalue().endswith("int x;\n")


def test_version_goes_to_stderr(capsys):
    assert cli.main(["--version"]) == 0
    captured = capsys.readouterr()
    assert "insertdox, version" in captured.err
    assert captured.out == ""
