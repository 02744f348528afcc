"""Tests for the fused-reader command-line interface.

WHY: The CLI is the quickest way to exercise the reader end to end on
real files, and users script against its output format.

HOW: main() is called with an explicit argv. Output is captured with
capsys (text commands) or capsysbinary (cat).

RULES:
- Files are written to tmp_path via the make_files fixture
- Error paths assert on SystemExit codes and stderr text
"""

import pytest

from fused_reader.cli import build_parser, main


class TestParser:
    def test_subcommands(self):
        parser = build_parser()
        args = parser.parse_args(["words", "a.txt", "b.txt"])
        assert args.command == "words"
        assert args.files == ["a.txt", "b.txt"]

    def test_split_delimiters_option(self):
        args = build_parser().parse_args(["split", "-d", ",;", "a.txt"])
        assert args.delimiters == ",;"
        assert args.files == ["a.txt"]

    def test_command_is_required(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args([])

    def test_files_are_required(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["cat"])


class TestCat:
    def test_concatenates_bytes(self, make_files, capsysbinary):
        paths = make_files({"hello.txt": b"Hello", "world.txt": b" world!"})
        main(["cat"] + paths)
        assert capsysbinary.readouterr().out == b"Hello world!"

    def test_binary_content(self, make_files, capsysbinary):
        paths = make_files({"a.bin": b"\x00\xff", "b.bin": b"\x10"})
        main(["cat"] + paths)
        assert capsysbinary.readouterr().out == b"\x00\xff\x10"


class TestWords:
    def test_words_one_per_line(self, make_files, capsys):
        paths = make_files({"a.txt": b"alpha beta\n  gamma\n", "b.txt": b"delta\tepsilon\n"})
        main(["words"] + paths)
        assert capsys.readouterr().out.split("\n") == [
            "alpha", "beta", "gamma", "delta", "epsilon", "",
        ]

    def test_partial_line_at_member_end(self, make_files, capsys):
        # Lines never span files, so "gam" + "ma" stay separate words
        paths = make_files({"a.txt": b"alpha gam", "b.txt": b"ma delta\n"})
        main(["words"] + paths)
        assert capsys.readouterr().out.split() == ["alpha", "gam", "ma", "delta"]


class TestSplit:
    def test_custom_delimiters(self, make_files, capsys):
        paths = make_files({"a.csv": b"a,b;c\n", "b.csv": b"d,,e\n"})
        main(["split", "-d", ",;"] + paths)
        assert capsys.readouterr().out.split("\n") == ["a", "b", "c", "d", "e", ""]

    def test_regex_characters_are_literal(self, make_files, capsys):
        paths = make_files({"a.txt": b"x]y-z^w\n"})
        main(["split", "-d", "]-^"] + paths)
        assert capsys.readouterr().out.split() == ["x", "y", "z", "w"]

    def test_default_delimiters_are_whitespace(self, make_files, capsys):
        paths = make_files({"a.txt": b"one two\tthree\n"})
        main(["split"] + paths)
        assert capsys.readouterr().out.split("\n") == ["one", "two", "three", ""]

    def test_empty_delimiters(self, make_files, capsys):
        paths = make_files({"a.txt": b"abc\n"})
        with pytest.raises(SystemExit) as exc_info:
            main(["split", "-d", ""] + paths)
        assert exc_info.value.code == 1
        assert "DELIMITERS" in capsys.readouterr().err


class TestNumbers:
    def test_numbers_across_files(self, make_files, capsys):
        paths = make_files({"a.txt": b"12 0x1f\n4", "b.txt": b"2 0b11 x 0o7"})
        main(["numbers"] + paths)
        assert capsys.readouterr().out.split() == ["12", "31", "42", "3", "7"]

    def test_no_numbers(self, make_files, capsys):
        paths = make_files({"a.txt": b"no digits here"})
        main(["numbers"] + paths)
        assert capsys.readouterr().out == ""


class TestErrors:
    def test_missing_file(self, make_files, tmp_path, capsys):
        paths = make_files({"a.txt": b"x"})
        missing = str(tmp_path / "nope.txt")
        with pytest.raises(SystemExit) as exc_info:
            main(["cat"] + paths + [missing])
        assert exc_info.value.code == 1
        err = capsys.readouterr().err
        assert err.startswith("Error: cannot open")
        assert "nope.txt" in err

    def test_bad_log_level(self, make_files, capsys):
        paths = make_files({"a.txt": b"x"})
        with pytest.raises(SystemExit) as exc_info:
            main(["--log-level", "chatty", "words"] + paths)
        assert exc_info.value.code == 1
        assert "Unknown log level" in capsys.readouterr().err
