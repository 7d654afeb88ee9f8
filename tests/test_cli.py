"""Tests for the command-line interface."""

from __future__ import annotations

from pathlib import Path

import pytest

from lesson2html.cli import build_parser, main


class TestMain:
    """Tests for main."""

    def test_success_prints_summary(
        self, lesson_dir: Path, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        output = tmp_path / "site"

        exit_code = main([str(lesson_dir), str(output), "--title", "JS Reference", "-q"])

        assert exit_code == 0
        captured = capsys.readouterr()
        assert "Site: JS Reference" in captured.out
        assert "Documents: 3" in captured.out
        assert (output / "objects.html").exists()

    def test_missing_input_returns_nonzero(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        exit_code = main([str(tmp_path / "missing"), str(tmp_path / "site")])

        assert exit_code == 1
        assert "Content root not found" in capsys.readouterr().err

    def test_unwritable_output_returns_nonzero(self, lesson_dir: Path, tmp_path: Path) -> None:
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory")

        assert main([str(lesson_dir), str(blocker), "-q"]) == 1

    def test_flags_reach_the_build(self, lesson_dir: Path, tmp_path: Path) -> None:
        output = tmp_path / "site"

        exit_code = main(
            [
                str(lesson_dir),
                str(output),
                "--no-search-index",
                "--no-toc",
                "--exclude-section",
                "Iterating",
                "-q",
            ]
        )

        assert exit_code == 0
        assert not (output / "search_index.json").exists()
        page = (output / "basics" / "arrays.html").read_text(encoding="utf-8")
        assert '<nav class="toc">' not in page
        assert "Iterating" not in page

    def test_invalid_workers_is_usage_error(self, lesson_dir: Path, tmp_path: Path) -> None:
        with pytest.raises(SystemExit) as excinfo:
            main([str(lesson_dir), str(tmp_path / "site"), "--workers", "0"])
        assert excinfo.value.code == 2


class TestBuildParser:
    """Tests for argument parsing."""

    def test_defaults(self) -> None:
        args = build_parser().parse_args(["in", "out"])

        assert args.input == Path("in")
        assert args.output == Path("out")
        assert args.workers == 1
        assert args.include_section == []
        assert not args.no_toc

    def test_include_and_exclude_are_exclusive(self) -> None:
        with pytest.raises(SystemExit):
            build_parser().parse_args(
                ["in", "out", "--include-section", "a", "--exclude-section", "b"]
            )
