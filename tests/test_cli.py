"""Tests for the split-css command line front-end."""

from pathlib import Path

import pytest

import split_css

SOURCE = "a { color: red; /* !critical */ }\nb { color: blue; }\n"


@pytest.fixture()
def stylesheet(tmp_path: Path) -> Path:
    path = tmp_path / "styles.css"
    path.write_text(SOURCE, encoding="utf-8")
    return path


class TestMain:
    def test_writes_both_files_next_to_source(self, stylesheet: Path, capsys) -> None:
        assert split_css.main([str(stylesheet)]) == 0
        assert (stylesheet.parent / "styles-critical.css").read_text() == "a{color:red}"
        assert (stylesheet.parent / "styles-non-critical.css").read_text() == "b{color:blue}"
        out = capsys.readouterr().out
        assert "styles-critical.css" in out
        assert "styles-non-critical.css" in out

    def test_pretty_format(self, stylesheet: Path) -> None:
        assert split_css.main([str(stylesheet), "--format", "pretty"]) == 0
        assert (stylesheet.parent / "styles-critical.css").read_text() == "a {\n\tcolor: red;\n}\n"

    def test_output_dir(self, stylesheet: Path, tmp_path: Path) -> None:
        out_dir = tmp_path / "out" / "css"
        assert split_css.main([str(stylesheet), "-o", str(out_dir)]) == 0
        assert (out_dir / "styles-critical.css").exists()
        assert (out_dir / "styles-non-critical.css").exists()
        assert not (stylesheet.parent / "styles-critical.css").exists()

    def test_directory_input_skips_previous_outputs(self, stylesheet: Path) -> None:
        (stylesheet.parent / "other.css").write_text("c { x: 1 }", encoding="utf-8")
        assert split_css.main([str(stylesheet.parent)]) == 0
        assert split_css.main([str(stylesheet.parent)]) == 0
        names = sorted(p.name for p in stylesheet.parent.glob("*.css"))
        assert names == [
            "other-critical.css",
            "other-non-critical.css",
            "other.css",
            "styles-critical.css",
            "styles-non-critical.css",
            "styles.css",
        ]
        assert (stylesheet.parent / "other-critical.css").read_text() == ""

    def test_syntax_error_exit_code(self, tmp_path: Path, capsys) -> None:
        broken = tmp_path / "broken.css"
        broken.write_text("a { color: red", encoding="utf-8")
        assert split_css.main([str(broken)]) == 1
        err = capsys.readouterr().err
        assert "Failed to parse" in err
        assert "broken.css" in err

    def test_missing_input(self, tmp_path: Path, capsys) -> None:
        assert split_css.main([str(tmp_path / "nope.css")]) == 1
        assert "does not exist" in capsys.readouterr().err

    def test_empty_directory(self, tmp_path: Path, capsys) -> None:
        assert split_css.main([str(tmp_path)]) == 1
        assert "No .css files" in capsys.readouterr().err

    def test_invalid_format_is_usage_error(self, stylesheet: Path) -> None:
        with pytest.raises(SystemExit) as excinfo:
            split_css.main([str(stylesheet), "--format", "minified"])
        assert excinfo.value.code == 2

    def test_verbose_logs_debug_to_stderr(self, stylesheet: Path, capsys) -> None:
        assert split_css.main([str(stylesheet), "--verbose"]) == 0
        err = capsys.readouterr().err
        assert "DEBUG" in err
        assert "Parser Logger" in err
        assert "Splitter Logger" in err

    def test_quiet_by_default(self, stylesheet: Path, capsys) -> None:
        assert split_css.main([str(stylesheet), "--verbose"]) == 0
        capsys.readouterr()
        assert split_css.main([str(stylesheet)]) == 0
        assert "DEBUG" not in capsys.readouterr().err

    def test_byte_order_mark_input(self, tmp_path: Path) -> None:
        path = tmp_path / "bom.css"
        path.write_text("\ufeff" + SOURCE, encoding="utf-8")
        assert split_css.main([str(path)]) == 0
        assert (tmp_path / "bom-critical.css").read_text(encoding="utf-8") == "a{color:red}"


class TestHelpers:
    def test_output_paths(self) -> None:
        assert split_css.output_paths(Path("dir/site.css"), None) == (
            Path("dir/site-critical.css"),
            Path("dir/site-non-critical.css"),
        )

    def test_output_paths_with_dir(self) -> None:
        critical, non_critical = split_css.output_paths(Path("dir/site.css"), Path("out"))
        assert critical == Path("out/site-critical.css")
        assert non_critical == Path("out/site-non-critical.css")

    def test_is_split_output(self) -> None:
        assert split_css.is_split_output(Path("a-critical.css"))
        assert split_css.is_split_output(Path("a-non-critical.css"))
        assert not split_css.is_split_output(Path("a.css"))
