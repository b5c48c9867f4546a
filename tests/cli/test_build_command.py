from __future__ import annotations

import json
import logging

import pytest

from webcore.cli import build_parser, main

PROJECT = {
    "webc.toml": '[app]\ntitle = "Demo"\nlang = "en"\n',
    "theme.toml": '[theme]\nname = "light"\n[theme.colors]\nprimary = "#3366ff"\n',
    "src/layouts/main.webc": "layout MainLayout { main { slot content } }\n",
    "src/pages/home.webc": 'page "home" { button on:click={count += 1} "+" "{count}" }\n',
    "src/components/counter.webc": "component Counter { state { count: number = 0 } }\n",
    "public/favicon.ico": "icon",
}


@pytest.fixture(autouse=True)
def _isolate_cli(monkeypatch):
    for name in ("WEBCORE_MODE", "WEBCORE_RERAISE", "WEBCORE_DEBUG", "WEBCORE_VERBOSE", "WEBCORE_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    yield
    webcore_logger = logging.getLogger("webcore")
    for handler in list(webcore_logger.handlers):
        webcore_logger.removeHandler(handler)
    webcore_logger.propagate = True
    webcore_logger.setLevel(logging.NOTSET)


def test_build_writes_site(write_project, capsys) -> None:
    root = write_project(PROJECT)
    main(["build", str(root)])

    out_dir = root / "dist"
    home = (out_dir / "home.html").read_text(encoding="utf-8")
    assert '<html lang="en">' in home
    assert "<title>Demo</title>" in home
    assert "--color-primary: #3366ff;" in (out_dir / "theme.css").read_text(encoding="utf-8")
    js = (out_dir / "webcore.js").read_text(encoding="utf-8")
    assert "'btn1': function()" in js
    assert "window.__webcore_state__.set('count', 0);" in js
    assert (out_dir / "index.html").exists()
    assert (out_dir / "favicon.ico").read_text(encoding="utf-8") == "icon"
    assert capsys.readouterr().out.startswith("✓ Built 1 page(s)")


def test_prod_mode_minifies_css(write_project, monkeypatch) -> None:
    root = write_project(PROJECT)
    monkeypatch.chdir(root)
    main(["build", str(root), "--mode", "prod", "--out", "public_html"])
    css = (root / "public_html" / "theme.css").read_text(encoding="utf-8")
    assert "--color-primary:#3366ff" in css
    assert "\n" not in css.strip()


def test_mode_from_environment(write_project, monkeypatch) -> None:
    monkeypatch.setenv("WEBCORE_MODE", "prod")
    root = write_project(PROJECT)
    main(["build", str(root)])
    assert "\n" not in (root / "dist" / "theme.css").read_text(encoding="utf-8").strip()


def test_print_ast(write_project, capsys) -> None:
    root = write_project(PROJECT)
    main(["build", str(root), "--print-ast"])
    dumped = json.loads(capsys.readouterr().out)
    assert set(dumped["pages"]) == {"home"}
    assert dumped["components"]["Counter"]["state"][0]["name"] == "count"
    assert not (root / "dist").exists()


def test_syntax_error_exits_with_location(write_project, capsys) -> None:
    files = dict(PROJECT)
    files["src/pages/home.webc"] = 'page "home" p'
    root = write_project(files)
    with pytest.raises(SystemExit) as excinfo:
        main(["build", str(root)])
    assert excinfo.value.code == 1
    err = capsys.readouterr().err
    assert err.startswith("Error: Expected LBRACE")
    assert "home.webc:1" in err


def test_missing_project_directory(tmp_path, capsys) -> None:
    with pytest.raises(SystemExit):
        main(["build", str(tmp_path / "nope")])
    assert "CLI_FILE_NOT_FOUND" in capsys.readouterr().err


def test_missing_config_file(tmp_path, capsys) -> None:
    with pytest.raises(SystemExit):
        main(["build", str(tmp_path)])
    assert "webc.toml not found" in capsys.readouterr().err


def test_reraise_flag(write_project, monkeypatch) -> None:
    from webcore.errors import WebCoreConfigError

    monkeypatch.setenv("WEBCORE_RERAISE", "1")
    with pytest.raises(WebCoreConfigError):
        main(["build", str(write_project({"src/app.webc": ""}))])


def test_build_options_after_subcommand() -> None:
    args = build_parser().parse_args(["build", "site", "--verbose", "--log-level", "debug"])
    assert args.verbose is True
    assert args.log_level == "debug"
    assert args.project == "site"
    defaults = build_parser().parse_args(["build"])
    assert defaults.verbose is False
    assert defaults.log_level is None
    assert defaults.project == "."


def test_no_command_prints_help(capsys) -> None:
    with pytest.raises(SystemExit):
        main([])
    assert "usage: webcore" in capsys.readouterr().out


def test_relative_out_is_resolved_from_working_directory(write_project, tmp_path, monkeypatch) -> None:
    root = write_project(PROJECT)
    monkeypatch.chdir(tmp_path)
    main(["build", str(root), "--out", "built"])
    assert (tmp_path / "built" / "home.html").exists()
    assert not (root / "built").exists()


@pytest.mark.parametrize("out", [".", "..", "src"])
def test_output_directory_must_not_contain_project_files(write_project, monkeypatch, capsys, out) -> None:
    root = write_project(PROJECT)
    monkeypatch.chdir(root)
    with pytest.raises(SystemExit) as excinfo:
        main(["build", str(root), "--out", out])
    assert excinfo.value.code == 1
    assert "CLI_BUILD_ERROR" in capsys.readouterr().err
    assert (root / "src" / "pages" / "home.webc").exists()
    assert (root / "webc.toml").exists()


def test_configured_output_directory_is_checked(write_project, capsys) -> None:
    files = dict(PROJECT)
    files["webc.toml"] = '[app]\ntitle = "Demo"\n[build]\nout = "public"\n'
    root = write_project(files)
    with pytest.raises(SystemExit):
        main(["build", str(root)])
    assert "Refusing to use" in capsys.readouterr().err
    assert (root / "public" / "favicon.ico").read_text(encoding="utf-8") == "icon"
