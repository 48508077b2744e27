import importlib
import sys
from pathlib import Path

import pytest

from cmdspec.__main__ import bootstrap, find_cmdspec_config, main

HANDLERS = """
CALLS = []


def hello(values):
    CALLS.append(values["name"])
"""

CONFIG = """
app_name: greeter
commands:
  - template: "hello:<string-name>?Say hello"
    handler: cmdspec_main_handlers.hello
"""


@pytest.fixture(autouse=True)
def fake_home(monkeypatch, tmp_path):
    """Redirect Path.home() and the working directory to temporary directories."""
    home = tmp_path / "home"
    work = tmp_path / "work"
    home.mkdir()
    work.mkdir()
    monkeypatch.setattr(Path, "home", lambda: home)
    monkeypatch.chdir(work)
    monkeypatch.delenv("CMDSPEC_CONFIG", raising=False)
    monkeypatch.setattr(sys, "path", list(sys.path))
    yield home
    sys.modules.pop("cmdspec_main_handlers", None)


def write_project(directory: Path, config: str = CONFIG) -> Path:
    (directory / "cmdspec_main_handlers.py").write_text(HANDLERS, encoding="UTF-8")
    config_file = directory / "cmdspec.yaml"
    config_file.write_text(config, encoding="UTF-8")
    importlib.invalidate_caches()
    return config_file


def test_find_cmdspec_config():
    config_file = Path("cmdspec.yaml").resolve()
    config_file.touch()
    assert find_cmdspec_config().resolve() == config_file


def test_find_hidden_toml_config():
    config_file = Path(".cmdspec.toml").resolve()
    config_file.touch()
    assert find_cmdspec_config().resolve() == config_file


def test_find_global_config(fake_home):
    config_file = fake_home / ".config" / "cmdspec" / "cmdspec.toml"
    config_file.parent.mkdir(parents=True)
    config_file.touch()
    assert find_cmdspec_config() == config_file


def test_env_config_takes_precedence(monkeypatch, tmp_path):
    Path("cmdspec.yaml").touch()
    env_config = tmp_path / "elsewhere.yaml"
    env_config.touch()
    monkeypatch.setenv("CMDSPEC_CONFIG", str(env_config))
    assert find_cmdspec_config() == env_config


def test_bootstrap():
    config_file = Path("cmdspec.yaml").resolve()
    config_file.touch()
    bootstrap_path = bootstrap()
    assert bootstrap_path.resolve() == config_file
    assert str(bootstrap_path.parent) in sys.path


def test_bootstrap_no_config():
    sys_path_before = list(sys.path)
    assert bootstrap() is None
    assert sys.path == sys_path_before


def test_main_without_config(capsys):
    assert main(["hello:world"]) == 1
    assert "No cmdspec config found" in capsys.readouterr().out


def test_main_runs_configured_command():
    write_project(Path.cwd())
    assert main(["hello:world"]) == 0
    handlers = importlib.import_module("cmdspec_main_handlers")
    assert handlers.CALLS == ["world"]


def test_main_usage_error_exit_code(capsys):
    write_project(Path.cwd())
    assert main(["goodbye"]) == 2
    assert "Usage: greeter <command> <options>" in capsys.readouterr().out


def test_main_help(capsys):
    write_project(Path.cwd())
    assert main(["--help"]) == 0
    assert "hello:<name>  Say hello" in capsys.readouterr().out


def test_main_invalid_config(capsys):
    write_project(Path.cwd(), "commands: []\n")
    assert main([]) == 1
    assert "Invalid configuration" in capsys.readouterr().out


def test_main_reports_definition_errors(capsys):
    write_project(
        Path.cwd(),
        "strict: false\n"
        "commands:\n"
        "  - template: 'hello:'\n"
        "    handler: cmdspec_main_handlers.hello\n"
        "  - template: 'bye'\n"
        "    handler: cmdspec_main_handlers.hello\n",
    )
    assert main([]) == 1
    assert "1 definition error(s)" in capsys.readouterr().out
