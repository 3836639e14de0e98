"""Settings resolution: environment beats .env beats defaults."""

from pathlib import Path

from todo_config import DEFAULT_TODO_FILE, Settings, lookup, read_env_file


def test_read_env_file_ignores_noise(tmp_path) -> None:
    env = tmp_path / ".env"
    env.write_text(
        "# comment\n"
        "\n"
        "TODO_FILE = /tmp/todo.csv\n"
        "TODO_DEFAULT_PROJECT=\"Inbox\"\n"
        "UNRELATED=1\n"
        "not a pair\n"
    )
    assert read_env_file(env) == {"TODO_FILE": "/tmp/todo.csv", "TODO_DEFAULT_PROJECT": "Inbox"}


def test_read_env_file_missing(tmp_path) -> None:
    assert read_env_file(tmp_path / ".env") == {}


def test_lookup_priority() -> None:
    assert lookup("TODO_FILE", "d", environ={"TODO_FILE": "env"}, env_file={"TODO_FILE": "file"}) == "env"
    assert lookup("TODO_FILE", "d", environ={}, env_file={"TODO_FILE": "file"}) == "file"
    assert lookup("TODO_FILE", "d", environ={}, env_file={}) == "d"


def test_settings_defaults() -> None:
    settings = Settings.load(environ={}, env_file={})
    assert settings.todo_file == DEFAULT_TODO_FILE
    assert settings.default_project == "General"
    assert settings.log_level == "WARNING"


def test_settings_from_environment() -> None:
    settings = Settings.load(
        environ={"TODO_FILE": "~/todo.csv", "TODO_LOG_LEVEL": "debug"},
        env_file={"TODO_DEFAULT_PROJECT": "Inbox"},
    )
    assert settings.todo_file == Path("~/todo.csv").expanduser()
    assert settings.default_project == "Inbox"
    assert settings.log_level == "DEBUG"
