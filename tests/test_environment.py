import pytest

from shibabot.environment import load_env, parse_env_text


def test_parse_skips_comments_and_lines_without_equals():
    text = '# comment\nDEV_TOKEN="token"\nno assignment here\nA=b=c\n'
    assert parse_env_text(text) == [("DEV_TOKEN", "token"), ("A", "b=c")]


def test_parse_only_skips_comment_at_line_start():
    assert parse_env_text(" #X=1") == [(" #X", "1")]


def test_parse_removes_all_quotes():
    assert parse_env_text('KEY="a"b"') == [("KEY", "ab")]


def test_parse_handles_crlf():
    assert parse_env_text("A=1\r\nB=2\r\n") == [("A", "1"), ("B", "2")]


def test_load_env_sets_values(tmp_path):
    env_file = tmp_path / ".env"
    env_file.write_text('SQL_HOST="localhost"\n# SQL_PORT=1\nSQL_USER=user\n')
    environ = {}
    loaded = load_env(env_file, environ)
    assert environ == {"SQL_HOST": "localhost", "SQL_USER": "user"}
    assert loaded == environ


def test_load_env_overrides_existing(tmp_path):
    env_file = tmp_path / ".env"
    env_file.write_text("KEY=new\n")
    environ = {"KEY": "old", "OTHER": "kept"}
    load_env(env_file, environ)
    assert environ == {"KEY": "new", "OTHER": "kept"}


def test_load_env_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_env(tmp_path / "missing.env", {})


def test_load_env_rejects_empty_name(tmp_path):
    env_file = tmp_path / ".env"
    env_file.write_text("=value\n")
    with pytest.raises(ValueError):
        load_env(env_file, {})