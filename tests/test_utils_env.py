"""Tests for the environment variable utility."""

import pytest

from microbench.utils.env import EnvVarTypeError, env_is_set, get_env


def test_get_env_basic(monkeypatch):
    """Test getting set variables and missing variables with defaults."""
    monkeypatch.setenv("MICROBENCH_TEST_VAR", "test_value")
    monkeypatch.delenv("MICROBENCH_MISSING_VAR", raising=False)

    assert get_env("MICROBENCH_TEST_VAR") == "test_value"
    assert get_env("MICROBENCH_MISSING_VAR", default="default") == "default"
    assert get_env("MICROBENCH_MISSING_VAR") is None


def test_get_env_coercion(monkeypatch):
    """Test type coercion for common types."""
    monkeypatch.setenv("MICROBENCH_BOOL_TRUE", "true")
    monkeypatch.setenv("MICROBENCH_BOOL_FALSE", "0")
    monkeypatch.setenv("MICROBENCH_BOOL_OFF", " Off ")
    monkeypatch.setenv("MICROBENCH_INT", "123")
    monkeypatch.setenv("MICROBENCH_FLOAT", "1.23")
    monkeypatch.setenv("MICROBENCH_LIST", "a, b, c ")

    assert get_env("MICROBENCH_BOOL_TRUE", as_type=bool) is True
    assert get_env("MICROBENCH_BOOL_FALSE", as_type=bool) is False
    assert get_env("MICROBENCH_BOOL_OFF", as_type=bool) is False
    assert get_env("MICROBENCH_INT", as_type=int) == 123
    assert get_env("MICROBENCH_FLOAT", as_type=float) == 1.23
    assert get_env("MICROBENCH_LIST", as_type=list) == ["a", "b", "c"]


def test_get_env_coercion_failure(monkeypatch):
    """Test that a bad value raises with the variable name."""
    monkeypatch.setenv("MICROBENCH_INVALID_INT", "not_an_int")

    with pytest.raises(EnvVarTypeError, match="MICROBENCH_INVALID_INT"):
        get_env("MICROBENCH_INVALID_INT", as_type=int)


def test_env_is_set(monkeypatch):
    """Test that empty values count as unset."""
    monkeypatch.setenv("MICROBENCH_EMPTY", "")
    monkeypatch.setenv("MICROBENCH_FULL", "1")
    monkeypatch.delenv("MICROBENCH_ABSENT", raising=False)

    assert not env_is_set("MICROBENCH_EMPTY")
    assert env_is_set("MICROBENCH_FULL")
    assert not env_is_set("MICROBENCH_ABSENT")
