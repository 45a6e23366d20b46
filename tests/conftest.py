"""Shared pytest fixtures for factordb tests."""

from __future__ import annotations

import json
import sys
from unittest.mock import Mock

import pytest
import requests

from factordb import runtime


def make_response(body, status_code: int = 200, url: str = "http://factordb.com/api") -> requests.Response:
    """Build a real requests.Response carrying ``body`` (dict -> JSON, str/bytes as-is)."""
    if isinstance(body, (dict, list)):
        body = json.dumps(body)
    if isinstance(body, str):
        body = body.encode("utf-8")
    resp = requests.Response()
    resp.status_code = status_code
    resp._content = body
    resp.encoding = "utf-8"
    resp.url = url
    resp.reason = "OK" if status_code < 400 else "Error"
    return resp


FORTY_TWO = {"id": "42", "status": "FF", "factors": [["2", 1], ["3", 1], ["7", 1]]}


@pytest.fixture(autouse=True)
def fresh_runtime(monkeypatch, tmp_path):
    """Isolate every test: empty runtime, no user settings file."""
    monkeypatch.setenv("FACTORDB_HOME", str(tmp_path / "home"))
    monkeypatch.delenv("FACTORDB_CONFIG", raising=False)
    yield runtime.reset()
    runtime.reset()


@pytest.fixture
def fake_session():
    """A stand-in for requests.Session answering 42's record.

    Returns:
        Mock: session whose .get returns a 200 response
    """
    session = Mock(spec=requests.Session)
    session.get.return_value = make_response(FORTY_TWO)
    return session


@pytest.fixture
def default_digit_limit(monkeypatch):
    """Put Python's stock 4300-digit int<->str guard in place for one test."""
    monkeypatch.delenv("PYTHONINTMAXSTRDIGITS", raising=False)
    before = sys.get_int_max_str_digits()
    sys.set_int_max_str_digits(4300)
    yield 4300
    sys.set_int_max_str_digits(before)
