"""Tests for registry existence checks."""
from unittest.mock import MagicMock, Mock

import pytest
import requests

from src.genenv.registry import (
    CachingRegistry,
    ExistenceOracle,
    OfflineRegistry,
    PyPIRegistry,
    StaticRegistry,
)


def make_session(status_code=200, side_effect=None):
    session = MagicMock(spec=requests.Session)
    session.headers = {}
    if side_effect is not None:
        session.get.side_effect = side_effect
    else:
        session.get.return_value = Mock(status_code=status_code)
    return session


def test_pypi_registry_found():
    session = make_session(200)
    registry = PyPIRegistry(session=session, timeout=3.0)

    assert registry.exists("numpy") is True
    session.get.assert_called_once_with("https://pypi.org/pypi/numpy/json", timeout=3.0)


@pytest.mark.parametrize("status_code", [404, 301, 500])
def test_pypi_registry_other_status_is_not_found(status_code):
    registry = PyPIRegistry(session=make_session(status_code))
    assert registry.exists("nope") is False


@pytest.mark.parametrize("error", [
    requests.ConnectionError("offline"),
    requests.Timeout("slow"),
    requests.TooManyRedirects("loop"),
])
def test_pypi_registry_network_errors_are_unknown(error):
    registry = PyPIRegistry(session=make_session(side_effect=error))
    assert registry.exists("numpy") is None


def test_pypi_registry_custom_base_url():
    session = make_session(200)
    registry = PyPIRegistry("https://mirror.example/pypi/", session=session)

    registry.exists("flask")

    assert session.get.call_args[0][0] == "https://mirror.example/pypi/flask/json"


def test_pypi_registry_sets_accept_header():
    session = make_session(200)
    PyPIRegistry(session=session)
    assert session.headers["Accept"] == "application/json"


def test_static_registry_is_case_sensitive():
    registry = StaticRegistry({"Pillow"})
    assert registry.exists("Pillow") is True
    assert registry.exists("pillow") is False


def test_offline_registry_always_unknown():
    assert OfflineRegistry().exists("numpy") is None


def test_caching_registry_queries_once():
    inner = Mock()
    inner.exists.return_value = True
    registry = CachingRegistry(inner)

    assert registry.exists("numpy") is True
    assert registry.exists("numpy") is True
    inner.exists.assert_called_once_with("numpy")


def test_caching_registry_caches_unknown_answers():
    inner = Mock()
    inner.exists.return_value = None
    registry = CachingRegistry(inner)

    registry.exists("numpy")
    registry.exists("numpy")
    assert inner.exists.call_count == 1


@pytest.mark.parametrize("oracle", [
    PyPIRegistry(session=make_session()),
    StaticRegistry(()),
    OfflineRegistry(),
    CachingRegistry(OfflineRegistry()),
])
def test_registries_satisfy_protocol(oracle):
    assert isinstance(oracle, ExistenceOracle)
