"""
Tests for version discovery.
"""
import importlib
import re
from importlib import metadata as importlib_metadata
from unittest.mock import mock_open, patch

import pytest

import bnb_agent_sdk.version as vmod
from bnb_agent_sdk import __version__


@pytest.fixture(autouse=True)
def _restore_version():
    yield
    importlib.reload(vmod)


def test_version_format():
    assert re.match(r"^\d+\.\d+\.\d+", __version__)


@patch("importlib.metadata.version", return_value="2.3.4")
def test_version_from_metadata(mock_metadata_version):
    importlib.reload(vmod)
    assert vmod.__version__ == "2.3.4"
    mock_metadata_version.assert_called_with("bnb-agent-sdk")


@patch("importlib.metadata.version", side_effect=importlib_metadata.PackageNotFoundError)
@patch("pathlib.Path.open", new_callable=mock_open, read_data=b'[project]\nversion = "1.2.3"\n')
def test_version_from_pyproject(mock_open_file, mock_metadata_version):
    importlib.reload(vmod)
    assert vmod.__version__ == "1.2.3"


@pytest.mark.parametrize("error", [FileNotFoundError(), KeyError("project")])
def test_version_falls_back_to_default(monkeypatch, error):
    def missing(name):
        raise importlib_metadata.PackageNotFoundError(name)

    def broken(*args, **kwargs):
        raise error

    monkeypatch.setattr(importlib_metadata, "version", missing)
    monkeypatch.setattr("pathlib.Path.open", broken)
    importlib.reload(vmod)
    assert vmod.__version__ == vmod.DEFAULT_VERSION
