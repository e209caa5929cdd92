"""
Tests for the explorer balance client.
"""
import pytest
import requests

from bnb_agent_sdk.explorer import ExplorerClient

from conftest import TEST_ADDRESS

API_URL = "https://api.explorer.example.com/api"


@pytest.fixture
def explorer():
    return ExplorerClient(api_url=API_URL, api_key="key", session=requests.Session())


def test_native_balance(explorer, requests_mock):
    requests_mock.get(API_URL, json={"status": "1", "message": "OK", "result": "1500000000000000000"})
    assert explorer.native_balance(TEST_ADDRESS) == 1_500_000_000_000_000_000
    qs = requests_mock.last_request.qs
    assert qs["module"] == ["account"]
    assert qs["action"] == ["balance"]
    assert qs["apikey"] == ["key"]


def test_native_balance_api_error(explorer, requests_mock):
    requests_mock.get(API_URL, json={"status": "0", "message": "NOTOK", "result": "Invalid API Key"})
    assert explorer.native_balance(TEST_ADDRESS) is None


def test_native_balance_malformed_result(explorer, requests_mock):
    requests_mock.get(API_URL, json={"status": "1", "message": "OK", "result": "lots"})
    assert explorer.native_balance(TEST_ADDRESS) is None


def test_native_balance_transport_error(explorer, requests_mock):
    requests_mock.get(API_URL, exc=requests.ConnectionError("refused"))
    assert explorer.native_balance(TEST_ADDRESS) is None


def test_native_balance_not_json(explorer, requests_mock):
    requests_mock.get(API_URL, text="<html>busy</html>")
    assert explorer.native_balance(TEST_ADDRESS) is None


def test_native_balance_api_url_override(explorer, requests_mock):
    other = "https://other.example.com/api"
    requests_mock.get(other, json={"status": "1", "message": "OK", "result": "5"})
    assert explorer.native_balance(TEST_ADDRESS, api_url=other) == 5
