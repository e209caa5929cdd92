"""
HTTP session construction shared by the REST clients.
"""
import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry


def retrying_session(retry_count: int = 3) -> requests.Session:
    """
    Build a session that retries connection errors and transient server errors.

    Args:
        retry_count: Maximum retries per request

    Returns:
        requests.Session with retrying adapters mounted for http and https
    """
    session = requests.Session()
    retries = Retry(
        total=retry_count,
        backoff_factor=0.5,
        status_forcelist=[429, 500, 502, 503, 504],
        allowed_methods=["GET"],
        raise_on_status=False,
        connect=retry_count,
        read=retry_count,
    )
    session.mount("http://", HTTPAdapter(max_retries=retries))
    session.mount("https://", HTTPAdapter(max_retries=retries))
    return session
