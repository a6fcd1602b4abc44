"""Test utilities for courier dispatchers.

Provides an in-process async test client and a few response assertions::

    from courier.testing import TestClient, assert_redirect
"""

from courier.testing.assertions import assert_json, assert_redirect, assert_status
from courier.testing.client import TestClient

__all__ = [
    "TestClient",
    "assert_json",
    "assert_redirect",
    "assert_status",
]
