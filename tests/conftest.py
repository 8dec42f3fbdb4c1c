"""Shared fixtures for algebra tests."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from algebra import Algebra
from app import create_app
from bounds import INT8, INT32


@pytest.fixture
def int32() -> Algebra:
    return Algebra(bounds=INT32)


@pytest.fixture
def int8() -> Algebra:
    return Algebra(bounds=INT8)


@pytest.fixture
def client() -> TestClient:
    return TestClient(create_app())
