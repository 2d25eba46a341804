"""
Shared test fixtures for table-explorer tests.

This module provides:
- Environment defaults so importing the app never touches log files or real keys
- A fake DynamoDB resource backed by in-memory tables
- A fake clock for the rate limiter
- A stub chat model
"""

import os

os.environ["LOG_TO_FILE"] = "false"
os.environ["LOG_TO_CONSOLE"] = "false"
os.environ.setdefault("AWS_REGION", "us-west-2")
os.environ["LLM_PROVIDER"] = "OPENAI"
os.environ["API_KEY"] = "sk-test"

from typing import Any, Dict, List, Optional
from unittest.mock import MagicMock

import pytest
from botocore.exceptions import ClientError
from langchain_core.messages import AIMessage

from table_explorer.core.rate_limiter import MinIntervalRateLimiter
from table_explorer.services.table_store_service import TableStoreService


# =============================================================================
# Helpers
# =============================================================================


def make_client_error(code: str, message: str = "boom", operation: str = "Scan") -> ClientError:
    """Create a botocore ClientError with the given error code."""
    return ClientError({"Error": {"Code": code, "Message": message}}, operation)


class FakeClock:
    """Monotonic clock whose sleep() advances time instead of blocking."""

    def __init__(self, start: float = 1000.0):
        self.now = start
        self.sleeps: List[float] = []

    def __call__(self) -> float:
        return self.now

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeDynamoDB:
    """
    Minimal stand-in for a boto3 DynamoDB resource.

    ``tables`` maps a table name to a list of pages; each page is the list of
    items one Scan call returns. Unknown tables raise ResourceNotFoundException.
    """

    def __init__(self, tables: Optional[Dict[str, List[List[Dict[str, Any]]]]] = None):
        self.tables = tables or {}
        self.table_mocks: Dict[str, MagicMock] = {}
        self.meta = MagicMock()
        self.meta.client.list_tables.side_effect = self._list_tables
        self.meta.client.describe_table.side_effect = self._describe_table

    def _list_tables(self, **kwargs):
        return {"TableNames": list(self.tables)}

    def _describe_table(self, TableName):
        if TableName not in self.tables:
            raise make_client_error("ResourceNotFoundException", "Requested resource not found", "DescribeTable")
        count = sum(len(page) for page in self.tables[TableName])
        return {"Table": {"TableName": TableName, "ItemCount": count, "TableStatus": "ACTIVE"}}

    def _scan(self, name):
        def scan(**kwargs):
            if name not in self.tables:
                raise make_client_error("ResourceNotFoundException", "Requested resource not found")
            pages = self.tables[name] or [[]]
            index = kwargs.get("ExclusiveStartKey", {}).get("page", 0)
            response = {"Items": pages[index], "Count": len(pages[index])}
            if index + 1 < len(pages):
                response["LastEvaluatedKey"] = {"page": index + 1}
            return response
        return scan

    def Table(self, name):
        if name not in self.table_mocks:
            table = MagicMock(name=f"Table({name})")
            table.scan.side_effect = self._scan(name)
            self.table_mocks[name] = table
        return self.table_mocks[name]


class StubChatModel:
    """Records the messages it receives and replies with fixed text."""

    def __init__(self, reply: str = "There are 3 orders.", error: Optional[Exception] = None):
        self.reply = reply
        self.error = error
        self.calls: List[list] = []

    def invoke(self, messages):
        self.calls.append(messages)
        if self.error is not None:
            raise self.error
        return AIMessage(content=self.reply)


# =============================================================================
# Fixtures
# =============================================================================


ORDERS = [
    {"ORDER_ID": "o-1", "STATUS": "A", "TOTAL": 10},
    {"ORDER_ID": "o-2", "STATUS": "B", "TOTAL": 25},
    {"ORDER_ID": "o-3", "STATUS": "A", "TOTAL": 7, "NOTE": "rush"},
]


@pytest.fixture
def orders():
    return [dict(row) for row in ORDERS]


@pytest.fixture
def fake_dynamodb(orders):
    return FakeDynamoDB({"ORDERS": [orders], "EMPTY": []})


@pytest.fixture
def table_store(fake_dynamodb):
    return TableStoreService(fake_dynamodb)


@pytest.fixture
def fake_clock():
    return FakeClock()


@pytest.fixture
def rate_limiter(fake_clock):
    return MinIntervalRateLimiter(1.0, clock=fake_clock, sleep=fake_clock.sleep)


@pytest.fixture
def chat_model():
    return StubChatModel()
