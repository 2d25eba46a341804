"""
Table Store Service

Thin gateway over DynamoDB: list/describe tables, full scans, key queries and
single-item mutations. Every call is one logical request to the store (scans
and queries follow continuation tokens until exhausted). Nothing is retried
or cached; botocore failures are translated into the error taxonomy in
table_explorer.core.errors.
"""

import logging
from typing import Any, Callable, Dict, List, Optional

from botocore.exceptions import BotoCoreError, ClientError

from table_explorer.core.errors import (
    BackendUnavailable,
    InvalidQuery,
    ItemConflict,
    TableExplorerError,
    TableNotFound,
)
from table_explorer.utils.item_codec import item_from_row, row_from_item

logger = logging.getLogger("table_explorer")

Row = Dict[str, Any]

NOT_FOUND_CODES = {"ResourceNotFoundException"}
INVALID_QUERY_CODES = {"ValidationException"}
CONFLICT_CODES = {"ConditionalCheckFailedException", "TransactionConflictException"}


def translate_error(error: Exception, table_name: Optional[str] = None) -> TableExplorerError:
    """Map a botocore exception onto the application error taxonomy."""
    if isinstance(error, ClientError):
        code = error.response.get("Error", {}).get("Code", "")
        message = error.response.get("Error", {}).get("Message") or str(error)
        if code in NOT_FOUND_CODES:
            return TableNotFound(
                f"Table not found: {table_name}" if table_name else message,
                table_name=table_name,
            )
        if code in INVALID_QUERY_CODES:
            return InvalidQuery(message, table_name=table_name)
        if code in CONFLICT_CODES:
            return ItemConflict(message, table_name=table_name)
        return BackendUnavailable(f"{code}: {message}" if code else message, table_name=table_name)
    return BackendUnavailable(str(error), table_name=table_name)


class TableStoreService:
    """
    Gateway to the managed table store.

    Args:
        dynamodb: boto3 DynamoDB service resource. Tests pass a mock.
    """

    def __init__(self, dynamodb):
        self._dynamodb = dynamodb

    @property
    def client(self):
        """Low-level client behind the resource (list/describe)."""
        return self._dynamodb.meta.client

    def _table(self, table_name: str):
        return self._dynamodb.Table(table_name)

    def _call(self, operation: str, table_name: Optional[str], fn: Callable[[], Any]) -> Any:
        try:
            return fn()
        except (ClientError, BotoCoreError) as e:
            error = translate_error(e, table_name)
            logger.error(f"DynamoDB {operation} failed for table={table_name}: {error.kind}: {error}")
            raise error from e

    def _collect_pages(
        self,
        operation: str,
        table_name: str,
        request: Callable[..., Dict[str, Any]],
        params: Dict[str, Any],
    ) -> List[Row]:
        """Run a scan/query, following LastEvaluatedKey until the store has no more pages."""
        rows: List[Row] = []
        pages = 0
        start_key = None
        while True:
            page_params = dict(params)
            if start_key is not None:
                page_params["ExclusiveStartKey"] = start_key
            response = self._call(operation, table_name, lambda: request(**page_params))
            pages += 1
            rows.extend(row_from_item(item) for item in response.get("Items", []))
            start_key = response.get("LastEvaluatedKey")
            if not start_key:
                break
        logger.debug(f"DynamoDB {operation} table={table_name}: {len(rows)} rows in {pages} page(s)")
        return rows

    # ------------------------------------------------------------------
    # Tables
    # ------------------------------------------------------------------

    def list_tables(self) -> List[str]:
        """Return every table name known to the store, in store order."""
        names: List[str] = []
        params: Dict[str, Any] = {}
        while True:
            response = self._call("ListTables", None, lambda: self.client.list_tables(**params))
            names.extend(response.get("TableNames", []))
            last = response.get("LastEvaluatedTableName")
            if not last:
                break
            params = {"ExclusiveStartTableName": last}
        logger.info(f"DynamoDB ListTables: {len(names)} tables")
        return names

    def ping(self) -> None:
        """Cheapest round trip to the store; raises BackendUnavailable on failure."""
        self._call("ListTables", None, lambda: self.client.list_tables(Limit=1))

    def describe_table(self, table_name: str) -> Dict[str, Any]:
        """Return the store's description of a table (key schema, status, item count)."""
        response = self._call(
            "DescribeTable", table_name, lambda: self.client.describe_table(TableName=table_name)
        )
        return row_from_item(response.get("Table", {}))

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def get_all_rows(self, table_name: str) -> List[Row]:
        """Full scan of a table."""
        logger.info(f"Scanning table {table_name}")
        table = self._table(table_name)
        return self._collect_pages("Scan", table_name, table.scan, {})

    def query_rows(
        self,
        table_name: str,
        key_condition: str,
        bound_values: Dict[str, Any],
        attribute_names: Optional[Dict[str, str]] = None,
    ) -> List[Row]:
        """
        Rows matching a key condition expression.

        Args:
            table_name: Table to query
            key_condition: e.g. "pk = :pk AND sk BETWEEN :lo AND :hi"
            bound_values: Values for the ":placeholders" in the condition
            attribute_names: Optional "#name" substitutions for reserved words
        """
        params: Dict[str, Any] = {
            "KeyConditionExpression": key_condition,
            "ExpressionAttributeValues": item_from_row(bound_values),
        }
        if attribute_names:
            params["ExpressionAttributeNames"] = attribute_names
        table = self._table(table_name)
        return self._collect_pages("Query", table_name, table.query, params)

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def put_row(self, table_name: str, row: Row) -> None:
        table = self._table(table_name)
        item = item_from_row(row)
        self._call("PutItem", table_name, lambda: table.put_item(Item=item))
        logger.info(f"DynamoDB PutItem table={table_name}")

    def update_row(
        self,
        table_name: str,
        key: Row,
        update_expression: str,
        bound_values: Dict[str, Any],
    ) -> Row:
        """Apply an update expression to one item and return the updated attributes."""
        table = self._table(table_name)
        response = self._call(
            "UpdateItem",
            table_name,
            lambda: table.update_item(
                Key=item_from_row(key),
                UpdateExpression=update_expression,
                ExpressionAttributeValues=item_from_row(bound_values),
                ReturnValues="UPDATED_NEW",
            ),
        )
        logger.info(f"DynamoDB UpdateItem table={table_name}")
        return row_from_item(response.get("Attributes", {}))

    def delete_row(self, table_name: str, key: Row) -> None:
        table = self._table(table_name)
        self._call("DeleteItem", table_name, lambda: table.delete_item(Key=item_from_row(key)))
        logger.info(f"DynamoDB DeleteItem table={table_name}")
