import logging
from decimal import Decimal
from typing import Any, Dict, List, Optional

import boto3
from boto3.dynamodb.conditions import Attr, Key
from botocore.exceptions import ClientError

from app.core.config import settings

logger = logging.getLogger(__name__)

# Initialize DynamoDB resource
dynamodb = boto3.resource(
    "dynamodb",
    region_name=settings.DYNAMO_REGION,
    endpoint_url=settings.DYNAMO_ENDPOINT_URL,
)

# Get table references
users_table = dynamodb.Table(settings.DYNAMO_USERS_TABLE)
fuel_table = dynamodb.Table(settings.DYNAMO_FUEL_TABLE)
toll_table = dynamodb.Table(settings.DYNAMO_TOLL_TABLE)
settings_table = dynamodb.Table(settings.DYNAMO_SETTINGS_TABLE)


def _error_message(e: ClientError) -> str:
    return e.response.get("Error", {}).get("Message", str(e))


def _error_code(e: ClientError) -> str:
    return e.response.get("Error", {}).get("Code", "")


# Users

def get_user_by_email(email: str):
    """Query the Users table by email (assumes a GSI exists on email)."""
    try:
        response = users_table.query(
            IndexName="email-index",
            KeyConditionExpression=Key("email").eq(email),
        )
        return _from_dynamo(response["Items"][0]) if response["Items"] else None
    except ClientError as e:
        logger.error(f"get_user_by_email failed: {_error_message(e)}")
        return None


def get_user_by_id(user_id: str):
    """Get user by user_id from the Users table."""
    try:
        response = users_table.get_item(Key={"user_id": user_id})
        item = response.get("Item")
        return _from_dynamo(item) if item else None
    except ClientError as e:
        logger.error(f"get_user_by_id failed: {_error_message(e)}")
        return None


def put_user(user_item: dict):
    """Insert a new user into the Users table."""
    try:
        users_table.put_item(Item=_convert_for_dynamo(user_item))
        return True
    except ClientError as e:
        logger.error(f"put_user failed: {_error_message(e)}")
        return False


# Records (fuel and toll share one layout: PK user_id, SK record_id)

def _query_period(table, user_id: str, start_date: str, end_date: str) -> Optional[List[Dict[str, Any]]]:
    """
    All of a user's rows whose ``date`` lies in [start_date, end_date],
    newest first. Returns None when the query fails.
    """
    items: List[Dict[str, Any]] = []
    kwargs = {
        "KeyConditionExpression": Key("user_id").eq(user_id),
        "FilterExpression": Attr("date").between(start_date, end_date),
    }
    try:
        while True:
            response = table.query(**kwargs)
            items.extend(response.get("Items", []))
            last_key = response.get("LastEvaluatedKey")
            if not last_key:
                break
            kwargs["ExclusiveStartKey"] = last_key
    except ClientError as e:
        logger.error(f"query on {table.name} failed: {_error_message(e)}")
        return None

    records = [_from_dynamo(item) for item in items]
    records.sort(key=lambda r: (r.get("date") or "", r.get("time") or ""), reverse=True)
    return records


def _get_record(table, user_id: str, record_id: str):
    try:
        response = table.get_item(Key={"user_id": user_id, "record_id": record_id})
        item = response.get("Item")
        return _from_dynamo(item) if item else None
    except ClientError as e:
        logger.error(f"get_item on {table.name} failed: {_error_message(e)}")
        return None


def _put_record(table, item: dict) -> bool:
    try:
        table.put_item(Item=_convert_for_dynamo(item))
        return True
    except ClientError as e:
        logger.error(f"put_item on {table.name} failed: {_error_message(e)}")
        return False


def _replace_record(table, item: dict):
    """
    Overwrite an existing row with ``item``. The write only happens when the
    owner already has a row with that record_id; returns the stored row or None.
    """
    try:
        table.put_item(
            Item=_convert_for_dynamo(item),
            ConditionExpression=Attr("user_id").exists() & Attr("record_id").exists(),
        )
        return item
    except ClientError as e:
        if _error_code(e) == "ConditionalCheckFailedException":
            logger.info(f"replace on {table.name} skipped, no record {item.get('record_id')}")
        else:
            logger.error(f"replace on {table.name} failed: {_error_message(e)}")
        return None


def _delete_record(table, user_id: str, record_id: str) -> bool:
    try:
        response = table.delete_item(
            Key={"user_id": user_id, "record_id": record_id},
            ReturnValues="ALL_OLD",
        )
        return "Attributes" in response
    except ClientError as e:
        logger.error(f"delete_item on {table.name} failed: {_error_message(e)}")
        return False


def list_fuel_records(user_id: str, start_date: str, end_date: str):
    return _query_period(fuel_table, user_id, start_date, end_date)


def get_fuel_record(user_id: str, record_id: str):
    return _get_record(fuel_table, user_id, record_id)


def put_fuel_record(item: dict) -> bool:
    return _put_record(fuel_table, item)


def replace_fuel_record(item: dict):
    return _replace_record(fuel_table, item)


def delete_fuel_record(user_id: str, record_id: str) -> bool:
    return _delete_record(fuel_table, user_id, record_id)


def list_toll_records(user_id: str, start_date: str, end_date: str):
    return _query_period(toll_table, user_id, start_date, end_date)


def get_toll_record(user_id: str, record_id: str):
    return _get_record(toll_table, user_id, record_id)


def put_toll_record(item: dict) -> bool:
    return _put_record(toll_table, item)


def replace_toll_record(item: dict):
    return _replace_record(toll_table, item)


def delete_toll_record(user_id: str, record_id: str) -> bool:
    return _delete_record(toll_table, user_id, record_id)


# Settings (PK user_id, SK "<key>#<year_month>"; the memo uses an empty year_month)

def _setting_key(key: str, year_month: str) -> str:
    return f"{key}#{year_month or ''}"


def get_setting(user_id: str, key: str, year_month: str = ""):
    """Return the stored setting value, or None if it was never saved."""
    try:
        response = settings_table.get_item(
            Key={"user_id": user_id, "setting_key": _setting_key(key, year_month)}
        )
        item = response.get("Item")
        return _from_dynamo(item).get("value") if item else None
    except ClientError as e:
        logger.error(f"get_setting {key} failed: {_error_message(e)}")
        return None


def put_setting(user_id: str, key: str, value: Any, year_month: str = "") -> bool:
    """Create or replace a setting value."""
    item = {
        "user_id": user_id,
        "setting_key": _setting_key(key, year_month),
        "key": key,
        "year_month": year_month or "",
        "value": value,
    }
    try:
        settings_table.put_item(Item=_convert_for_dynamo(item))
        return True
    except ClientError as e:
        logger.error(f"put_setting {key} failed: {_error_message(e)}")
        return False


def _convert_for_dynamo(obj: Any):
    """
    Recursively convert floats to Decimal for DynamoDB compatibility.
    """
    if isinstance(obj, float):
        return Decimal(str(obj))
    if isinstance(obj, dict):
        return {k: _convert_for_dynamo(v) for k, v in obj.items()}
    if isinstance(obj, list):
        return [_convert_for_dynamo(v) for v in obj]
    return obj


def _from_dynamo(obj: Any):
    """
    Recursively convert Decimal instances back to native Python numeric types.
    """
    if isinstance(obj, list):
        return [_from_dynamo(item) for item in obj]
    if isinstance(obj, dict):
        return {k: _from_dynamo(v) for k, v in obj.items()}
    if isinstance(obj, Decimal):
        if obj % 1 == 0:
            return int(obj)
        return float(obj)
    return obj
