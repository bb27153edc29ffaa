from typing import Any

from aws_lambda_powertools import Logger
from pydantic import ValidationError

from common.config import TEMPERATURES_TABLE
from common.ddb import get_dynamodb
from common.errors import StoreError
from common.events import request_body
from common.models import TemperatureSampleModel
from common.temperature_slots import TemperatureSlotStore

logger = Logger()

ddb = get_dynamodb()
slots = TemperatureSlotStore(ddb.Table(TEMPERATURES_TABLE))


@logger.inject_lambda_context
def lambda_handler(event: dict[str, Any], context: Any) -> dict[str, Any]:
    if event.get("httpMethod") != "POST":
        return {"statusCode": 400, "body": "Invalid Method"}

    try:
        sample = TemperatureSampleModel.model_validate_json(request_body(event))
    except (ValidationError, ValueError):
        logger.warning("Invalid temperature sample payload")
        return {"statusCode": 400, "body": "Missing data"}

    try:
        hour = slots.record_sample(sample)
    except StoreError:
        logger.exception("temperature_log_failed")
        return {"statusCode": 500, "body": "Fail in writing temperature"}

    logger.info("temperature_log_ok", hour=hour)
    return {"statusCode": 200, "body": ""}
