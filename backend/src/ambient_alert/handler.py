from typing import Any

from aws_lambda_powertools import Logger
from pydantic import ValidationError

from common.config import DEVICE_TOKENS_TABLE, MOTION_TABLE
from common.ddb import get_dynamodb
from common.errors import AmbientAlertsError
from common.events import request_body
from common.models import AmbientReadingModel
from common.motion_log import MotionLogStore
from common.notifications import NotificationDispatcher
from common.push import PushSender

logger = Logger()

ddb = get_dynamodb()
motion_log = MotionLogStore(ddb.Table(MOTION_TABLE))
dispatcher = NotificationDispatcher(ddb.Table(DEVICE_TOKENS_TABLE), PushSender(), motion_log)


def _response(status: int, body: str = "") -> dict[str, Any]:
    return {"statusCode": status, "headers": {"Content-Type": "text/plain"}, "body": body}


@logger.inject_lambda_context
def lambda_handler(event: dict[str, Any], context: Any) -> dict[str, Any]:
    if event.get("httpMethod") != "POST":
        return _response(400, "Invalid Method")

    try:
        reading = AmbientReadingModel.model_validate_json(request_body(event))
    except (ValidationError, ValueError):
        logger.warning("Invalid ambient reading payload")
        return _response(400)

    try:
        dispatcher.notify(reading)
    except AmbientAlertsError:
        logger.exception("ambient_alert_failed", movement=reading.movementCount)
        return _response(500)

    return _response(200)
