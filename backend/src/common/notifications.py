from datetime import datetime
from typing import Any, Protocol

from aws_lambda_powertools import Logger
from botocore.exceptions import BotoCoreError, ClientError

from .ddb import scan_all
from .errors import CorruptStateError, StoreError
from .models import AmbientReadingModel, NotificationPayload
from .motion_log import MotionLogStore

logger = Logger()

MOTION_TITLE = "motion alert"
MOTION_BODY = "motion detected"
AMBIENT_TITLE = "ambient alert"
AMBIENT_BODY = "Temperature: {temperature:.2f}°C<br>Humidity: {humidity:.0f}%<br>Heat index: {heat_index:.2f}°C"


class MulticastSender(Protocol):
    def send_multicast(self, data: dict[str, str], tokens: list[str]) -> Any: ...


def build_payload(reading: AmbientReadingModel) -> NotificationPayload:
    if reading.movementCount > 0:
        return NotificationPayload(title=MOTION_TITLE, body=MOTION_BODY, flags=frozenset({"move"}))
    body = AMBIENT_BODY.format(
        temperature=reading.temperature,
        humidity=reading.humidity,
        heat_index=reading.heatIndex,
    )
    return NotificationPayload(title=AMBIENT_TITLE, body=body, flags=frozenset({"temp"}))


class NotificationDispatcher:
    def __init__(self, tokens_table: Any, sender: MulticastSender, motion_log: MotionLogStore) -> None:
        self.tokens_table = tokens_table
        self.sender = sender
        self.motion_log = motion_log

    def device_tokens(self) -> list[str]:
        try:
            items = list(scan_all(self.tokens_table))
        except (ClientError, BotoCoreError) as exc:
            raise StoreError("device token scan failed", table=self.tokens_table.name) from exc
        tokens = []
        for item in items:
            token = item.get("token")
            if not isinstance(token, str) or not token:
                raise CorruptStateError("device token item without token", table=self.tokens_table.name)
            tokens.append(token)
        return tokens

    def dispatch(self, payload: NotificationPayload) -> int:
        """Send ``payload`` to every registered device; return the number of targeted tokens."""
        tokens = self.device_tokens()
        if not tokens:
            logger.warning("no registered device tokens; skipping delivery")
            return 0
        resp = self.sender.send_multicast(payload.as_data(), tokens)
        failures = getattr(resp, "failure_count", 0)
        if failures:
            logger.warning("partial multicast failure", failure_count=failures, tokens=len(tokens))
        logger.info("notification_sent", title=payload.title, tokens=len(tokens))
        return len(tokens)

    def notify(self, reading: AmbientReadingModel, now: datetime | None = None) -> int:
        payload = build_payload(reading)
        if reading.movementCount > 0:
            # Best effort; a failed motion log never blocks delivery
            self.motion_log.record_motion_event(now)
        return self.dispatch(payload)
