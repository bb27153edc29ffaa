from datetime import UTC, datetime
from typing import Any

from aws_lambda_powertools import Logger
from botocore.exceptions import BotoCoreError, ClientError
from pydantic import ValidationError

from .config import MAX_MOTION_DAYS
from .ddb import is_conditional_check_failure, scan_all
from .errors import CorruptStateError, StoreError
from .models import MotionDayRecordModel
from .timeutil import day_key, epoch_millis, format_clock

logger = Logger()


class MotionLogStore:
    """Rolling per-day log of motion timestamps, capped at ``max_days`` day records.

    Writing is best effort: failures are logged and reported through the return
    value of :meth:`record_motion_event`, never raised.
    """

    def __init__(self, table: Any, max_days: int = MAX_MOTION_DAYS) -> None:
        self.table = table
        self.max_days = max_days

    def record_motion_event(self, now: datetime | None = None) -> bool:
        now = now or datetime.now(UTC)
        key = day_key(now)
        clock = format_clock(now)
        try:
            resp = self.table.get_item(Key={"dayKey": key}, ConsistentRead=True)
            if "Item" in resp:
                self._append(key, clock)
            elif not self._create(key, clock, now):
                # Another request created today's record first
                self._append(key, clock)
        except (ClientError, BotoCoreError, StoreError):
            logger.exception("motion_log_write_failed", day_key=key)
            return False
        logger.info("motion_event_recorded", day_key=key, at=clock)
        return True

    def _records(self) -> list[MotionDayRecordModel]:
        items = scan_all(
            self.table,
            ProjectionExpression="#k, createdAt",
            ExpressionAttributeNames={"#k": "dayKey"},
        )
        try:
            return [MotionDayRecordModel.model_validate(item) for item in items]
        except ValidationError as exc:
            raise CorruptStateError("invalid motion day record", table=self.table.name) from exc

    def _evict_oldest(self) -> None:
        records = self._records()
        if len(records) < self.max_days:
            return
        # Legacy records carry no createdAt and are evicted first
        oldest = min(records, key=lambda r: (r.createdAt or 0, r.dayKey))
        self.table.delete_item(Key={"dayKey": oldest.dayKey})
        logger.info("motion_day_evicted", day_key=oldest.dayKey, stored=len(records))

    def _create(self, key: str, clock: str, now: datetime) -> bool:
        self._evict_oldest()
        record = MotionDayRecordModel(dayKey=key, timestamps=[clock], createdAt=epoch_millis(now))
        try:
            self.table.put_item(
                Item=record.model_dump(by_alias=True),
                ConditionExpression="attribute_not_exists(#k)",
                ExpressionAttributeNames={"#k": "dayKey"},
            )
        except ClientError as ce:
            if is_conditional_check_failure(ce):
                return False
            raise
        return True

    def _append(self, key: str, clock: str) -> None:
        self.table.update_item(
            Key={"dayKey": key},
            UpdateExpression="SET #logs = list_append(if_not_exists(#logs, :empty), :entry)",
            ExpressionAttributeNames={"#logs": "move_logs"},
            ExpressionAttributeValues={":empty": [], ":entry": [clock]},
        )
