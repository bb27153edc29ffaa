from datetime import UTC, datetime
from decimal import ROUND_FLOOR, Context, Decimal, DecimalException
from typing import Any

from aws_lambda_powertools import Logger
from botocore.exceptions import BotoCoreError, ClientError
from pydantic import ValidationError

from .config import HOURLY_SLOTS, TEMPERATURES_DOC_ID
from .ddb import _decimalize, is_conditional_check_failure
from .errors import CorruptStateError, StaleWriteError, StoreError
from .models import HourlySlotModel, TemperatureSampleModel
from .timeutil import local_hour

logger = Logger()

PLACEHOLDER = 0
CENT = Decimal("0.01")
# Wide enough to hold any float down to the cent
CENT_CONTEXT = Context(prec=400, rounding=ROUND_FLOOR)

Slot = HourlySlotModel | None


def truncate_cents(value: float) -> float:
    """Drop everything past the second decimal (floor), e.g. 23.999 -> 23.99."""
    return float(Decimal(str(value)).quantize(CENT, context=CENT_CONTEXT))


class TemperatureSlotStore:
    """Singleton item holding the latest temperature sample of each local hour.

    The whole array is rewritten on every sample; the write is conditioned on the
    version read so that a concurrent writer is reported instead of overwritten.
    """

    def __init__(self, table: Any, doc_id: str = TEMPERATURES_DOC_ID) -> None:
        self.table = table
        self.doc_id = doc_id

    def load(self) -> tuple[list[Slot], int]:
        """Return the padded 24-slot array and the version it was read at."""
        try:
            resp = self.table.get_item(Key={"id": self.doc_id}, ConsistentRead=True)
        except (ClientError, BotoCoreError) as exc:
            raise StoreError("temperature read failed", table=self.table.name) from exc
        item = resp.get("Item") or {}
        raw = item.get("temperatures", [])
        if not isinstance(raw, list):
            raise CorruptStateError("temperatures is not a list", table=self.table.name)
        slots = [self._parse_slot(entry) for entry in raw]
        slots.extend([None] * (HOURLY_SLOTS - len(slots)))
        return slots, self._parse_version(item.get("version", 0))

    def save(self, slots: list[Slot], version: int) -> None:
        entries = [PLACEHOLDER if slot is None else slot.model_dump(by_alias=True) for slot in slots]
        try:
            self.table.update_item(
                Key={"id": self.doc_id},
                UpdateExpression="SET #t = :t, #v = :next",
                ConditionExpression="attribute_not_exists(#v) OR #v = :v",
                ExpressionAttributeNames={"#t": "temperatures", "#v": "version"},
                ExpressionAttributeValues=_decimalize({":t": entries, ":next": version + 1, ":v": version}),
            )
        except ClientError as ce:
            if is_conditional_check_failure(ce):
                raise StaleWriteError("temperature array changed during update", table=self.table.name) from ce
            raise StoreError("temperature write failed", table=self.table.name) from ce
        except BotoCoreError as exc:
            raise StoreError("temperature write failed", table=self.table.name) from exc
        except (TypeError, DecimalException) as exc:
            # Raised by the boto3 serializer for numbers DynamoDB cannot hold
            raise StoreError("temperature value not storable", table=self.table.name) from exc

    def record_sample(self, sample: TemperatureSampleModel, now: datetime | None = None) -> int:
        """Store ``sample`` in the slot of the current local hour and return that hour."""
        now = now or datetime.now(UTC)
        slots, version = self.load()
        hour = local_hour(now)
        slots[hour] = HourlySlotModel(
            averageTemperature=truncate_cents(sample.averageTemperature),
            adjustedTemperature=truncate_cents(sample.adjustedTemperature),
        )
        self.save(slots, version)
        logger.info("temperature_recorded", hour=hour, version=version + 1)
        return hour

    def _parse_version(self, value: Any) -> int:
        if isinstance(value, Decimal) and value.is_finite() and value == value.to_integral_value():
            value = int(value)
        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            raise CorruptStateError(f"unexpected version {value!r}", table=self.table.name)
        return value

    def _parse_slot(self, entry: Any) -> Slot:
        if entry is None or (isinstance(entry, (int, float, Decimal)) and entry == 0):
            return None
        if not isinstance(entry, dict):
            raise CorruptStateError(f"unexpected slot value {entry!r}", table=self.table.name)
        try:
            return HourlySlotModel.model_validate(entry)
        except ValidationError as exc:
            raise CorruptStateError("invalid hourly slot", table=self.table.name) from exc
