from typing import Literal

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

NotificationFlag = Literal["move", "temp"]


class AmbientReadingModel(BaseModel):
    temperature: float = Field(allow_inf_nan=False)
    humidity: float = Field(allow_inf_nan=False)
    heatIndex: float = Field(allow_inf_nan=False)
    movementCount: int = Field(default=0, validation_alias=AliasChoices("move", "movementCount"))


class TemperatureSampleModel(BaseModel):
    adjustedTemperature: float = Field(
        allow_inf_nan=False, validation_alias=AliasChoices("adj_temperature", "adjustedTemperature")
    )
    averageTemperature: float = Field(
        allow_inf_nan=False, validation_alias=AliasChoices("avg_temperature", "averageTemperature")
    )


class HourlySlotModel(BaseModel):
    """One filled hour of the temperature array, as stored in DynamoDB."""

    model_config = ConfigDict(populate_by_name=True)

    averageTemperature: float = Field(alias="avg_temperature")
    adjustedTemperature: float = Field(alias="adj_temperature")


class MotionDayRecordModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    dayKey: str
    timestamps: list[str] = Field(default_factory=list, alias="move_logs")
    # Absent on records written before creation order was tracked.
    createdAt: int | None = None


class NotificationPayload(BaseModel):
    title: str
    body: str
    flags: frozenset[NotificationFlag]

    def as_data(self) -> dict[str, str]:
        """String-keyed data map sent to FCM; each flag becomes an empty-valued key."""
        data = {"Title": self.title, "Body": self.body}
        for flag in sorted(self.flags):
            data[flag.capitalize()] = ""
        return data
