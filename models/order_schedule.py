from pydantic import BaseModel, ConfigDict, Field

import config


class OrderScheduleConfig(BaseModel):
    """
    Weekly ordering cadence of a seller.

    Weekdays follow datetime.weekday(): Monday is 0, Sunday is 6.
    Default: pickup on Thursday, orders editable until Tuesday 23:59.
    """
    model_config = ConfigDict(frozen=True)

    pickup_day: int = Field(default=3, ge=0, le=6)
    deadline_day: int = Field(default=1, ge=0, le=6)
    deadline_hour: int = Field(default=23, ge=0, le=23)
    deadline_minute: int = Field(default=59, ge=0, le=59)

    @property
    def days_from_deadline_to_pickup(self) -> int:
        return (self.pickup_day - self.deadline_day) % 7

    @classmethod
    def from_config(cls) -> 'OrderScheduleConfig':
        return cls(
            pickup_day=config.PICKUP_DAY,
            deadline_day=config.DEADLINE_DAY,
            deadline_hour=config.DEADLINE_HOUR,
            deadline_minute=config.DEADLINE_MINUTE
        )
