from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field


class ScenarioStatus(str, Enum):
    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    FAILED = "failed"


class LegStatus(str, Enum):
    PENDING = "PENDING"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"


class BookingData(BaseModel):
    billing_customer: str = Field(..., description="Billing customer option label")
    booking_type: str
    department: str
    shipper_ref: str
    customer_ref: str
    remarks: str = ""
    load_type: str
    customer_so: str = ""
    references: str = ""
    quotation: str
    job_type: str = "DOMESTIC"
    measurement_type: str = "Linear"
    quantity: str
    uom: str
    from_company: str
    to_company: str


class JobData(BaseModel):
    job_type: str = "DOMESTIC"
    measurement_type: str = "Linear"
    quantity: str
    uom: str
    remarks: str | None = None


class TripData(BaseModel):
    from_company: str
    to_company: str
    from_address: str | None = None
    to_address: str | None = None
    remarks: str | None = None


class LegData(BaseModel):
    """
    Leg assignment plus timeline.

    Timeline fields accept "HH:MM" to type a time, True to stamp the current
    time with the field's own button, or None/False to leave the field alone.
    """

    driver: str | None = None
    vehicle: str | None = None
    transporter: str | None = None
    assistants: str | None = None
    remarks: str | None = None

    plan_start: str | bool | None = None
    start: str | bool | None = None
    start_out: str | bool | None = None
    plan_end: str | bool | None = None
    end: str | bool | None = None
    end_out: str | bool | None = None

    def timeline(self) -> dict[str, str | bool]:
        """Timeline fields that should be touched, keyed by the app's field id."""
        fields = {
            "planStart": self.plan_start,
            "start": self.start,
            "startOut": self.start_out,
            "planEnd": self.plan_end,
            "end": self.end,
            "endOut": self.end_out,
        }
        return {name: value for name, value in fields.items() if value}


class ShiftData(BaseModel):
    driver: str
    vehicle: str
    shift_date: str = Field(..., description="Day-of-month label shown in the date picker, e.g. '05'")
    remarks: str = ""


class IncentiveData(BaseModel):
    incentive_type: str
    amount: float = Field(..., gt=0)


class EntityData(BaseModel):
    name: str
    link_name: str
    url: str
    exact_link: bool = False


class ManageCategory(BaseModel):
    category: str
    entities: list[EntityData]


class StepRecord(BaseModel):
    name: str
    started_at: datetime
    finished_at: datetime | None = None
    succeeded: bool = False


class BookingTrackingState(BaseModel):
    booking_id: str
    job_id: str | None = None
    trip_id: str | None = None
    leg_id: str | None = None
    status: LegStatus | None = None


class EntitySweepResult(BaseModel):
    """Outcome of visiting every Manage entity."""

    visited: list[str] = []
    failed: list[str] = []
    empty: list[str] = []

    @property
    def total(self) -> int:
        return len(self.visited) + len(self.failed)

    @property
    def success_rate(self) -> float:
        return len(self.visited) / self.total if self.total else 0.0

    def passed(self, threshold: float = 0.8) -> bool:
        """True when strictly more than threshold of the entities displayed."""
        return self.total > 0 and self.success_rate > threshold
