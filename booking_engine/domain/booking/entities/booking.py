"""
Booking Entity

The core scheduling entity: when a job happens, who does it, how it is
priced and where it is in its lifecycle. Identity is assigned by the
storage collaborator; bookings built by the engine have ``id=None``.
"""

import datetime as dt
from datetime import time, timedelta
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from ...shared.base import Entity
from ..value_objects.assignee import Assignee
from ..value_objects.enums import BookingStatus, PriceMode
from ..value_objects.pricing import PriceRequest, ResolvedPrice
from ..value_objects.time_interval import BookingSlot


class Booking(Entity):
    """
    A single scheduled job.

    Field types are checked on construction; the business rules (one
    assignee, complete pricing, ordered dates, legal status) are checked by
    the booking validation service so that every failed rule can be
    reported at once.
    """

    customer_id: str | None = None

    # Schedule
    date: dt.date
    end_date: dt.date | None = None
    start_time: time
    end_time: time

    # Assignment
    staff_id: str | None = None
    team_id: str | None = None

    # Pricing
    price_mode: PriceMode = PriceMode.PACKAGE
    package_id: str | None = None
    area_sqm: Decimal | None = None
    # Visits per month
    frequency: int | None = Field(default=None, ge=1)
    custom_price: Decimal | None = None
    job_name: str | None = None
    resolved_price: Decimal | None = None

    status: BookingStatus = BookingStatus.PENDING

    # Recurrence link
    recurring_group_id: str | None = None
    recurring_sequence: int | None = None
    recurring_total: int | None = None

    notes: str | None = None

    @property
    def slot(self) -> BookingSlot:
        return BookingSlot(
            date=self.date,
            end_date=self.end_date,
            start_time=self.start_time,
            end_time=self.end_time,
        )

    @property
    def assignee(self) -> Assignee | None:
        """The staff member or team, or None if the assignment is invalid."""
        return Assignee.from_ids(self.staff_id, self.team_id)

    @property
    def is_active(self) -> bool:
        """Active bookings take part in conflict checks."""
        return self.status.blocks_schedule

    @property
    def is_recurring(self) -> bool:
        return self.recurring_group_id is not None

    def price_request(self) -> PriceRequest:
        return PriceRequest(
            price_mode=self.price_mode,
            package_id=self.package_id,
            area_sqm=self.area_sqm,
            frequency=self.frequency,
            custom_price=self.custom_price,
            job_name=self.job_name,
        )

    def with_price(self, price: ResolvedPrice) -> "Booking":
        return self.model_copy(update={"resolved_price": price.amount})

    def with_status(self, status: BookingStatus) -> "Booking":
        return self.model_copy(update={"status": status})

    def __str__(self) -> str:
        return f"Booking(id={self.id}, {self.slot}, status={self.status.value})"


class BookingTemplate(BaseModel):
    """
    The fields shared by every booking of a recurring series.

    ``span_days`` is how many days after its start date each occurrence
    ends; zero means single-day occurrences.
    """

    model_config = ConfigDict(frozen=True)

    customer_id: str | None = None
    start_time: time
    end_time: time
    span_days: int = Field(default=0, ge=0)

    staff_id: str | None = None
    team_id: str | None = None

    price_mode: PriceMode = PriceMode.PACKAGE
    package_id: str | None = None
    area_sqm: Decimal | None = None
    # Visits per month
    frequency: int | None = Field(default=None, ge=1)
    custom_price: Decimal | None = None
    job_name: str | None = None

    status: BookingStatus = BookingStatus.PENDING
    notes: str | None = None

    def booking_for(self, on_date: dt.date, **recurrence: object) -> Booking:
        """Build the occurrence that starts on ``on_date``."""
        end_date = on_date + timedelta(days=self.span_days) if self.span_days else None
        return Booking(
            date=on_date,
            end_date=end_date,
            **self.model_dump(exclude={"span_days"}),
            **recurrence,
        )
