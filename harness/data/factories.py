"""
Test data factories.

Every identifying field of a created entity carries a uniqueness token
(epoch milliseconds) so repeated runs against the same environment never
collide with earlier data. The option labels below name records that exist
in the shared test company.
"""

import time as time_module
from datetime import UTC, datetime

from harness.models.schemas import BookingData, IncentiveData, JobData, LegData, ShiftData, TripData

BILLING_CUSTOMER = "1234567 - Another Base Company Testing"
MULTI_TRIP_CUSTOMER = "30050 - TOTAL ENERGIES"
BOOKING_TYPE = "TRANSPORT"
DEPARTMENT = "NORTH"
QUOTATION = "dev_4D7Z21f4B"
MULTI_TRIP_QUOTATION = "dev_Vwhf8d947"

LEG_DRIVER = "Aeril - Aakhif Aeril"
LEG_VEHICLE = "ABC001 - ABC001"

INCENTIVE_TYPE = "INC0100 - JOB INCENTIVE"
APPROVE_SHIFT_DRIVER = "Alexandre - Alexandre"
APPROVE_SHIFT_VEHICLE = "TRN3202C - TRN3202C"
CANCEL_SHIFT_DRIVER = "Alek - Alek"
CANCEL_SHIFT_VEHICLE = "TRN3202E - TRN3202E"
SHIFT_DAY = "05"


def unique_token() -> str:
    return str(int(time_module.time() * 1000))


def make_booking_data(token: str | None = None, **overrides: str) -> BookingData:
    """Single-job booking with token-stamped references."""
    token = token or unique_token()
    stamp = datetime.now(UTC).isoformat()
    fields = {
        "billing_customer": BILLING_CUSTOMER,
        "booking_type": BOOKING_TYPE,
        "department": DEPARTMENT,
        "shipper_ref": f"Farah Z-{token}",
        "customer_ref": f"8742-{token}",
        "remarks": f"Automated Testing {stamp}",
        "load_type": "LTL",
        "customer_so": f"1001-{token}",
        "references": f"Automated Testing {stamp}",
        "quotation": QUOTATION,
        "job_type": "DOMESTIC",
        "measurement_type": "Linear",
        "quantity": "km",
        "uom": "TRIP",
        "from_company": BILLING_CUSTOMER,
        "to_company": BILLING_CUSTOMER,
    }
    fields.update(overrides)
    return BookingData(**fields)


def make_multi_trip_booking_data(token: str | None = None) -> BookingData:
    """Booking used for the one-job, two-trip flow."""
    token = token or unique_token()
    return make_booking_data(
        token,
        billing_customer=MULTI_TRIP_CUSTOMER,
        shipper_ref=f"ADDTRIP-{token}",
        customer_ref=f"AT-{token}",
        remarks=f"Automated test - {token}",
        load_type="FTL",
        customer_so=f"SO-{token}",
        quotation=MULTI_TRIP_QUOTATION,
        from_company=MULTI_TRIP_CUSTOMER,
        to_company=MULTI_TRIP_CUSTOMER,
    )


def make_job_data(token: str | None = None, **overrides: str) -> JobData:
    """Job added to an existing booking, remarks stamped with the token."""
    token = token or unique_token()
    fields = {"quantity": "1", "uom": "TRIP", "remarks": f"Automated job {token}"}
    fields.update(overrides)
    return JobData(**fields)


def make_trip_data(token: str | None = None, **overrides: str) -> TripData:
    token = token or unique_token()
    fields = {
        "from_company": BILLING_CUSTOMER,
        "to_company": MULTI_TRIP_CUSTOMER,
        "remarks": f"Automated trip {token}",
    }
    fields.update(overrides)
    return TripData(**fields)


def make_leg_data(**overrides: object) -> LegData:
    """
    Driver/vehicle assignment plus a full timeline stamped with the current time.

    planStart is left alone: the app fills it when driver and vehicle are submitted.
    """
    fields: dict[str, object] = {
        "driver": LEG_DRIVER,
        "vehicle": LEG_VEHICLE,
        "plan_start": False,
        "start": True,
        "start_out": True,
        "plan_end": True,
        "end": True,
        "end_out": True,
    }
    fields.update(overrides)
    return LegData(**fields)


def make_shift_data(
    token: str | None = None,
    driver: str = APPROVE_SHIFT_DRIVER,
    vehicle: str = APPROVE_SHIFT_VEHICLE,
    day: str = SHIFT_DAY,
) -> ShiftData:
    token = token or unique_token()
    return ShiftData(driver=driver, vehicle=vehicle, shift_date=day, remarks=f"Automated Testing {token}")


def make_incentive_data(amount: float, incentive_type: str = INCENTIVE_TYPE) -> IncentiveData:
    return IncentiveData(incentive_type=incentive_type, amount=amount)
