"""Canned tracking data for demo AWBs.

Lets integrations be exercised end to end without Shiprocket credentials.
"""

from __future__ import annotations

from typing import Any

from shiprocket_relay.config import DemoSettings
from shiprocket_relay.models.tracking import (
    ShipmentTrack,
    TrackActivity,
    TrackingData,
    TrackingEnvelope,
)


DEMO_ENVELOPE = TrackingEnvelope(
    tracking_data=TrackingData(
        track_status=1,
        shipment_status=7,
        shipment_track=[
            ShipmentTrack(
                id=101,
                awb_code="DEMO123456789",
                courier_company_id=21,
                shipment_id=556677,
                order_id=123456,
                pickup_date="2025-11-01 09:30 AM",
                delivered_date="2025-11-06 02:00 PM",
                weight="1.25 KG",
                packages=1,
                current_status="Delivered",
                delivered_to="Ramesh Sharma",
                destination="Pune, Maharashtra",
                consignee_name="Ramesh Sharma",
                origin="Delhi, India",
                courier_agent_details="Handled by Delhivery Express",
                courier_name="Delhivery Express",
                edd="2025-11-06",
                pod="Received",
                pod_status="Delivered successfully",
                rto_delivered_date="",
                return_awb_code="",
                updated_time_stamp="2025-11-06T14:00:00Z",
            ),
        ],
        shipment_track_activities=[
            TrackActivity(date="2025-11-01 09:00 AM", status="Shipment Booked", location="Delhi Warehouse"),
            TrackActivity(date="2025-11-02 02:00 PM", status="In Transit", location="Agra Distribution Center"),
            TrackActivity(date="2025-11-04 08:30 AM", status="Out for Delivery", location="Pune Facility"),
            TrackActivity(date="2025-11-06 02:00 PM", status="Delivered", location="Pune, Maharashtra"),
        ],
        track_url="https://track.shiprocket.in/shipment/DEMO123456789",
        qc_response="",
        is_return=False,
        error="",
        order_tag="Demo order for testing full data",
    ),
)


def is_demo_awb(awb: str, settings: DemoSettings | None = None) -> bool:
    """Check whether an AWB is reserved for demo data.

    Exact matches against the configured AWBs, or the keyword anywhere in
    the AWB, case-insensitively.
    """
    settings = settings or DemoSettings()
    if awb in settings.awbs:
        return True
    return bool(settings.keyword) and settings.keyword.lower() in awb.lower()


def get_demo_data() -> dict[str, Any]:
    """Return a fresh copy of the demo tracking envelope."""
    return DEMO_ENVELOPE.model_dump()
