"""Tracking envelope and handler result models."""

from __future__ import annotations

import json
from typing import Any

from pydantic import BaseModel, Field


RESPONSE_HEADERS = {
    "Content-Type": "application/json",
    "Access-Control-Allow-Origin": "*",
}


class ShipmentTrack(BaseModel):
    """A single shipment entry under ``tracking_data.shipment_track``."""
    id: int
    awb_code: str
    courier_company_id: int
    shipment_id: int
    order_id: int
    pickup_date: str
    delivered_date: str
    weight: str
    packages: int
    current_status: str
    delivered_to: str
    destination: str
    consignee_name: str
    origin: str
    courier_agent_details: str
    courier_name: str
    edd: str
    pod: str
    pod_status: str
    rto_delivered_date: str = ""
    return_awb_code: str = ""
    updated_time_stamp: str


class TrackActivity(BaseModel):
    """A scan event under ``tracking_data.shipment_track_activities``."""
    date: str
    status: str
    location: str


class TrackingData(BaseModel):
    track_status: int
    shipment_status: int
    shipment_track: list[ShipmentTrack] = Field(default_factory=list)
    shipment_track_activities: list[TrackActivity] = Field(default_factory=list)
    track_url: str = ""
    qc_response: str = ""
    is_return: bool = False
    error: str = ""
    order_tag: str = ""


class TrackingEnvelope(BaseModel):
    """Top-level body of a Shiprocket AWB tracking response."""
    tracking_data: TrackingData


class TrackingResult(BaseModel):
    """Outcome of one tracking request, ready to be written as HTTP."""
    status_code: int
    body: dict[str, Any]

    @property
    def ok(self) -> bool:
        return self.status_code == 200

    @property
    def headers(self) -> dict[str, str]:
        return dict(RESPONSE_HEADERS)

    def render(self) -> str:
        """Serialize the body. Successful envelopes are pretty-printed."""
        if self.ok:
            return json.dumps(self.body, indent=2)
        return json.dumps(self.body)
