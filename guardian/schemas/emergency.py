"""Emergency contact and SOS schemas."""
from datetime import datetime
from typing import List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class EmergencyContactCreate(BaseModel):
    name: str
    phone: str
    relationship: str
    priority: Optional[int] = 1


class EmergencyContactUpdate(BaseModel):
    name: Optional[str] = None
    phone: Optional[str] = None
    relationship: Optional[str] = None
    priority: Optional[int] = None


class EmergencyContactRead(BaseModel):
    id: int
    name: str
    phone: str
    relationship: str = Field(validation_alias=AliasChoices("relationship", "relation"))
    priority: int
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class SOSAlertCreate(BaseModel):
    # Optional so a missing coordinate is reported as a 400, not a 422.
    latitude: Optional[float] = Field(None, ge=-90, le=90)
    longitude: Optional[float] = Field(None, ge=-180, le=180)
    address: Optional[str] = None
    alert_type: str = Field("emergency", max_length=50)


class Location(BaseModel):
    latitude: float
    longitude: float
    address: str


class SOSAlertSummary(BaseModel):
    id: int
    alert_type: str
    location: Location
    contacts_notified: int
    contacts_failed: int
    police_notified: bool
    created_at: datetime


class NotificationRecord(BaseModel):
    name: str
    phone: Optional[str] = None
    notification_status: str
    sent_at: Optional[datetime] = None


class SOSAlertRead(BaseModel):
    id: int
    user_id: int
    alert_type: str
    location: Location
    message: str
    contacts_notified: List[NotificationRecord]
    police_notified: bool
    police_notification_status: str
    simulated: bool
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class SOSAlertResponse(BaseModel):
    success: bool = True
    message: str
    alert: SOSAlertSummary


class SOSHistoryResponse(BaseModel):
    success: bool = True
    alerts: List[SOSAlertRead]


class ContactResponse(BaseModel):
    success: bool = True
    message: str
    contact: Optional[EmergencyContactRead] = None


class ContactListResponse(BaseModel):
    success: bool = True
    contacts: List[EmergencyContactRead]
