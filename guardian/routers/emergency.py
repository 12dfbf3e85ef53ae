"""Emergency contacts and SOS alert endpoints."""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from guardian.core.database import get_db
from guardian.dependencies.auth import get_current_user
from guardian.dependencies.rate_limit import rate_limit
from guardian.schemas.common import SuccessResponse
from guardian.schemas.emergency import (
    ContactListResponse,
    ContactResponse,
    EmergencyContactCreate,
    EmergencyContactUpdate,
    SOSAlertCreate,
    SOSAlertResponse,
    SOSHistoryResponse,
)
from guardian.services.contact_service import ContactService
from guardian.services.sms_service import SmsTransport, get_sms_transport
from guardian.services.sos_service import SOSService, summarize_alert

router = APIRouter(prefix="/emergency", tags=["emergency"])


@router.post("/sos", response_model=SOSAlertResponse)
async def send_sos(
    payload: SOSAlertCreate,
    current_user = Depends(get_current_user),
    db: Session = Depends(get_db),
    transport: SmsTransport = Depends(get_sms_transport),
    _: None = Depends(rate_limit),
):
    """
    Raise an SOS alert
    - Notify every emergency contact and the authority number by SMS
    - Record the outcome; delivery failures are reported inside the alert
    """
    alert = await SOSService.send_alert(db, current_user["sub"], payload.model_dump(), transport)
    return {
        "success": True,
        "message": "SOS alert sent successfully",
        "alert": summarize_alert(alert),
    }


@router.get("/sos-history", response_model=SOSHistoryResponse)
async def sos_history(current_user = Depends(get_current_user), db: Session = Depends(get_db)):
    return {"success": True, "alerts": SOSService.list_history(db, current_user["sub"])}


@router.post("/contacts", response_model=ContactResponse)
async def add_contact(
    payload: EmergencyContactCreate,
    current_user = Depends(get_current_user),
    db: Session = Depends(get_db),
    _: None = Depends(rate_limit),
):
    contact = ContactService.add_contact(db, current_user["sub"], payload.model_dump())
    return {"success": True, "message": "Emergency contact added successfully", "contact": contact}


@router.get("/contacts", response_model=ContactListResponse)
async def list_contacts(current_user = Depends(get_current_user), db: Session = Depends(get_db)):
    return {"success": True, "contacts": ContactService.list_contacts(db, current_user["sub"])}


@router.put("/contacts/{contact_id}", response_model=ContactResponse)
async def update_contact(
    contact_id: int,
    payload: EmergencyContactUpdate,
    current_user = Depends(get_current_user),
    db: Session = Depends(get_db),
    _: None = Depends(rate_limit),
):
    contact = ContactService.update_contact(
        db,
        current_user["sub"],
        contact_id,
        payload.model_dump(exclude_unset=True),
    )
    return {"success": True, "message": "Emergency contact updated successfully", "contact": contact}


@router.delete("/contacts/{contact_id}", response_model=SuccessResponse)
async def delete_contact(
    contact_id: int,
    current_user = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    ContactService.delete_contact(db, current_user["sub"], contact_id)
    return {"success": True, "message": "Emergency contact deleted successfully"}
