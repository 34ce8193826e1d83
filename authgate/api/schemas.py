from typing import List, Literal, Optional
from pydantic import BaseModel, ConfigDict, Field

Severity = Literal["error", "success"]
Status = Literal["IDLE", "IN_FLIGHT", "SUCCEEDED", "FAILED", "in_flight"]

class LoginRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    formId: str = "default"
    phoneNumber: str = ""
    password: str = ""
    agree: bool = False
    # Path the visitor was bounced from before landing on the login page
    from_path: Optional[str] = Field(default=None, alias="from")

class NotificationOut(BaseModel):
    message: str
    severity: Severity

class RedirectOut(BaseModel):
    path: str
    replace: bool = True

class LoginResponse(BaseModel):
    formId: str
    # "in_flight": another submission for this formId is still running
    status: Status
    reason: Optional[str] = None
    notifications: List[NotificationOut] = Field(default_factory=list)
    redirect: Optional[RedirectOut] = None
    authenticated: bool = False

class FormStatusResponse(BaseModel):
    formId: str
    status: Optional[str] = None
    reason: Optional[str] = None
    redirect: Optional[str] = None
    updatedAtEpoch: Optional[int] = None
