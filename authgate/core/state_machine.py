from dataclasses import dataclass
from typing import Optional

# Submission lifecycle (one instance per login form)

# Interaction Surface: form editable, nothing sent
# Entered at mount and after any local validation failure
IDLE = "IDLE"

# Interaction Surface: submit control disabled
# Exactly one auth call outstanding for this form
IN_FLIGHT = "IN_FLIGHT"

# Interaction Surface: success toast shown, waiting for session redirect
SUCCEEDED = "SUCCEEDED"

# Interaction Surface: failure toast shown, form resubmittable
# Carries the user-facing failure text as reason
FAILED = "FAILED"


@dataclass(frozen=True)
class SubmissionState:
    status: str = IDLE
    reason: Optional[str] = None