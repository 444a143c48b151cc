from skills_hub.schemas.common import APIResponse
from skills_hub.schemas.auth import (
    TokenPayload,
    Login,
    RegisterRequest,
    ChangePasswordRequest,
)
from skills_hub.schemas.users import UserResponse, UserUpdate
from skills_hub.schemas.lms import (
    AssignmentCreate,
    AssignmentUpdate,
    AssignmentResponse,
    ClassCreate,
    ClassUpdate,
    ClassResponse,
    SubmissionCreate,
    SubmissionUpdate,
    GradeSubmissionRequest,
    SubmissionResponse,
    ResourceCreate,
    ResourceUpdate,
    ResourceResponse,
)
from skills_hub.schemas.branches import BranchCreate, BranchUpdate, BranchResponse
from skills_hub.schemas.finance import (
    PayslipCreate,
    PayslipStatusUpdate,
    PayslipResponse,
    PayslipSummary,
)
from skills_hub.schemas.communication import (
    MessageCreate,
    MessageResponse,
    ParentContact,
    NotificationCreate,
    NotificationResponse,
)
from skills_hub.schemas.applications import (
    AdmissionCreate,
    AdmissionResponse,
    AdmissionStatusUpdate,
    WaitingListCreate,
    WaitingListUpdate,
    WaitingListStatusUpdate,
    WaitingListResponse,
)
