from skills_hub.core.database import Base
from skills_hub.models.users import UserRole, Teacher, Student, Parent
from skills_hub.models.auth import User
from skills_hub.models.lms import (
    Assignment,
    SchoolClass,
    Submission,
    LearningResource,
    ResourceBookmark,
    ResourceType,
    ResourceCategory,
)
from skills_hub.models.branches import Branch, BranchStatus, DEFAULT_BRANCH_NAME
from skills_hub.models.finance import Payslip, PayslipStatus
from skills_hub.models.communication import (
    Message,
    MessageSender,
    Notification,
    NotificationType,
    NotificationPriority,
)
from skills_hub.models.applications import (
    Admission,
    AdmissionStatus,
    WaitingListEntry,
    WaitingListStatus,
)
