from app.services.onboarding import (
    Destination,
    OnboardingStatus,
    check_onboarding,
    resolve_onboarding,
)
from app.services.registration import (
    apply_to_job,
    register_for_event,
    set_application_status,
    unregister_from_event,
)
from app.services.storage import LocalStorage, SupabaseStorage, get_storage
from app.services.users import assign_user_type, delete_account, sync_user

__all__ = [
    "Destination",
    "OnboardingStatus",
    "check_onboarding",
    "resolve_onboarding",
    "apply_to_job",
    "register_for_event",
    "set_application_status",
    "unregister_from_event",
    "LocalStorage",
    "SupabaseStorage",
    "get_storage",
    "assign_user_type",
    "delete_account",
    "sync_user",
]
