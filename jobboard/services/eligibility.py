"""
Eligibility & Capacity Rules

Decides whether a candidate may apply to a vacancy and how much capacity a
vacancy has left. Everything here is pure: no I/O, no caching, no exceptions.
Views call it on fresh data for every request.

The decision is advisory. The API re-validates every apply request and its
answer is the one that counts.
"""

from typing import Optional, Sequence

from jobboard.schemas.schemas import (
    Application,
    ApplyBlockReason,
    ApplyDecision,
    User,
    UserRole,
    Vacancy,
)

MAX_ACTIVE_APPLICATIONS = 3

REASON_MESSAGES = {
    ApplyBlockReason.not_found: "Vacancy not found",
    ApplyBlockReason.already_applied: "You have already applied to this vacancy",
    ApplyBlockReason.limit_reached: (
        f"You have reached the limit of {MAX_ACTIVE_APPLICATIONS} active applications"
    ),
    ApplyBlockReason.vacancy_inactive: "This vacancy is not active",
    ApplyBlockReason.no_slots: "This vacancy has no slots left",
}


def current_applications_count(vacancy: Vacancy) -> int:
    return len(vacancy.applications or [])


def available_slots(vacancy: Vacancy) -> int:
    """Remaining capacity, never negative even if the applications list overcounts."""
    return max(0, vacancy.max_applicants - current_applications_count(vacancy))


def is_fully_booked(vacancy: Vacancy) -> bool:
    return available_slots(vacancy) <= 0


def remaining_quota(my_applications: Sequence[Application]) -> int:
    """How many more applications the candidate may submit."""
    return max(0, MAX_ACTIVE_APPLICATIONS - len(my_applications))


def has_applied(vacancy: Vacancy, my_applications: Sequence[Application]) -> bool:
    return any(app.vacancy_id == vacancy.id for app in my_applications)


def _blocked(reason: ApplyBlockReason) -> ApplyDecision:
    return ApplyDecision(allowed=False, reason=reason, message=REASON_MESSAGES[reason])


def can_apply(vacancy: Optional[Vacancy], my_applications: Sequence[Application]) -> ApplyDecision:
    """
    Pre-flight check for the apply action.

    Checks run in a fixed order and the first failure is reported, so the
    reason is always the most specific one:
        ALREADY_APPLIED > LIMIT_REACHED > VACANCY_INACTIVE > NO_SLOTS
    A missing vacancy is NOT_FOUND.
    """
    if vacancy is None:
        return _blocked(ApplyBlockReason.not_found)
    if has_applied(vacancy, my_applications):
        return _blocked(ApplyBlockReason.already_applied)
    if len(my_applications) >= MAX_ACTIVE_APPLICATIONS:
        return _blocked(ApplyBlockReason.limit_reached)
    if vacancy.is_active is False:
        return _blocked(ApplyBlockReason.vacancy_inactive)
    if available_slots(vacancy) <= 0:
        return _blocked(ApplyBlockReason.no_slots)
    return ApplyDecision(allowed=True)


def can_delete_application(application: Application, user: Optional[User]) -> bool:
    """Admins delete any application, candidates only their own, managers none."""
    if user is None:
        return False
    if user.role == UserRole.admin:
        return True
    return user.role == UserRole.candidate and application.user_id == user.id
