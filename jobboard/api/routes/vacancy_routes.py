"""
Vacancy Routes

GET /vacancies - List vacancies with filters and search (admin, manager)
GET /vacancies/new - Empty vacancy form (admin, manager)
POST /vacancies - Create vacancy (admin, manager)
GET /vacancies/{vacancy_id} - Vacancy detail with slots and apply eligibility
GET /vacancies/{vacancy_id}/edit - Prefilled vacancy form (admin, manager)
GET /vacancies/{vacancy_id}/stats - Capacity statistics (admin, manager)
PUT /vacancies/{vacancy_id} - Update vacancy (admin, manager)
PATCH /vacancies/{vacancy_id}/toggle-active - Activate/deactivate (admin, manager)
DELETE /vacancies/{vacancy_id} - Delete vacancy (admin only)
POST /vacancies/{vacancy_id}/apply - Apply to vacancy (candidate only)
GET /explore - Active vacancies with free slots (candidate only)
"""

import asyncio
from typing import List, Literal, Optional

from fastapi import APIRouter, Depends, Query

from jobboard.core.auth import get_api, require_roles, require_route
from jobboard.core.exceptions import ApiError, ApplyNotAllowedError
from jobboard.core.navigation import STAFF
from jobboard.schemas.schemas import (
    Application,
    ApplyBlockReason,
    ExploreView,
    MessageResponse,
    Modality,
    Notice,
    User,
    UserRole,
    VacanciesView,
    Vacancy,
    VacancyDetailView,
    VacancyFilters,
    VacancyForm,
    VacancyFormView,
    VacancySingleStats,
)
from jobboard.services.api_client import ApiClient
from jobboard.services.eligibility import (
    available_slots,
    can_apply,
    current_applications_count,
    has_applied,
    is_fully_booked,
    remaining_quota,
)
from jobboard.services.resource_service import ApplicationService, VacancyService
from jobboard.services.view_service import filter_vacancies, vacancy_card

router = APIRouter(tags=["Vacancies"])

FORM_FIELDS = set(VacancyForm.model_fields)
DEFAULT_FORM_VALUES = {
    "title": "", "description": "", "technologies": "", "seniority": "", "softSkills": "",
    "location": "", "modality": Modality.remote.value, "salaryRange": "", "company": "",
    "maxApplicants": 5,
}


async def get_vacancy_or_none(api: ApiClient, vacancy_id: str) -> Optional[Vacancy]:
    """The vacancy, or None when the API says it does not exist."""
    try:
        return await VacancyService(api).get(vacancy_id)
    except ApiError as e:
        if e.status_code == 404:
            return None
        raise


async def _no_applications() -> List[Application]:
    return []


@router.get("/vacancies", response_model=VacanciesView)
async def list_vacancies(
    search: Optional[str] = Query(None, description="Search in title, company or technologies"),
    company: Optional[str] = Query(None),
    location: Optional[str] = Query(None),
    modality: Optional[Modality] = Query(None),
    is_active: Optional[bool] = Query(None, alias="isActive"),
    has_available_slots: Optional[bool] = Query(None, alias="hasAvailableSlots"),
    page: Optional[int] = Query(None, ge=1),
    limit: Optional[int] = Query(None, ge=1),
    order: Optional[Literal["ASC", "DESC"]] = Query(None),
    order_by: Optional[str] = Query(None, alias="orderBy"),
    user: User = Depends(require_route("vacancies")),
    api: ApiClient = Depends(get_api),
):
    filters = VacancyFilters(
        company=company, location=location, modality=modality, is_active=is_active,
        has_available_slots=has_available_slots, page=page, limit=limit,
        order=order, order_by=order_by,
    )
    vacancies = filter_vacancies(await VacancyService(api).list(filters), search, None)
    return VacanciesView(
        vacancies=[vacancy_card(v) for v in vacancies],
        total=len(vacancies),
        can_create=True,
        can_delete=user.role == UserRole.admin,
        search=search,
    )


@router.get("/vacancies/new", response_model=VacancyFormView)
async def new_vacancy_form(user: User = Depends(require_route("vacancy_create"))):
    return VacancyFormView(mode="create", values=dict(DEFAULT_FORM_VALUES))


@router.post("/vacancies", response_model=MessageResponse, status_code=201)
async def create_vacancy(
    data: VacancyForm,
    user: User = Depends(require_roles(*STAFF)),
    api: ApiClient = Depends(get_api),
):
    await VacancyService(api).create(data)
    return MessageResponse(
        message="Vacancy created",
        notice=Notice(icon="success", title="Vacancy created"),
        redirect="/vacancies",
    )


@router.get("/vacancies/{vacancy_id}", response_model=VacancyDetailView)
async def vacancy_detail(
    vacancy_id: str,
    user: User = Depends(require_route("vacancy_detail")),
    api: ApiClient = Depends(get_api),
):
    """
    Vacancy detail. Candidates also get `hasApplied` and the apply
    eligibility, computed from their current applications.
    """
    is_candidate = user.role == UserRole.candidate
    vacancy, my_applications = await asyncio.gather(
        VacancyService(api).get(vacancy_id),
        ApplicationService(api).list() if is_candidate else _no_applications(),
    )
    is_staff = user.role in STAFF
    return VacancyDetailView(
        vacancy=vacancy,
        technologies=vacancy.technology_list,
        current_applications=current_applications_count(vacancy),
        available_slots=available_slots(vacancy),
        is_fully_booked=is_fully_booked(vacancy),
        has_applied=has_applied(vacancy, my_applications),
        eligibility=can_apply(vacancy, my_applications) if is_candidate else None,
        can_edit=is_staff,
        can_toggle_active=is_staff,
        can_delete=user.role == UserRole.admin,
    )


@router.get("/vacancies/{vacancy_id}/edit", response_model=VacancyFormView)
async def edit_vacancy_form(
    vacancy_id: str,
    user: User = Depends(require_route("vacancy_edit")),
    api: ApiClient = Depends(get_api),
):
    vacancy = await VacancyService(api).get(vacancy_id)
    values = vacancy.model_dump(mode="json", by_alias=True, include=FORM_FIELDS)
    values["softSkills"] = values.get("softSkills") or ""
    return VacancyFormView(mode="edit", vacancy_id=vacancy.id, values=values)


@router.get("/vacancies/{vacancy_id}/stats", response_model=VacancySingleStats)
async def vacancy_stats(
    vacancy_id: str,
    user: User = Depends(require_roles(*STAFF)),
    api: ApiClient = Depends(get_api),
):
    return await VacancyService(api).stats(vacancy_id)


@router.put("/vacancies/{vacancy_id}", response_model=MessageResponse)
async def update_vacancy(
    vacancy_id: str,
    data: VacancyForm,
    user: User = Depends(require_roles(*STAFF)),
    api: ApiClient = Depends(get_api),
):
    await VacancyService(api).update(vacancy_id, data)
    return MessageResponse(
        message="Vacancy updated",
        notice=Notice(icon="success", title="Vacancy updated"),
        redirect="/vacancies",
    )


@router.patch("/vacancies/{vacancy_id}/toggle-active", response_model=Vacancy)
async def toggle_vacancy(
    vacancy_id: str,
    user: User = Depends(require_roles(*STAFF)),
    api: ApiClient = Depends(get_api),
):
    """Returns the vacancy as the API left it."""
    return await VacancyService(api).toggle_active(vacancy_id)


@router.delete("/vacancies/{vacancy_id}", response_model=MessageResponse)
async def delete_vacancy(
    vacancy_id: str,
    user: User = Depends(require_roles(UserRole.admin)),
    api: ApiClient = Depends(get_api),
):
    await VacancyService(api).delete(vacancy_id)
    return MessageResponse(
        message="Vacancy deleted",
        notice=Notice(icon="success", title="Deleted!"),
        redirect="/vacancies",
    )


@router.post("/vacancies/{vacancy_id}/apply", response_model=MessageResponse, status_code=201)
async def apply_to_vacancy(
    vacancy_id: str,
    user: User = Depends(require_roles(UserRole.candidate)),
    api: ApiClient = Depends(get_api),
):
    """
    Apply to a vacancy. Candidates only.

    The rules are checked first on freshly fetched data. If they pass and the
    API still refuses (someone took the last slot meanwhile), the API's
    message is returned as is.
    """
    applications = ApplicationService(api)
    vacancy, my_applications = await asyncio.gather(
        get_vacancy_or_none(api, vacancy_id),
        applications.list(),
    )

    decision = can_apply(vacancy, my_applications)
    if not decision.allowed:
        error = ApplyNotAllowedError(decision.reason.value, decision.message)
        if decision.reason == ApplyBlockReason.not_found:
            error.status_code = 404
        raise error

    await applications.create(vacancy_id)
    return MessageResponse(
        message=f"Your application to \"{vacancy.title}\" at {vacancy.company} has been registered",
        notice=Notice(icon="success", title="Application submitted!"),
        redirect="/applications",
    )


@router.get("/explore", response_model=ExploreView)
async def explore(
    search: Optional[str] = Query(None, description="Search in title, company or technologies"),
    modality: Optional[Modality] = Query(None),
    user: User = Depends(require_route("explore")),
    api: ApiClient = Depends(get_api),
):
    vacancies, my_applications = await asyncio.gather(
        VacancyService(api).list(VacancyFilters(is_active=True, has_available_slots=True)),
        ApplicationService(api).list(),
    )
    matches = filter_vacancies(vacancies, search, modality)
    return ExploreView(
        vacancies=[vacancy_card(v, my_applications, with_eligibility=True) for v in matches],
        total=len(matches),
        active_applications=len(my_applications),
        remaining_quota=remaining_quota(my_applications),
        search=search,
        modality=modality,
    )
