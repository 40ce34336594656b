"""
View Service - assembles the view models the page routes return.

HOW A PAGE IS BUILT:
1. Fetch every read model the page needs, concurrently
2. Run the eligibility rules on the fresh data
3. Return one view model

Dashboard and metrics widgets are independent: a widget whose fetch fails
is rendered empty and listed in `failed_widgets`; the others still render.
An expired session is never treated as a widget failure.
"""

import asyncio
import logging
from typing import Awaitable, Callable, Dict, List, Optional, Sequence, Tuple

from pydantic import ValidationError

from jobboard.core.exceptions import AuthenticationError, JobBoardError
from jobboard.schemas.schemas import (
    AdminDashboard,
    Application,
    CandidateDashboard,
    ChartPoint,
    DashboardView,
    ManagerDashboard,
    MetricsView,
    Modality,
    User,
    UserRole,
    Vacancy,
    VacancyCard,
    VacancyFilters,
)
from jobboard.services.api_client import ApiClient
from jobboard.services.eligibility import (
    MAX_ACTIVE_APPLICATIONS,
    available_slots,
    can_apply,
    has_applied,
    is_fully_booked,
    remaining_quota,
)
from jobboard.services.resource_service import ApplicationService, UserService, VacancyService

logger = logging.getLogger(__name__)

CANDIDATE_DASHBOARD_VACANCIES = 6
CANDIDATE_DASHBOARD_APPLICATIONS = 3
POPULAR_CHART_SIZE = 10
CHART_TITLE_LENGTH = 20


# ============================================================
# CONCURRENT FETCH HELPERS
# ============================================================

async def gather_widgets(widgets: Dict[str, Awaitable]) -> Tuple[Dict[str, object], List[str]]:
    """
    Await all widget fetches concurrently.

    Returns (results, failed_names). A failed widget's result is None.
    AuthenticationError is re-raised: the session is gone, not the widget.
    """
    names = list(widgets)
    outcomes = await asyncio.gather(*widgets.values(), return_exceptions=True)

    results: Dict[str, object] = {}
    failed: List[str] = []
    for name, outcome in zip(names, outcomes):
        if isinstance(outcome, AuthenticationError):
            raise outcome
        if isinstance(outcome, (JobBoardError, ValidationError)):
            logger.warning("Widget %s failed: %s", name, outcome)
            results[name] = None
            failed.append(name)
        elif isinstance(outcome, BaseException):
            raise outcome
        else:
            results[name] = outcome
    return results, failed


# ============================================================
# CARDS, FILTERS, CHARTS
# ============================================================

def vacancy_card(
    vacancy: Vacancy,
    my_applications: Sequence[Application] = (),
    with_eligibility: bool = False,
) -> VacancyCard:
    return VacancyCard(
        vacancy=vacancy,
        available_slots=available_slots(vacancy),
        is_fully_booked=is_fully_booked(vacancy),
        has_applied=has_applied(vacancy, my_applications),
        eligibility=can_apply(vacancy, my_applications) if with_eligibility else None,
    )


def _contains(haystack: Optional[str], needle: str) -> bool:
    return bool(haystack) and needle in haystack.lower()


def filter_vacancies(
    vacancies: Sequence[Vacancy], search: Optional[str], modality: Optional[Modality]
) -> List[Vacancy]:
    """Case-insensitive search over title, company and technologies."""
    term = (search or "").strip().lower()
    return [
        v for v in vacancies
        if (not term or _contains(v.title, term) or _contains(v.company, term)
            or _contains(v.technologies, term))
        and (modality is None or v.modality == modality)
    ]


def filter_users(users: Sequence[User], search: Optional[str], role: Optional[UserRole]) -> List[User]:
    term = (search or "").strip().lower()
    return [
        u for u in users
        if (not term or _contains(u.name, term) or _contains(u.email, term))
        and (role is None or u.role == role)
    ]


def filter_applications(applications: Sequence[Application], search: Optional[str]) -> List[Application]:
    """Search over candidate name, vacancy title and company."""
    term = (search or "").strip().lower()
    if not term:
        return list(applications)
    return [
        a for a in applications
        if (a.user and _contains(a.user.name, term))
        or (a.vacancy and (_contains(a.vacancy.title, term) or _contains(a.vacancy.company, term)))
    ]


def truncate_title(title: str, length: int = CHART_TITLE_LENGTH) -> str:
    return title if len(title) <= length else title[:length] + "..."


# ============================================================
# DASHBOARDS (one builder per role)
# ============================================================

async def build_admin_dashboard(api: ApiClient, user: User) -> AdminDashboard:
    applications = ApplicationService(api)
    vacancies = VacancyService(api)
    results, failed = await gather_widgets({
        "user_stats": UserService(api).stats(),
        "vacancy_stats": vacancies.general_stats(),
        "application_stats": applications.dashboard(),
        "popular_vacancies": applications.popular_vacancies(),
    })
    return AdminDashboard(**results, failed_widgets=failed)


async def build_manager_dashboard(api: ApiClient, user: User) -> ManagerDashboard:
    applications = ApplicationService(api)
    results, failed = await gather_widgets({
        "vacancy_stats": VacancyService(api).general_stats(),
        "application_stats": applications.dashboard(),
        "popular_vacancies": applications.popular_vacancies(),
    })
    return ManagerDashboard(**results, failed_widgets=failed)


async def build_candidate_dashboard(api: ApiClient, user: User) -> CandidateDashboard:
    open_vacancies, my_applications = await asyncio.gather(
        VacancyService(api).list(VacancyFilters(
            is_active=True, has_available_slots=True, limit=CANDIDATE_DASHBOARD_VACANCIES
        )),
        ApplicationService(api).list(),
    )
    quota = remaining_quota(my_applications)
    return CandidateDashboard(
        recent_applications=my_applications[:CANDIDATE_DASHBOARD_APPLICATIONS],
        total_applications=len(my_applications),
        active_applications=len(my_applications),
        max_applications=MAX_ACTIVE_APPLICATIONS,
        remaining_quota=quota,
        can_explore=quota > 0,
        vacancies=[
            vacancy_card(v, my_applications)
            for v in open_vacancies[:CANDIDATE_DASHBOARD_VACANCIES]
        ],
    )


DASHBOARD_BUILDERS: Dict[UserRole, Callable[[ApiClient, User], Awaitable[object]]] = {
    UserRole.admin: build_admin_dashboard,
    UserRole.manager: build_manager_dashboard,
    UserRole.candidate: build_candidate_dashboard,
}


async def build_dashboard(api: ApiClient, user: User) -> DashboardView:
    builder = DASHBOARD_BUILDERS[user.role]
    return DashboardView(
        greeting=f"Hello, {user.name}!",
        role=user.role,
        dashboard=await builder(api, user),
    )


# ============================================================
# METRICS
# ============================================================

async def build_metrics(api: ApiClient, user: User) -> MetricsView:
    applications = ApplicationService(api)
    widgets = {
        "vacancy_stats": VacancyService(api).general_stats(),
        "application_stats": applications.dashboard(),
        "popular_vacancies": applications.popular_vacancies(),
    }
    if user.role == UserRole.admin:
        widgets["user_stats"] = UserService(api).stats()

    results, failed = await gather_widgets(widgets)
    vacancy_stats = results.get("vacancy_stats")
    user_stats = results.get("user_stats")
    popular = results.get("popular_vacancies") or []

    view = MetricsView(
        vacancy_stats=vacancy_stats,
        application_stats=results.get("application_stats"),
        user_stats=user_stats,
        failed_widgets=failed,
        popular_chart=[
            ChartPoint(name=truncate_title(p.title), value=p.applications_count, company=p.company)
            for p in popular[:POPULAR_CHART_SIZE]
        ],
    )
    if vacancy_stats is not None:
        view.vacancy_pie = [
            ChartPoint(name="Active", value=vacancy_stats.active_vacancies),
            ChartPoint(name="Inactive", value=vacancy_stats.inactive_vacancies),
        ]
    if user_stats is not None:
        by_role = user_stats.users_by_role
        view.user_pie = [
            ChartPoint(name="Admin", value=by_role.admin),
            ChartPoint(name="Manager", value=by_role.manager),
            ChartPoint(name="Candidate", value=by_role.candidate),
        ]
    return view
