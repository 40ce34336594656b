"""
Pydantic Schemas - Read Models, Forms and View Models

All schemas in one file for simplicity.

Wire format of the external API is camelCase JSON; attributes are snake_case.
Every model accepts both spellings on input and emits camelCase.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, EmailStr, Field, ValidationInfo, field_validator
from pydantic.alias_generators import to_camel


class ApiModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ============================================================
# ENUMS
# ============================================================

class UserRole(str, Enum):
    admin = "ADMIN"
    manager = "GESTOR"
    candidate = "CODER"

    @classmethod
    def _missing_(cls, value):
        # Older API builds and forms send lowercase values
        if isinstance(value, str):
            for member in cls:
                if member.value == value.strip().upper():
                    return member
        return None


class Modality(str, Enum):
    remote = "REMOTE"
    onsite = "ONSITE"
    hybrid = "HYBRID"

    @classmethod
    def _missing_(cls, value):
        if isinstance(value, str):
            normalized = value.strip().upper().replace("_", "").replace("-", "")
            for member in cls:
                if member.value == normalized:
                    return member
        return None


class ApplyBlockReason(str, Enum):
    not_found = "NOT_FOUND"
    already_applied = "ALREADY_APPLIED"
    limit_reached = "LIMIT_REACHED"
    vacancy_inactive = "VACANCY_INACTIVE"
    no_slots = "NO_SLOTS"


# ============================================================
# READ MODELS (owned by the API, cached per request)
# ============================================================

class User(ApiModel):
    id: str
    name: str
    email: str
    role: UserRole
    created_at: Optional[datetime] = None


class Vacancy(ApiModel):
    id: str
    title: str
    description: str = ""
    technologies: str = ""
    seniority: str = ""
    soft_skills: Optional[str] = None
    location: str = ""
    modality: Modality
    salary_range: str = ""
    company: str = ""
    max_applicants: int
    is_active: bool = True
    created_at: Optional[datetime] = None
    applications: Optional[List["Application"]] = None

    @property
    def technology_list(self) -> List[str]:
        return [t.strip() for t in self.technologies.split(",") if t.strip()]


class Application(ApiModel):
    id: str
    user_id: str
    vacancy_id: str
    applied_at: Optional[datetime] = None
    status: Optional[str] = None
    user: Optional[User] = None
    vacancy: Optional[Vacancy] = None


Vacancy.model_rebuild()


class LoginResponse(ApiModel):
    access_token: str = Field(..., alias="access_token")
    user: User


# ============================================================
# STATISTICS READ MODELS
# ============================================================

class UsersByRole(ApiModel):
    admin: int = Field(0, alias="ADMIN")
    manager: int = Field(0, alias="GESTOR")
    candidate: int = Field(0, alias="CODER")


class UserStats(ApiModel):
    total_users: int = 0
    users_by_role: UsersByRole = Field(default_factory=UsersByRole)
    recent_users: List[User] = []


class VacancyStats(ApiModel):
    total_vacancies: int = 0
    active_vacancies: int = 0
    inactive_vacancies: int = 0
    vacancies_with_available_slots: int = 0
    most_recent_vacancies: List[Vacancy] = []


class PopularVacancy(ApiModel):
    vacancy_id: str
    title: str
    company: str = ""
    applications_count: int = 0


class ApplicationStats(ApiModel):
    total_applications: int = 0
    vacancies_with_applications: int = 0
    users_with_applications: int = 0
    recent_applications: List[Application] = []
    most_popular_vacancies: List[PopularVacancy] = []


class VacancySingleStats(ApiModel):
    vacancy_id: str
    title: str
    company: str = ""
    max_applicants: int
    current_applications: int
    available_slots: int
    is_fully_booked: bool
    is_active: bool


class VacancyApplicationStats(ApiModel):
    vacancy_id: str
    max_applicants: int
    current_applications: int
    available_slots: int
    is_fully_booked: bool


class UserApplicationStats(ApiModel):
    user_id: str
    total_applications: int = 0
    active_applications: int = 0
    recent_applications: List[Application] = []


# ============================================================
# FORMS (validated before anything is sent to the API)
# ============================================================

class LoginForm(ApiModel):
    email: EmailStr
    password: str = Field(..., min_length=6)


class RegisterForm(ApiModel):
    name: str = Field(..., min_length=2)
    email: EmailStr
    password: str = Field(..., min_length=6)
    role: UserRole = UserRole.candidate


class UserCreate(ApiModel):
    name: str = Field(..., min_length=2)
    email: EmailStr
    password: str = Field(..., min_length=6)
    role: UserRole = UserRole.candidate


class UserUpdate(ApiModel):
    name: str = Field(..., min_length=2)
    email: EmailStr
    password: Optional[str] = None
    role: UserRole

    @field_validator("password")
    @classmethod
    def password_empty_or_long_enough(cls, v: Optional[str]) -> Optional[str]:
        if v and len(v) < 6:
            raise ValueError("Password must be at least 6 characters")
        return v or None


class ProfileUpdate(ApiModel):
    model_config = ConfigDict(extra="forbid")

    name: str = Field(..., min_length=2)
    email: EmailStr
    password: Optional[str] = None
    confirm_password: Optional[str] = Field(None, validate_default=True)

    @field_validator("password")
    @classmethod
    def password_empty_or_long_enough(cls, v: Optional[str]) -> Optional[str]:
        if v and len(v) < 6:
            raise ValueError("Password must be at least 6 characters")
        return v or None

    @field_validator("confirm_password")
    @classmethod
    def passwords_match(cls, v: Optional[str], info: ValidationInfo) -> Optional[str]:
        # password is absent from info.data when it failed its own check
        password = info.data.get("password")
        if password and v != password:
            raise ValueError("Passwords do not match")
        return v


class VacancyForm(ApiModel):
    title: str = Field(..., min_length=5)
    description: str = Field(..., min_length=20)
    technologies: str = Field(..., min_length=1)
    seniority: str = Field(..., min_length=1)
    soft_skills: Optional[str] = None
    location: str = Field(..., min_length=1)
    modality: Modality = Modality.remote
    salary_range: str = Field(..., min_length=1)
    company: str = Field(..., min_length=1)
    max_applicants: int = Field(5, ge=1)


class VacancyFilters(ApiModel):
    company: Optional[str] = None
    location: Optional[str] = None
    modality: Optional[Modality] = None
    is_active: Optional[bool] = None
    has_available_slots: Optional[bool] = None
    page: Optional[int] = Field(None, ge=1)
    limit: Optional[int] = Field(None, ge=1)
    order: Optional[Literal["ASC", "DESC"]] = None
    order_by: Optional[str] = None


class ApplicationStatusUpdate(ApiModel):
    status: str = Field(..., min_length=1)


# ============================================================
# RULE ENGINE RESULT
# ============================================================

class ApplyDecision(ApiModel):
    model_config = ConfigDict(frozen=True)

    allowed: bool
    reason: Optional[ApplyBlockReason] = None
    message: Optional[str] = None


# ============================================================
# VIEW MODELS (what each page renders)
# ============================================================

class Notice(ApiModel):
    icon: Literal["success", "error", "warning", "info"] = "info"
    title: str
    text: Optional[str] = None


class MessageResponse(ApiModel):
    message: str
    success: bool = True
    notice: Optional[Notice] = None
    redirect: Optional[str] = None


class NavItem(ApiModel):
    route: str
    label: str
    path: str


class NavigationResponse(ApiModel):
    user: User
    items: List[NavItem]


class LoginResult(ApiModel):
    user: User
    redirect: str
    notice: Notice


class VacancyCard(ApiModel):
    vacancy: Vacancy
    available_slots: int
    is_fully_booked: bool
    has_applied: bool = False
    eligibility: Optional[ApplyDecision] = None


class VacanciesView(ApiModel):
    view: Literal["vacancies"] = "vacancies"
    vacancies: List[VacancyCard]
    total: int
    can_create: bool
    can_delete: bool
    search: Optional[str] = None


class VacancyDetailView(ApiModel):
    view: Literal["vacancy_detail"] = "vacancy_detail"
    vacancy: Vacancy
    technologies: List[str]
    current_applications: int
    available_slots: int
    is_fully_booked: bool
    has_applied: bool = False
    eligibility: Optional[ApplyDecision] = None
    can_edit: bool = False
    can_toggle_active: bool = False
    can_delete: bool = False


class VacancyFormView(ApiModel):
    view: Literal["vacancy_form"] = "vacancy_form"
    mode: Literal["create", "edit"]
    vacancy_id: Optional[str] = None
    values: Dict[str, Any]


class ExploreView(ApiModel):
    view: Literal["explore"] = "explore"
    vacancies: List[VacancyCard]
    total: int
    active_applications: int
    remaining_quota: int
    search: Optional[str] = None
    modality: Optional[Modality] = None


class ApplicationRow(ApiModel):
    application: Application
    can_delete: bool


class ApplicationsView(ApiModel):
    view: Literal["applications"] = "applications"
    title: str
    show_candidate: bool
    applications: List[ApplicationRow]
    total: int
    search: Optional[str] = None


class UsersView(ApiModel):
    view: Literal["users"] = "users"
    users: List[User]
    total: int
    search: Optional[str] = None
    role: Optional[UserRole] = None


class ProfileView(ApiModel):
    view: Literal["profile"] = "profile"
    user: User


class AdminDashboard(ApiModel):
    kind: Literal["admin"] = "admin"
    user_stats: Optional[UserStats] = None
    vacancy_stats: Optional[VacancyStats] = None
    application_stats: Optional[ApplicationStats] = None
    popular_vacancies: Optional[List[PopularVacancy]] = None
    failed_widgets: List[str] = []


class ManagerDashboard(ApiModel):
    kind: Literal["manager"] = "manager"
    vacancy_stats: Optional[VacancyStats] = None
    application_stats: Optional[ApplicationStats] = None
    popular_vacancies: Optional[List[PopularVacancy]] = None
    failed_widgets: List[str] = []


class CandidateDashboard(ApiModel):
    kind: Literal["candidate"] = "candidate"
    recent_applications: List[Application]
    total_applications: int
    active_applications: int
    max_applications: int
    remaining_quota: int
    can_explore: bool
    vacancies: List[VacancyCard]


class DashboardView(ApiModel):
    view: Literal["dashboard"] = "dashboard"
    greeting: str
    role: UserRole
    dashboard: Union[AdminDashboard, ManagerDashboard, CandidateDashboard] = Field(
        ..., discriminator="kind"
    )


class ChartPoint(ApiModel):
    name: str
    value: int
    company: Optional[str] = None


class MetricsView(ApiModel):
    view: Literal["metrics"] = "metrics"
    vacancy_stats: Optional[VacancyStats] = None
    application_stats: Optional[ApplicationStats] = None
    user_stats: Optional[UserStats] = None
    popular_chart: List[ChartPoint] = []
    vacancy_pie: List[ChartPoint] = []
    user_pie: List[ChartPoint] = []
    failed_widgets: List[str] = []


class HealthResponse(ApiModel):
    status: str
    api: str
    authenticated: bool


# ============================================================
# GENERIC
# ============================================================

class ErrorResponse(ApiModel):
    detail: str
    notice: Optional[Notice] = None
    redirect: Optional[str] = None
    reason: Optional[str] = None
    errors: Optional[Dict[str, str]] = None
