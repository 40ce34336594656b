"""
Resource Services - typed access to the external REST API.

Resources:
1. users         - /users
2. vacancies     - /vacancies
3. applications  - /applications

Every method is one API call. Nothing is cached: views call these on each
request and get the API's current state. Errors propagate as the
exceptions raised by ApiClient.
"""

from typing import Any, Dict, List, Optional

from jobboard.schemas.schemas import (
    Application,
    ApplicationStats,
    PopularVacancy,
    User,
    UserApplicationStats,
    UserCreate,
    UserStats,
    Vacancy,
    VacancyApplicationStats,
    VacancyFilters,
    VacancyForm,
    VacancySingleStats,
    VacancyStats,
)
from jobboard.services.api_client import ApiClient


def _payload(model) -> Dict[str, Any]:
    """Form -> camelCase JSON body, unset optionals dropped."""
    return model.model_dump(mode="json", by_alias=True, exclude_none=True)


def filters_to_params(filters: Optional[VacancyFilters]) -> Dict[str, str]:
    """Query string for GET /vacancies; None and empty values are dropped."""
    if filters is None:
        return {}
    params = {}
    for key, value in filters.model_dump(mode="json", by_alias=True).items():
        if value is None or value == "":
            continue
        params[key] = str(value).lower() if isinstance(value, bool) else str(value)
    return params


# ============================================================
# USERS
# ============================================================

class UserService:
    """User management (Admin) and profile updates."""

    def __init__(self, api: ApiClient):
        self.api = api

    async def list(self) -> List[User]:
        data = await self.api.get("/users")
        return [User.model_validate(u) for u in data or []]

    async def get(self, user_id: str) -> User:
        return User.model_validate(await self.api.get(f"/users/{user_id}"))

    async def create(self, data: UserCreate) -> User:
        return User.model_validate(await self.api.post("/users", json=_payload(data)))

    async def update(self, user_id: str, changes: Dict[str, Any]) -> User:
        """PATCH with only the fields being changed."""
        return User.model_validate(await self.api.patch(f"/users/{user_id}", json=changes))

    async def delete(self, user_id: str) -> Optional[dict]:
        return await self.api.delete(f"/users/{user_id}")

    async def stats(self) -> UserStats:
        return UserStats.model_validate(await self.api.get("/users/stats/overview"))


# ============================================================
# VACANCIES
# ============================================================

class VacancyService:
    """Vacancy CRUD, activation toggle and vacancy statistics."""

    def __init__(self, api: ApiClient):
        self.api = api

    async def list(self, filters: Optional[VacancyFilters] = None) -> List[Vacancy]:
        data = await self.api.get("/vacancies", params=filters_to_params(filters))
        return [Vacancy.model_validate(v) for v in data or []]

    async def get(self, vacancy_id: str) -> Vacancy:
        return Vacancy.model_validate(await self.api.get(f"/vacancies/{vacancy_id}"))

    async def create(self, data: VacancyForm) -> Vacancy:
        return Vacancy.model_validate(await self.api.post("/vacancies", json=_payload(data)))

    async def update(self, vacancy_id: str, data: VacancyForm) -> Vacancy:
        return Vacancy.model_validate(
            await self.api.patch(f"/vacancies/{vacancy_id}", json=_payload(data))
        )

    async def toggle_active(self, vacancy_id: str) -> Vacancy:
        return Vacancy.model_validate(await self.api.patch(f"/vacancies/{vacancy_id}/toggle-active"))

    async def delete(self, vacancy_id: str) -> Optional[dict]:
        return await self.api.delete(f"/vacancies/{vacancy_id}")

    async def with_available_slots(self) -> List[Vacancy]:
        data = await self.api.get("/vacancies/available/slots")
        return [Vacancy.model_validate(v) for v in data or []]

    async def stats(self, vacancy_id: str) -> VacancySingleStats:
        return VacancySingleStats.model_validate(await self.api.get(f"/vacancies/stats/{vacancy_id}"))

    async def general_stats(self) -> VacancyStats:
        return VacancyStats.model_validate(await self.api.get("/vacancies/stats/general/overview"))


# ============================================================
# APPLICATIONS
# ============================================================

class ApplicationService:
    """
    Applications. The API scopes GET /applications by the caller's role:
    candidates get only their own.
    """

    def __init__(self, api: ApiClient):
        self.api = api

    async def list(self) -> List[Application]:
        data = await self.api.get("/applications")
        return [Application.model_validate(a) for a in data or []]

    async def get(self, application_id: str) -> Application:
        return Application.model_validate(await self.api.get(f"/applications/{application_id}"))

    async def create(self, vacancy_id: str) -> Application:
        return Application.model_validate(
            await self.api.post("/applications", json={"vacancyId": vacancy_id})
        )

    async def update_status(self, application_id: str, status: str) -> Application:
        return Application.model_validate(
            await self.api.patch(f"/applications/{application_id}", json={"status": status})
        )

    async def delete(self, application_id: str) -> Optional[dict]:
        return await self.api.delete(f"/applications/{application_id}")

    async def vacancy_stats(self, vacancy_id: str) -> VacancyApplicationStats:
        return VacancyApplicationStats.model_validate(
            await self.api.get(f"/applications/vacancy/{vacancy_id}/stats")
        )

    async def user_stats(self, user_id: str) -> UserApplicationStats:
        return UserApplicationStats.model_validate(
            await self.api.get(f"/applications/stats/user/{user_id}")
        )

    async def popular_vacancies(self) -> List[PopularVacancy]:
        data = await self.api.get("/applications/stats/popular/vacancies")
        return [PopularVacancy.model_validate(p) for p in data or []]

    async def dashboard(self) -> ApplicationStats:
        return ApplicationStats.model_validate(await self.api.get("/applications/stats/dashboard"))
