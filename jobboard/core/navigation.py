"""
Role-gated navigation table.

Route name -> (path, sidebar label, permitted roles). This is configuration:
the gate in jobboard.core.auth only looks things up here.
"""

from typing import Dict, FrozenSet, List, NamedTuple, Optional

from jobboard.schemas.schemas import NavItem, UserRole

LOGIN_PATH = "/login"
DEFAULT_LANDING_PATH = "/dashboard"

ALL_ROLES: FrozenSet[UserRole] = frozenset(UserRole)
STAFF: FrozenSet[UserRole] = frozenset({UserRole.admin, UserRole.manager})


class Route(NamedTuple):
    path: str
    roles: FrozenSet[UserRole]
    label: Optional[str] = None  # None: not shown in the sidebar


# Order is the sidebar order.
ROUTES: Dict[str, Route] = {
    "dashboard": Route("/dashboard", ALL_ROLES, "Dashboard"),
    "users": Route("/users", frozenset({UserRole.admin}), "Users"),
    "vacancies": Route("/vacancies", STAFF, "Vacancies"),
    "explore": Route("/explore", frozenset({UserRole.candidate}), "Explore Vacancies"),
    "applications": Route("/applications", ALL_ROLES, "Applications"),
    "metrics": Route("/metrics", STAFF, "Metrics"),
    "profile": Route("/profile", ALL_ROLES, "My Profile"),
    "vacancy_create": Route("/vacancies/new", STAFF),
    "vacancy_detail": Route("/vacancies/{vacancy_id}", ALL_ROLES),
    "vacancy_edit": Route("/vacancies/{vacancy_id}/edit", STAFF),
}


def is_allowed(route_name: str, role: Optional[UserRole]) -> bool:
    """Unknown routes and missing roles are never allowed."""
    route = ROUTES.get(route_name)
    return route is not None and role is not None and role in route.roles


def resolve_redirect(route_name: str, authenticated: bool, role: Optional[UserRole]) -> Optional[str]:
    """
    Where to send the operator instead of rendering `route_name`.
    None means render it.
    """
    if not authenticated:
        return LOGIN_PATH
    if not is_allowed(route_name, role):
        return DEFAULT_LANDING_PATH
    return None


def visible_items(role: Optional[UserRole]) -> List[NavItem]:
    """Sidebar entries for a role."""
    return [
        NavItem(route=name, label=route.label, path=route.path)
        for name, route in ROUTES.items()
        if route.label is not None and is_allowed(name, role)
    ]
