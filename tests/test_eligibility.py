"""
Unit tests for the eligibility & capacity rules.
"""

import pytest

from conftest import make_application, make_user, make_vacancy
from jobboard.schemas.schemas import Application, ApplyBlockReason, User, Vacancy
from jobboard.services.eligibility import (
    MAX_ACTIVE_APPLICATIONS,
    available_slots,
    can_apply,
    can_delete_application,
    current_applications_count,
    has_applied,
    is_fully_booked,
    remaining_quota,
)


def vacancy(**kwargs) -> Vacancy:
    return Vacancy.model_validate(make_vacancy(**kwargs))


def my_apps(*vacancy_ids) -> list:
    return [
        Application.model_validate(make_application(app_id=f"mine-{i}", user_id="me", vacancy_id=vid))
        for i, vid in enumerate(vacancy_ids)
    ]


class TestCapacity:

    def test_available_slots_counts_applications(self):
        assert available_slots(vacancy(max_applicants=5, applications=4)) == 1

    def test_available_slots_without_applications_list(self):
        data = make_vacancy(max_applicants=3)
        del data["applications"]
        assert available_slots(Vacancy.model_validate(data)) == 3

    @pytest.mark.parametrize("max_applicants,applications", [(3, 3), (3, 4), (1, 10)])
    def test_available_slots_never_negative(self, max_applicants, applications):
        v = vacancy(max_applicants=max_applicants, applications=applications)
        assert available_slots(v) == 0
        assert is_fully_booked(v)

    def test_current_applications_count(self):
        assert current_applications_count(vacancy(applications=2)) == 2

    def test_remaining_quota(self):
        assert remaining_quota([]) == MAX_ACTIVE_APPLICATIONS
        assert remaining_quota(my_apps("a", "b")) == 1
        assert remaining_quota(my_apps("a", "b", "c", "d")) == 0

    def test_has_applied(self):
        v = vacancy(vacancy_id="v-1")
        assert has_applied(v, my_apps("v-1"))
        assert not has_applied(v, my_apps("v-2"))


class TestCanApplyScenarios:

    def test_scenario_a_allowed_with_last_slot(self):
        v = vacancy(max_applicants=5, applications=4)
        decision = can_apply(v, my_apps("elsewhere"))
        assert decision.allowed is True
        assert decision.reason is None
        assert available_slots(v) == 1

    def test_scenario_b_already_applied(self):
        v = vacancy(vacancy_id="v-1", max_applicants=5, applications=4)
        decision = can_apply(v, my_apps("v-1"))
        assert decision.allowed is False
        assert decision.reason == ApplyBlockReason.already_applied

    def test_scenario_c_no_slots(self):
        v = vacancy(max_applicants=3, applications=3)
        assert available_slots(v) == 0
        decision = can_apply(v, [])
        assert decision.allowed is False
        assert decision.reason == ApplyBlockReason.no_slots

    def test_scenario_d_limit_reached(self):
        decision = can_apply(vacancy(vacancy_id="v-4"), my_apps("v-1", "v-2", "v-3"))
        assert decision.allowed is False
        assert decision.reason == ApplyBlockReason.limit_reached

    def test_scenario_e_inactive(self):
        decision = can_apply(vacancy(is_active=False, applications=0), [])
        assert decision.allowed is False
        assert decision.reason == ApplyBlockReason.vacancy_inactive

    def test_missing_vacancy_is_not_found(self):
        decision = can_apply(None, my_apps("v-1"))
        assert decision.allowed is False
        assert decision.reason == ApplyBlockReason.not_found


class TestCanApplyPriority:

    def test_already_applied_beats_everything(self):
        v = vacancy(vacancy_id="v-1", is_active=False, max_applicants=1, applications=1)
        decision = can_apply(v, my_apps("v-1", "v-2", "v-3"))
        assert decision.reason == ApplyBlockReason.already_applied

    def test_limit_beats_inactive_and_full(self):
        v = vacancy(vacancy_id="v-9", is_active=False, max_applicants=1, applications=1)
        decision = can_apply(v, my_apps("v-1", "v-2", "v-3"))
        assert decision.reason == ApplyBlockReason.limit_reached

    def test_inactive_beats_no_slots(self):
        v = vacancy(is_active=False, max_applicants=2, applications=2)
        assert can_apply(v, []).reason == ApplyBlockReason.vacancy_inactive

    @pytest.mark.parametrize("is_active", [True, False])
    @pytest.mark.parametrize("applications", [0, 5, 9])
    def test_limit_regardless_of_vacancy_state(self, is_active, applications):
        v = vacancy(vacancy_id="new", is_active=is_active, max_applicants=5, applications=applications)
        assert can_apply(v, my_apps("x", "y", "z")).reason == ApplyBlockReason.limit_reached


class TestCanApplyPurity:

    def test_same_inputs_same_result(self):
        v = vacancy(max_applicants=2, applications=1)
        apps = my_apps("other")
        assert can_apply(v, apps) == can_apply(v, apps)

    def test_inputs_not_mutated(self):
        v = vacancy(max_applicants=2, applications=1)
        apps = my_apps("other")
        before = (v.model_dump(), [a.model_dump() for a in apps])
        can_apply(v, apps)
        assert before == (v.model_dump(), [a.model_dump() for a in apps])

    def test_reflects_new_data_each_call(self):
        v = vacancy(max_applicants=2, applications=1)
        assert can_apply(v, []).allowed
        v_full = vacancy(max_applicants=2, applications=2)
        assert can_apply(v_full, []).reason == ApplyBlockReason.no_slots

    def test_blocked_decision_carries_message(self):
        decision = can_apply(vacancy(is_active=False), [])
        assert decision.message == "This vacancy is not active"


class TestDeletePermission:

    def application(self, owner="u-1"):
        return Application.model_validate(make_application(user_id=owner))

    def test_admin_deletes_any(self):
        admin = User.model_validate(make_user(user_id="admin", role="ADMIN"))
        assert can_delete_application(self.application(owner="someone"), admin)

    def test_candidate_deletes_own_only(self):
        me = User.model_validate(make_user(user_id="u-1", role="CODER"))
        assert can_delete_application(self.application(owner="u-1"), me)
        assert not can_delete_application(self.application(owner="u-2"), me)

    def test_manager_cannot_delete(self):
        manager = User.model_validate(make_user(user_id="m-1", role="GESTOR"))
        assert not can_delete_application(self.application(owner="m-1"), manager)

    def test_no_user(self):
        assert not can_delete_application(self.application(), None)
