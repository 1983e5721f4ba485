"""Tests for mortgage scenarios"""
import pytest

from homeplanner.application.scenarios import ListScenariosUseCase, CreateScenarioUseCase, DeleteScenarioUseCase
from homeplanner.application.seed import seed_reference_data
from homeplanner.errors import ValidationError, NotFoundError
from homeplanner.infrastructure.db.models import Scenario


def _create(db_session, user_id, label, monthly, profile_id=None):
    return CreateScenarioUseCase(db_session).execute(
        user_id=user_id,
        label=label,
        total_cost_ils=monthly * 400,
        equity_ils=monthly * 200,
        mortgage_ils=monthly * 200,
        monthly_pay_ils=monthly,
        profile_id=profile_id,
    )


def test_default_profile_sees_shared_and_own_sorted(db_session, make_user, make_profile):
    user = make_user()
    make_profile(user, "Default family")
    other = make_profile(user, "Second family")
    seed_reference_data(db_session)
    _create(db_session, user.id, "Own cheap", 5000)
    _create(db_session, user.id, "Other family", 1000, profile_id=other.id)

    default_labels = [s.label for s in ListScenariosUseCase(db_session).execute(user.id)]
    assert default_labels == ["Own cheap", "Moderate Case", "Good Case", "Stress Case"]

    other_labels = [s.label for s in ListScenariosUseCase(db_session).execute(user.id, other.id)]
    assert other_labels == ["Other family"]


def test_equal_payment_sorted_by_label(db_session, make_user, make_profile):
    user = make_user()
    make_profile(user)
    _create(db_session, user.id, "Beta", 7000)
    _create(db_session, user.id, "Alpha", 7000)
    assert [s.label for s in ListScenariosUseCase(db_session).execute(user.id)] == ["Alpha", "Beta"]


def test_create_generates_key(db_session, make_user, make_profile):
    user = make_user()
    family = make_profile(user)
    scenario = _create(db_session, user.id, "Plan A", 8000)
    assert scenario.key.startswith("scenario_")
    assert scenario.family_id == family.id


def test_create_requires_all_amounts(db_session, make_user, make_profile):
    user = make_user()
    make_profile(user)
    with pytest.raises(ValidationError):
        CreateScenarioUseCase(db_session).execute(
            user_id=user.id, label="Plan", total_cost_ils=1, equity_ils=1, mortgage_ils=None, monthly_pay_ils=1,
        )


def test_delete_own_but_not_shared_or_foreign(db_session, make_user, make_profile):
    user = make_user()
    make_profile(user)
    intruder = make_user(email="intruder@example.com")
    make_profile(intruder)
    seed_reference_data(db_session)
    own = _create(db_session, user.id, "Plan A", 8000)
    shared = db_session.query(Scenario).filter(Scenario.family_id.is_(None)).first()

    with pytest.raises(NotFoundError):
        DeleteScenarioUseCase(db_session).execute(own.id, intruder.id)
    with pytest.raises(NotFoundError):
        DeleteScenarioUseCase(db_session).execute(shared.id, user.id)

    DeleteScenarioUseCase(db_session).execute(own.id, user.id)
    assert db_session.get(Scenario, own.id) is None
