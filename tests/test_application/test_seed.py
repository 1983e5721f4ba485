"""Tests for provisioning of the shared tier and the demo account"""
from homeplanner.application.finances import GetFinanceSummaryUseCase
from homeplanner.application.seed import DEMO_EMAIL, DEMO_PASSWORD, seed_reference_data, seed_demo_account
from homeplanner.auth import verify_password
from homeplanner.infrastructure.db.models import HouseType, Scenario, IncomeType, User


def test_seed_is_idempotent(db_session):
    seed_reference_data(db_session)
    seed_reference_data(db_session)
    first = seed_demo_account(db_session)
    second = seed_demo_account(db_session)

    assert first.id == second.id
    assert db_session.query(User).count() == 1
    assert db_session.query(HouseType).count() == 2
    assert db_session.query(Scenario).count() == 3
    assert db_session.query(IncomeType).count() == 3


def test_demo_account_finances(db_session):
    seed_reference_data(db_session)
    user = seed_demo_account(db_session)
    assert user.email == DEMO_EMAIL
    assert verify_password(DEMO_PASSWORD, user.password_hash)

    summary = GetFinanceSummaryUseCase(db_session).execute(user.id)
    assert summary.profile.family_name == "Asaf & Talia"
    assert summary.totals.monthly_income == 43500
    assert summary.totals.monthly_expenses == 17300
    assert summary.totals.net_monthly == 26200
    assert summary.totals.investments_total == 3073541
    assert {i.type_label for i in summary.incomes} == {"Salary", "Freelance", "Rental"}
