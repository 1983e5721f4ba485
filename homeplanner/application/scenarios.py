"""
Scenario use cases

A family sees its own scenarios; its owner's default profile additionally
sees the shared default scenarios (family_id NULL).
"""
from sqlalchemy.orm import Session

from homeplanner.application.ownership import get_owned_record, resolve_family_scope
from homeplanner.errors import ValidationError, NotFoundError
from homeplanner.infrastructure.db.models import Scenario
from homeplanner.utils.keys import make_scenario_key
from homeplanner.utils.validation import clean_text, optional_text, to_decimal


class ListScenariosUseCase:
    def __init__(self, db: Session):
        self.db = db

    def execute(self, user_id: str, profile_id: str | None = None) -> list[Scenario]:
        """Visible scenarios, cheapest monthly payment first"""
        scope = resolve_family_scope(self.db, user_id, profile_id)
        return (
            self.db.query(Scenario)
            .filter(scope.visible(Scenario))
            .order_by(Scenario.monthly_pay_ils.asc(), Scenario.label.asc())
            .all()
        )


class CreateScenarioUseCase:
    def __init__(self, db: Session):
        self.db = db

    def execute(
        self,
        user_id: str,
        label: str,
        total_cost_ils: float | None,
        equity_ils: float | None,
        mortgage_ils: float | None,
        monthly_pay_ils: float | None,
        notes: str | None = None,
        key: str | None = None,
        profile_id: str | None = None,
    ) -> Scenario:
        label = clean_text(label)
        amounts = (total_cost_ils, equity_ils, mortgage_ils, monthly_pay_ils)
        if not label or any(amount is None for amount in amounts):
            raise ValidationError(
                "label, totalCostIls, equityIls, mortgageIls and monthlyPayIls are required."
            )

        scope = resolve_family_scope(self.db, user_id, profile_id)
        scenario = Scenario(
            key=clean_text(key) or make_scenario_key(),
            label=label,
            total_cost_ils=to_decimal(total_cost_ils),
            equity_ils=to_decimal(equity_ils),
            mortgage_ils=to_decimal(mortgage_ils),
            monthly_pay_ils=to_decimal(monthly_pay_ils),
            notes=optional_text(notes),
            family_id=scope.family_id,
        )
        self.db.add(scenario)
        self.db.commit()
        return scenario


class DeleteScenarioUseCase:
    def __init__(self, db: Session):
        self.db = db

    def execute(self, scenario_id: str, user_id: str) -> None:
        # Shared-tier rows have no family, so the ownership join never matches them
        scenario = get_owned_record(self.db, Scenario, scenario_id, user_id)
        if not scenario:
            raise NotFoundError("Scenario not found.")
        self.db.delete(scenario)
        self.db.commit()
