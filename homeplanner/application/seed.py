"""
Provisioning: shared reference tier and a demo account

Each step skips itself when its data is already present, so the seed can be
re-run against a live database.
"""
import logging

from sqlalchemy.orm import Session

from homeplanner.auth import hash_password, get_user_by_email
from homeplanner.infrastructure.db.models import (
    User, FamilyProfile, IncomeType, ExpenseType, IncomeSource, Investment, FamilyExpense,
    HouseType, BuildCostItem, Scenario,
)
from homeplanner.utils.validation import to_decimal

logger = logging.getLogger(__name__)

DEMO_EMAIL = "demo@planyourhome.local"
DEMO_PASSWORD = "demo123456"

SHARED_INCOME_TYPES = [("salary", "Salary"), ("freelance", "Freelance"), ("rental", "Rental")]
SHARED_EXPENSE_TYPES = [
    ("living", "Living Expenses"),
    ("debt", "Debt / Loans"),
    ("children", "Children / Education"),
]

# (key, label, description, [(stage, name, amount, percent hint)])
BUILD_CATALOG = [
    (
        "single_storey",
        "Single-storey house",
        "Ground floor only, block construction",
        [
            ("1. Planning & permits", "Architect and engineering", 120000, 4),
            ("1. Planning & permits", "Permit fees and levies", 95000, 3),
            ("2. Frame", "Foundations", 310000, 10),
            ("2. Frame", "Walls and roof slab", 640000, 21),
            ("3. Systems", "Electrical", 150000, 5),
            ("3. Systems", "Plumbing and drainage", 140000, 5),
            ("4. Finishing", "Flooring and tiling", 260000, 9),
            ("4. Finishing", "Kitchen", 180000, 6),
        ],
    ),
    (
        "two_storey",
        "Two-storey house",
        "Ground floor plus upper floor, reinforced concrete frame",
        [
            ("1. Planning & permits", "Architect and engineering", 160000, 4),
            ("1. Planning & permits", "Permit fees and levies", 120000, 3),
            ("2. Frame", "Foundations", 380000, 9),
            ("2. Frame", "Skeleton and slabs", 910000, 22),
            ("2. Frame", "Staircase", 85000, 2),
            ("3. Systems", "Electrical", 210000, 5),
            ("3. Systems", "Plumbing and drainage", 190000, 5),
            ("4. Finishing", "Flooring and tiling", 340000, 8),
            ("4. Finishing", "Kitchen", 220000, 5),
        ],
    ),
]

# (key, label, total, equity, mortgage, monthly payment)
SHARED_SCENARIOS = [
    ("moderate", "Moderate Case", 4840000, 3200000, 1640000, 9840),
    ("good", "Good Case", 5471000, 3300000, 2171000, 13026),
    ("stress", "Stress Case", 6095500, 3100000, 2995500, 17973),
]


def seed_reference_data(db: Session) -> None:
    """Shared types, build catalog and shared scenarios"""
    if not db.query(IncomeType.id).filter(IncomeType.family_id.is_(None)).first():
        db.add_all(IncomeType(key=key, label=label) for key, label in SHARED_INCOME_TYPES)
        logger.info("Seeded %d shared income types", len(SHARED_INCOME_TYPES))

    if not db.query(ExpenseType.id).filter(ExpenseType.family_id.is_(None)).first():
        db.add_all(ExpenseType(key=key, label=label) for key, label in SHARED_EXPENSE_TYPES)
        logger.info("Seeded %d shared expense types", len(SHARED_EXPENSE_TYPES))

    if not db.query(HouseType.id).first():
        for key, label, description, items in BUILD_CATALOG:
            house_type = HouseType(key=key, label=label, description=description)
            for position, (stage, name, amount, percent) in enumerate(items, start=1):
                house_type.items.append(BuildCostItem(
                    code=f"{key.upper()}_{position:02d}",
                    stage=stage,
                    name=name,
                    amount_ils=to_decimal(amount),
                    percent_hint=to_decimal(percent),
                    sort_order=position,
                ))
            db.add(house_type)
        logger.info("Seeded build catalog with %d house types", len(BUILD_CATALOG))

    if not db.query(Scenario.id).filter(Scenario.family_id.is_(None)).first():
        db.add_all(
            Scenario(
                key=key,
                label=label,
                total_cost_ils=to_decimal(total),
                equity_ils=to_decimal(equity),
                mortgage_ils=to_decimal(mortgage),
                monthly_pay_ils=to_decimal(monthly),
            )
            for key, label, total, equity, mortgage, monthly in SHARED_SCENARIOS
        )
        logger.info("Seeded %d shared scenarios", len(SHARED_SCENARIOS))

    db.commit()


def seed_demo_account(db: Session) -> User:
    """
    Demo user with a default profile and sample records

    Requires seed_reference_data() to have run (records use the shared types).
    """
    user = get_user_by_email(db, DEMO_EMAIL)
    if user:
        logger.info("Demo user already exists (id=%s)", user.id)
        return user

    user = User(name="Default User", email=DEMO_EMAIL, password_hash=hash_password(DEMO_PASSWORD))
    db.add(user)
    db.flush()

    family = FamilyProfile(
        key="family_default",
        family_name="Asaf & Talia",
        monthly_goal=to_decimal(22668),
        owner_user_id=user.id,
    )
    db.add(family)
    db.flush()

    def shared_type(model, key):
        return db.query(model).filter(model.key == key, model.family_id.is_(None)).one()

    # Demo records use the shared default types, like pre-taxonomy legacy data
    salary = shared_type(IncomeType, "salary")
    freelance = shared_type(IncomeType, "freelance")
    rental = shared_type(IncomeType, "rental")
    living = shared_type(ExpenseType, "living")
    loans = shared_type(ExpenseType, "debt")
    children = shared_type(ExpenseType, "children")

    db.add_all([
        IncomeSource(name="Asaf salary", monthly_ils=to_decimal(23800), income_type=salary, family_id=family.id),
        IncomeSource(name="Talia salary", monthly_ils=to_decimal(13000), income_type=salary, family_id=family.id),
        IncomeSource(name="Side freelance", monthly_ils=to_decimal(2500), income_type=freelance, family_id=family.id),
        IncomeSource(name="Rent income", monthly_ils=to_decimal(4200), income_type=rental, family_id=family.id),
        Investment(
            name="Asaf portfolio", account_type="Stocks", provider="Meitav",
            current_value_ils=to_decimal(952747), yearly_deposit_ils=to_decimal(12570), family_id=family.id,
        ),
        Investment(
            name="Talia portfolio", account_type="Savings + Funds", provider="Migdal",
            current_value_ils=to_decimal(220794), yearly_deposit_ils=to_decimal(0), family_id=family.id,
        ),
        Investment(
            name="Ashkelon apartment", account_type="Real Estate",
            current_value_ils=to_decimal(1900000), family_id=family.id,
        ),
        FamilyExpense(name="Mortgage payment", monthly_ils=to_decimal(5300), expense_type=loans, family_id=family.id),
        FamilyExpense(name="Household baseline", monthly_ils=to_decimal(9000), expense_type=living, family_id=family.id),
        FamilyExpense(name="Education and kids", monthly_ils=to_decimal(3000), expense_type=children, family_id=family.id),
    ])
    db.commit()
    logger.info("Seeded demo account %s (profile id=%s)", DEMO_EMAIL, family.id)
    return user
