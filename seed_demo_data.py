"""
Seed the shared reference tier and the demo account.
Run:  python seed_demo_data.py   (after `alembic upgrade head`)
"""
import logging

from homeplanner.config import get_settings
from homeplanner.infrastructure.db.session import session_scope
from homeplanner.application.seed import DEMO_EMAIL, DEMO_PASSWORD, seed_reference_data, seed_demo_account

logging.basicConfig(level=get_settings().LOG_LEVEL)

with session_scope() as db:
    seed_reference_data(db)
    user_id = seed_demo_account(db).id

print(f"Demo login: {DEMO_EMAIL} / {DEMO_PASSWORD} (user id={user_id})")
