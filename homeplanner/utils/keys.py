"""
Generated keys and codes for new rows
"""
import re
import secrets
import time
import unicodedata


def _millis() -> int:
    return int(time.time() * 1000)


def make_profile_key() -> str:
    """profile_<epoch ms>_<6 hex chars>"""
    return f"profile_{_millis()}_{secrets.token_hex(3)}"


def make_type_key() -> str:
    """type_<epoch ms>_<4 hex chars>"""
    return f"type_{_millis()}_{secrets.token_hex(2)}"


def make_scenario_key() -> str:
    return f"scenario_{_millis()}_{secrets.token_hex(2)}"


def make_item_code() -> str:
    return f"ITEM_{_millis()}"


def slugify(label: str) -> str:
    """
    Lower-case ASCII slug for a label

    Example:
        >>> slugify("Two-Storey House (Concrete)")
        "two_storey_house_concrete"
    """
    ascii_label = unicodedata.normalize("NFKD", label).encode("ascii", "ignore").decode("ascii")
    slug = re.sub(r"[^a-z0-9]+", "_", ascii_label.lower()).strip("_")
    # Non-latin labels (e.g. Hebrew) normalize to nothing
    return slug or f"house_{_millis()}"
