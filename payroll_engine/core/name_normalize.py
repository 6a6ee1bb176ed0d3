from __future__ import annotations

import unicodedata

ALL_DEPARTMENTS = "All"


def normalize(name: str) -> str:
    normalized = unicodedata.normalize("NFKC", name).strip().casefold()
    return " ".join(normalized.split())


def is_all(department: str | None) -> bool:
    return department is None or not department.strip() or normalize(department) == normalize(ALL_DEPARTMENTS)


def same_department(left: str | None, right: str | None) -> bool:
    if left is None or right is None:
        return False
    return normalize(left) == normalize(right)
