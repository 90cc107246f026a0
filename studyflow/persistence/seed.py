"""
Bundled seed datasets used when a storage slot is unset.
"""

import json
from functools import lru_cache
from importlib import resources
from typing import List

from ..core.enums import COURSES_STORAGE_KEY, ASSIGNMENTS_STORAGE_KEY
from ..core.interfaces import Record


SEED_FILES = {
    COURSES_STORAGE_KEY: "courses.json",
    ASSIGNMENTS_STORAGE_KEY: "assignments.json",
}


@lru_cache(maxsize=None)
def _read_seed_file(filename: str) -> str:
    return resources.files(__package__).joinpath("seed_data").joinpath(filename).read_text(encoding="utf-8")


def load_seed(filename: str) -> List[Record]:
    """Return a fresh copy of a bundled dataset."""
    return json.loads(_read_seed_file(filename))


def seed_for_key(key: str) -> List[Record]:
    """Return the seed dataset for a storage key, or an empty list."""
    filename = SEED_FILES.get(key)
    if filename is None:
        return []
    return load_seed(filename)
