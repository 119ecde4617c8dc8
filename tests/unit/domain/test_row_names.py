from __future__ import annotations

from rabbitry.domain.services.row_names import PLANET_NAMES, next_row_name


def test_first_row_is_mercury():
    assert next_row_name([]) == "Mercury"


def test_skips_names_in_use():
    assert next_row_name(["Mercury", "Venus", "Mars"]) == "Earth"


def test_falls_back_to_numbered_rows_when_pool_exhausted():
    assert next_row_name(list(PLANET_NAMES)) == f"Row-{len(PLANET_NAMES) + 1}"


def test_custom_pool():
    assert next_row_name(["North"], pool=("North", "South")) == "South"
    assert next_row_name(["North", "South"], pool=("North", "South")) == "Row-3"
