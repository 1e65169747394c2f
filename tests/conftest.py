from __future__ import annotations

from collections.abc import Iterator

import pytest

from testmatch.matcher import get_case_insensitive, set_case_insensitive


@pytest.fixture(autouse=True)
def case_sensitive() -> Iterator[None]:
    """Run every test case-sensitive, whatever the host platform, and restore after."""
    saved = get_case_insensitive()
    set_case_insensitive(False)
    yield
    set_case_insensitive(saved)
