import itertools

import pytest
from click.testing import CliRunner


@pytest.fixture()
def cli_runner() -> CliRunner:
    """Provides a reusable Click CLI runner."""
    return CliRunner()


@pytest.fixture()
def sequential_ids():
    """Provides a deterministic block identifier factory: id00001, id00002, ..."""
    counter = itertools.count(1)
    return lambda: f"id{next(counter):05d}"
