# tests/conftest.py
import pytest
from fastapi.testclient import TestClient

from israstat.api.http import app  # ensures imports resolve; run tests from repo root
from israstat.domain.mortgage import MortgageInputs


@pytest.fixture(scope="session")
def client():
    return TestClient(app)


@pytest.fixture
def default_inputs() -> MortgageInputs:
    """The calculator's opening state."""
    return MortgageInputs(
        initial_capital=800_000,
        monthly_gross_income=25_000,
        buyer_type="FIRST_HOME",
        dsr=0.30,
        interest_rate=0.051,
        term_years=25,
    )
