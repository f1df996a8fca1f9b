"""
Pytest configuration and shared fixtures.
"""

import pytest
import json
import uuid
from datetime import datetime
from pathlib import Path
from types import SimpleNamespace

from careercloud.database import create_db_engine, get_session, init_database
from careercloud.logger import get_logger, reset_logger
from careercloud.pocos import (
    ApplicantProfile,
    CompanyJob,
    CompanyProfile,
    SecurityLogin,
    SystemCountryCode,
    SystemLanguageCode,
)


@pytest.fixture(autouse=True)
def quiet_logger(tmp_path):
    """Fresh global logger per test, writing only to a temp directory."""
    reset_logger()
    logger = get_logger(log_dir=tmp_path / "logs", enable_console=False)
    yield logger
    reset_logger()


@pytest.fixture
def db_url(tmp_path) -> str:
    return f"sqlite:///{tmp_path / 'careercloud.db'}"


@pytest.fixture
def engine(db_url):
    """Pooled engine on a freshly created schema."""
    engine = init_database(db_url)
    yield engine
    engine.dispose()


@pytest.fixture
def sql_engine(engine, db_url):
    """NullPool engine on the same database, as the direct-statement backend uses."""
    sql_engine = create_db_engine(db_url, pooled=False)
    yield sql_engine
    sql_engine.dispose()


@pytest.fixture
def db_session(engine):
    session = get_session(engine)
    yield session
    session.close()


@pytest.fixture
def seeded(engine):
    """
    Parent rows every child entity needs so foreign keys hold.

    Returns the keys only; instances would be detached once the seeding
    session closes.
    """
    session = get_session(engine)
    login = SecurityLogin(
        id=uuid.uuid4(),
        login="jdoe",
        password="secret",
        created=datetime(2020, 1, 1, 9, 0),
        email_address="jdoe@example.com",
    )
    profile = ApplicantProfile(id=uuid.uuid4(), login=login.id, country="CA")
    company = CompanyProfile(
        id=uuid.uuid4(),
        registration_date=datetime(2019, 6, 1),
        company_website="www.acme.com",
        contact_phone="416-555-1234",
    )
    job = CompanyJob(id=uuid.uuid4(), company=company.id, profile_created=datetime(2020, 2, 1))
    session.add_all(
        [
            SystemCountryCode(code="CA", name="Canada"),
            SystemLanguageCode(language_id="EN", name="English", native_name="English"),
            login,
        ]
    )
    session.flush()
    session.add_all([profile, company])
    session.flush()
    session.add(job)
    session.commit()
    keys = SimpleNamespace(
        country="CA",
        language="EN",
        login=login.id,
        applicant=profile.id,
        company=company.id,
        job=job.id,
    )
    session.close()
    return keys


@pytest.fixture
def write_settings(tmp_path, db_url):
    """Factory writing an appsettings.json for the temp database."""

    def _write(backend: str = "orm", **overrides) -> Path:
        data = {
            "ConnectionStrings": {"DataConnection": db_url},
            "Repository": {"Backend": backend},
            "Logging": {"Level": "DEBUG", "Directory": str(tmp_path / "logs")},
        }
        data.update(overrides)
        path = tmp_path / "appsettings.json"
        path.write_text(json.dumps(data))
        return path

    return _write
