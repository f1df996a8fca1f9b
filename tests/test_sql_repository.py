"""
Tests for the direct-statement repository backend.
"""

import pytest
import uuid
from datetime import datetime

from sqlalchemy.exc import IntegrityError

from careercloud.errors import NotSupportedError
from careercloud.pocos import ApplicantProfile, ApplicantSkill, SecurityLogin, SystemCountryCode
from careercloud.repositories import SqlRepository

SKILL_FIELDS = ["applicant", "skill", "skill_level", "start_month", "start_year", "end_month", "end_year"]


@pytest.fixture
def skills(sql_engine, seeded):
    return SqlRepository(ApplicantSkill, sql_engine)


@pytest.fixture
def make_skill(seeded):
    def _make(**overrides):
        values = dict(
            applicant=seeded.applicant,
            skill="Python",
            skill_level="Expert",
            start_month=1,
            start_year=2015,
            end_month=6,
            end_year=2020,
        )
        values.update(overrides)
        return ApplicantSkill(**values)

    return _make


class TestSqlRepositoryReads:
    """get_all / get_single."""

    def test_get_single_on_empty_store(self, skills):
        """An empty table gives None for clause and callable predicates."""
        assert skills.get_single(ApplicantSkill.skill == "Python") is None
        assert skills.get_single(lambda s: s.skill == "Python") is None

    def test_get_all_empty(self, skills):
        assert skills.get_all() == []

    def test_get_single_clause_and_callable(self, skills, make_skill):
        skills.add(make_skill(skill="Python"), make_skill(skill="Go"))

        by_clause = skills.get_single(ApplicantSkill.skill == "Go")
        by_callable = skills.get_single(lambda s: s.skill == "Go")

        assert by_clause.skill == "Go"
        assert by_callable.id == by_clause.id

    def test_callable_lookup_counted_as_get_single(self, skills, make_skill, quiet_logger):
        skills.add(make_skill())

        skills.get_single(lambda s: s.skill == "Python")

        ops = quiet_logger.get_metrics()["operations_by_entity"]["ApplicantSkill"]
        assert ops == {"add": 1, "get_single": 1}

    def test_columns_mapped_by_name(self, sql_engine, seeded):
        """Columns whose names differ from attribute names still land on the right field."""
        logins = SqlRepository(SecurityLogin, sql_engine)
        login = logins.get_single(SecurityLogin.id == seeded.login)

        assert login.login == "jdoe"
        assert login.email_address == "jdoe@example.com"
        assert login.preferred_language is None
        assert login.is_locked is False

    def test_relations_not_populated(self, sql_engine, seeded, make_skill):
        SqlRepository(ApplicantSkill, sql_engine).add(make_skill())
        profiles = SqlRepository(ApplicantProfile, sql_engine)

        (profile,) = profiles.get_all("applicant_skills")

        assert profile.id == seeded.applicant
        assert profile.applicant_skills == []


class TestSqlRepositoryWrites:
    """add / update / remove."""

    def test_round_trip(self, skills, make_skill):
        """A row read back equals what was added, except store-populated fields."""
        item = make_skill()
        skills.add(item)

        (stored,) = skills.get_all()
        for field in SKILL_FIELDS:
            assert getattr(stored, field) == getattr(item, field)
        assert stored.id == item.id
        assert isinstance(stored.time_stamp, datetime)

    def test_add_assigns_generated_id(self, skills, make_skill):
        item = make_skill()
        assert item.id is None

        skills.add(item)

        assert isinstance(item.id, uuid.UUID)

    def test_add_keeps_given_id(self, skills, make_skill):
        given = uuid.uuid4()
        skills.add(make_skill(id=given))
        assert skills.get_single(ApplicantSkill.id == given) is not None

    def test_natural_key(self, sql_engine, seeded):
        countries = SqlRepository(SystemCountryCode, sql_engine)
        countries.add(SystemCountryCode(code="US", name="United States"))

        assert countries.get_single(SystemCountryCode.code == "US").name == "United States"

    def test_partial_add_failure(self, skills, make_skill, quiet_logger):
        """A failing item stops the batch; earlier items stay written."""
        first = make_skill(skill="Python")
        broken = make_skill(skill="Rust", applicant=uuid.uuid4())
        last = make_skill(skill="Go")

        with pytest.raises(IntegrityError):
            skills.add(first, broken, last)

        assert [s.skill for s in skills.get_all()] == ["Python"]
        metrics = quiet_logger.get_metrics()
        assert metrics["store_errors"] == 1
        assert metrics["errors_by_type"]["IntegrityError"] == 1

    def test_update_replaces_row(self, skills, make_skill):
        item = make_skill()
        skills.add(item)

        item.skill_level = "Beginner"
        item.end_year = 2022
        skills.update(item)

        stored = skills.get_single(ApplicantSkill.id == item.id)
        assert stored.skill_level == "Beginner"
        assert stored.end_year == 2022

    def test_update_missing_key_is_noop(self, skills, make_skill):
        skills.add(make_skill())

        ghost = make_skill(id=uuid.uuid4(), skill="Haskell")
        skills.update(ghost)

        assert [s.skill for s in skills.get_all()] == ["Python"]

    def test_remove(self, skills, make_skill):
        keep, drop = make_skill(skill="Python"), make_skill(skill="Go")
        skills.add(keep, drop)

        skills.remove(drop)

        assert [s.skill for s in skills.get_all()] == ["Python"]

    def test_remove_missing_key_is_noop(self, skills, make_skill):
        skills.add(make_skill())

        skills.remove(make_skill(id=uuid.uuid4()))

        assert len(skills.get_all()) == 1

    def test_operations_counted(self, skills, make_skill, quiet_logger):
        skills.add(make_skill())
        skills.get_all()

        ops = quiet_logger.get_metrics()["operations_by_entity"]["ApplicantSkill"]
        assert ops == {"add": 1, "get_all": 1}


class TestSqlRepositoryUnsupported:
    def test_get_filtered(self, skills):
        with pytest.raises(NotSupportedError):
            skills.get_filtered(ApplicantSkill.skill == "Python")

    def test_call_procedure(self, skills):
        with pytest.raises(NotImplementedError):
            skills.call_procedure("usp_refresh", ("@Id", "1"))
