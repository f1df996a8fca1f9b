"""
Tests for the business-logic layer on both backends.
"""

import pytest
import uuid
from datetime import datetime, timedelta

from careercloud.config import Settings
from careercloud.errors import ValidationErrors
from careercloud.logic import (
    ApplicantEducationLogic,
    ApplicantSkillLogic,
    CompanyJobLogic,
    CompanyProfileLogic,
    SystemCountryCodeLogic,
    SystemLanguageCodeLogic,
)
from careercloud.pocos import (
    ApplicantEducation,
    ApplicantSkill,
    CompanyJob,
    CompanyProfile,
    SystemCountryCode,
    SystemLanguageCode,
)
from careercloud.repositories import OrmRepository, SqlRepository, create_repository


@pytest.fixture(params=["sql", "orm"])
def make_logic(request, engine, db_url, seeded):
    settings = Settings(db_url, backend=request.param)
    opened = []

    def _make(logic_cls):
        repository = create_repository(logic_cls.poco_cls, settings)
        opened.append(repository)
        return logic_cls(repository)

    yield _make
    for repository in opened:
        repository.close()


class SpyRepository:
    """Records calls instead of touching a store."""

    def __init__(self):
        self.calls = []

    def add(self, *items):
        self.calls.append(("add", items))

    def update(self, *items):
        self.calls.append(("update", items))

    def remove(self, *items):
        self.calls.append(("remove", items))


class TestValidationGate:
    """Rejected batches never reach the repository."""

    def test_education_scenario(self):
        """Short major plus a future start date gives two errors."""
        repo = SpyRepository()
        logic = ApplicantEducationLogic(repo)
        item = ApplicantEducation(
            id=uuid.uuid4(),
            applicant=uuid.uuid4(),
            major="AI",
            start_date=datetime.now() + timedelta(days=1),
        )

        with pytest.raises(ValidationErrors) as exc:
            logic.add([item])

        assert exc.value.codes == [107, 108]
        assert repo.calls == []

    def test_phone_scenario(self):
        """A phone number without dashes gives one 601 error."""
        repo = SpyRepository()
        item = CompanyProfile(
            id=uuid.uuid4(),
            registration_date=datetime(2020, 1, 1),
            company_website="www.acme.com",
            contact_phone="4165551234",
        )

        with pytest.raises(ValidationErrors) as exc:
            CompanyProfileLogic(repo).update([item])

        assert exc.value.codes == [601]
        assert "416-555-1234" in exc.value.errors[0].message
        assert repo.calls == []

    def test_one_bad_item_rejects_batch(self):
        repo = SpyRepository()
        good = ApplicantSkill(skill="SQL", skill_level="Mid", start_month=1, start_year=2010, end_month=2, end_year=2012)
        bad = ApplicantSkill(skill="C", skill_level="Mid", start_month=13, start_year=2010, end_month=2, end_year=2012)

        with pytest.raises(ValidationErrors):
            ApplicantSkillLogic(repo).add([good, bad])

        assert repo.calls == []

    def test_valid_batch_passes_through(self):
        repo = SpyRepository()
        items = [CompanyJob(company=uuid.uuid4(), profile_created=datetime(2020, 1, 1))]

        CompanyJobLogic(repo).add(items)

        assert repo.calls == [("add", tuple(items))]

    def test_delete_skips_rules(self):
        repo = SpyRepository()
        item = ApplicantSkill(start_month=13)

        ApplicantSkillLogic(repo).delete([item])

        assert repo.calls == [("remove", (item,))]

    def test_lookup_delete_is_verified(self):
        repo = SpyRepository()

        with pytest.raises(ValidationErrors) as exc:
            SystemCountryCodeLogic(repo).delete([SystemCountryCode(code="CA", name="")])

        assert exc.value.codes == [901]
        assert repo.calls == []

    def test_rejection_recorded(self, quiet_logger):
        with pytest.raises(ValidationErrors):
            ApplicantEducationLogic(SpyRepository()).add([ApplicantEducation(major="AI")])

        metrics = quiet_logger.get_metrics()
        assert metrics["validation_failures"] == 1
        assert metrics["violations_by_code"] == {"107": 1}

    def test_errors_carry_messages(self):
        with pytest.raises(ValidationErrors) as exc:
            SystemLanguageCodeLogic(SpyRepository()).add([SystemLanguageCode(language_id="EN", name="English")])

        (error,) = exc.value.errors
        assert error.code == 1002
        assert error.message == "Native Language Name for EN cannot be empty."
        assert len(exc.value) == 1


class TestLogicAgainstStore:
    """End to end through each configured backend."""

    def test_backend_selected_from_settings(self, make_logic, request):
        logic = make_logic(ApplicantSkillLogic)
        expected = SqlRepository if request.node.callspec.params["make_logic"] == "sql" else OrmRepository
        assert isinstance(logic.repository, expected)

    def test_add_get_update_delete(self, make_logic, seeded):
        logic = make_logic(ApplicantSkillLogic)
        item = ApplicantSkill(
            id=uuid.uuid4(),
            applicant=seeded.applicant,
            skill="Python",
            skill_level="Expert",
            start_month=3,
            start_year=2016,
            end_month=8,
            end_year=2021,
        )

        logic.add([item])
        assert logic.get(item.id).skill == "Python"

        replacement = ApplicantSkill(
            id=item.id,
            applicant=seeded.applicant,
            skill="Python",
            skill_level="Lead",
            start_month=3,
            start_year=2016,
            end_month=8,
            end_year=2023,
        )
        logic.update([replacement])
        stored = logic.get(item.id)
        assert (stored.skill_level, stored.end_year) == ("Lead", 2023)

        logic.delete([stored])
        assert logic.get(item.id) is None

    def test_get_unknown_id(self, make_logic):
        assert make_logic(ApplicantSkillLogic).get(uuid.uuid4()) is None

    def test_lookup_by_code(self, make_logic, seeded):
        countries = make_logic(SystemCountryCodeLogic)
        languages = make_logic(SystemLanguageCodeLogic)

        assert countries.get("CA").name == "Canada"
        assert languages.get("EN").native_name == "English"
        assert countries.get("ZZ") is None

    def test_get_all(self, make_logic, seeded):
        assert [j.id for j in make_logic(CompanyJobLogic).get_all()] == [seeded.job]

    def test_invalid_batch_leaves_store_unchanged(self, make_logic, seeded):
        logic = make_logic(CompanyProfileLogic)
        before = len(logic.get_all())

        with pytest.raises(ValidationErrors):
            logic.add(
                [
                    CompanyProfile(registration_date=datetime(2021, 1, 1), company_website="ok.com", contact_phone="416-555-0000"),
                    CompanyProfile(registration_date=datetime(2021, 1, 1), company_website="bad.org", contact_phone="416-555-0001"),
                ]
            )

        assert len(logic.get_all()) == before
