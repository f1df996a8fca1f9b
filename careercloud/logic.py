"""
Business-logic layer.

Every write goes through verify() first. A batch with any violation is
rejected as a whole with ValidationErrors, and the repository is never
called for it. Reads pass straight through.
"""

import uuid
from typing import Any, Iterable, List, Optional, Sequence

from . import rules as R
from .errors import ValidationError, ValidationErrors
from .logger import get_logger
from .pocos import (
    ApplicantEducation,
    ApplicantJobApplication,
    ApplicantProfile,
    ApplicantResume,
    ApplicantSkill,
    ApplicantWorkHistory,
    CompanyDescription,
    CompanyJob,
    CompanyJobDescription,
    CompanyJobEducation,
    CompanyJobSkill,
    CompanyLocation,
    CompanyProfile,
    SecurityLogin,
    SecurityLoginsLog,
    SecurityLoginsRole,
    SecurityRole,
    SystemCountryCode,
    SystemLanguageCode,
)
from .repositories import DataRepository


class BaseLogic:
    """Validation gate in front of one repository."""

    poco_cls: type = None
    rules: Sequence[R.Rule] = ()
    key_attr = "id"

    def __init__(self, repository: DataRepository):
        self.repository = repository

    def _key_clause(self, key):
        return getattr(self.poco_cls, self.key_attr) == key

    def verify(self, pocos: Iterable[Any]) -> List[ValidationError]:
        return R.verify(pocos, self.rules)

    def _guard(self, pocos: Sequence[Any], operation: str) -> None:
        errors = self.verify(pocos)
        if errors:
            logger = get_logger()
            logger.record_validation_failure(self.poco_cls.__name__, [e.code for e in errors])
            logger.warning(
                f"{self.poco_cls.__name__} {operation} rejected",
                items=len(pocos),
                codes=[e.code for e in errors],
            )
            raise ValidationErrors(errors)

    def get(self, id: uuid.UUID) -> Optional[Any]:
        return self.repository.get_single(self._key_clause(id))

    def get_all(self) -> List[Any]:
        return list(self.repository.get_all())

    def add(self, pocos: Sequence[Any]) -> None:
        pocos = list(pocos)
        self._guard(pocos, "add")
        self.repository.add(*pocos)

    def update(self, pocos: Sequence[Any]) -> None:
        pocos = list(pocos)
        self._guard(pocos, "update")
        self.repository.update(*pocos)

    def delete(self, pocos: Sequence[Any]) -> None:
        self.repository.remove(*pocos)


class CodeLogic(BaseLogic):
    """Lookup tables addressed by a natural code."""

    key_attr = "code"

    def get(self, code: str) -> Optional[Any]:
        return self.repository.get_single(self._key_clause(code))

    def delete(self, pocos: Sequence[Any]) -> None:
        # Lookups are verified on delete as well.
        pocos = list(pocos)
        self._guard(pocos, "delete")
        self.repository.remove(*pocos)


class ApplicantEducationLogic(BaseLogic):
    poco_cls = ApplicantEducation
    rules = R.APPLICANT_EDUCATION_RULES


class ApplicantJobApplicationLogic(BaseLogic):
    poco_cls = ApplicantJobApplication
    rules = R.APPLICANT_JOB_APPLICATION_RULES


class ApplicantProfileLogic(BaseLogic):
    poco_cls = ApplicantProfile
    rules = R.APPLICANT_PROFILE_RULES


class ApplicantResumeLogic(BaseLogic):
    poco_cls = ApplicantResume
    rules = R.APPLICANT_RESUME_RULES


class ApplicantSkillLogic(BaseLogic):
    poco_cls = ApplicantSkill
    rules = R.APPLICANT_SKILL_RULES


class ApplicantWorkHistoryLogic(BaseLogic):
    poco_cls = ApplicantWorkHistory
    rules = R.APPLICANT_WORK_HISTORY_RULES


class CompanyDescriptionLogic(BaseLogic):
    poco_cls = CompanyDescription
    rules = R.COMPANY_DESCRIPTION_RULES


class CompanyJobLogic(BaseLogic):
    poco_cls = CompanyJob
    rules = R.COMPANY_JOB_RULES


class CompanyJobDescriptionLogic(BaseLogic):
    poco_cls = CompanyJobDescription
    rules = R.COMPANY_JOB_DESCRIPTION_RULES


class CompanyJobEducationLogic(BaseLogic):
    poco_cls = CompanyJobEducation
    rules = R.COMPANY_JOB_EDUCATION_RULES


class CompanyJobSkillLogic(BaseLogic):
    poco_cls = CompanyJobSkill
    rules = R.COMPANY_JOB_SKILL_RULES


class CompanyLocationLogic(BaseLogic):
    poco_cls = CompanyLocation
    rules = R.COMPANY_LOCATION_RULES


class CompanyProfileLogic(BaseLogic):
    poco_cls = CompanyProfile
    rules = R.COMPANY_PROFILE_RULES


class SecurityLoginLogic(BaseLogic):
    poco_cls = SecurityLogin
    rules = R.SECURITY_LOGIN_RULES


class SecurityLoginsLogLogic(BaseLogic):
    poco_cls = SecurityLoginsLog
    rules = R.SECURITY_LOGINS_LOG_RULES


class SecurityLoginsRoleLogic(BaseLogic):
    poco_cls = SecurityLoginsRole
    rules = R.SECURITY_LOGINS_ROLE_RULES


class SecurityRoleLogic(BaseLogic):
    poco_cls = SecurityRole
    rules = R.SECURITY_ROLE_RULES


class SystemCountryCodeLogic(CodeLogic):
    poco_cls = SystemCountryCode
    rules = R.SYSTEM_COUNTRY_CODE_RULES


class SystemLanguageCodeLogic(CodeLogic):
    poco_cls = SystemLanguageCode
    rules = R.SYSTEM_LANGUAGE_CODE_RULES
    key_attr = "language_id"
