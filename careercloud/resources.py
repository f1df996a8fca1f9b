"""
Resource registry.

Ties each entity to its logic class and the REST path the admin UI
calls. The CLI, the Flask app and the client all look resources up here.
"""

from typing import Dict, List, NamedTuple

from . import logic

API_PREFIX = "/api/careercloud"


class Resource(NamedTuple):
    name: str
    logic_cls: type
    endpoint: str

    @property
    def poco_cls(self) -> type:
        return self.logic_cls.poco_cls

    @property
    def key_attr(self) -> str:
        return self.logic_cls.key_attr

    @property
    def path(self) -> str:
        return f"{API_PREFIX}/{self.endpoint}"


RESOURCES: List[Resource] = [
    Resource("system-country-code", logic.SystemCountryCodeLogic, "SystemCountryCode/v1/countrycode"),
    Resource("system-language-code", logic.SystemLanguageCodeLogic, "systemlanguagecode/v1/languagecode"),
    Resource("security-login", logic.SecurityLoginLogic, "securitylogin/v1/login"),
    Resource("security-role", logic.SecurityRoleLogic, "securityrole/v1/role"),
    Resource("security-logins-role", logic.SecurityLoginsRoleLogic, "securityloginsrole/v1/loginsrole"),
    Resource("security-logins-log", logic.SecurityLoginsLogLogic, "securityloginslog/v1/securityloginslog"),
    Resource("company-profile", logic.CompanyProfileLogic, "companyprofile/v1/companyprofile"),
    Resource("company-description", logic.CompanyDescriptionLogic, "companydescription/v1/description"),
    Resource("company-location", logic.CompanyLocationLogic, "companylocation/v1/location"),
    Resource("company-job", logic.CompanyJobLogic, "companyjob/v1/job"),
    Resource("company-job-description", logic.CompanyJobDescriptionLogic, "companyjobdescription/v1/jobdescription"),
    Resource("company-job-education", logic.CompanyJobEducationLogic, "companyjobeducation/v1/jobeducation"),
    Resource("company-job-skill", logic.CompanyJobSkillLogic, "companyjobskill/v1/jobskill"),
    Resource("applicant-profile", logic.ApplicantProfileLogic, "applicantprofile/v1/profile"),
    Resource("applicant-education", logic.ApplicantEducationLogic, "applicanteducation/v1/education"),
    Resource("applicant-skill", logic.ApplicantSkillLogic, "applicantskill/v1/skill"),
    Resource("applicant-work-history", logic.ApplicantWorkHistoryLogic, "applicantworkhistory/v1/workhistory"),
    Resource("applicant-resume", logic.ApplicantResumeLogic, "applicantresume/v1/resume"),
    Resource("applicant-job-application", logic.ApplicantJobApplicationLogic, "applicantjobapplication/v1/job"),
]

_BY_NAME: Dict[str, Resource] = {r.name: r for r in RESOURCES}


def get_resource(name: str) -> Resource:
    """Look up by registry name ("applicant-skill") or entity class name ("ApplicantSkill")."""
    if name in _BY_NAME:
        return _BY_NAME[name]
    for r in RESOURCES:
        if r.poco_cls.__name__ == name:
            return r
    raise KeyError(f"Unknown resource: {name}")
