"""
Entity definitions.

Flat records mirroring one table row each. Relationship attributes are
filled only by the ORM backend; the direct-statement backend leaves them
empty, so callers must not rely on them there.
"""

from .system import SystemCountryCode, SystemLanguageCode
from .security import SecurityLogin, SecurityLoginsLog, SecurityRole, SecurityLoginsRole
from .applicant import (
    ApplicantProfile,
    ApplicantEducation,
    ApplicantJobApplication,
    ApplicantResume,
    ApplicantSkill,
    ApplicantWorkHistory,
)
from .company import (
    CompanyProfile,
    CompanyDescription,
    CompanyLocation,
    CompanyJob,
    CompanyJobDescription,
    CompanyJobEducation,
    CompanyJobSkill,
)

__all__ = [
    "SystemCountryCode",
    "SystemLanguageCode",
    "SecurityLogin",
    "SecurityLoginsLog",
    "SecurityRole",
    "SecurityLoginsRole",
    "ApplicantProfile",
    "ApplicantEducation",
    "ApplicantJobApplication",
    "ApplicantResume",
    "ApplicantSkill",
    "ApplicantWorkHistory",
    "CompanyProfile",
    "CompanyDescription",
    "CompanyLocation",
    "CompanyJob",
    "CompanyJobDescription",
    "CompanyJobEducation",
    "CompanyJobSkill",
]
