"""
Business rules.

Each entity owns a table of independent rules. A rule is a numeric code,
a message template formatted with the offending item as ``p``, and a
predicate that returns True when the item breaks the rule. verify() runs
every rule against every item and returns all violations; it never stops
at the first one.

Codes are a fixed taxonomy shared with existing clients. Some are reused
across entities (107) and some entities have paired rules under one code
(null vs too short); do not renumber.
"""

import re
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Iterable, List, NamedTuple

from .errors import ValidationError


class Rule(NamedTuple):
    code: int
    message: str
    violated: Callable[[Any], bool]


def _is_null_or_empty(v: Any) -> bool:
    return v is None or v == ""


def _shorter_than(n: int) -> Callable[[Any], bool]:
    # Only fires on a present value; the paired null rule covers absence.
    return lambda v: not _is_null_or_empty(v) and len(v) < n


def _utc(v: Any) -> Any:
    # Naive values are taken as UTC; aware ones are converted.
    if isinstance(v, datetime) and v.tzinfo is not None:
        return v.astimezone(timezone.utc).replace(tzinfo=None)
    return v


def _in_future(v: Any) -> bool:
    return v is not None and _utc(v) > datetime.now(timezone.utc).replace(tzinfo=None)


def _below(limit) -> Callable[[Any], bool]:
    return lambda v: v is not None and v < limit


def _not_a_month(v: Any) -> bool:
    return v is not None and not 1 <= v <= 12


def _before(later: Any, earlier: Any) -> bool:
    return later is not None and earlier is not None and _utc(later) < _utc(earlier)


PHONE_PATTERN = re.compile(r"[0-9]{3}-[0-9]{3}-[0-9]{4}")

# Optional scheme and www prefix, one label of letters, digits or "!" with
# single inner hyphens (at least two characters), then .ca, .biz or .com.
WEBSITE_PATTERN = re.compile(
    r"\A(?:(?:http)?s?://)?(?:www\.)?"
    r"(?=[a-z0-9!-]{2,}\.)[a-z0-9!]+(?:-[a-z0-9!]+)*"
    r"\.(?:ca|biz|com)\Z"
)


def is_valid_phone(v: str) -> bool:
    return PHONE_PATTERN.fullmatch(v) is not None


def is_valid_website(v: str) -> bool:
    return WEBSITE_PATTERN.match(v) is not None


APPLICANT_EDUCATION_RULES = [
    Rule(107, "Major field cannot be null", lambda p: _is_null_or_empty(p.major)),
    Rule(107, "Major field cannot be of less than 3 characters.", lambda p: _shorter_than(3)(p.major)),
    Rule(108, "Start date for {p.id} cannot be greater than today's date.", lambda p: _in_future(p.start_date)),
    Rule(
        109,
        "Completion date for {p.id} cannot be earlier than the start date.",
        lambda p: _before(p.completion_date, p.start_date),
    ),
]

APPLICANT_JOB_APPLICATION_RULES = [
    Rule(110, "Application Date for {p.id} cannot be greater than today.", lambda p: _in_future(p.application_date)),
]

APPLICANT_PROFILE_RULES = [
    Rule(111, "Current Salary for {p.id} cannot be negative.", lambda p: _below(0)(p.current_salary)),
    Rule(112, "Current Rate {p.id} cannot be negative.", lambda p: _below(0)(p.current_rate)),
]

APPLICANT_RESUME_RULES = [
    Rule(113, "Resume field cannot be empty.", lambda p: _is_null_or_empty(p.resume)),
]

APPLICANT_SKILL_RULES = [
    Rule(101, "The Start Month for {p.id} cannot be greater than 12.", lambda p: _not_a_month(p.start_month)),
    Rule(102, "The Start Month {p.id} cannot be greater than 12.", lambda p: _not_a_month(p.end_month)),
    Rule(103, "The year for {p.id} Cannot be less then 1900.", lambda p: _below(1900)(p.start_year)),
    Rule(
        104,
        "End year for {p.id} cannot be less than start year.",
        lambda p: _before(p.end_year, p.start_year),
    ),
]

APPLICANT_WORK_HISTORY_RULES = [
    Rule(
        105,
        "Company Name for {p.id} must be of more than 2 characters",
        lambda p: p.company_name is None or len(p.company_name) < 3,
    ),
]

COMPANY_DESCRIPTION_RULES = [
    Rule(106, "Company Name for {p.id} cannot be null.", lambda p: _is_null_or_empty(p.company_name)),
    Rule(106, "Company Name must be of more than 2 characters.", lambda p: _shorter_than(3)(p.company_name)),
    Rule(107, "Company Description for {p.id} cannot be null.", lambda p: _is_null_or_empty(p.company_description)),
    Rule(
        107,
        "Company Description must be of more than 2 characters.",
        lambda p: _shorter_than(3)(p.company_description),
    ),
]

COMPANY_JOB_EDUCATION_RULES = [
    Rule(200, "Major for {p.id} cannot be empty", lambda p: _is_null_or_empty(p.major)),
    Rule(200, "Major for {p.id} must be at least 2 characters.", lambda p: _shorter_than(2)(p.major)),
    Rule(201, "Importance field's value cannot be less than 0", lambda p: _below(0)(p.importance)),
]

COMPANY_JOB_DESCRIPTION_RULES = [
    Rule(300, "Job Name for {p.id} cannot be null.", lambda p: _is_null_or_empty(p.job_name)),
    Rule(301, "Job Description for {p.id} cannot be null.", lambda p: _is_null_or_empty(p.job_descriptions)),
]

COMPANY_JOB_SKILL_RULES = [
    Rule(400, "Importance field value cannot be less than 0", lambda p: _below(0)(p.importance)),
]

COMPANY_LOCATION_RULES = [
    Rule(500, "Country Code cannot be empty", lambda p: _is_null_or_empty(p.country_code)),
    Rule(501, "Province for {p.id} cannot be empty", lambda p: _is_null_or_empty(p.province)),
    Rule(502, "Street for {p.id} cannot be empty", lambda p: _is_null_or_empty(p.street)),
    Rule(503, "City for {p.id} cannot be empty", lambda p: _is_null_or_empty(p.city)),
    Rule(504, "Postal Code for {p.id} cannot be empty", lambda p: _is_null_or_empty(p.postal_code)),
]

COMPANY_PROFILE_RULES = [
    Rule(600, "Company Website for {p.id} cannot be empty.", lambda p: _is_null_or_empty(p.company_website)),
    Rule(
        600,
        "You entered '{p.company_website}' which is an invalid website address "
        "as only .ca, .com, and .biz domains are allowed.",
        lambda p: not _is_null_or_empty(p.company_website) and not is_valid_website(p.company_website),
    ),
    Rule(601, "Contact Phone Number is required", lambda p: _is_null_or_empty(p.contact_phone)),
    Rule(
        601,
        "Contact Phone must correspond to a valid phone number (e.g., 416-555-1234).",
        lambda p: not _is_null_or_empty(p.contact_phone) and not is_valid_phone(p.contact_phone),
    ),
]

SECURITY_ROLE_RULES = [
    Rule(800, "Role for {p.id} cannot be empty.", lambda p: _is_null_or_empty(p.role)),
]

SYSTEM_COUNTRY_CODE_RULES = [
    Rule(900, "Country Code cannot be empty.", lambda p: _is_null_or_empty(p.code)),
    Rule(901, "Country Name for {p.code} cannot be empty.", lambda p: _is_null_or_empty(p.name)),
]

SYSTEM_LANGUAGE_CODE_RULES = [
    Rule(1000, "Language ID cannot be empty.", lambda p: _is_null_or_empty(p.language_id)),
    Rule(1001, "Language Name for {p.language_id} cannot be empty.", lambda p: _is_null_or_empty(p.name)),
    Rule(
        1002,
        "Native Language Name for {p.language_id} cannot be empty.",
        lambda p: _is_null_or_empty(p.native_name),
    ),
]

# No rules yet; the verify step still runs.
COMPANY_JOB_RULES: List[Rule] = []
SECURITY_LOGIN_RULES: List[Rule] = []
SECURITY_LOGINS_LOG_RULES: List[Rule] = []
SECURITY_LOGINS_ROLE_RULES: List[Rule] = []


RULES_BY_ENTITY: Dict[str, List[Rule]] = {
    "ApplicantEducation": APPLICANT_EDUCATION_RULES,
    "ApplicantJobApplication": APPLICANT_JOB_APPLICATION_RULES,
    "ApplicantProfile": APPLICANT_PROFILE_RULES,
    "ApplicantResume": APPLICANT_RESUME_RULES,
    "ApplicantSkill": APPLICANT_SKILL_RULES,
    "ApplicantWorkHistory": APPLICANT_WORK_HISTORY_RULES,
    "CompanyDescription": COMPANY_DESCRIPTION_RULES,
    "CompanyJob": COMPANY_JOB_RULES,
    "CompanyJobDescription": COMPANY_JOB_DESCRIPTION_RULES,
    "CompanyJobEducation": COMPANY_JOB_EDUCATION_RULES,
    "CompanyJobSkill": COMPANY_JOB_SKILL_RULES,
    "CompanyLocation": COMPANY_LOCATION_RULES,
    "CompanyProfile": COMPANY_PROFILE_RULES,
    "SecurityLogin": SECURITY_LOGIN_RULES,
    "SecurityLoginsLog": SECURITY_LOGINS_LOG_RULES,
    "SecurityLoginsRole": SECURITY_LOGINS_ROLE_RULES,
    "SecurityRole": SECURITY_ROLE_RULES,
    "SystemCountryCode": SYSTEM_COUNTRY_CODE_RULES,
    "SystemLanguageCode": SYSTEM_LANGUAGE_CODE_RULES,
}


def check(poco: Any, rules: Iterable[Rule]) -> List[ValidationError]:
    """Violations of one item, in rule order."""
    return [
        ValidationError(rule.code, rule.message.format(p=poco))
        for rule in rules
        if rule.violated(poco)
    ]


def verify(pocos: Iterable[Any], rules: Iterable[Rule]) -> List[ValidationError]:
    """
    Returns every violation of every item. Empty list means valid.
    Items are checked in order; within an item, rules run in table order.
    """
    rules = list(rules)
    errors: List[ValidationError] = []
    for poco in pocos:
        errors.extend(check(poco, rules))
    return errors
