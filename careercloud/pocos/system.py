"""Lookup tables keyed by a natural code instead of a generated id."""

from sqlalchemy import Column, String
from sqlalchemy.orm import relationship

from ..database import Base


class SystemCountryCode(Base):
    __tablename__ = "System_Country_Codes"

    code = Column("Code", String(10), primary_key=True)
    name = Column("Name", String(50), nullable=False)

    applicant_profiles = relationship("ApplicantProfile", back_populates="system_country_code")
    applicant_work_histories = relationship("ApplicantWorkHistory", back_populates="system_country_code")
    company_locations = relationship("CompanyLocation", back_populates="system_country_code")


class SystemLanguageCode(Base):
    __tablename__ = "System_Language_Codes"

    language_id = Column("LanguageID", String(10), primary_key=True)
    name = Column("Name", String(50), nullable=False)
    native_name = Column("Native_Name", String(50), nullable=False)

    company_descriptions = relationship("CompanyDescription", back_populates="system_language_code")
