"""Company-side entities: profiles, their descriptions/locations, and posted jobs."""

import uuid

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    LargeBinary,
    SmallInteger,
    String,
    Uuid,
)
from sqlalchemy.orm import relationship

from ..database import Base, time_stamp_column


class CompanyProfile(Base):
    __tablename__ = "Company_Profiles"

    id = Column("Id", Uuid, primary_key=True, default=uuid.uuid4)
    registration_date = Column("Registration_Date", DateTime, nullable=False)
    company_website = Column("Company_Website", String(100), nullable=True)
    contact_phone = Column("Contact_Phone", String(20), nullable=True)
    contact_name = Column("Contact_Name", String(50), nullable=True)
    company_logo = Column("Company_Logo", LargeBinary, nullable=True)
    time_stamp = time_stamp_column()

    company_jobs = relationship("CompanyJob", back_populates="company_profile")
    company_descriptions = relationship("CompanyDescription", back_populates="company_profile")
    company_locations = relationship("CompanyLocation", back_populates="company_profile")


class CompanyDescription(Base):
    __tablename__ = "Company_Descriptions"

    id = Column("Id", Uuid, primary_key=True, default=uuid.uuid4)
    company = Column("Company", Uuid, ForeignKey("Company_Profiles.Id"), nullable=False)
    language_id = Column("LanguageID", String(10), ForeignKey("System_Language_Codes.LanguageID"), nullable=False)
    company_name = Column("Company_Name", String(50), nullable=False)
    company_description = Column("Company_Description", String(1000), nullable=False)
    time_stamp = time_stamp_column()

    company_profile = relationship("CompanyProfile", back_populates="company_descriptions")
    system_language_code = relationship("SystemLanguageCode", back_populates="company_descriptions")


class CompanyLocation(Base):
    __tablename__ = "Company_Locations"

    id = Column("Id", Uuid, primary_key=True, default=uuid.uuid4)
    company = Column("Company", Uuid, ForeignKey("Company_Profiles.Id"), nullable=False)
    country_code = Column("Country_Code", String(10), ForeignKey("System_Country_Codes.Code"), nullable=False)
    province = Column("State_Province_Code", String(10), nullable=True)
    street = Column("Street_Address", String(100), nullable=True)
    city = Column("City_Town", String(100), nullable=True)
    postal_code = Column("Zip_Postal_Code", String(20), nullable=True)
    time_stamp = time_stamp_column()

    company_profile = relationship("CompanyProfile", back_populates="company_locations")
    system_country_code = relationship("SystemCountryCode", back_populates="company_locations")


class CompanyJob(Base):
    __tablename__ = "Company_Jobs"

    id = Column("Id", Uuid, primary_key=True, default=uuid.uuid4)
    company = Column("Company", Uuid, ForeignKey("Company_Profiles.Id"), nullable=False)
    profile_created = Column("Profile_Created", DateTime, nullable=False)
    # Advisory only; inactive jobs are still returned by every query.
    is_inactive = Column("Is_Inactive", Boolean, nullable=False, default=False)
    is_company_hidden = Column("Is_Company_Hidden", Boolean, nullable=False, default=False)
    time_stamp = time_stamp_column()

    company_profile = relationship("CompanyProfile", back_populates="company_jobs")
    company_job_educations = relationship("CompanyJobEducation", back_populates="company_job")
    company_job_descriptions = relationship("CompanyJobDescription", back_populates="company_job")
    company_job_skills = relationship("CompanyJobSkill", back_populates="company_job")
    applicant_job_applications = relationship("ApplicantJobApplication", back_populates="company_job")


class CompanyJobDescription(Base):
    __tablename__ = "Company_Jobs_Descriptions"

    id = Column("Id", Uuid, primary_key=True, default=uuid.uuid4)
    job = Column("Job", Uuid, ForeignKey("Company_Jobs.Id"), nullable=False)
    job_name = Column("Job_Name", String(100), nullable=True)
    job_descriptions = Column("Job_Descriptions", String(1000), nullable=True)
    time_stamp = time_stamp_column()

    company_job = relationship("CompanyJob", back_populates="company_job_descriptions")


class CompanyJobEducation(Base):
    __tablename__ = "Company_Job_Educations"

    id = Column("Id", Uuid, primary_key=True, default=uuid.uuid4)
    job = Column("Job", Uuid, ForeignKey("Company_Jobs.Id"), nullable=False)
    major = Column("Major", String(100), nullable=False)
    importance = Column("Importance", SmallInteger, nullable=False)
    time_stamp = time_stamp_column()

    company_job = relationship("CompanyJob", back_populates="company_job_educations")


class CompanyJobSkill(Base):
    __tablename__ = "Company_Job_Skills"

    id = Column("Id", Uuid, primary_key=True, default=uuid.uuid4)
    job = Column("Job", Uuid, ForeignKey("Company_Jobs.Id"), nullable=False)
    skill = Column("Skill", String(100), nullable=False)
    skill_level = Column("Skill_Level", String(10), nullable=False)
    importance = Column("Importance", Integer, nullable=False)
    time_stamp = time_stamp_column()

    company_job = relationship("CompanyJob", back_populates="company_job_skills")
