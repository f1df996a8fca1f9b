"""Applicant-side entities. Every row hangs off an ApplicantProfile."""

import uuid

from sqlalchemy import (
    Column,
    DateTime,
    ForeignKey,
    Integer,
    Numeric,
    SmallInteger,
    String,
    Text,
    Uuid,
)
from sqlalchemy.orm import relationship

from ..database import Base, time_stamp_column


class ApplicantProfile(Base):
    __tablename__ = "Applicant_Profiles"

    id = Column("Id", Uuid, primary_key=True, default=uuid.uuid4)
    login = Column("Login", Uuid, ForeignKey("Security_Logins.Id"), nullable=False)
    current_salary = Column("Current_Salary", Numeric(18, 2), nullable=True)
    current_rate = Column("Current_Rate", Numeric(18, 2), nullable=True)
    currency = Column("Currency", String(10), nullable=True)
    country = Column("Country_Code", String(10), ForeignKey("System_Country_Codes.Code"), nullable=True)
    province = Column("State_Province_Code", String(10), nullable=True)
    street = Column("Street_Address", String(100), nullable=True)
    city = Column("City_Town", String(100), nullable=True)
    postal_code = Column("Zip_Postal_Code", String(20), nullable=True)
    time_stamp = time_stamp_column()

    security_login = relationship("SecurityLogin", back_populates="applicant_profiles")
    system_country_code = relationship("SystemCountryCode", back_populates="applicant_profiles")
    applicant_educations = relationship("ApplicantEducation", back_populates="applicant_profile")
    applicant_job_applications = relationship("ApplicantJobApplication", back_populates="applicant_profile")
    applicant_resumes = relationship("ApplicantResume", back_populates="applicant_profile")
    applicant_skills = relationship("ApplicantSkill", back_populates="applicant_profile")
    applicant_work_histories = relationship("ApplicantWorkHistory", back_populates="applicant_profile")


class ApplicantEducation(Base):
    __tablename__ = "Applicant_Educations"

    id = Column("Id", Uuid, primary_key=True, default=uuid.uuid4)
    applicant = Column("Applicant", Uuid, ForeignKey("Applicant_Profiles.Id"), nullable=False)
    major = Column("Major", String(100), nullable=True)
    certificate_diploma = Column("Certificate_Diploma", String(100), nullable=True)
    start_date = Column("Start_Date", DateTime, nullable=True)
    completion_date = Column("Completion_Date", DateTime, nullable=True)
    completion_percent = Column("Completion_Percent", SmallInteger, nullable=True)
    time_stamp = time_stamp_column()

    applicant_profile = relationship("ApplicantProfile", back_populates="applicant_educations")


class ApplicantJobApplication(Base):
    __tablename__ = "Applicant_Job_Applications"

    id = Column("Id", Uuid, primary_key=True, default=uuid.uuid4)
    applicant = Column("Applicant", Uuid, ForeignKey("Applicant_Profiles.Id"), nullable=False)
    job = Column("Job", Uuid, ForeignKey("Company_Jobs.Id"), nullable=False)
    application_date = Column("Application_Date", DateTime, nullable=False)
    time_stamp = time_stamp_column()

    applicant_profile = relationship("ApplicantProfile", back_populates="applicant_job_applications")
    company_job = relationship("CompanyJob", back_populates="applicant_job_applications")


class ApplicantResume(Base):
    __tablename__ = "Applicant_Resumes"

    id = Column("Id", Uuid, primary_key=True, default=uuid.uuid4)
    applicant = Column("Applicant", Uuid, ForeignKey("Applicant_Profiles.Id"), nullable=False)
    resume = Column("Resume", Text, nullable=False)
    last_updated = Column("Last_Updated", DateTime, nullable=True)

    applicant_profile = relationship("ApplicantProfile", back_populates="applicant_resumes")


class ApplicantSkill(Base):
    __tablename__ = "Applicant_Skills"

    id = Column("Id", Uuid, primary_key=True, default=uuid.uuid4)
    applicant = Column("Applicant", Uuid, ForeignKey("Applicant_Profiles.Id"), nullable=False)
    skill = Column("Skill", String(100), nullable=False)
    skill_level = Column("Skill_Level", String(10), nullable=False)
    start_month = Column("Start_Month", SmallInteger, nullable=False)
    start_year = Column("Start_Year", Integer, nullable=False)
    end_month = Column("End_Month", SmallInteger, nullable=False)
    end_year = Column("End_Year", Integer, nullable=False)
    time_stamp = time_stamp_column()

    applicant_profile = relationship("ApplicantProfile", back_populates="applicant_skills")


class ApplicantWorkHistory(Base):
    __tablename__ = "Applicant_Work_History"

    id = Column("Id", Uuid, primary_key=True, default=uuid.uuid4)
    applicant = Column("Applicant", Uuid, ForeignKey("Applicant_Profiles.Id"), nullable=False)
    company_name = Column("Company_Name", String(150), nullable=False)
    country_code = Column("Country_Code", String(10), ForeignKey("System_Country_Codes.Code"), nullable=False)
    location = Column("Location", String(50), nullable=False)
    job_title = Column("Job_Title", String(50), nullable=False)
    job_description = Column("Job_Description", String(500), nullable=False)
    start_month = Column("Start_Month", SmallInteger, nullable=False)
    start_year = Column("Start_Year", Integer, nullable=False)
    end_month = Column("End_Month", SmallInteger, nullable=False)
    end_year = Column("End_Year", Integer, nullable=False)
    time_stamp = time_stamp_column()

    applicant_profile = relationship("ApplicantProfile", back_populates="applicant_work_histories")
    system_country_code = relationship("SystemCountryCode", back_populates="applicant_work_histories")
