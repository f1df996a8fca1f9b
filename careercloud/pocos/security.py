import uuid

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, String, Uuid
from sqlalchemy.orm import relationship

from ..database import Base, time_stamp_column


class SecurityLogin(Base):
    """Account used by applicants and company staff to sign in."""

    __tablename__ = "Security_Logins"

    id = Column("Id", Uuid, primary_key=True, default=uuid.uuid4)
    login = Column("Login", String(50), nullable=False)
    password = Column("Password", String(100), nullable=False)
    created = Column("Created_Date", DateTime, nullable=False)
    password_update = Column("Password_Update_Date", DateTime, nullable=True)
    agreement_accepted = Column("Agreement_Accepted_Date", DateTime, nullable=True)
    is_locked = Column("Is_Locked", Boolean, nullable=False, default=False)
    is_inactive = Column("Is_Inactive", Boolean, nullable=False, default=False)
    email_address = Column("Email_Address", String(50), nullable=False)
    phone_number = Column("Phone_Number", String(20), nullable=True)
    full_name = Column("Full_Name", String(100), nullable=True)
    force_change_password = Column("Force_Change_Password", Boolean, nullable=False, default=False)
    # Column name keeps the historical spelling.
    preferred_language = Column("Prefferred_Language", String(10), nullable=True)
    time_stamp = time_stamp_column()

    applicant_profiles = relationship("ApplicantProfile", back_populates="security_login")
    security_logins_logs = relationship("SecurityLoginsLog", back_populates="security_login")
    security_logins_roles = relationship("SecurityLoginsRole", back_populates="security_login")


class SecurityLoginsLog(Base):
    __tablename__ = "Security_Logins_Log"

    id = Column("Id", Uuid, primary_key=True, default=uuid.uuid4)
    login = Column("Login", Uuid, ForeignKey("Security_Logins.Id"), nullable=False)
    source_ip = Column("Source_IP", String(15), nullable=False)
    logon_date = Column("Logon_Date", DateTime, nullable=False)
    is_successful = Column("Is_Succesful", Boolean, nullable=False, default=False)

    security_login = relationship("SecurityLogin", back_populates="security_logins_logs")


class SecurityRole(Base):
    __tablename__ = "Security_Roles"

    id = Column("Id", Uuid, primary_key=True, default=uuid.uuid4)
    role = Column("Role", String(50), nullable=False)
    # Advisory only; rows are never soft-deleted through this flag.
    is_inactive = Column("Is_Inactive", Boolean, nullable=False, default=False)

    security_logins_roles = relationship("SecurityLoginsRole", back_populates="security_role")


class SecurityLoginsRole(Base):
    __tablename__ = "Security_Logins_Roles"

    id = Column("Id", Uuid, primary_key=True, default=uuid.uuid4)
    login = Column("Login", Uuid, ForeignKey("Security_Logins.Id"), nullable=False)
    role = Column("Role", Uuid, ForeignKey("Security_Roles.Id"), nullable=False)
    time_stamp = time_stamp_column()

    security_login = relationship("SecurityLogin", back_populates="security_logins_roles")
    security_role = relationship("SecurityRole", back_populates="security_logins_roles")
