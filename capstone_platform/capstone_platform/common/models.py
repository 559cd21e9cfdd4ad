from sqlalchemy import Column, Integer, String, Boolean, Text

from .db import Base


class Account(Base):
    __tablename__ = "tsao_accounts"
    id = Column("ID", Integer, primary_key=True, index=True)
    name = Column("Name", String(255), nullable=False, default="")
    # Soft-deleted rows keep their username reserved
    username = Column("Username", String(255), unique=True, index=True, nullable=False)
    password = Column("Password", String(64), nullable=False)
    role = Column("Role", String(255), nullable=False, default="")
    creation_date = Column("CreationDate", String(19), nullable=False)
    is_approved = Column("IsApproved", Boolean, default=False, nullable=False)
    is_deleted = Column("IsDeleted", Boolean, default=False, nullable=False)

    def __repr__(self):
        return f"<Account(id={self.id}, username={self.username}, role={self.role}, is_deleted={self.is_deleted})>"


class Record(Base):
    __tablename__ = "tsao_records"
    id = Column("ID", Integer, primary_key=True, index=True)
    account_id = Column("AccountID", Integer, nullable=False, index=True)
    contact_role = Column("ContactRole", String(255), nullable=False, default="")
    student_count = Column("StudentCount", Integer, nullable=False, default=0)
    acad_year = Column("AcadYear", String(32), nullable=False, default="", index=True)
    title = Column("Title", String(255), nullable=False, default="")
    company_name = Column("CompanyName", String(255), nullable=False, default="")
    company_poc = Column("CompanyPOC", String(255), nullable=False, default="")
    description = Column("Description", Text, nullable=False, default="")
    creation_date = Column("CreationDate", String(19), nullable=False)
    is_deleted = Column("IsDeleted", Boolean, default=False, nullable=False)

    def __repr__(self):
        return f"<Record(id={self.id}, account_id={self.account_id}, acad_year={self.acad_year}, title={self.title})>"
