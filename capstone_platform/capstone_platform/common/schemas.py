"""
Pydantic schemas for the JSON bodies exchanged by the microservices.

Wire field names are PascalCase (``ID``, ``Username``, ...). Incoming keys are
matched case-insensitively, unknown keys are ignored and absent fields take
their zero value. An explicit ``null`` counts as absent.
"""
from pydantic import BaseModel, ConfigDict, Field, model_validator

from typing import Any, Optional


class WireModel(BaseModel):
    """Base for request bodies."""

    @model_validator(mode="before")
    @classmethod
    def match_keys_case_insensitively(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        wire_names = {}
        zero_values = {}
        for name, field in cls.model_fields.items():
            wire_name = field.alias or name
            wire_names[wire_name.lower()] = wire_name
            zero_values[wire_name] = field.get_default()
        matched = {}
        # Exact matches win over case-insensitive ones
        for key, value in data.items():
            if isinstance(key, str) and key in wire_names.values():
                matched[key] = value
        for key, value in data.items():
            if not isinstance(key, str):
                continue
            wire_name = wire_names.get(key.lower())
            if wire_name is not None and wire_name not in matched:
                matched[wire_name] = value
        # JSON null leaves a field at its zero value
        return {
            key: zero_values[key] if value is None else value
            for key, value in matched.items()
        }


class Credentials(WireModel):
    username: str = Field("", alias="Username")
    password: str = Field("", alias="Password")


# Accounts
class AccountCreate(WireModel):
    name: str = Field("", alias="Name")
    username: str = Field("", alias="Username")
    password: str = Field("", alias="Password")
    role: str = Field("", alias="Role")


class AccountUpdate(WireModel):
    name: Optional[str] = Field(None, alias="Name")
    username: Optional[str] = Field(None, alias="Username")
    password: Optional[str] = Field(None, alias="Password")
    role: Optional[str] = Field(None, alias="Role")
    is_approved: Optional[bool] = Field(None, alias="IsApproved")


class AccountPublic(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int = Field(serialization_alias="ID")
    name: str = Field(serialization_alias="Name")
    username: str = Field(serialization_alias="Username")
    role: str = Field(serialization_alias="Role")
    creation_date: str = Field(serialization_alias="CreationDate")
    is_approved: bool = Field(serialization_alias="IsApproved")
    is_deleted: bool = Field(serialization_alias="IsDeleted")


class AccountOut(AccountPublic):
    # Echoes the stored digest, as existing clients expect
    password: str = Field(serialization_alias="Password")


# Records
class RecordCreate(WireModel):
    account_id: int = Field(0, alias="AccountID")
    contact_role: str = Field("", alias="ContactRole")
    student_count: int = Field(0, alias="StudentCount")
    acad_year: str = Field("", alias="AcadYear")
    title: str = Field("", alias="Title")
    company_name: str = Field("", alias="CompanyName")
    company_poc: str = Field("", alias="CompanyPOC")
    description: str = Field("", alias="Description")


class RecordUpdate(WireModel):
    account_id: Optional[int] = Field(None, alias="AccountID")
    contact_role: Optional[str] = Field(None, alias="ContactRole")
    student_count: Optional[int] = Field(None, alias="StudentCount")
    acad_year: Optional[str] = Field(None, alias="AcadYear")
    title: Optional[str] = Field(None, alias="Title")
    company_name: Optional[str] = Field(None, alias="CompanyName")
    company_poc: Optional[str] = Field(None, alias="CompanyPOC")
    description: Optional[str] = Field(None, alias="Description")


class RecordOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int = Field(serialization_alias="ID")
    account_id: int = Field(serialization_alias="AccountID")
    contact_role: str = Field(serialization_alias="ContactRole")
    student_count: int = Field(serialization_alias="StudentCount")
    acad_year: str = Field(serialization_alias="AcadYear")
    title: str = Field(serialization_alias="Title")
    company_name: str = Field(serialization_alias="CompanyName")
    company_poc: str = Field(serialization_alias="CompanyPOC")
    description: str = Field(serialization_alias="Description")
    creation_date: str = Field(serialization_alias="CreationDate")
    is_deleted: bool = Field(serialization_alias="IsDeleted")
