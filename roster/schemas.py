from __future__ import annotations

from typing import Annotated, Any, Optional

from pydantic import BaseModel, Field

# 必填字段只校验“非空”，不做格式校验
NonEmpty = Annotated[str, Field(min_length=1)]

# SQLite INTEGER 为有符号 64 位
MAX_SQLITE_INT = 2**63 - 1
RowId = Annotated[int, Field(ge=1, le=MAX_SQLITE_INT)]


class Empty(BaseModel):
    pass


class RecordId(BaseModel):
    id: RowId


class AccountCreate(BaseModel):
    username: NonEmpty
    password: NonEmpty
    role: Optional[str] = None


class AccountUpdate(AccountCreate):
    id: RowId


class PersonnelFields(BaseModel):
    username: NonEmpty
    degree: NonEmpty
    police_no: NonEmpty
    birth_date: NonEmpty  # YYYY-MM-DD
    join_date: NonEmpty  # YYYY-MM-DD
    address: NonEmpty
    job: NonEmpty
    image: Optional[str] = None  # base64
    description: Optional[str] = None


class PersonnelUpdate(PersonnelFields):
    id: RowId


class PersonnelQuery(BaseModel):
    search: Optional[str] = None
    page_size: Optional[int] = Field(None, ge=1, le=MAX_SQLITE_INT)
    page_offset: Optional[int] = Field(None, ge=0, le=MAX_SQLITE_INT)


class OpenWindow(BaseModel):
    hash: str = ""


class Prompt(BaseModel):
    message: NonEmpty


class ReplyError(BaseModel):
    code: str
    message: str


class Reply(BaseModel):
    ok: bool
    data: Any = None
    error: Optional[ReplyError] = None

    @classmethod
    def success(cls, data: Any) -> "Reply":
        return cls(ok=True, data=data)

    @classmethod
    def failure(cls, code: str, message: str) -> "Reply":
        return cls(ok=False, error=ReplyError(code=code, message=message))
