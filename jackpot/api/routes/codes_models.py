from __future__ import annotations

from pydantic import BaseModel, Field

from jackpot.economy.codes.normalization import MAX_CODE_LENGTH


class AddCodeRequest(BaseModel):
    type: str = Field(min_length=1, max_length=16)
    code: str = Field(min_length=1, max_length=MAX_CODE_LENGTH)


class CodeRequest(BaseModel):
    code: str = Field(min_length=1, max_length=MAX_CODE_LENGTH)


class SuccessResponse(BaseModel):
    success: bool = True


class CodesResponse(BaseModel):
    mini: list[str]
    minor: list[str]
    mega: list[str]
    grand: list[str]


class ValidateCodeResponse(BaseModel):
    valid: bool
    tier: str | None = None
    reason: str | None = None
