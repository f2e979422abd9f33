"""Persisted record schemas.

Records are JSON documents validated with pydantic. ``schema_version``
guards against reading a file written by an incompatible release.
"""

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

SCHEMA_VERSION = 1


class _Record(BaseModel):
    model_config = ConfigDict(extra="forbid")

    schema_version: Literal[1] = SCHEMA_VERSION


class BankKeysRecord(BaseModel):
    model_config = ConfigDict(extra="forbid")

    encryption_key: str
    authentication_key: str
    signature_key: Optional[str] = None
    encryption_version: str = "E002"
    authentication_version: str = "X002"


class BankRecord(_Record):
    host_id: str = Field(..., min_length=1)
    url: str
    name: str
    use_certificate: bool = False
    public_keys: Optional[BankKeysRecord] = None


class PartnerRecord(_Record):
    partner_id: str = Field(..., min_length=1)
    host_id: str = Field(..., min_length=1)
    order_counter: int = Field(..., ge=0)


class UserRecord(_Record):
    user_id: str = Field(..., min_length=1)
    partner_id: str = Field(..., min_length=1)
    name: str
    email: str
    country: str
    organization: str
    initialized: bool = False
    initialized_hia: bool = False
    private_keys: dict[str, str]
