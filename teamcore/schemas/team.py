#teamcore/schemas/team.py
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional
from datetime import datetime


class TeamUpdate(BaseModel):
    """
    TeamUpdate: partial update of identity fields and policy flags.
    """
    name: Optional[str] = Field(None, max_length=255, description="Display name")
    subdomain: Optional[str] = Field(None, description="Subdomain (a-z, 0-9, dashes; 4-32 chars)")
    domain: Optional[str] = Field(None, description="Custom domain")
    avatar_url: Optional[str] = Field(None, description="Avatar URL")
    sharing: Optional[bool] = Field(None, description="Public sharing allowed")
    guest_signin: Optional[bool] = Field(None, description="Guest sign-in allowed")
    document_embeds: Optional[bool] = Field(None, description="Document embeds allowed")


class TeamRead(BaseModel):
    """
    TeamRead: team as returned to clients, including derived url and logo_url.
    """
    id: str
    name: Optional[str] = None
    subdomain: Optional[str] = None
    domain: Optional[str] = None
    avatar_url: Optional[str] = None
    sharing: bool = True
    guest_signin: bool = True
    document_embeds: bool = True
    url: str = Field(..., description="Public URL")
    logo_url: str = Field(..., description="Avatar or generated placeholder")
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    deleted_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)
