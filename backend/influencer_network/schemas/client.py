"""Client schemas."""

import uuid
from datetime import datetime
from typing import Optional

from pydantic import Field

from influencer_network.schemas.common import AddressSchema, CamelModel

WEBSITE_PATTERN = r"^https?://.+"


class SocialMediaSchema(CamelModel):
    instagram: Optional[str] = None
    facebook: Optional[str] = None
    twitter: Optional[str] = None
    linkedin: Optional[str] = None
    youtube: Optional[str] = None
    tiktok: Optional[str] = None
    other: Optional[str] = None


class ClientBase(CamelModel):
    logo: Optional[str] = Field(default=None, max_length=500)
    is_gst_registered: bool = False
    gst_number: Optional[str] = Field(default=None, max_length=30)
    pan_number: Optional[str] = Field(default=None, max_length=20)
    business_address: Optional[AddressSchema] = None
    category: Optional[str] = Field(default=None, max_length=100)
    website: Optional[str] = Field(default=None, max_length=500, pattern=WEBSITE_PATTERN)
    social_media: Optional[SocialMediaSchema] = None
    notes: Optional[str] = Field(default=None, max_length=2000)


class ClientCreate(ClientBase):
    business_name: str = Field(min_length=1, max_length=200)


class ClientUpdate(ClientBase):
    business_name: Optional[str] = Field(default=None, min_length=1, max_length=200)
    is_gst_registered: Optional[bool] = None


class ClientResponse(ClientBase):
    id: uuid.UUID
    business_name: str
    created_by: Optional[uuid.UUID] = None
    created_at: datetime
    updated_at: datetime


class ClientData(CamelModel):
    client: ClientResponse
