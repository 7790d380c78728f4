# =============================================================================
# core/models/contact.py - Contact Form Schemas
# =============================================================================

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class ContactMessageCreate(BaseModel):
    """Message sent from the contact page."""

    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(..., min_length=2, max_length=100)
    email: EmailStr
    message: str = Field(..., min_length=10, max_length=1000)


class ContactMessageResponse(BaseModel):
    id: str
    message: str
