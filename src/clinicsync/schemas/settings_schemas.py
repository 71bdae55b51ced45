# src/clinicsync/schemas/settings_schemas.py
from typing import Optional
from .base_schemas import BaseSchema


class ClinicInfo(BaseSchema):
    """Clinic profile printed on documents and messages"""

    name: str = ""
    address: str = ""
    phone: str = ""
    email: str = ""


class MessageTemplate(BaseSchema):
    name: str
    template: str


class MessageTemplateUpdate(BaseSchema):
    template: Optional[str] = None
