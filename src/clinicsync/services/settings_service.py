# src/clinicsync/services/settings_service.py
import json
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union
from pydantic import ValidationError
from clinicsync.core.config import settings
from clinicsync.schemas.settings_schemas import ClinicInfo
from clinicsync.utils.exceptions import InvalidEntityError
from clinicsync.utils.logger import setup_logger

logger = setup_logger("SETTINGS_SERVICE")

CLINIC_INFO_KEY = "clinic_info"
WHATSAPP_TEMPLATE_KEY = "whatsapp_template"
REMINDER_TEMPLATE_KEY = "reminder_template"

TEMPLATE_PLACEHOLDERS = (
    "patientName",
    "clinicName",
    "appointmentDate",
    "appointmentTime",
    "doctorName",
)

DEFAULT_TEMPLATE = (
    "Hello {patientName}, this is a reminder from {clinicName} dental clinic "
    "about your appointment on {appointmentDate} at {appointmentTime}. "
    "We look forward to seeing you. {doctorName}"
)

DEFAULT_TEMPLATES = {
    "whatsapp": DEFAULT_TEMPLATE,
    "reminder": DEFAULT_TEMPLATE,
}

TEMPLATE_KEYS = {
    "whatsapp": WHATSAPP_TEMPLATE_KEY,
    "reminder": REMINDER_TEMPLATE_KEY,
}


class SettingsStore:
    """Clinic profile and message templates kept in a local JSON file

    The file is read once on construction and rewritten on every change.
    """

    def __init__(self, path: Optional[Union[str, Path]] = None):
        self.path = Path(path or settings.SETTINGS_STORE_PATH)
        self.clinic_info = ClinicInfo()
        self.templates: Dict[str, str] = dict(DEFAULT_TEMPLATES)
        self.load()

    def load(self):
        if not self.path.exists():
            logger.info(f"No settings file at {self.path}, using defaults")
            return
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
            clinic_info = ClinicInfo.model_validate(data.get(CLINIC_INFO_KEY) or {})
        except (OSError, ValueError, ValidationError, AttributeError) as e:
            logger.warning(f"Unreadable settings file {self.path}, using defaults: {e}")
            return

        self.clinic_info = clinic_info
        for name, key in TEMPLATE_KEYS.items():
            if isinstance(data.get(key), str):
                self.templates[name] = data[key]

    def save(self):
        self.path.parent.mkdir(parents=True, exist_ok=True)
        payload: Dict[str, Any] = {CLINIC_INFO_KEY: self.clinic_info.model_dump()}
        for name, key in TEMPLATE_KEYS.items():
            payload[key] = self.templates[name]
        self.path.write_text(json.dumps(payload, indent=2, ensure_ascii=False), encoding="utf-8")
        logger.debug(f"Settings written to {self.path}")

    def update_clinic_info(self, info: Union[ClinicInfo, Mapping[str, Any]]) -> ClinicInfo:
        self.clinic_info = ClinicInfo.model_validate(info)
        self.save()
        logger.info("Clinic info updated")
        return self.clinic_info

    def get_template(self, name: str) -> str:
        if name not in TEMPLATE_KEYS:
            raise InvalidEntityError(f"Unknown message template '{name}'")
        return self.templates[name]

    def update_template(self, name: str, template: str) -> str:
        if name not in TEMPLATE_KEYS:
            raise InvalidEntityError(f"Unknown message template '{name}'")
        self.templates[name] = template
        self.save()
        logger.info(f"Message template '{name}' updated")
        return template

    def render_template(self, name: str, values: Mapping[str, Any]) -> str:
        """Fill the known placeholders; anything else in braces is left alone"""
        text = self.get_template(name)
        for placeholder in TEMPLATE_PLACEHOLDERS:
            if placeholder in values:
                text = text.replace(f"{{{placeholder}}}", str(values[placeholder]))
        if "clinicName" not in values:
            text = text.replace("{clinicName}", self.clinic_info.name)
        return text
