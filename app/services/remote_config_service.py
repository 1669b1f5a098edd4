"""
Maps the app's eleven Remote Config parameters to a flat JSON object.

Values are stored as strings in the template; BOOLEAN parameters read back
as True only when the stored value is exactly "true".
"""

from enum import Enum
from typing import Any, Dict, NamedTuple
import logging

from .remote_config_client import RemoteConfigTemplate, remote_config_client

logger = logging.getLogger(__name__)


class ParameterType(str, Enum):
    BOOLEAN = "BOOLEAN"
    STRING = "STRING"


class ConfigParameter(NamedTuple):
    value_type: ParameterType
    fallback: Any


CONFIG_PARAMETERS: Dict[str, ConfigParameter] = {
    "christmas_enabled": ConfigParameter(ParameterType.BOOLEAN, False),
    "admin_hidden": ConfigParameter(ParameterType.BOOLEAN, False),
    "maintenance_mode": ConfigParameter(ParameterType.BOOLEAN, False),
    "banner_text": ConfigParameter(ParameterType.STRING, ""),
    # App update / branding
    "app_logo_url": ConfigParameter(ParameterType.STRING, ""),
    "latest_version_code": ConfigParameter(ParameterType.STRING, "1"),
    "update_url": ConfigParameter(ParameterType.STRING, ""),
    "force_update": ConfigParameter(ParameterType.BOOLEAN, False),
    # Support chat
    "tawk_link": ConfigParameter(ParameterType.STRING, ""),
    "use_tawk": ConfigParameter(ParameterType.BOOLEAN, False),
    "whatsapp_number": ConfigParameter(ParameterType.STRING, "+254702716440"),
}


def read_parameters(parameters: Dict[str, Any]) -> Dict[str, Any]:
    """Typed view of the known parameters' default values"""
    config = {}
    for key, param in CONFIG_PARAMETERS.items():
        value = ((parameters.get(key) or {}).get("defaultValue") or {}).get("value")
        if param.value_type == ParameterType.BOOLEAN:
            config[key] = value == "true"
        else:
            config[key] = value or param.fallback
    return config


def to_template_value(value: Any, param: ConfigParameter) -> str:
    if param.value_type == ParameterType.BOOLEAN:
        if value is None:
            value = param.fallback
        if isinstance(value, bool):
            return "true" if value else "false"
        return str(value)
    return str(value or param.fallback)


def apply_parameters(template: RemoteConfigTemplate, values: Dict[str, Any]) -> None:
    """Overwrite the known parameters in place; unrelated parameters are kept"""
    for key, param in CONFIG_PARAMETERS.items():
        template.parameters[key] = {
            "defaultValue": {"value": to_template_value(values.get(key), param)},
            "valueType": param.value_type.value,
        }


class RemoteConfigService:
    def __init__(self):
        self.client = remote_config_client

    async def get_config(self) -> Dict[str, Any]:
        template = await self.client.get_template()
        return read_parameters(template.parameters)

    async def set_config(self, values: Dict[str, Any]) -> None:
        """Fetch, modify, validate, publish. Not isolated from concurrent writers."""
        try:
            template = await self.client.get_template()
        except Exception as e:
            logger.warning(f"Could not fetch Remote Config template, starting from an empty one: {e}")
            template = RemoteConfigTemplate({"parameters": {}})

        apply_parameters(template, values)

        validated = await self.client.validate_template(template)
        await self.client.publish_template(validated)


remote_config_service = RemoteConfigService()
