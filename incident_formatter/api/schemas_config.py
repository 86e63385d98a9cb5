from typing import Any, Dict

from pydantic import BaseModel


class ConfigResponse(BaseModel):
    fieldConfig: Dict[str, Dict[str, Any]]
    sectionConfig: Dict[str, Dict[str, Any]]
