from pydantic import BaseModel, Field, field_validator
from typing import Any, Dict, Optional
import re


class FilterRequest(BaseModel):
    """Modelo para solicitud de filtrado de un mensaje HRMD_A"""

    receiver_service: str = Field(
        "",
        description="Sistema receptor del mensaje. Vacío: no se filtra por sociedad"
    )
    ownership: Dict[str, str] = Field(
        default_factory=dict,
        description="Pares BUKRS -> sistema, sin prefijo 'R'. Ej: {'1000': 'SYS_A'}"
    )
    payload: str = Field(
        ...,
        description="IDoc HRMD_A en XML"
    )

    @field_validator('receiver_service')
    @classmethod
    def validate_receiver_service(cls, v):
        return v.strip()

    @field_validator('ownership')
    @classmethod
    def validate_ownership(cls, v):
        for key, system_id in v.items():
            if not re.match(r'^[A-Za-z0-9]{1,4}$', key.strip()):
                raise ValueError(f"Código de sociedad inválido: {key}")
            if not system_id or not system_id.strip():
                raise ValueError(f"Sistema vacío para sociedad: {key}")
        return {key.strip(): system_id.strip() for key, system_id in v.items()}

    @field_validator('payload')
    @classmethod
    def validate_payload(cls, v):
        if not v or not v.strip():
            raise ValueError("payload no puede estar vacío")
        return v


class FilterResponse(BaseModel):
    """Modelo para respuesta de filtrado"""

    success: bool
    message: str
    payload: Optional[str] = None
    report: Dict[str, Any] = Field(default_factory=dict)
