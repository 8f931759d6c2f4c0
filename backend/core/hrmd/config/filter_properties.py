# backend/core/hrmd/config/filter_properties.py
"""
Carga de filter.properties: listas de infotipos que pasan el filtro.
"""
import logging
from functools import lru_cache
from pathlib import Path
from typing import Dict, FrozenSet, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, field_validator

from ..exceptions.xml_exceptions import FilterConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_PROPERTIES_PATH = Path(__file__).resolve().parent / "filter.properties"
# codificación por defecto de los .properties de Java
PROPERTIES_ENCODING = "latin-1"

MANAGEMENT_INFOTYPES_KEY = "management.infotypes"
EMPLOYEE_INFOTYPES_KEY = "employee.infotypes"


class FilterProperties(BaseModel):
    """Configuración inmutable del filtro, construida una vez al arrancar."""
    model_config = ConfigDict(frozen=True)

    management_infotypes: Tuple[str, ...]
    employee_infotypes: Tuple[str, ...]

    @field_validator('management_infotypes', 'employee_infotypes', mode='before')
    @classmethod
    def split_codes(cls, v):
        if isinstance(v, str):
            v = v.split(',')
        codes = tuple(str(code).strip() for code in v if str(code).strip())
        if not codes:
            raise ValueError("infotype list can not be empty")
        return codes

    @property
    def allowed_infotypes(self) -> FrozenSet[str]:
        return frozenset(self.employee_infotypes) | frozenset(self.management_infotypes)


def parse_properties(text: str) -> Dict[str, str]:
    """
    Parser mínimo de ficheros .properties de Java.

    Soporta 'key=value', 'key: value', comentarios con '#' o '!' y
    continuación de línea con barra invertida.
    """
    properties: Dict[str, str] = {}
    pending = ""

    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not pending and (not line or line[0] in "#!"):
            continue

        if line.endswith("\\") and not line.endswith("\\\\"):
            pending += line[:-1]
            continue

        line = pending + line
        pending = ""

        separators = [i for i in (line.find("="), line.find(":")) if i >= 0]
        if separators:
            index = min(separators)
            key, value = line[:index], line[index + 1:]
        else:
            key, value = line, ""

        properties[key.strip()] = value.strip()

    if pending:
        key, _, value = pending.partition("=")
        properties[key.strip()] = value.strip()

    return properties


def load_filter_properties(path: Optional[Union[str, Path]] = None) -> FilterProperties:
    """
    Lee filter.properties y valida las dos listas obligatorias.

    Raises:
        FilterConfigurationError: fichero ausente, clave ausente o lista vacía
    """
    path = Path(path) if path else DEFAULT_PROPERTIES_PATH

    try:
        properties = parse_properties(path.read_text(encoding=PROPERTIES_ENCODING))
    except OSError as e:
        raise FilterConfigurationError(f"Can't read '{path.name}': {str(e)}")

    values = {}
    for field_name, key in (("management_infotypes", MANAGEMENT_INFOTYPES_KEY),
                            ("employee_infotypes", EMPLOYEE_INFOTYPES_KEY)):
        raw = properties.get(key)
        if raw is None:
            raise FilterConfigurationError(f"Property missing in '{path.name}'", key)
        if not [code for code in raw.split(",") if code.strip()]:
            raise FilterConfigurationError(f"Property is empty in '{path.name}'", key)
        values[field_name] = raw

    filter_properties = FilterProperties(**values)
    logger.debug(f"Loaded Management Infotypes property with value: "
                 f"{list(filter_properties.management_infotypes)}")
    logger.debug(f"Loaded Employee Infotypes property with value: "
                 f"{list(filter_properties.employee_infotypes)}")
    return filter_properties


@lru_cache()
def get_filter_properties(path: Optional[str] = None) -> FilterProperties:
    """
    Instancia única de FilterProperties por ruta.
    El decorador lru_cache asegura que el fichero solo se lea una vez.
    """
    return load_filter_properties(path)
