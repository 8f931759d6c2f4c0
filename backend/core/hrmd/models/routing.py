from dataclasses import dataclass, field
from typing import Dict, Mapping, Optional, Tuple

from ..constants import OWNERSHIP_NAMESPACE, ownership_key


class DynamicConfiguration:
    """
    Almacén clave/valor del mensaje, indexado por (namespace, nombre).

    Lo rellena la determinación de receptores antes de que corra el filtro.
    """

    def __init__(self, values: Optional[Mapping[Tuple[str, str], str]] = None):
        self._values: Dict[Tuple[str, str], str] = dict(values or {})

    @classmethod
    def from_mapping(cls,
                     mapping: Mapping[str, str],
                     namespace: str = OWNERSHIP_NAMESPACE) -> "DynamicConfiguration":
        """
        Construye el almacén a partir de un dict BUKRS -> sistema.

        Las claves son siempre códigos de sociedad tal cual ('1000', 'RU01');
        el prefijo 'R' de la configuración dinámica se añade siempre.
        """
        values = {}
        for company_code, system_id in mapping.items():
            values[(namespace, ownership_key(str(company_code).strip()))] = system_id
        return cls(values)

    def get(self, namespace: str, name: str) -> Optional[str]:
        return self._values.get((namespace, name))

    def put(self, namespace: str, name: str, value: str) -> None:
        self._values[(namespace, name)] = value

    def __len__(self) -> int:
        return len(self._values)


@dataclass
class RoutingContext:
    """Datos de enrutamiento del mensaje actual."""
    receiver_service: str = ""
    dynamic_configuration: DynamicConfiguration = field(default_factory=DynamicConfiguration)
    ownership_namespace: str = OWNERSHIP_NAMESPACE

    def owner_of(self, company_code: str) -> Optional[str]:
        """Sistema dueño de la sociedad, o None si no hay entrada 'R<BUKRS>'."""
        return self.dynamic_configuration.get(self.ownership_namespace,
                                              ownership_key(company_code))
