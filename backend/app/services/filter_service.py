from functools import lru_cache
from typing import Dict, Mapping, Optional, Union
import logging

from ...core.hrmd.orchestrator import HRMDFilterOrchestrator, TransformResult, create_orchestrator
from ...core.hrmd.models.routing import DynamicConfiguration, RoutingContext
from ..core.config import get_settings

logger = logging.getLogger(__name__)


@lru_cache()
def get_orchestrator() -> HRMDFilterOrchestrator:
    """
    Orquestador único del proceso, creado en el primer uso.

    Lanza FilterConfigurationError si filter.properties no se puede cargar;
    en ese caso no se cachea nada y el siguiente intento vuelve a leerlo.
    """
    settings = get_settings()
    properties_path = settings.FILTER_PROPERTIES_PATH
    return create_orchestrator(
        properties_path=properties_path,
        remove_cost_center=settings.REMOVE_COST_CENTER
    )


class FilterService:

    @staticmethod
    def build_context(receiver_service: Optional[str],
                      ownership: Mapping[str, str]) -> RoutingContext:
        """
        Construye el contexto de enrutamiento del mensaje.

        Args:
            receiver_service: sistema receptor del mensaje actual
            ownership: pares BUKRS -> sistema dueño (sin prefijo 'R')
        """
        settings = get_settings()
        return RoutingContext(
            receiver_service=(receiver_service or "").strip(),
            dynamic_configuration=DynamicConfiguration.from_mapping(
                ownership, namespace=settings.OWNERSHIP_NAMESPACE
            ),
            ownership_namespace=settings.OWNERSHIP_NAMESPACE
        )

    @staticmethod
    def filter_payload(payload: Union[bytes, str],
                       receiver_service: Optional[str],
                       ownership: Mapping[str, str],
                       source_name: Optional[str] = None) -> TransformResult:
        """
        Filtra un mensaje HRMD_A para un receptor.

        Un payload str ya viene decodificado y se devuelve como str; bytes
        se devuelven como bytes en la codificación declarada.

        Raises:
            FilterConfigurationError: configuración no disponible
        """
        orchestrator = get_orchestrator()
        context = FilterService.build_context(receiver_service, ownership)

        logger.info(f"Filtering message for receiver: '{context.receiver_service}' "
                    f"with {len(context.dynamic_configuration)} ownership entries")

        if isinstance(payload, str):
            result = orchestrator.transform_text(payload, context, source_name)
        else:
            result = orchestrator.transform(payload, context, source_name)

        logger.info(f"Filtering completed: {FilterService.summarize(result)}")
        return result

    @staticmethod
    def summarize(result: TransformResult) -> Dict[str, int]:
        report = result.report
        return {
            "removed_segments": len(report.removed_segments),
            "kept_persons": len(report.kept_persons),
            "removed_persons": len(report.removed_persons),
            "removed_cost_centers": len(report.removed_cost_centers)
        }
