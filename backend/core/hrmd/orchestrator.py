#backend/core/hrmd/orchestrator.py
"""
Orchestrator del filtro HRMD_A: parseo, filtros y serialización.
"""
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import BinaryIO, Callable, Mapping, Optional, Union

from .config.filter_properties import FilterProperties, load_filter_properties
from .exceptions.xml_exceptions import (
    XMLParsingError,
    XMLSerializationError,
    FilterConfigurationError
)
from .filters.infotype_filter import InfotypeFilter
from .filters.ownership_filter import OwnershipFilter
from .models.report import FilterReport
from .models.routing import DynamicConfiguration, RoutingContext
from .models.xml_elements import XMLDocument
from .normalizers.name_normalizer import NameNormalizer
from .parsers.xml_parser import XMLParser
from .writers.xml_writer import XMLWriter

logger = logging.getLogger(__name__)


@dataclass
class TransformResult:
    payload: Optional[Union[bytes, str]] = None
    report: FilterReport = field(default_factory=FilterReport)

    @property
    def success(self) -> bool:
        return self.payload is not None


class HRMDFilterOrchestrator:
    """
    Orquestador que maneja todo el flujo de filtrado de un mensaje.

    La configuración llega ya cargada y no se modifica; la misma instancia
    puede atender varios mensajes, cada uno con su propio árbol.
    """

    def __init__(self,
                 properties: FilterProperties,
                 remove_cost_center: bool = True):
        """
        Args:
            properties: listas de infotipos permitidos
            remove_cost_center: borrar KOSTL de los E1P0001 de personas retenidas
        """
        self.properties = properties
        self.parser = XMLParser()
        self.writer = XMLWriter()
        self.infotype_filter = InfotypeFilter(properties.allowed_infotypes)
        self.name_normalizer = NameNormalizer(remove_cost_center=remove_cost_center)
        self.ownership_filter = OwnershipFilter(self.name_normalizer)

    def filter_document(self,
                        document: XMLDocument,
                        context: RoutingContext) -> FilterReport:
        """
        Aplica los filtros sobre el documento en sitio.
        """
        report = FilterReport()

        # Quitar infotipos que el receptor no debe ver
        self.infotype_filter.filter_document(document, report)

        # Dejar solo personas del receptor y limpiar sus nombres
        self.ownership_filter.filter_document(document, context, report)

        return report

    def transform(self,
                  payload: bytes,
                  context: RoutingContext,
                  source_name: Optional[str] = None) -> TransformResult:
        """
        Pipeline completo bytes -> bytes.

        Errores de parseo o serialización no se propagan: quedan como
        warning y el resultado no trae payload.
        """
        return self._transform(
            lambda: self.parser.parse_bytes(payload, source_name),
            self.writer.to_bytes,
            context
        )

    def transform_text(self,
                       xml_string: str,
                       context: RoutingContext,
                       source_name: Optional[str] = None) -> TransformResult:
        """
        Pipeline completo texto -> texto.

        La codificación declarada en el texto se ignora y la salida se
        declara sin codificación.
        """
        return self._transform(
            lambda: self.parser.parse_string(xml_string, source_name),
            self.writer.to_string,
            context
        )

    def _transform(self,
                   parse: Callable[[], XMLDocument],
                   serialize: Callable[[XMLDocument], Union[bytes, str]],
                   context: RoutingContext) -> TransformResult:
        logger.info("HRMD_A filtration mapping program started!")

        try:
            logger.debug("Started to parse HRMD_A09 XML to document tree.")
            document = parse()
            logger.debug("Finished parsing of HRMD_A09 XML to document tree.")
        except XMLParsingError as e:
            logger.warning(f"Encountered error during incoming message parsing: {str(e)}")
            return TransformResult(report=FilterReport(aborted_reason=f"parse: {str(e)}"))

        report = self.filter_document(document, context)

        try:
            output = serialize(document)
        except XMLSerializationError as e:
            logger.warning(f"Encountered error while serializing document to XML: {str(e)}")
            report.aborted_reason = f"serialize: {str(e)}"
            return TransformResult(report=report)

        logger.info("HRMD_A filtration mapping program finished!")
        return TransformResult(payload=output, report=report)

    def transform_stream(self,
                         source: BinaryIO,
                         sink: BinaryIO,
                         context: RoutingContext,
                         source_name: Optional[str] = None) -> bool:
        """
        Lee el mensaje de `source` y escribe el resultado en `sink`.

        Returns:
            True si se escribió un payload
        """
        try:
            payload = source.read()
        except OSError as e:
            logger.warning(f"Encountered error during reading of incoming message: {str(e)}")
            return False

        result = self.transform(payload, context, source_name)
        if not result.success:
            return False

        try:
            sink.write(result.payload)
            sink.flush()
            logger.debug("Finished writing result message to output stream")
        except (OSError, ValueError) as e:
            logger.warning(f"Encountered error during writing to output stream: {str(e)}")
            return False

        return True


def create_orchestrator(properties_path: Optional[Union[str, Path]] = None,
                        remove_cost_center: bool = True) -> HRMDFilterOrchestrator:
    """
    Crea y retorna un orquestador configurado.

    Raises:
        FilterConfigurationError: si filter.properties no se puede cargar
    """
    try:
        properties = load_filter_properties(properties_path)
    except FilterConfigurationError as e:
        logger.warning(f"Can't load infotype properties: {str(e)}")
        raise

    return HRMDFilterOrchestrator(properties, remove_cost_center=remove_cost_center)


def run_filter(payload: bytes,
               receiver_service: str,
               ownership: Mapping[str, str],
               properties_path: Optional[Union[str, Path]] = None,
               remove_cost_center: bool = True) -> Optional[bytes]:
    """
    Ejecuta el filtro completo para un único mensaje.

    Returns:
        Payload filtrado, o None si la configuración, el parseo o la
        serialización fallan
    """
    try:
        orchestrator = create_orchestrator(properties_path, remove_cost_center)
    except FilterConfigurationError:
        return None

    context = RoutingContext(
        receiver_service=receiver_service or "",
        dynamic_configuration=DynamicConfiguration.from_mapping(ownership)
    )
    return orchestrator.transform(payload, context).payload
