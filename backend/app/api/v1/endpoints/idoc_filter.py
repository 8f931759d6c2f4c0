from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import Response
from typing import Dict, List, Union
import logging

from ....models.filter import FilterRequest, FilterResponse
from ....services.filter_service import FilterService
from ....core.config import get_settings
from .....core.hrmd.exceptions.xml_exceptions import FilterConfigurationError

router = APIRouter()
settings = get_settings()
logger = logging.getLogger(__name__)


def parse_ownership_headers(values: List[str]) -> Dict[str, str]:
    """
    Convierte cabeceras 'X-Ownership: 1000=SYS_A, RU01=SYS_B' en un dict.
    """
    ownership = {}
    for value in values:
        for pair in value.split(","):
            if not pair.strip():
                continue
            key, sep, system_id = pair.partition("=")
            if not sep or not key.strip() or not system_id.strip():
                raise HTTPException(
                    status_code=400,
                    detail=f"Cabecera X-Ownership inválida: '{pair.strip()}'"
                )
            ownership[key.strip()] = system_id.strip()
    return ownership


def _run_filter(payload: Union[bytes, str], receiver_service: str, ownership: Dict[str, str]):
    size = len(payload.encode("utf-8")) if isinstance(payload, str) else len(payload)
    if size > settings.MAX_PAYLOAD_SIZE:
        raise HTTPException(
            status_code=413,
            detail=f"Payload demasiado grande (máx {settings.MAX_PAYLOAD_SIZE} bytes)"
        )

    try:
        result = FilterService.filter_payload(payload, receiver_service, ownership)
    except FilterConfigurationError as e:
        logger.error(f"Configuration error: {str(e)}")
        raise HTTPException(
            status_code=500,
            detail=f"Configuración del filtro no disponible: {str(e)}"
        )

    if not result.success:
        logger.warning(f"Filtering aborted: {result.report.aborted_reason}")
        raise HTTPException(
            status_code=400,
            detail=f"No se pudo procesar el mensaje: {result.report.aborted_reason}"
        )

    return result


@router.post("/", response_model=FilterResponse)
async def filter_message(request: FilterRequest):
    """
    Filtra un IDoc HRMD_A enviado como texto dentro de un JSON.
    """
    logger.info(f"Filter request for receiver: '{request.receiver_service}'")

    result = _run_filter(request.payload, request.receiver_service, request.ownership)

    return FilterResponse(
        success=True,
        message="Filtrado completado exitosamente",
        payload=result.payload,
        report=result.report.to_dict()
    )


@router.post("/raw")
async def filter_raw_message(request: Request):
    """
    Filtra un IDoc HRMD_A enviado como cuerpo XML.

    El receptor llega en X-Receiver-Service y los pares de sociedad en
    una o varias cabeceras X-Ownership.
    """
    payload = await request.body()
    receiver_service = request.headers.get("x-receiver-service", "")
    ownership = parse_ownership_headers(request.headers.getlist("x-ownership"))

    logger.info(f"Raw filter request for receiver: '{receiver_service}'")

    result = _run_filter(payload, receiver_service, ownership)

    return Response(content=result.payload, media_type="application/xml")
