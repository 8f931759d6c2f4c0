# backend/core/hrmd/filters/infotype_filter.py
"""
Filtro de segmentos E1PITYP por código de infotipo (INFTY).
"""
import logging
from typing import Iterable, Optional

from ..constants import INFOTYPE_TAG, Fields
from ..models.xml_elements import XMLDocument
from ..models.report import FilterReport, SegmentDecision

logger = logging.getLogger(__name__)


class InfotypeFilter:
    """
    Elimina los E1PITYP cuyo INFTY no está en la lista de infotipos permitidos.

    Los segmentos sin INFTY no se tocan: un código desconocido no es un
    código prohibido.
    """

    def __init__(self, allowed_infotypes: Iterable[str]):
        self.allowed_infotypes = frozenset(allowed_infotypes)

    def filter_document(self,
                        document: XMLDocument,
                        report: Optional[FilterReport] = None) -> XMLDocument:
        report = report if report is not None else FilterReport()

        logger.debug(f"Infotypes to pass: {sorted(self.allowed_infotypes)}")

        # Lista fija: los nodos se eliminan mientras se recorre
        segments = document.iter_nodes_by_tag(INFOTYPE_TAG)
        report.segments_before = len(segments)
        logger.debug(f"Source IDOC message has {len(segments)} info segments.")

        for segment in segments:
            object_id = segment.get_text(Fields.OBJECT_ID)
            infotype_code = segment.get_text(Fields.INFOTYPE)

            if not infotype_code:
                continue

            if infotype_code not in self.allowed_infotypes:
                segment.detach()
                report.removed_segments.append(SegmentDecision(infotype_code, object_id))
                logger.info(
                    f"Found segment with INFTY: '{infotype_code}' and OBJID: '{object_id}', "
                    f"so the whole parent '{INFOTYPE_TAG}' element would be removed from target message."
                )

        document.normalize()
        report.segments_after = len(document.iter_nodes_by_tag(INFOTYPE_TAG))
        return document
