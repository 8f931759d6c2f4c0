# backend/core/hrmd/filters/ownership_filter.py
"""
Filtro de personas (E1PLOGI) por sociedad del receptor.
"""
import logging
from typing import Optional

from ..constants import (
    INFOTYPE_TAG,
    PERSON_TAG,
    ORG_ASSIGNMENT_INFOTYPE,
    Fields,
    is_active,
    time_slice_tag
)
from ..models.xml_elements import XMLDocument, XMLNode
from ..models.routing import RoutingContext
from ..models.report import FilterReport, PersonDecision
from ..normalizers.name_normalizer import NameNormalizer

logger = logging.getLogger(__name__)


class OwnershipFilter:
    """
    Deja en el mensaje solo las personas cuya sociedad pertenece al receptor.

    Para cada E1PITYP con INFTY=0001 se recorren sus E1P0001 en orden de
    documento. Solo cuentan los segmentos activos (ENDDA=99991231) con BUKRS.
    El primer segmento decisivo manda:
      - el sistema de 'R<BUKRS>' coincide con el receptor: la persona se
        queda y pasa por NameNormalizer;
      - no hay sistema o es otro: el E1PLOGI entero se elimina.
    """

    def __init__(self, name_normalizer: Optional[NameNormalizer] = None):
        self.name_normalizer = name_normalizer or NameNormalizer()

    def filter_document(self,
                        document: XMLDocument,
                        context: RoutingContext,
                        report: Optional[FilterReport] = None) -> XMLDocument:
        report = report if report is not None else FilterReport()
        current_system_id = context.receiver_service

        if not current_system_id:
            report.ownership_filter_skipped = True
            logger.warning(
                "Can not get ReceiverService for current message. "
                "Can not perform person by company code filtration."
            )
            return document

        segments = document.iter_nodes_by_tag(INFOTYPE_TAG)
        logger.debug(f"Source IDOC message has {len(segments)} info segments.")

        for segment in segments:
            infotype_code = segment.get_text(Fields.INFOTYPE)
            if infotype_code != ORG_ASSIGNMENT_INFOTYPE:
                continue

            # la persona pudo eliminarse ya por otro segmento 0001
            if not segment.is_attached_to(document.root):
                continue

            self._decide_person(segment, context, report)

        document.normalize()
        return document

    def _decide_person(self,
                       segment: XMLNode,
                       context: RoutingContext,
                       report: FilterReport) -> None:
        current_system_id = context.receiver_service
        object_id = segment.get_text(Fields.OBJECT_ID)

        person = segment.find_ancestor(PERSON_TAG)
        if person is None:
            logger.debug(f"Segment 0001 with OBJID: '{object_id}' has no '{PERSON_TAG}' parent, skipped.")
            return

        for time_slice in segment.find_nodes_by_tag(time_slice_tag(ORG_ASSIGNMENT_INFOTYPE)):
            if not is_active(time_slice.get_text(Fields.END_DATE)):
                continue

            company_code = time_slice.get_text(Fields.COMPANY_CODE)
            if not company_code:
                continue

            system_id = context.owner_of(company_code)

            if system_id and system_id == current_system_id:
                full_name = self.name_normalizer.normalize_person(person, report)
                report.kept_persons.append(
                    PersonDecision(company_code, object_id, current_system_id, full_name)
                )
                logger.info(
                    f"Found relevant person data with BUKRS: '{company_code}' and OBJID: '{object_id}' "
                    f"- keep this person in target message that goes to system: '{current_system_id}'."
                )
                return

            person.detach()
            report.removed_persons.append(
                PersonDecision(company_code, object_id, current_system_id)
            )
            logger.info(
                f"Found person data with BUKRS: '{company_code}' and OBJID: '{object_id}' "
                f"that is irrelevant for receiver system: '{current_system_id}', so "
                f"the whole '{PERSON_TAG}' element would be removed from target message."
            )
            return
