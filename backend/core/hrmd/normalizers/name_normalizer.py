# backend/core/hrmd/normalizers/name_normalizer.py
"""
Normalización de nombres de una persona que se queda en el mensaje.
"""
import logging
from typing import List, Optional

from ..constants import (
    INFOTYPE_TAG,
    ORG_ASSIGNMENT_INFOTYPE,
    PERSONAL_DATA_INFOTYPE,
    EXTENSION_SLICE_PREFIX,
    PERSONAL_DATA_REMOVED_FIELDS,
    PERSONAL_DATA_EXTENSION_REMOVED_FIELDS,
    Fields,
    is_active,
    time_slice_tag
)
from ..models.xml_elements import XMLNode
from ..models.report import FilterReport

logger = logging.getLogger(__name__)


def to_initial(name: str) -> str:
    """'john' -> 'J.'; un valor ya normalizado no cambia."""
    return (name[0] + ".").upper()


class NameNormalizer:
    """
    Reescribe nombres de un E1PLOGI y borra los campos de nombre extendidos.

    Args:
        remove_cost_center: si es True se borra KOSTL de cada E1P0001.
            Medida temporal; ponerlo a False devuelve el KOSTL al receptor.
    """

    def __init__(self, remove_cost_center: bool = True):
        self.remove_cost_center = remove_cost_center

    def normalize_person(self,
                         person: XMLNode,
                         report: Optional[FilterReport] = None) -> str:
        """
        Normaliza los E1P0002 de la persona y escribe ENAME/SNAME en sus E1P0001.

        Returns:
            Nombre completo construido con los segmentos 0002 activos
        """
        org_assignment: Optional[XMLNode] = None
        full_name_parts: List[str] = []

        for segment in person.find_nodes_by_tag(INFOTYPE_TAG):
            infotype_code = segment.get_text(Fields.INFOTYPE)

            if infotype_code == ORG_ASSIGNMENT_INFOTYPE:
                # debería haber uno solo por persona; se queda el último
                org_assignment = segment
            elif infotype_code == PERSONAL_DATA_INFOTYPE:
                for time_slice in segment.find_nodes_by_tag(time_slice_tag(infotype_code)):
                    self._normalize_personal_data(time_slice, full_name_parts)

        full_name = "".join(full_name_parts)

        if org_assignment is not None:
            self._write_full_name(org_assignment, full_name, report)

        return full_name

    def _normalize_personal_data(self, time_slice: XMLNode, full_name_parts: List[str]) -> None:
        surname = time_slice.get_text(Fields.SURNAME)
        name = time_slice.get_text(Fields.FIRST_NAME)
        middle_name = time_slice.get_text(Fields.MIDDLE_NAME)
        active = is_active(time_slice.get_text(Fields.END_DATE))

        if surname:
            surname = surname.strip()
            if active:
                full_name_parts.append(surname)
            time_slice.set_text(Fields.SURNAME, surname)

        if name:
            name = to_initial(name)
            if active:
                full_name_parts.append(" " + name)
            time_slice.set_text(Fields.FIRST_NAME, name)

        if middle_name:
            middle_name = to_initial(middle_name)
            if active:
                full_name_parts.append(" " + middle_name)
            time_slice.set_text(Fields.MIDDLE_NAME, middle_name)

        for tag in PERSONAL_DATA_REMOVED_FIELDS:
            time_slice.remove_descendants(tag)

        extension_tag = time_slice_tag(PERSONAL_DATA_INFOTYPE, EXTENSION_SLICE_PREFIX)
        for extension in time_slice.find_nodes_by_tag(extension_tag):
            for tag in PERSONAL_DATA_EXTENSION_REMOVED_FIELDS:
                extension.remove_descendants(tag)

    def _write_full_name(self,
                         org_assignment: XMLNode,
                         full_name: str,
                         report: Optional[FilterReport]) -> None:
        for time_slice in org_assignment.find_nodes_by_tag(time_slice_tag(ORG_ASSIGNMENT_INFOTYPE)):
            # sobrescribe el nombre existente en todos los segmentos, activos o no
            time_slice.set_text(Fields.DISPLAY_NAME, full_name)
            time_slice.set_text(Fields.SHORT_NAME, full_name.upper())

            if self.remove_cost_center:
                self._remove_cost_center(time_slice, report)

    def _remove_cost_center(self, time_slice: XMLNode, report: Optional[FilterReport]) -> None:
        if time_slice.find_first(Fields.COST_CENTER) is None:
            return

        personnel_number = time_slice.get_text(Fields.PERSONNEL_NUMBER)
        time_slice.remove_descendants(Fields.COST_CENTER)
        if report is not None:
            report.removed_cost_centers.append(personnel_number)
        logger.info(f"Removed KOSTL from 0001 INFTY for PERNR: {personnel_number}.")
