"""
Registro de decisiones tomadas por los filtros sobre un mensaje.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class SegmentDecision:
    infotype: str
    object_id: str

    def to_dict(self) -> Dict[str, Any]:
        return {"infotype": self.infotype, "object_id": self.object_id}


@dataclass
class PersonDecision:
    company_code: str
    object_id: str
    receiver_service: str
    full_name: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "company_code": self.company_code,
            "object_id": self.object_id,
            "receiver_service": self.receiver_service,
            "full_name": self.full_name
        }


@dataclass
class FilterReport:
    """Resumen de una ejecución del filtro HRMD_A."""
    removed_segments: List[SegmentDecision] = field(default_factory=list)
    kept_persons: List[PersonDecision] = field(default_factory=list)
    removed_persons: List[PersonDecision] = field(default_factory=list)
    removed_cost_centers: List[str] = field(default_factory=list)
    ownership_filter_skipped: bool = False
    segments_before: int = 0
    segments_after: int = 0
    aborted_reason: Optional[str] = None

    @property
    def aborted(self) -> bool:
        return self.aborted_reason is not None

    def to_dict(self) -> Dict[str, Any]:
        """Convierte a diccionario para serialización."""
        return {
            "removed_segments": [d.to_dict() for d in self.removed_segments],
            "kept_persons": [d.to_dict() for d in self.kept_persons],
            "removed_persons": [d.to_dict() for d in self.removed_persons],
            "removed_cost_centers": list(self.removed_cost_centers),
            "ownership_filter_skipped": self.ownership_filter_skipped,
            "segments_before": self.segments_before,
            "segments_after": self.segments_after,
            "aborted_reason": self.aborted_reason
        }
