# backend/core/hrmd/filters/__init__.py
"""
Filtros del IDoc HRMD_A: por infotipo y por sociedad del receptor.
"""

from .infotype_filter import InfotypeFilter
from .ownership_filter import OwnershipFilter

__all__ = ['InfotypeFilter', 'OwnershipFilter']
