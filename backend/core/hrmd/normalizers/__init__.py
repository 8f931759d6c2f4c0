from .name_normalizer import NameNormalizer, to_initial

__all__ = ['NameNormalizer', 'to_initial']
