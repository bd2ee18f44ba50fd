from .normalizer import DataNormalizer

__all__ = [
    'DataNormalizer',
]
