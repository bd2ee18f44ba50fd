from abc import ABC, abstractmethod
from typing import Generic, TypeVar

# Type variables for generics
T = TypeVar('T')  # Generic type for raw data
R = TypeVar('R')  # Generic type for normalized data


class DataNormalizer(Generic[T, R], ABC):
    """
    Abstract base interface for data normalizers.

    Normalizers turn platform-specific product payloads into the stable
    record the rest of the service works with.

    Type Parameters:
        T: The type of raw data from the external API
        R: The type of normalized data after processing
    """

    @abstractmethod
    def normalize_product(self, raw_data: T, sku: str, locale: str) -> R:
        """
        Normalizes product data from external API format to standardized format.

        Args:
            raw_data: Raw product data from external API
            sku: The SKU the product was looked up by
            locale: Requested locale for localized text

        Returns:
            R: Normalized product data in standardized format
        """
        pass
