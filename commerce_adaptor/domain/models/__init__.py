from commerce_adaptor.domain.models.product import ProductData

__all__ = ["ProductData"]
