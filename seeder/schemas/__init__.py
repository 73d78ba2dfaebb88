from seeder.schemas.dataset import ProductRecord

__all__ = ["ProductRecord"]
