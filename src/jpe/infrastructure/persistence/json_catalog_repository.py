"""JSON-file-backed, read-only catalog: products and their variations.

The files are maintained by the catalog admin; rows are validated on
every read so a malformed row blocks pricing instead of mispricing.
"""

from __future__ import annotations

from pathlib import Path

from jpe.domain.model.product import Product
from jpe.domain.model.variation import ProductVariation
from jpe.domain.repository.product_repository import ProductRepository
from jpe.domain.repository.variation_repository import VariationRepository
from jpe.infrastructure.persistence.json_file import JsonFile
from jpe.infrastructure.persistence.records import parse_products, parse_variations


class JsonProductRepository(ProductRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path)

    def get_by_id(self, product_id: str) -> Product | None:
        for product in self.list_all():
            if product.id == product_id:
                return product
        return None

    def list_all(self) -> list[Product]:
        return parse_products(self._file.read())


class JsonVariationRepository(VariationRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path)

    def list_for_product(self, product_id: str) -> list[ProductVariation]:
        rows = [raw for raw in self._file.read() if raw.get("product_id") == product_id]
        return parse_variations(rows)
