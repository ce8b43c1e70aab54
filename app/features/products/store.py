"""
Product store: cached product list and stock changes.
"""
from collections import defaultdict
from typing import List, Optional
from pydantic import ValidationError as SchemaError
from app.core.constants import LOW_STOCK_THRESHOLD, Table
from app.core.exceptions import DataServiceError
from app.core.results import ErrorKind, OperationResult
from app.features.base_store import BaseStore
from app.infrastructure.dataservice import DataServiceClient
from app.schemas.product import ChartPoint, Product, ProductCreate, ProductUpdate


class ProductStore(BaseStore[Product]):
    """Store for product operations."""

    table = Table.PRODUCTS
    model = Product

    def __init__(self, client: DataServiceClient, low_stock_threshold: int = LOW_STOCK_THRESHOLD):
        super().__init__(client)
        self.low_stock_threshold = low_stock_threshold

    @property
    def products(self) -> List[Product]:
        return self.items

    def fetch_products(self) -> OperationResult[List[Product]]:
        """
        Load all products ordered by name, replacing the cache.

        On failure the cache is left as it was.
        """
        def load() -> List[Product]:
            rows = self.client.select(self.table, order="name")
            return [self._from_row(row) for row in rows]

        return self._fetch("fetch_products", load)

    def add_product(self, data: ProductCreate) -> OperationResult[Product]:
        """
        Insert a product and append it to the end of the cache.

        The cache is not re-sorted, so a new product stays last until the
        next fetch.
        """
        try:
            product = self._from_row(self.client.insert(self.table, data.model_dump(mode="json")))
        except DataServiceError as e:
            return self._remote_failure("add_product", e)
        except SchemaError as e:
            return self._unexpected_row("add_product", e)

        self._append(product)
        self.logger.info(f"Product added: {product.code} ({product.id})")
        return OperationResult.ok(product)

    def update_product(self, product_id: str, updates: ProductUpdate) -> OperationResult[Optional[Product]]:
        """
        Send a partial update, then merge the same fields into the cached record.

        Args:
            product_id: Product ID
            updates: Fields to change (unset fields are left alone)

        Returns:
            Result with the merged cached product (None if it was not cached)
        """
        changes = updates.model_dump(exclude_unset=True)
        try:
            self.client.update(self.table, product_id, updates.model_dump(exclude_unset=True, mode="json"))
        except DataServiceError as e:
            return self._remote_failure("update_product", e)

        return OperationResult.ok(self._merge(product_id, changes))

    def delete_product(self, product_id: str) -> OperationResult[None]:
        """Delete a product remotely, then drop it from the cache."""
        try:
            self.client.delete(self.table, product_id)
        except DataServiceError as e:
            return self._remote_failure("delete_product", e)

        self._remove(product_id)
        self.logger.info(f"Product deleted: {product_id}")
        return OperationResult.ok()

    def update_stock(self, product_id: str, delta: int) -> OperationResult[Optional[Product]]:
        """
        Apply a stock delta computed against the cached stock.

        The non-negative check only sees this cache; concurrent changes from
        other sessions are not detected.

        Args:
            product_id: Product ID
            delta: Units to add (positive) or remove (negative)

        Returns:
            Result of the underlying update, or a failure without any remote
            call when the product is unknown or stock would go negative
        """
        product = self._find(product_id)
        if product is None:
            return OperationResult.fail(
                ErrorKind.NOT_FOUND,
                detail=f"Product not found: {product_id}",
                context={"product_id": product_id}
            )

        new_stock = product.stock + delta
        if new_stock < 0:
            self.logger.warning(
                f"Rejected stock change for {product.code}: available {product.stock}, delta {delta}"
            )
            return OperationResult.fail(
                ErrorKind.INSUFFICIENT_STOCK,
                detail=f"Insufficient stock for {product.name}",
                context={"product": product.name, "available": product.stock, "requested": -delta}
            )

        return self.update_product(product_id, ProductUpdate(stock=new_stock))

    def check_low_stock(self) -> List[Product]:
        """Cached products at or below the low stock threshold."""
        return self._filter(lambda p: p.stock <= self.low_stock_threshold)

    def search_products(self, term: str) -> List[Product]:
        """Case-insensitive match on code, name or category."""
        term = (term or "").strip().lower()
        if not term:
            return list(self.items)
        return self._filter(
            lambda p: term in p.code.lower() or term in p.name.lower() or term in p.category.lower()
        )

    def stock_by_product(self) -> List[ChartPoint]:
        """Stock of each cached product, in cache order."""
        return [ChartPoint(label=product.name, value=product.stock) for product in self.items]

    def stock_by_category(self) -> List[ChartPoint]:
        """Total cached stock per category, for the dashboard chart."""
        totals = defaultdict(int)
        for product in self.items:
            totals[product.category or "Sin categoría"] += product.stock
        return [ChartPoint(label=label, value=value) for label, value in sorted(totals.items())]
