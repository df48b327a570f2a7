"""
Product API — Product Store (Data Mapper)
===========================================

What:  Translates between Product ORM objects and rows of the products table.
How:   Wraps one AsyncSession per request. Reads are a single query; writes
       are a single statement followed by a commit.
Who:   Constructed per request by the `get_product_store` dependency and
       called by the route handlers.

Error Handling Strategy:
    - Missing rows become NotFoundError (404)
    - Any SQLAlchemyError is logged, the session is rolled back, and the
      error is re-raised as DatabaseError (500). Write failures are never
      reported as success.
"""

import logging
from typing import Any, Dict, List, NoReturn, Optional

from fastapi import Depends
from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from product_api.database import get_db_session
from product_api.exceptions import DatabaseError, NotFoundError
from product_api.models.product import Product
from product_api.schemas.product import ProductPayload

logger = logging.getLogger(__name__)


class ProductStore:
    """
    Data mapper for the products table.

    Operations:
        - find_all(): every product, ordered by id
        - find_by_id(): one product or NotFoundError
        - insert(): new row, id assigned by the store
        - save(): persist field changes of an already loaded product
        - delete(): remove the row at an id
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    async def find_all(self) -> List[Product]:
        try:
            result = await self.db.execute(select(Product).order_by(Product.id))
            return list(result.scalars().all())
        except SQLAlchemyError as e:
            await self._fail("list products", e)

    async def find_by_id(self, product_id: int) -> Product:
        """
        Fetch a single product by primary key.

        Raises:
            NotFoundError: no row has this id
            DatabaseError: the query failed
        """
        try:
            product = await self.db.get(Product, product_id)
        except SQLAlchemyError as e:
            await self._fail("fetch product", e, {"product_id": product_id})

        if product is None:
            raise NotFoundError(resource="product", resource_id=str(product_id))
        return product

    async def insert(self, payload: ProductPayload) -> Product:
        """Insert a new row and return it with its store-assigned id."""
        product = Product(
            name=payload.name,
            price=payload.price,
            quantity=payload.quantity,
        )
        try:
            self.db.add(product)
            await self.db.commit()
        except SQLAlchemyError as e:
            await self._fail("insert product", e)

        logger.info("Product %s created", product.id)
        return product

    async def save(self, product: Product) -> Product:
        """Persist the current field values of a product loaded by this store."""
        try:
            await self.db.commit()
        except SQLAlchemyError as e:
            await self._fail("save product", e, {"product_id": product.id})

        logger.info("Product %s updated", product.id)
        return product

    async def delete(self, product_id: int) -> None:
        """
        Remove the row at `product_id`.

        Raises:
            NotFoundError: no row was removed
        """
        try:
            result = await self.db.execute(
                delete(Product).where(Product.id == product_id)
            )
            await self.db.commit()
        except SQLAlchemyError as e:
            await self._fail("delete product", e, {"product_id": product_id})

        if result.rowcount == 0:
            raise NotFoundError(resource="product", resource_id=str(product_id))
        logger.info("Product %s deleted", product_id)

    async def _fail(
        self,
        action: str,
        error: SQLAlchemyError,
        context: Optional[Dict[str, Any]] = None,
    ) -> NoReturn:
        """Roll back, log, and raise DatabaseError for a failed operation."""
        ctx = dict(context or {})
        ctx["error_type"] = type(error).__name__
        logger.error("Database error during %s: %s", action, str(error), exc_info=True)
        try:
            await self.db.rollback()
        except SQLAlchemyError:
            logger.error("Rollback failed after %s", action)
        raise DatabaseError(
            message=f"Could not {action}",
            context=ctx,
        ) from error


def get_product_store(db: AsyncSession = Depends(get_db_session)) -> ProductStore:
    """FastAPI dependency providing a ProductStore bound to the request session."""
    return ProductStore(db)
