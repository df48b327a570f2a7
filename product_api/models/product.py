"""
Product API — Product SQLAlchemy Model
========================================

What:  ORM model representing the `products` table.
How:   Inherits from the shared DeclarativeBase; `init_store` creates the
       table from this mapping on startup when it is absent.
Who:   Used by ProductStore for every CRUD operation.

Table Design:
    - id: bigint primary key, generated by the store (autoincrement)
    - name, price, quantity: plain value columns, no constraints beyond NOT NULL
"""

from sqlalchemy import BigInteger, Float, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from product_api.database import Base

# Signed 64-bit range of the BIGINT id and quantity columns
INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1


class Product(Base):
    """
    A single product row.

    Lifecycle:
        1. Inserted by POST /products (store assigns id)
        2. Read by GET /products and GET /products/{id}
        3. name/price/quantity overwritten in place by PUT (id never changes)
        4. Deleted by DELETE /products/{id}
    """

    __tablename__ = "products"

    id: Mapped[int] = mapped_column(
        # SQLite only autoincrements an INTEGER PRIMARY KEY
        BigInteger().with_variant(Integer, "sqlite"),
        primary_key=True,
        autoincrement=True,
    )

    name: Mapped[str] = mapped_column(Text, nullable=False)

    # Double precision on PostgreSQL
    price: Mapped[float] = mapped_column(Float, nullable=False)

    quantity: Mapped[int] = mapped_column(BigInteger, nullable=False)

    def __repr__(self) -> str:
        """Developer-friendly string representation for debugging."""
        return (
            f"<Product(id={self.id}, name='{self.name}', "
            f"price={self.price}, quantity={self.quantity})>"
        )
