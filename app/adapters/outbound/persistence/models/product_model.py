# app/adapters/outbound/persistence/models/product_model.py

from sqlalchemy import (
    CheckConstraint,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Text,
    Uuid,
    func,
)
from sqlalchemy.orm import relationship
import uuid
from app.adapters.outbound.persistence.models.base_model import Base, utcnow


class Product(Base):
    """
    Product owned by the user who created it.

    Attributes:
        id: Unique identifier (UUID)
        name: Product name
        description: Free text description
        price: Unit price, never negative
        stock: Units in stock, never negative
        category: Optional category label
        owner_id: Creator of the product
        created_at: Creation timestamp
        updated_at: Last update timestamp
    """
    __tablename__ = "products"
    __table_args__ = (
        CheckConstraint("price >= 0", name="ck_products_price_non_negative"),
        CheckConstraint("stock >= 0", name="ck_products_stock_non_negative"),
    )

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(String(100), nullable=False)
    description = Column(Text, nullable=True)
    price = Column(Numeric(10, 2), nullable=False)
    stock = Column(Integer, default=0, nullable=False)
    category = Column(String(50), nullable=True, index=True)
    owner_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    created_at = Column(DateTime, default=utcnow, server_default=func.now(), index=True)
    updated_at = Column(DateTime, onupdate=utcnow)

    owner = relationship("User", back_populates="products")

    def __repr__(self) -> str:
        return f"<Product(name={self.name}, owner_id={self.owner_id})>"
