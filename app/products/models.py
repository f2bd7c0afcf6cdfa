from enum import Enum

from external.database import db
from app.libs.models import BaseModel, StatusMixin


class ProductType(Enum):
    PRODUCT = "product"
    VARIATION = "product_variation"


class Product(BaseModel, StatusMixin):
    __tablename__ = "products"

    class Status(Enum):
        ACTIVE = "active"
        DRAFT = "draft"
        ARCHIVED = "archived"
        OUT_OF_STOCK = "out_of_stock"

    Type = ProductType

    id = db.Column(db.Integer, primary_key=True)
    type = db.Column(
        db.Enum(
            ProductType,
            name="products_type",
            values_callable=lambda e: [m.value for m in e],
        ),
        default=ProductType.PRODUCT,
        nullable=False,
    )
    # Variations point at the product they belong to
    parent_id = db.Column(db.Integer, db.ForeignKey("products.id"), nullable=True)
    name = db.Column(db.String(100), nullable=False)
    description = db.Column(db.Text)
    price = db.Column(db.Float, nullable=False)
    stock = db.Column(db.Integer, default=0)
    sku = db.Column(db.String(50), unique=True)
    product_metadata = db.Column(db.JSON)  # attributes of a variation, specs etc

    parent = db.relationship("Product", remote_side=[id], back_populates="variations")
    variations = db.relationship("Product", back_populates="parent")

    def is_available(self):
        return self.status == self.Status.ACTIVE and (self.stock or 0) > 0

    @property
    def is_variation(self):
        return self.type == ProductType.VARIATION
