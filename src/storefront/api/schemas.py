"""Pydantic request/response schemas for the Storefront API.

These are external contracts (anti-corruption layer), separate from
internal Protean commands.
"""

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Shared sub-models
# ---------------------------------------------------------------------------
class CartLineSchema(BaseModel):
    product_id: str
    title: str
    image: str | None = None
    price: float = Field(ge=0)
    sale_price: float = Field(ge=0, default=0.0)
    quantity: int = Field(ge=1)


class AddressSnapshotSchema(BaseModel):
    address_id: str | None = None
    address: str
    city: str
    pincode: str
    phone: str
    notes: str | None = None


# ---------------------------------------------------------------------------
# Cart
# ---------------------------------------------------------------------------
class AddToCartRequest(BaseModel):
    user_id: str
    product_id: str
    quantity: int = Field(ge=1, default=1)


class UpdateCartQuantityRequest(BaseModel):
    user_id: str
    product_id: str
    quantity: int = Field(ge=1)


class CartItemView(BaseModel):
    product_id: str
    title: str
    image: str | None = None
    price: float
    sale_price: float
    quantity: int


class CartView(BaseModel):
    cart_id: str
    user_id: str
    items: list[CartItemView]
    updated_at: str | None = None


class CartIdResponse(BaseModel):
    cart_id: str


class ReconcileCartResponse(BaseModel):
    removed: int


# ---------------------------------------------------------------------------
# Orders
# ---------------------------------------------------------------------------
class CreateOrderRequest(BaseModel):
    user_id: str
    cart_id: str | None = None
    cart_items: list[CartLineSchema] = Field(default_factory=list)
    address_info: AddressSnapshotSchema | None = None
    payment_method: str = "paypal"

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "user_id": "user-001",
                    "cart_id": "cart-001",
                    "cart_items": [
                        {
                            "product_id": "prod-001",
                            "title": "Cotton T-Shirt",
                            "image": "https://img.example.com/tee.png",
                            "price": 100.0,
                            "sale_price": 0.0,
                            "quantity": 2,
                        }
                    ],
                    "address_info": {
                        "address_id": "addr-001",
                        "address": "12 MG Road",
                        "city": "Bengaluru",
                        "pincode": "560001",
                        "phone": "9876543210",
                        "notes": "Ring the bell",
                    },
                    "payment_method": "paypal",
                }
            ]
        }
    }


class CreateOrderResponse(BaseModel):
    order_id: str
    approval_url: str


class CapturePaymentRequest(BaseModel):
    payment_id: str
    payer_id: str
    order_id: str


class OrderItemView(BaseModel):
    product_id: str
    title: str
    image: str | None = None
    price: float
    sale_price: float
    quantity: int


class OrderView(BaseModel):
    order_id: str
    user_id: str
    cart_id: str | None = None
    items: list[OrderItemView]
    address: AddressSnapshotSchema | None = None
    payment_method: str | None = None
    total_amount: float
    currency: str
    settlement_amount: float | None = None
    settlement_currency: str | None = None
    order_status: str
    payment_status: str
    payment_id: str | None = None
    payer_id: str | None = None
    order_date: str | None = None
    order_update_date: str | None = None


class UpdateOrderStatusRequest(BaseModel):
    order_status: str


class ExpirePendingOrdersRequest(BaseModel):
    idle_threshold_hours: int = Field(ge=0, default=24)


class ExpiredCountResponse(BaseModel):
    expired: int


# ---------------------------------------------------------------------------
# Products
# ---------------------------------------------------------------------------
class AddProductRequest(BaseModel):
    title: str
    price: float = Field(ge=0)
    sale_price: float = Field(ge=0, default=0.0)
    total_stock: int = Field(ge=0, default=0)
    description: str | None = None
    category: str | None = None
    need: str | None = None
    brand: str | None = None
    image: str | None = None


class ProductIdResponse(BaseModel):
    product_id: str


class ProductView(BaseModel):
    product_id: str
    title: str
    description: str | None = None
    need: str | None = None
    category: str | None = None
    brand: str | None = None
    image: str | None = None
    price: float
    sale_price: float
    total_stock: int
    average_review: float


# ---------------------------------------------------------------------------
# Addresses
# ---------------------------------------------------------------------------
class AddAddressRequest(BaseModel):
    user_id: str
    address: str
    city: str
    pincode: str
    phone: str
    notes: str | None = None


class AddressIdResponse(BaseModel):
    address_id: str


class AddressView(BaseModel):
    address_id: str
    user_id: str
    address: str
    city: str
    pincode: str
    phone: str
    notes: str | None = None


# ---------------------------------------------------------------------------
# Reviews
# ---------------------------------------------------------------------------
class AddReviewRequest(BaseModel):
    product_id: str
    user_id: str
    user_name: str
    message: str
    rating: int = Field(ge=1, le=5)


class ReviewIdResponse(BaseModel):
    review_id: str


class ReviewView(BaseModel):
    review_id: str
    product_id: str
    user_id: str
    user_name: str
    message: str
    rating: int
    created_at: str | None = None


# ---------------------------------------------------------------------------
# Gateway
# ---------------------------------------------------------------------------
class ConfigureGatewayRequest(BaseModel):
    should_succeed: bool = True
    failure_reason: str = "Payment declined"


class GatewayConfigResponse(BaseModel):
    gateway: str
    should_succeed: bool
    failure_reason: str


# ---------------------------------------------------------------------------
# Shared Response Schemas
# ---------------------------------------------------------------------------
class StatusResponse(BaseModel):
    status: str = "ok"
