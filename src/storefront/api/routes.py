"""FastAPI routes for the Storefront: carts, orders, products, addresses, reviews."""

import json

from fastapi import APIRouter, HTTPException
from protean.utils.globals import current_domain

from storefront.addresses.management import AddAddress, RemoveAddress, list_addresses
from storefront.api.schemas import (
    AddAddressRequest,
    AddProductRequest,
    AddressIdResponse,
    AddressView,
    AddReviewRequest,
    AddToCartRequest,
    CapturePaymentRequest,
    CartIdResponse,
    CartView,
    ConfigureGatewayRequest,
    CreateOrderRequest,
    CreateOrderResponse,
    ExpiredCountResponse,
    ExpirePendingOrdersRequest,
    GatewayConfigResponse,
    OrderView,
    ProductIdResponse,
    ProductView,
    ReconcileCartResponse,
    ReviewIdResponse,
    ReviewView,
    StatusResponse,
    UpdateCartQuantityRequest,
    UpdateOrderStatusRequest,
)
from storefront.cart.items import AddToCart, RemoveFromCart, UpdateCartQuantity
from storefront.cart.reconciliation import ReconcileCart
from storefront.cart.view import get_cart
from storefront.catalogue.management import AddProduct, RemoveProduct
from storefront.catalogue.view import DEFAULT_SORT, get_product, list_products, search_products
from storefront.checkout.capture import CapturePayment
from storefront.checkout.initiation import InitiateCheckout
from storefront.config import get_settings
from storefront.order.expiry import ExpirePendingOrders
from storefront.order.fulfillment import UpdateOrderStatus
from storefront.order.view import list_all_orders, list_orders, order_details
from storefront.payments.gateway import get_gateway
from storefront.payments.gateway.fake_adapter import FakeGateway
from storefront.reviews.submission import SubmitReview, list_reviews

# ---------------------------------------------------------------------------
# Cart Router
# ---------------------------------------------------------------------------
cart_router = APIRouter(prefix="/cart", tags=["cart"])


@cart_router.post("/add", response_model=CartIdResponse)
async def add_to_cart(body: AddToCartRequest) -> CartIdResponse:
    command = AddToCart(
        user_id=body.user_id,
        product_id=body.product_id,
        quantity=body.quantity,
    )
    result = current_domain.process(command, asynchronous=False)
    return CartIdResponse(cart_id=result)


@cart_router.get("/get/{user_id}", response_model=CartView)
async def fetch_cart(user_id: str) -> CartView:
    return CartView(**get_cart(user_id))


@cart_router.put("/update-cart", response_model=StatusResponse)
async def update_cart_quantity(body: UpdateCartQuantityRequest) -> StatusResponse:
    command = UpdateCartQuantity(
        user_id=body.user_id,
        product_id=body.product_id,
        quantity=body.quantity,
    )
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@cart_router.delete("/{user_id}/{product_id}", response_model=StatusResponse)
async def remove_from_cart(user_id: str, product_id: str) -> StatusResponse:
    command = RemoveFromCart(user_id=user_id, product_id=product_id)
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@cart_router.post("/{user_id}/reconcile", response_model=ReconcileCartResponse)
async def reconcile_cart(user_id: str) -> ReconcileCartResponse:
    """Drop lines whose product has been removed from the catalogue."""
    removed = current_domain.process(ReconcileCart(user_id=user_id), asynchronous=False)
    return ReconcileCartResponse(removed=removed)


# ---------------------------------------------------------------------------
# Order Router
# ---------------------------------------------------------------------------
order_router = APIRouter(prefix="/order", tags=["orders"])


@order_router.post("/create", status_code=201, response_model=CreateOrderResponse)
async def create_order(body: CreateOrderRequest) -> CreateOrderResponse:
    """Place an order from the client's cart and return the payment approval URL."""
    command = InitiateCheckout(
        user_id=body.user_id,
        cart_id=body.cart_id,
        items=json.dumps([item.model_dump() for item in body.cart_items]),
        address=json.dumps(body.address_info.model_dump()) if body.address_info else None,
        payment_method=body.payment_method,
    )
    result = current_domain.process(command, asynchronous=False)
    return CreateOrderResponse(**result)


@order_router.post("/capture", response_model=OrderView)
async def capture_payment(body: CapturePaymentRequest) -> OrderView:
    """Capture an approved payment. Capturing a paid order again changes nothing."""
    command = CapturePayment(
        order_id=body.order_id,
        payment_id=body.payment_id,
        payer_id=body.payer_id,
    )
    result = current_domain.process(command, asynchronous=False)
    return OrderView(**result)


@order_router.get("/list/{user_id}", response_model=list[OrderView])
async def get_orders_for_user(user_id: str) -> list[OrderView]:
    return [OrderView(**o) for o in list_orders(user_id)]


@order_router.get("/details/{order_id}", response_model=OrderView)
async def get_order_details(order_id: str) -> OrderView:
    return OrderView(**order_details(order_id))


# ---------------------------------------------------------------------------
# Admin Order Router
# ---------------------------------------------------------------------------
admin_router = APIRouter(prefix="/admin/orders", tags=["admin"])


@admin_router.get("", response_model=list[OrderView])
async def get_all_orders() -> list[OrderView]:
    return [OrderView(**o) for o in list_all_orders()]


@admin_router.post("/expire", response_model=ExpiredCountResponse)
async def expire_pending_orders(body: ExpirePendingOrdersRequest) -> ExpiredCountResponse:
    """Reject checkouts left unapproved past the idle threshold.

    Intended to be called by an external scheduler.
    """
    command = ExpirePendingOrders(idle_threshold_hours=body.idle_threshold_hours)
    expired = current_domain.process(command, asynchronous=False)
    return ExpiredCountResponse(expired=expired)


@admin_router.get("/{order_id}", response_model=OrderView)
async def get_order_details_for_admin(order_id: str) -> OrderView:
    return OrderView(**order_details(order_id))


@admin_router.put("/{order_id}/status", response_model=OrderView)
async def update_order_status(order_id: str, body: UpdateOrderStatusRequest) -> OrderView:
    command = UpdateOrderStatus(order_id=order_id, order_status=body.order_status)
    current_domain.process(command, asynchronous=False)
    return OrderView(**order_details(order_id))


# ---------------------------------------------------------------------------
# Product Router
# ---------------------------------------------------------------------------
product_router = APIRouter(prefix="/products", tags=["products"])


def _split(values):
    return [v.strip() for v in values.split(",") if v.strip()] if values else []


@product_router.post("", status_code=201, response_model=ProductIdResponse)
async def add_product(body: AddProductRequest) -> ProductIdResponse:
    command = AddProduct(**body.model_dump())
    result = current_domain.process(command, asynchronous=False)
    return ProductIdResponse(product_id=result)


@product_router.get("", response_model=list[ProductView])
async def fetch_filtered_products(
    category: str | None = None,
    need: str | None = None,
    sort_by: str = DEFAULT_SORT,
) -> list[ProductView]:
    """Filter by comma-separated `category` and `need` values.

    `sort_by` is one of price-lowtohigh, price-hightolow, title-atoz, title-ztoa.
    """
    products = list_products(
        categories=_split(category),
        needs=_split(need),
        sort_by=sort_by,
    )
    return [ProductView(**p) for p in products]


@product_router.get("/search/{keyword}", response_model=list[ProductView])
async def search_catalogue(keyword: str) -> list[ProductView]:
    return [ProductView(**p) for p in search_products(keyword)]


@product_router.get("/{product_id}", response_model=ProductView)
async def fetch_product(product_id: str) -> ProductView:
    return ProductView(**get_product(product_id))


@product_router.delete("/{product_id}", response_model=StatusResponse)
async def remove_product(product_id: str) -> StatusResponse:
    current_domain.process(RemoveProduct(product_id=product_id), asynchronous=False)
    return StatusResponse(status="removed")


# ---------------------------------------------------------------------------
# Address Router
# ---------------------------------------------------------------------------
address_router = APIRouter(prefix="/address", tags=["addresses"])


@address_router.post("/add", status_code=201, response_model=AddressIdResponse)
async def add_address(body: AddAddressRequest) -> AddressIdResponse:
    result = current_domain.process(AddAddress(**body.model_dump()), asynchronous=False)
    return AddressIdResponse(address_id=result)


@address_router.get("/get/{user_id}", response_model=list[AddressView])
async def fetch_addresses(user_id: str) -> list[AddressView]:
    return [AddressView(**a) for a in list_addresses(user_id)]


@address_router.delete("/{user_id}/{address_id}", response_model=StatusResponse)
async def remove_address(user_id: str, address_id: str) -> StatusResponse:
    current_domain.process(RemoveAddress(user_id=user_id, address_id=address_id), asynchronous=False)
    return StatusResponse(status="removed")


# ---------------------------------------------------------------------------
# Review Router
# ---------------------------------------------------------------------------
review_router = APIRouter(prefix="/review", tags=["reviews"])


@review_router.post("/add", status_code=201, response_model=ReviewIdResponse)
async def add_review(body: AddReviewRequest) -> ReviewIdResponse:
    result = current_domain.process(SubmitReview(**body.model_dump()), asynchronous=False)
    return ReviewIdResponse(review_id=result)


@review_router.get("/{product_id}", response_model=list[ReviewView])
async def fetch_reviews(product_id: str) -> list[ReviewView]:
    return [ReviewView(**r) for r in list_reviews(product_id)]


# ---------------------------------------------------------------------------
# Payment Gateway Router
# ---------------------------------------------------------------------------
gateway_router = APIRouter(prefix="/payments", tags=["payments"])


@gateway_router.post("/gateway/configure", response_model=GatewayConfigResponse)
async def configure_gateway(body: ConfigureGatewayRequest) -> GatewayConfigResponse:
    """Configure the FakeGateway behavior (non-production only).

    Lets manual API testing toggle whether authorizations and captures succeed.
    """
    if get_settings().is_production:
        raise HTTPException(status_code=403, detail="Gateway configuration not available in production")

    gateway = get_gateway()
    if not isinstance(gateway, FakeGateway):
        raise HTTPException(status_code=400, detail="Gateway configuration only available for FakeGateway")

    gateway.configure(
        should_succeed=body.should_succeed,
        failure_reason=body.failure_reason,
    )
    return GatewayConfigResponse(
        gateway=type(gateway).__name__,
        should_succeed=gateway.should_succeed,
        failure_reason=gateway.failure_reason,
    )
