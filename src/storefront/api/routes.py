"""FastAPI endpoints for the Storefront API.

Every endpoint except registration and the public catalogue reads acts on
behalf of the principal resolved from the ``X-User-Id`` header.
"""

from fastapi import APIRouter, Depends, Query
from protean.utils.globals import current_domain

from storefront.api.dependencies import current_principal
from storefront.api.schemas import (
    AddToCartRequest,
    AddToCartResponse,
    AllOrdersResponse,
    ChangeStatusRequest,
    ChangeUserRoleRequest,
    ConfirmOrderRequest,
    ConfirmOrderResponse,
    CreateProductRequest,
    DeleteProductResponse,
    LinesResponse,
    MessageResponse,
    ProductIdResponse,
    ProductListResponse,
    ProductPageResponse,
    ProductResponse,
    QueryIdResponse,
    QueryListResponse,
    RatingResponse,
    RegisterUserRequest,
    ReviewListResponse,
    ReviewPageResponse,
    ReviewResponse,
    SendQueryRequest,
    SubmitReviewRequest,
    UserIdResponse,
    UserListResponse,
    UserResponse,
)
from storefront.catalogue.creation import CreateProduct
from storefront.catalogue.queries import DEFAULT_PAGE_SIZE, get_product, list_products, search_products
from storefront.catalogue.rating import RecomputeRating
from storefront.catalogue.removal import DeleteProduct
from storefront.identity.principal import Principal, require_admin
from storefront.identity.queries import get_user_info, list_users
from storefront.identity.registration import ChangeUserRole, RegisterUser
from storefront.ordering.cart import DeleteCartItem, add_to_cart
from storefront.ordering.confirmation import ConfirmOrder
from storefront.ordering.queries import get_active_orders, get_user_cart
from storefront.ordering.status import ChangeStatus
from storefront.reporting.all_orders import get_all_orders
from storefront.reviews.queries import list_all_reviews, list_reviews
from storefront.reviews.submission import SubmitReview
from storefront.support.queries import get_all_queries, get_user_queries
from storefront.support.sending import SendQuery

user_router = APIRouter(prefix="/users", tags=["users"])
product_router = APIRouter(prefix="/products", tags=["products"])
cart_router = APIRouter(prefix="/cart", tags=["cart"])
order_router = APIRouter(prefix="/orders", tags=["orders"])
review_router = APIRouter(prefix="/reviews", tags=["reviews"])
query_router = APIRouter(prefix="/queries", tags=["queries"])


# --- User endpoints ---


@user_router.post("", status_code=201, response_model=UserIdResponse)
async def register_user(body: RegisterUserRequest) -> UserIdResponse:
    command = RegisterUser(name=body.name, email=body.email)
    result = current_domain.process(command, asynchronous=False)
    return UserIdResponse(user_id=result)


@user_router.get("/me", response_model=UserResponse)
async def my_account(principal: Principal = Depends(current_principal)) -> UserResponse:
    return UserResponse(user=get_user_info(principal.id))


@user_router.get("/me/queries", response_model=QueryListResponse)
async def my_queries(principal: Principal = Depends(current_principal)) -> QueryListResponse:
    return QueryListResponse(queries=get_user_queries(principal.id))


@user_router.get("", response_model=UserListResponse)
async def all_users(principal: Principal = Depends(current_principal)) -> UserListResponse:
    return UserListResponse(users=list_users(principal.id))


@user_router.put("/{user_id}/role", response_model=MessageResponse)
async def change_user_role(
    user_id: str,
    body: ChangeUserRoleRequest,
    principal: Principal = Depends(current_principal),
) -> MessageResponse:
    command = ChangeUserRole(admin_id=principal.id, user_id=user_id, role=body.role)
    current_domain.process(command, asynchronous=False)
    return MessageResponse(message="Role updated")


# --- Product endpoints ---


@product_router.post("", status_code=201, response_model=ProductIdResponse)
async def create_product(
    body: CreateProductRequest,
    principal: Principal = Depends(current_principal),
) -> ProductIdResponse:
    command = CreateProduct(
        admin_id=principal.id,
        title=body.title,
        description=body.description,
        price=body.price,
        quantity=body.quantity,
        image=body.image,
    )
    result = current_domain.process(command, asynchronous=False)
    return ProductIdResponse(product_id=result)


@product_router.get("", response_model=ProductPageResponse)
async def product_page(
    page: int = Query(1),
    page_size: int = Query(DEFAULT_PAGE_SIZE),
) -> ProductPageResponse:
    return ProductPageResponse(**list_products(page=page, page_size=page_size))


@product_router.get("/search", response_model=ProductListResponse)
async def product_search(title: str = Query("")) -> ProductListResponse:
    return ProductListResponse(products=search_products(title))


@product_router.get("/{product_id}", response_model=ProductResponse)
async def product_details(product_id: str) -> ProductResponse:
    return ProductResponse(product=get_product(product_id))


@product_router.delete("/{product_id}", response_model=DeleteProductResponse)
async def delete_product(
    product_id: str,
    principal: Principal = Depends(current_principal),
) -> DeleteProductResponse:
    command = DeleteProduct(admin_id=principal.id, product_id=product_id)
    result = current_domain.process(command, asynchronous=False)
    return DeleteProductResponse(message="Product deleted", **result)


@product_router.get("/{product_id}/reviews", response_model=ReviewPageResponse)
async def product_reviews(
    product_id: str,
    page: int = Query(1),
    page_size: int = Query(10),
) -> ReviewPageResponse:
    return ReviewPageResponse(**list_reviews(product_id, page=page, page_size=page_size))


@product_router.post("/{product_id}/rating/recompute", response_model=RatingResponse)
async def recompute_product_rating(
    product_id: str,
    principal: Principal = Depends(current_principal),
) -> RatingResponse:
    require_admin(principal.id)
    rating = current_domain.process(RecomputeRating(product_id=product_id), asynchronous=False)
    return RatingResponse(product_id=product_id, rating=rating)


# --- Cart endpoints ---


@cart_router.post("/items", status_code=201, response_model=AddToCartResponse)
async def add_cart_item(
    body: AddToCartRequest,
    principal: Principal = Depends(current_principal),
) -> AddToCartResponse:
    line_id = add_to_cart(principal.id, body.product_id, body.quantity)
    return AddToCartResponse(message="Product added to cart", line_id=line_id)


@cart_router.delete("/items/{line_id}", response_model=MessageResponse)
async def delete_cart_item(
    line_id: str,
    principal: Principal = Depends(current_principal),
) -> MessageResponse:
    command = DeleteCartItem(user_id=principal.id, line_id=line_id)
    current_domain.process(command, asynchronous=False)
    return MessageResponse(message="Cart item removed")


@cart_router.get("", response_model=LinesResponse)
async def view_cart(principal: Principal = Depends(current_principal)) -> LinesResponse:
    return LinesResponse(lines=get_user_cart(principal.id))


# --- Order endpoints ---


@order_router.post("/confirm", response_model=ConfirmOrderResponse)
async def confirm_order(
    body: ConfirmOrderRequest,
    principal: Principal = Depends(current_principal),
) -> ConfirmOrderResponse:
    command = ConfirmOrder(user_id=principal.id, status=body.status)
    result = current_domain.process(command, asynchronous=False)
    return ConfirmOrderResponse(**result)


@order_router.get("/active", response_model=LinesResponse)
async def active_orders(principal: Principal = Depends(current_principal)) -> LinesResponse:
    return LinesResponse(lines=get_active_orders(principal.id))


@order_router.put("/{order_id}/status", response_model=MessageResponse)
async def change_order_status(
    order_id: str,
    body: ChangeStatusRequest,
    principal: Principal = Depends(current_principal),
) -> MessageResponse:
    command = ChangeStatus(admin_id=principal.id, order_id=order_id, status=body.status)
    current_domain.process(command, asynchronous=False)
    return MessageResponse(message="Order status updated")


@order_router.get("", response_model=AllOrdersResponse)
async def all_orders(principal: Principal = Depends(current_principal)) -> AllOrdersResponse:
    return AllOrdersResponse(orders=get_all_orders(principal.id))


# --- Review endpoints ---


@review_router.post("", response_model=ReviewResponse, response_model_exclude_none=True)
async def submit_review(
    body: SubmitReviewRequest,
    principal: Principal = Depends(current_principal),
) -> ReviewResponse:
    command = SubmitReview(
        user_id=principal.id,
        product_id=body.product_id,
        rating=body.rating,
        text=body.text,
    )
    result = current_domain.process(command, asynchronous=False)
    if result["created"]:
        return ReviewResponse(review=result["review"])
    return ReviewResponse(message="Review updated", review=result["review"])


@review_router.get("", response_model=ReviewListResponse)
async def recent_reviews(limit: int = Query(10)) -> ReviewListResponse:
    return ReviewListResponse(reviews=list_all_reviews(limit=limit))


# --- Customer query endpoints ---


@query_router.post("", status_code=201, response_model=QueryIdResponse)
async def send_query(
    body: SendQueryRequest,
    principal: Principal = Depends(current_principal),
) -> QueryIdResponse:
    command = SendQuery(
        user_id=principal.id,
        name=body.name,
        phone=body.phone,
        email=body.email,
        message=body.message,
    )
    result = current_domain.process(command, asynchronous=False)
    return QueryIdResponse(message="Your query has been sent", query_id=result)


@query_router.get("", response_model=QueryListResponse)
async def all_queries(principal: Principal = Depends(current_principal)) -> QueryListResponse:
    return QueryListResponse(queries=get_all_queries(principal.id))
