"""Pydantic request/response schemas for the Storefront API."""

from __future__ import annotations

from pydantic import BaseModel, Field

# --- Users ---


class RegisterUserRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Jane Doe",
                    "email": "jane.doe@example.com",
                }
            ]
        }
    }

    name: str = Field(..., max_length=100)
    email: str = Field(..., max_length=254)


class ChangeUserRoleRequest(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"role": "admin"}]}}

    role: str = Field(..., max_length=20)


class UserIdResponse(BaseModel):
    success: bool = True
    user_id: str


class UserResponse(BaseModel):
    success: bool = True
    user: dict


class UserListResponse(BaseModel):
    success: bool = True
    users: list[dict]


# --- Products ---


class CreateProductRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "title": "Classic Black T-Shirt",
                    "description": "Premium cotton crew-neck tee in black.",
                    "price": 29.99,
                    "quantity": 50,
                    "image": "https://cdn.example.com/tshirt-black.png",
                }
            ]
        }
    }

    title: str = Field(..., max_length=255)
    description: str
    price: float
    quantity: int = 0
    image: str | None = Field(None, max_length=500)


class ProductIdResponse(BaseModel):
    success: bool = True
    product_id: str


class ProductResponse(BaseModel):
    success: bool = True
    product: dict


class ProductPageResponse(BaseModel):
    success: bool = True
    products: list[dict]
    page: int
    page_size: int
    total: int


class ProductListResponse(BaseModel):
    success: bool = True
    products: list[dict]


class DeleteProductResponse(BaseModel):
    success: bool = True
    message: str
    reviews_removed: int
    order_lines_removed: int


class RatingResponse(BaseModel):
    success: bool = True
    product_id: str
    rating: float


# --- Cart and orders ---


class AddToCartRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "product_id": "prod-001",
                    "quantity": 2,
                }
            ]
        }
    }

    product_id: str
    quantity: int


class AddToCartResponse(BaseModel):
    success: bool = True
    message: str
    line_id: str


class LinesResponse(BaseModel):
    success: bool = True
    lines: list[dict]


class ConfirmOrderRequest(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"status": "processing"}]}}

    status: str = Field("processing", max_length=50)


class ConfirmOrderResponse(BaseModel):
    success: bool = True
    changed_count: int
    message: str
    lines: list[dict]


class ChangeStatusRequest(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"status": "shipped"}]}}

    status: str = Field(..., max_length=50)


class AllOrdersResponse(BaseModel):
    success: bool = True
    orders: list[dict]


# --- Reviews ---


class SubmitReviewRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "product_id": "prod-001",
                    "rating": 4,
                    "text": "Great fit and the fabric holds up well after washing.",
                }
            ]
        }
    }

    product_id: str
    rating: int
    text: str


class ReviewResponse(BaseModel):
    success: bool = True
    message: str | None = None
    review: dict


class ReviewPageResponse(BaseModel):
    success: bool = True
    reviews: list[dict]
    page: int
    page_size: int
    total: int


class ReviewListResponse(BaseModel):
    success: bool = True
    reviews: list[dict]


# --- Customer queries ---


class SendQueryRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Jane Doe",
                    "phone": "+1 555 010 0199",
                    "email": "jane.doe@example.com",
                    "message": "Do you ship the black tee to Canada?",
                }
            ]
        }
    }

    name: str = Field(..., max_length=100)
    phone: str = Field(..., max_length=20)
    email: str = Field(..., max_length=254)
    message: str


class QueryIdResponse(BaseModel):
    success: bool = True
    message: str
    query_id: str


class QueryListResponse(BaseModel):
    success: bool = True
    queries: list[dict]


# --- Common ---


class MessageResponse(BaseModel):
    success: bool = True
    message: str
