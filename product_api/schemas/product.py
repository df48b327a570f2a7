"""
Product API — Pydantic Request/Response Schemas
=================================================

What:  Pydantic models defining the JSON contract of the API, plus the
       payload decoder used by the create and update handlers.
How:   Request bodies are decoded explicitly with `decode_product_payload`
       so the handlers control when decoding happens (after the not-found
       check on update). Responses are serialized from ORM objects through
       `ProductResponse`.

Decoding rules:
    - Body must be a JSON object
    - name: JSON string; price: JSON number; quantity: JSON integer
    - All three fields are required; "id" and unknown keys are ignored
    - No coercion (strict mode): "10" is not a quantity, true is not a price
    - price must be finite; quantity must fit a signed 64-bit integer
"""

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from product_api.exceptions import InvalidPayloadError
from product_api.models.product import INT64_MAX, INT64_MIN


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class ProductPayload(BaseModel):
    """
    What:  Writable product fields accepted by POST and PUT.
    Who:   Produced by `decode_product_payload`; consumed by ProductStore.

    No business validation (negative price, empty name) by design of the
    API contract; any well-typed payload is accepted.
    """
    model_config = ConfigDict(strict=True, extra="ignore")

    name: str = Field(description="Product name")
    # NaN, Infinity and overflowing literals like 1e999 are not JSON numbers
    price: float = Field(allow_inf_nan=False, description="Unit price")
    quantity: int = Field(ge=INT64_MIN, le=INT64_MAX, description="Units in stock")


def decode_product_payload(raw: bytes) -> ProductPayload:
    """
    Decode a raw request body into a ProductPayload.

    Raises:
        InvalidPayloadError: body is not JSON or does not have the product shape
    """
    try:
        return ProductPayload.model_validate_json(raw)
    except ValidationError as e:
        raise InvalidPayloadError(
            context={"errors": [err["type"] for err in e.errors()]},
        ) from e


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class ProductResponse(BaseModel):
    """
    What:  Full representation of a stored product.
    Who:   Returned by every product endpoint except DELETE.
    """
    id: int = Field(description="Store-assigned product identifier")
    name: str = Field(description="Product name")
    price: float = Field(description="Unit price")
    quantity: int = Field(description="Units in stock")

    model_config = {"from_attributes": True}


class ErrorResponse(BaseModel):
    """
    What:  Error body shared by all error responses.

    Example:
        {"error": "Product not found"}
    """
    error: str = Field(description="Human-readable error description")


class HealthResponse(BaseModel):
    """
    What:  Health check response showing service and store status.
    Who:   Returned by GET /health for monitoring and container liveness checks.
    """
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
