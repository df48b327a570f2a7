"""
Product API — Product Route Handlers
======================================

What:  The five CRUD endpoints of the product resource.
How:   Each handler is decode → ProductStore call → encode. The store is
       injected per request through `get_product_store`.

Routes:
    GET    /products          list every product          200
    GET    /products/{id}     fetch one product           200 | 404
    POST   /products          create a product            201 | 400
    PUT    /products/{id}     overwrite name/price/qty    200 | 404 | 400
    DELETE /products/{id}     delete a product            204 | 404

Request bodies are read raw and decoded with `decode_product_payload` inside
the handler, so PUT answers 404 for a missing product before it looks at the
body. Errors are raised as exceptions and turned into responses by the
global handlers in main.py.
"""

import logging
from typing import Annotated, List

from fastapi import APIRouter, Depends, Path, Request, Response

from product_api.models.product import INT64_MAX, INT64_MIN
from product_api.schemas.product import (
    ErrorResponse,
    ProductPayload,
    ProductResponse,
    decode_product_payload,
)
from product_api.services.product_store import ProductStore, get_product_store

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/products", tags=["Products"])

# Ids outside the BIGINT column range can never match a row; they fail
# path validation and are answered as 404 by the global handler
ProductId = Annotated[
    int,
    Path(ge=INT64_MIN, le=INT64_MAX, description="Product identifier"),
]

# Request body documentation; the body itself is decoded by hand
_PAYLOAD_BODY = {
    "requestBody": {
        "required": True,
        "content": {
            "application/json": {"schema": ProductPayload.model_json_schema()},
        },
    },
}

_NOT_FOUND = {404: {"description": "Product not found", "model": ErrorResponse}}
_INVALID = {400: {"description": "Invalid request payload", "model": ErrorResponse}}


@router.get(
    "",
    response_model=List[ProductResponse],
    summary="List all products",
)
async def list_products(
    store: ProductStore = Depends(get_product_store),
) -> List[ProductResponse]:
    products = await store.find_all()
    return [ProductResponse.model_validate(product) for product in products]


@router.get(
    "/{product_id}",
    response_model=ProductResponse,
    responses=_NOT_FOUND,
    summary="Get a single product by ID",
)
async def get_product(
    product_id: ProductId,
    store: ProductStore = Depends(get_product_store),
) -> ProductResponse:
    product = await store.find_by_id(product_id)
    return ProductResponse.model_validate(product)


@router.post(
    "",
    status_code=201,
    response_model=ProductResponse,
    responses=_INVALID,
    openapi_extra=_PAYLOAD_BODY,
    summary="Create a product",
)
async def create_product(
    request: Request,
    store: ProductStore = Depends(get_product_store),
) -> ProductResponse:
    """
    Create a product from a JSON body.

    Any "id" in the body is ignored; the store assigns one.
    """
    payload = decode_product_payload(await request.body())
    product = await store.insert(payload)
    return ProductResponse.model_validate(product)


@router.put(
    "/{product_id}",
    response_model=ProductResponse,
    responses={**_NOT_FOUND, **_INVALID},
    openapi_extra=_PAYLOAD_BODY,
    summary="Update a product",
)
async def update_product(
    product_id: ProductId,
    request: Request,
    store: ProductStore = Depends(get_product_store),
) -> ProductResponse:
    """
    Overwrite name, price and quantity of an existing product.

    The lookup runs before the body is decoded: a missing product is 404
    even when the body is malformed. The id is never changed.
    """
    product = await store.find_by_id(product_id)
    payload = decode_product_payload(await request.body())

    product.name = payload.name
    product.price = payload.price
    product.quantity = payload.quantity

    product = await store.save(product)
    return ProductResponse.model_validate(product)


@router.delete(
    "/{product_id}",
    status_code=204,
    response_class=Response,
    responses=_NOT_FOUND,
    summary="Delete a product",
)
async def delete_product(
    product_id: ProductId,
    store: ProductStore = Depends(get_product_store),
) -> Response:
    await store.find_by_id(product_id)
    await store.delete(product_id)
    return Response(status_code=204)
