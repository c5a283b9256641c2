
import logging
from typing import List

import uvicorn
from fastapi import Depends, Request, Response

from common.app import create_app
from common.errors import error_response
from common.models import Product
from inventory_service.app.config import CORS_ORIGIN, LOG_LEVEL, PORT
from inventory_service.app.models import ProductCreateRequest, ProductUpdateRequest
from inventory_service.app.store import ProductStore, get_store

# Configure logging
logging.basicConfig(level=LOG_LEVEL, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
logger = logging.getLogger("inventory_service")

app = create_app(
    "inventory-api",
    title="Inventory API",
    description="Product catalog and stock levels",
    cors_origin=CORS_ORIGIN,
)


@app.get("/products", response_model=List[Product])
def list_products(products: ProductStore = Depends(get_store)):
    return products.list()


@app.get("/products/{product_id}", response_model=Product)
def get_product(request: Request, product_id: str, products: ProductStore = Depends(get_store)):
    product = products.find_by_id(product_id)
    if product is None:
        logger.info(f"Product {product_id} not found, correlation {request.state.correlation_id}")
        return error_response("PRODUCT_NOT_FOUND", f"Product with id '{product_id}' not found", 404)
    return product


@app.post("/products", response_model=Product, status_code=201)
def create_product(request: Request, body: ProductCreateRequest, products: ProductStore = Depends(get_store)):
    logger.info(f"Create product {body.id}, correlation {request.state.correlation_id}")
    return products.create(body)


@app.put("/products/{product_id}", response_model=Product)
def update_product(
    request: Request,
    product_id: str,
    body: ProductUpdateRequest,
    products: ProductStore = Depends(get_store),
):
    changes = body.model_dump(exclude_none=True)
    if not changes:
        return error_response(
            "INVALID_PAYLOAD", "At least one of name, stock or price must be provided", 400
        )
    logger.info(f"Update product {product_id} ({', '.join(changes)}), correlation {request.state.correlation_id}")
    return products.update(product_id, changes)


@app.delete("/products/{product_id}", status_code=204)
def delete_product(request: Request, product_id: str, products: ProductStore = Depends(get_store)):
    products.delete(product_id)
    logger.info(f"Deleted product {product_id}, correlation {request.state.correlation_id}")
    return Response(status_code=204)


if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=PORT)
