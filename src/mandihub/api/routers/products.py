"""
mandihub.api.routers.products

Product endpoints for both backends.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from mandihub.api.deps import catalog_dep
from mandihub.schemas import MessageResponse, ProductPayload, ProductRecord
from mandihub.services.catalog_service import ProductService
from mandihub.stores import Catalog

router = APIRouter(prefix="/product", tags=["product"])


@router.get("/all/{backend}", response_model=list[ProductRecord])
async def list_products(catalog: Catalog = Depends(catalog_dep)) -> list[ProductRecord]:
    return await ProductService(catalog).list_all()


@router.get("/{backend}", response_model=ProductRecord)
async def get_product(
    name: str = Query(...),
    catalog: Catalog = Depends(catalog_dep),
) -> ProductRecord:
    return await ProductService(catalog).get_by_name(name)


@router.post("/{backend}", response_model=ProductRecord)
async def create_product(
    body: ProductPayload,
    catalog: Catalog = Depends(catalog_dep),
) -> ProductRecord:
    return await ProductService(catalog).create(body)


@router.put("/{backend}", response_model=MessageResponse)
async def update_product(
    body: ProductPayload,
    catalog: Catalog = Depends(catalog_dep),
) -> MessageResponse:
    await ProductService(catalog).update(body)
    return MessageResponse(message="The product updated")
