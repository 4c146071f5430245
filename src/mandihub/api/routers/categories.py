"""
mandihub.api.routers.categories

Category endpoints for both backends.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from mandihub.api.deps import catalog_dep
from mandihub.schemas import CategoryPayload, CategoryRecord, MessageResponse
from mandihub.services.catalog_service import CategoryService
from mandihub.stores import Catalog

router = APIRouter(prefix="/category", tags=["category"])


@router.get("/all/{backend}", response_model=list[CategoryRecord])
async def list_categories(catalog: Catalog = Depends(catalog_dep)) -> list[CategoryRecord]:
    return await CategoryService(catalog).list_all()


@router.get("/{backend}", response_model=CategoryRecord)
async def get_category(
    name: str = Query(...),
    catalog: Catalog = Depends(catalog_dep),
) -> CategoryRecord:
    return await CategoryService(catalog).get_by_name(name)


@router.post("/{backend}", response_model=CategoryRecord)
async def create_category(
    body: CategoryPayload,
    catalog: Catalog = Depends(catalog_dep),
) -> CategoryRecord:
    return await CategoryService(catalog).create(body)


@router.put("/{backend}", response_model=MessageResponse)
async def update_category(
    body: CategoryPayload,
    catalog: Catalog = Depends(catalog_dep),
) -> MessageResponse:
    # Renames fan out to every product embedding this category (document backend).
    await CategoryService(catalog).update(body)
    return MessageResponse(message="The category updated")
