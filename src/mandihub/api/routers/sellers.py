"""
mandihub.api.routers.sellers

Seller endpoints for both backends. Profiles travel embedded in the seller.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from mandihub.api.deps import catalog_dep
from mandihub.schemas import MessageResponse, SellerPayload, SellerRecord
from mandihub.services.catalog_service import SellerService
from mandihub.stores import Catalog

router = APIRouter(prefix="/seller", tags=["seller"])


@router.get("/all/{backend}", response_model=list[SellerRecord])
async def list_sellers(catalog: Catalog = Depends(catalog_dep)) -> list[SellerRecord]:
    return await SellerService(catalog).list_all()


@router.get("/{backend}", response_model=list[SellerRecord])
async def find_sellers(
    first_name: str = Query(..., alias="firstName"),
    catalog: Catalog = Depends(catalog_dep),
) -> list[SellerRecord]:
    return await SellerService(catalog).find_by_first_name(first_name)


@router.post("/{backend}", response_model=SellerRecord)
async def create_seller(
    body: SellerPayload,
    catalog: Catalog = Depends(catalog_dep),
) -> SellerRecord:
    return await SellerService(catalog).create(body)


@router.put("/{backend}", response_model=MessageResponse)
async def update_seller(
    body: SellerPayload,
    catalog: Catalog = Depends(catalog_dep),
) -> MessageResponse:
    await SellerService(catalog).update(body)
    return MessageResponse(message="The seller updated")
