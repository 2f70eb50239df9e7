"""FastAPI endpoints for browsing the catalogue, backed by the app's catalogue source."""

from fastapi import APIRouter, HTTPException, Query, Request

from catalogue.api.schemas import ComboPackSchema, FarmerSchema, ProductSchema
from catalogue.source import FarmerNotFoundError, ProductNotFoundError

product_router = APIRouter(prefix="/products", tags=["products"])
farmer_router = APIRouter(prefix="/farmers", tags=["farmers"])
combo_router = APIRouter(prefix="/combos", tags=["combos"])


# --- Product endpoints ---


@product_router.get("", response_model=list[ProductSchema])
async def list_products(request: Request, category: str | None = None):
    products = request.app.state.catalogue.list_products(category=category)
    return [ProductSchema.model_validate(p) for p in products]


@product_router.get("/featured", response_model=list[ProductSchema])
async def featured_products(request: Request, count: int = Query(default=6, ge=1, le=50)):
    products = request.app.state.catalogue.featured_products(count=count)
    return [ProductSchema.model_validate(p) for p in products]


@product_router.get("/categories", response_model=list[str])
async def list_categories(request: Request):
    return request.app.state.catalogue.list_categories()


@product_router.get("/{product_id}", response_model=ProductSchema)
async def get_product(request: Request, product_id: str):
    try:
        product = request.app.state.catalogue.get_product(product_id)
    except ProductNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    return ProductSchema.model_validate(product)


# --- Farmer endpoints ---


@farmer_router.get("", response_model=list[FarmerSchema])
async def list_farmers(request: Request):
    return [FarmerSchema.model_validate(f) for f in request.app.state.catalogue.list_farmers()]


@farmer_router.get("/{farmer_id}", response_model=FarmerSchema)
async def get_farmer(request: Request, farmer_id: str):
    try:
        farmer = request.app.state.catalogue.get_farmer(farmer_id)
    except FarmerNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    return FarmerSchema.model_validate(farmer)


@farmer_router.get("/{farmer_id}/products", response_model=list[ProductSchema])
async def farmer_products(request: Request, farmer_id: str):
    products = request.app.state.catalogue.products_by_farmer(farmer_id)
    return [ProductSchema.model_validate(p) for p in products]


# --- Combo endpoints ---


@combo_router.get("", response_model=list[ComboPackSchema])
async def list_combo_packs(request: Request):
    return [ComboPackSchema.model_validate(c) for c in request.app.state.catalogue.combo_packs()]
