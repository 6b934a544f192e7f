from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from homemadefood.application.catalog_service import CatalogService
from homemadefood.domain.schemas import CreateCategoryRequest, CreateFoodItemRequest, UpdateFoodItemRequest
from homemadefood.interfaces.dependencies import CurrentUser, get_catalog_service, require_admin
from homemadefood.interfaces.responses import envelope

# Public reads
router = APIRouter(prefix="/food", tags=["food"])

# Catalog management, admin role only
admin_router = APIRouter(prefix="/admin", tags=["admin"])


@router.get("/categories")
def list_categories(service: CatalogService = Depends(get_catalog_service)):
    return envelope(service.list_categories(), "Categories retrieved successfully")


@router.get("/search")
def search_food(
    q: Optional[str] = None,
    category: Optional[str] = None,
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    service: CatalogService = Depends(get_catalog_service),
):
    return envelope(service.search(q, category, page, limit), "Food items retrieved successfully")


@router.get("/featured")
def featured_food(
    limit: int = Query(10, ge=1, le=100),
    service: CatalogService = Depends(get_catalog_service),
):
    return envelope(service.featured(limit), "Featured items retrieved successfully")


@router.get("/popular")
def popular_food(
    limit: int = Query(10, ge=1, le=100),
    service: CatalogService = Depends(get_catalog_service),
):
    return envelope(service.popular(limit), "Popular items retrieved successfully")


@router.get("/restaurant/{restaurant_id}")
def restaurant_food(
    restaurant_id: str,
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    service: CatalogService = Depends(get_catalog_service),
):
    return envelope(service.by_restaurant(restaurant_id, page, limit), "Restaurant items retrieved successfully")


@router.get("/{item_id}")
def get_food_item(item_id: str, service: CatalogService = Depends(get_catalog_service)):
    return envelope(service.get_item(item_id), "Food item retrieved successfully")


# --- admin ---

@admin_router.post("/food", status_code=status.HTTP_201_CREATED)
def create_food_item(
    request: CreateFoodItemRequest,
    admin: CurrentUser = Depends(require_admin),
    service: CatalogService = Depends(get_catalog_service),
):
    return envelope(service.create_item(request), "Food item created successfully")


@admin_router.get("/food")
def list_food_items(
    page: int = Query(1, ge=1),
    limit: int = Query(50, ge=1, le=100),
    admin: CurrentUser = Depends(require_admin),
    service: CatalogService = Depends(get_catalog_service),
):
    return envelope(service.list_all(page, limit), "Food items retrieved successfully")


@admin_router.get("/food/{item_id}")
def admin_get_food_item(
    item_id: str,
    admin: CurrentUser = Depends(require_admin),
    service: CatalogService = Depends(get_catalog_service),
):
    return envelope(service.get_item(item_id), "Food item retrieved successfully")


@admin_router.patch("/food/{item_id}")
def update_food_item(
    item_id: str,
    request: UpdateFoodItemRequest,
    admin: CurrentUser = Depends(require_admin),
    service: CatalogService = Depends(get_catalog_service),
):
    return envelope(service.update_item(item_id, request), "Food item updated successfully")


@admin_router.delete("/food/{item_id}")
def delete_food_item(
    item_id: str,
    admin: CurrentUser = Depends(require_admin),
    service: CatalogService = Depends(get_catalog_service),
):
    service.delete_item(item_id)
    return envelope(None, "Food item deleted successfully")


@admin_router.post("/categories", status_code=status.HTTP_201_CREATED)
def create_category(
    request: CreateCategoryRequest,
    admin: CurrentUser = Depends(require_admin),
    service: CatalogService = Depends(get_catalog_service),
):
    return envelope(service.create_category(request), "Category created successfully")


@admin_router.get("/categories")
def admin_list_categories(
    admin: CurrentUser = Depends(require_admin),
    service: CatalogService = Depends(get_catalog_service),
):
    return envelope(service.list_categories(active_only=False), "Categories retrieved successfully")
