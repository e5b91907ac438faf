"""REST API over the order workflow, the catalog, stocktakes and users.

Run with ``wms-api`` or: uvicorn --factory wms.infrastructure.api.app:create_app
"""

from __future__ import annotations

import uvicorn
from fastapi import APIRouter, Depends, FastAPI, Query, Request

from wms.application.complete_order import CompleteOrderHandler
from wms.application.dashboard_stats import DashboardStatsHandler
from wms.application.import_catalog import ImportCatalogHandler
from wms.application.list_orders import ListOrdersHandler
from wms.application.manage_users import (
    ApproveUserHandler,
    ChangeUserRoleHandler,
    ListUsersHandler,
    RegisterUserHandler,
    RemoveUserHandler,
)
from wms.application.save_inventory_count import SaveInventoryCountHandler
from wms.application.save_order import SaveOrderHandler
from wms.application.search_products import SearchProductsHandler
from wms.application.shortage_report import ShortageReportHandler
from wms.application.show_inventory_count import (
    DeleteInventoryCountHandler,
    ListInventoryCountsHandler,
    ShowInventoryCountHandler,
)
from wms.application.show_order import ShowOrderHandler
from wms.infrastructure.api.errors import setup_exception_handlers
from wms.infrastructure.api.schemas import (
    CompleteOrderIn,
    DashboardStatsOut,
    ImportProductsIn,
    InventoryCountIn,
    InventoryCountOut,
    MessageOut,
    OrderIn,
    OrderOut,
    ProductOut,
    RegisterIn,
    RoleIn,
    ShortageOut,
    UserOut,
)
from wms.infrastructure.bootstrap import Container
from wms.infrastructure.config import get_config
from wms.infrastructure.logging_config import setup_logging

router = APIRouter(prefix="/api")


def get_container(request: Request) -> Container:
    return request.app.state.container


# --- Catalog ----------------------------------------------------------------


@router.get("/products", response_model=list[ProductOut])
def search_products(
    search: str | None = None,
    available_only: bool = Query(False, alias="availableOnly"),
    container: Container = Depends(get_container),
):
    handler = SearchProductsHandler(
        container.product_repository(), limit=container.config.SEARCH_LIMIT
    )
    return [ProductOut.from_dto(p) for p in handler.handle(search, in_stock_only=available_only)]


@router.post("/admin/import-products", response_model=MessageOut)
def import_products(body: ImportProductsIn, container: Container = Depends(get_container)):
    names = body.files or container.config.CATALOG_FILES
    # Only files inside the data directory can be imported.
    paths = [container.data_dir / name for name in names if "/" not in name and "\\" not in name]
    count = ImportCatalogHandler(container.product_repository()).handle(paths)
    return MessageOut(message=f"Imported {count} products")


# --- Orders -----------------------------------------------------------------


@router.get("/orders", response_model=list[OrderOut])
def list_orders(status: str | None = None, container: Container = Depends(get_container)):
    orders = ListOrdersHandler(container.order_repository()).handle(status)
    return [OrderOut.from_dto(o) for o in orders]


@router.get("/orders/{order_id}", response_model=OrderOut)
def get_order(order_id: str, container: Container = Depends(get_container)):
    return OrderOut.from_dto(ShowOrderHandler(container.order_repository()).handle(order_id))


@router.post("/orders", response_model=OrderOut, status_code=201)
def create_order(body: OrderIn, container: Container = Depends(get_container)):
    return _save_order(container, body, order_id=None)


@router.put("/orders/{order_id}", response_model=OrderOut)
def update_order(order_id: str, body: OrderIn, container: Container = Depends(get_container)):
    return _save_order(container, body, order_id=order_id)


def _save_order(container: Container, body: OrderIn, order_id: str | None) -> OrderOut:
    handler = SaveOrderHandler(container.order_repository(), container.product_repository())
    dto = handler.handle(
        body.customer_name,
        [item.to_spec() for item in body.items],
        order_id=order_id,
        author=body.author,
    )
    return OrderOut.from_dto(dto)


@router.post("/orders/{order_id}/complete", response_model=OrderOut)
def complete_order(
    order_id: str, body: CompleteOrderIn, container: Container = Depends(get_container)
):
    handler = CompleteOrderHandler(container.order_repository())
    dto = handler.handle(order_id, [r.to_record() for r in body.pick_records])
    return OrderOut.from_dto(dto)


@router.get("/reports/shortages", response_model=list[ShortageOut])
def shortage_report(container: Container = Depends(get_container)):
    rows = ShortageReportHandler(container.order_repository()).handle()
    return [ShortageOut.from_dto(r) for r in rows]


@router.get("/dashboard-stats", response_model=DashboardStatsOut)
def dashboard_stats(container: Container = Depends(get_container)):
    handler = DashboardStatsHandler(container.order_repository(), container.product_repository())
    return DashboardStatsOut.from_dto(handler.handle())


# --- Inventory counts -------------------------------------------------------


@router.get("/inventories", response_model=list[InventoryCountOut])
def list_inventories(container: Container = Depends(get_container)):
    counts = ListInventoryCountsHandler(container.inventory_count_repository()).handle()
    return [InventoryCountOut.from_dto(c) for c in counts]


@router.get("/inventories/{count_id}", response_model=InventoryCountOut)
def get_inventory(count_id: str, container: Container = Depends(get_container)):
    dto = ShowInventoryCountHandler(container.inventory_count_repository()).handle(count_id)
    return InventoryCountOut.from_dto(dto)


@router.post("/inventories", response_model=InventoryCountOut, status_code=201)
def create_inventory(body: InventoryCountIn, container: Container = Depends(get_container)):
    return _save_inventory(container, body, count_id=None)


@router.put("/inventories/{count_id}", response_model=InventoryCountOut)
def update_inventory(
    count_id: str, body: InventoryCountIn, container: Container = Depends(get_container)
):
    return _save_inventory(container, body, count_id=count_id)


def _save_inventory(
    container: Container, body: InventoryCountIn, count_id: str | None
) -> InventoryCountOut:
    handler = SaveInventoryCountHandler(
        container.inventory_count_repository(), container.product_repository()
    )
    dto = handler.handle(
        body.name,
        [item.to_spec() for item in body.items],
        count_id=count_id,
        author=body.author,
    )
    return InventoryCountOut.from_dto(dto)


@router.delete("/inventories/{count_id}", response_model=MessageOut)
def delete_inventory(count_id: str, container: Container = Depends(get_container)):
    DeleteInventoryCountHandler(container.inventory_count_repository()).handle(count_id)
    return MessageOut(message=f"Inventory count {count_id} deleted")


# --- Users ------------------------------------------------------------------


@router.post("/register", response_model=UserOut, status_code=201)
def register(body: RegisterIn, container: Container = Depends(get_container)):
    return UserOut.from_dto(RegisterUserHandler(container.user_repository()).handle(body.username))


@router.get("/admin/users", response_model=list[UserOut])
def list_users(container: Container = Depends(get_container)):
    return [UserOut.from_dto(u) for u in ListUsersHandler(container.user_repository()).handle()]


@router.post("/admin/users/{username}/approve", response_model=UserOut)
def approve_user(username: str, container: Container = Depends(get_container)):
    return UserOut.from_dto(ApproveUserHandler(container.user_repository()).handle(username))


@router.post("/admin/users/{username}/role", response_model=UserOut)
def change_role(username: str, body: RoleIn, container: Container = Depends(get_container)):
    handler = ChangeUserRoleHandler(container.user_repository())
    return UserOut.from_dto(handler.handle(username, body.role))


@router.delete("/admin/users/{username}", response_model=MessageOut)
def remove_user(username: str, container: Container = Depends(get_container)):
    RemoveUserHandler(container.user_repository()).handle(username)
    return MessageOut(message=f"User '{username}' removed")


def create_app(container: Container | None = None) -> FastAPI:
    container = container or Container()
    setup_logging(container.config)

    application = FastAPI(
        title="WMS API",
        description="Warehouse orders, picking and stocktakes",
        version="0.1.0",
        debug=container.config.API_DEBUG,
    )
    application.state.container = container
    setup_exception_handlers(application)
    application.include_router(router)
    return application


def run() -> None:
    config = get_config()
    uvicorn.run(create_app(Container(config)), host=config.API_HOST, port=config.API_PORT)
