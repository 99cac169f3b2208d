"""Customer order endpoints."""
import logging
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session, joinedload

from kimi_kitchen.api.deps import get_current_user, require_any_role
from kimi_kitchen.database import get_db
from kimi_kitchen.models.order import Order, OrderItem
from kimi_kitchen.models.recipe import Recipe
from kimi_kitchen.models.user import User
from kimi_kitchen.schemas.order import OrderCreate, OrderList, OrderResponse, OrderStatusUpdate
from kimi_kitchen.services.roles import Role

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/orders", tags=["orders"])


def _load_order(db: Session, order_id: UUID) -> Order | None:
    return (
        db.query(Order)
        .options(joinedload(Order.items).joinedload(OrderItem.recipe))
        .filter(Order.id == order_id)
        .first()
    )


@router.get("", response_model=OrderList)
def list_orders(
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """List orders with their items, newest first."""
    orders = (
        db.query(Order)
        .options(joinedload(Order.items).joinedload(OrderItem.recipe))
        .order_by(Order.order_date.desc())
        .all()
    )
    return OrderList(orders=orders, count=len(orders))


@router.post("", response_model=OrderResponse, status_code=201)
def create_order(
    data: OrderCreate,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """Create an order. Each line's total is quantity * unit_price."""
    recipe_ids = {item.recipe_id for item in data.items}
    found = {r.id for r in db.query(Recipe.id).filter(Recipe.id.in_(recipe_ids)).all()}
    missing = recipe_ids - found
    if missing:
        raise HTTPException(status_code=404, detail=f"Recipe {sorted(missing, key=str)[0]} not found")

    order = Order(customer_name=data.customer_name, status=data.status)
    for item in data.items:
        order.items.append(OrderItem(
            recipe_id=item.recipe_id,
            quantity=item.quantity,
            unit_price=item.unit_price,
            total_price=item.quantity * item.unit_price,
        ))
    db.add(order)
    db.commit()

    logger.info(f"Created order for {order.customer_name} with {len(data.items)} item(s)")
    return _load_order(db, order.id)


@router.patch("/{order_id}/status", response_model=OrderResponse)
def update_order_status(
    order_id: UUID,
    data: OrderStatusUpdate,
    db: Session = Depends(get_db),
    user: User = Depends(require_any_role(
        Role.ADMIN,
        Role.MANAGER,
        message="Access denied. Only Admin and Manager roles can change order status.",
    )),
):
    """Set an order's status. Any listed status may follow any other."""
    order = _load_order(db, order_id)
    if not order:
        raise HTTPException(status_code=404, detail="Order not found")

    previous = order.status
    order.status = data.status
    db.commit()
    logger.info(f"Order {order.id} status {previous} -> {data.status} by {user.username}")
    return _load_order(db, order_id)
