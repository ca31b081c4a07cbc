"""
Order service - persists checkout drafts and reads order history.
"""
from typing import List, Optional
import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, joinedload

from fuelshop.exceptions import BusinessLogicError, NotFoundError, OrderSubmissionError
from fuelshop.models import Order, OrderItem, OrderStatus
from fuelshop.services.checkout_service import OrderDraft
from fuelshop.services.pricing_service import round_money

logger = logging.getLogger(__name__)


def submit_order(
    session: Session,
    user_id: int,
    draft: OrderDraft,
    idempotency_key: Optional[str] = None
) -> int:
    """
    Persist an order and its items in one transaction.

    The caller clears the cart only after this returns. On any failure the
    transaction is rolled back and OrderSubmissionError is raised so the
    shopper can retry with the cart intact.

    Returns:
        order id
    """
    if idempotency_key:
        existing = session.query(Order).filter_by(idempotency_key=idempotency_key).first()
        if existing:
            raise BusinessLogicError(
                f'This order was already placed (ID: {existing.id})',
                status_code=409,
                payload={'order_id': existing.id}
            )

    try:
        order = Order(
            user_id=user_id,
            subtotal=round_money(draft.subtotal),
            delivery_fee=draft.delivery_fee,
            total_amount=draft.total_amount,
            delivery_address=draft.delivery_address,
            special_instructions=draft.special_instructions,
            payment_method=draft.payment_method.value,
            status=OrderStatus.PENDING,
            idempotency_key=idempotency_key,
        )
        session.add(order)
        session.flush()

        for item in draft.snapshot.items:
            session.add(OrderItem(
                order_id=order.id,
                product_id=item.product_id,
                quantity=item.quantity,
                price_at_order=item.unit_price,
                line_total=round_money(item.line_total),
            ))

        session.commit()
    except SQLAlchemyError as e:
        session.rollback()
        logger.error(f"Order submission failed for user {user_id}: {e}")
        raise OrderSubmissionError()

    logger.info(f"Order {order.id} placed by user {user_id} total={order.total_amount}")
    return order.id


def list_orders_for_user(session: Session, user_id: int) -> List[Order]:
    """Orders of one user, newest first, with items and products loaded."""
    return (
        session.query(Order)
        .options(joinedload(Order.items).joinedload(OrderItem.product))
        .filter(Order.user_id == user_id)
        .order_by(Order.created_at.desc(), Order.id.desc())
        .all()
    )


def get_order(session: Session, order_id: int, user_id: int) -> Order:
    """Single order owned by `user_id`."""
    order = session.query(Order).filter(
        Order.id == order_id,
        Order.user_id == user_id
    ).first()
    if not order:
        raise NotFoundError('Order not found.')
    return order
