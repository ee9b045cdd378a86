# agrigrow/services/order_service.py
from datetime import datetime, timezone
from decimal import Decimal
from typing import Dict, Any, List

from sqlalchemy.orm import Session

from agrigrow.data.models.order import OrderModel
from agrigrow.domain.enums import OrderStatus, is_terminal
from agrigrow.domain.errors import MissingFields, InvalidInput, NotFound, InvalidTransition
from agrigrow.repos.order_repo import OrderRepo
from agrigrow.repos.product_repo import ProductRepo
from agrigrow.services.address_service import AddressService
from agrigrow.services.notification_service import NotificationService
from agrigrow.utils.ids import parse_id
from agrigrow.utils.logging import get_logger

logger = get_logger(__name__)

PLACEHOLDER_PHOTO = "https://via.placeholder.com/100"
MISSING_PRODUCT_NAME = "Product Not Found"


def _snapshot_item(item: Dict[str, Any]) -> Dict[str, Any]:
    # stored as JSON; prices go in as strings so no precision is lost
    return {
        "product_id": item.get("product_id"),
        "name": item.get("name"),
        "price": str(Decimal(str(item["price"]))),
        "quantity": int(item.get("quantity") or 1),
        "photo": item.get("photo"),
    }


class OrderService:
    """
    Order placement and the payment-status lifecycle.

    Placed orders are snapshots: items and delivery details are copied in and
    never edited afterwards, only payment.status and the two timestamps move.
    """

    def __init__(self, db: Session):
        self.db = db
        self.repo = OrderRepo(db)
        self.products = ProductRepo(db)
        self.addresses = AddressService(db)
        self.notification_service = NotificationService()

    def place_order(
        self,
        user_id: str,
        items: List[Dict[str, Any]] | None,
        delivery_details: Dict[str, Any] | None,
        total_amount,
        payment: Dict[str, Any] | None,
        save_address: bool = False,
    ) -> str:
        """
        Use case: place an order.

        1. Checks the four required inputs
        2. Persists the snapshot
        3. Optionally saves the delivery address (best effort)
        4. Sends a notification (async, best effort)
        """
        if not items or not delivery_details or not total_amount or not payment:
            raise MissingFields("Missing required order information.")

        user_id = parse_id(user_id, "userId")
        status = payment.get("status") or OrderStatus.PENDING_VERIFICATION
        status = self._parse_status(status)

        order = OrderModel(
            user_id=user_id,
            items=[_snapshot_item(i) for i in items],
            delivery_details=dict(delivery_details),
            total_amount=Decimal(str(total_amount)),
            payment_txn_id=payment["txn_id"],
            payment_utr_id=payment["utr_id"],
            payment_status=status.value,
        )
        created = self.repo.create_order(order)
        logger.info(f"Order {created.id} placed by user {user_id}, status {created.payment_status}")

        if save_address:
            self._save_delivery_address(user_id, delivery_details)

        self._notify(created)
        return created.id

    def update_status(self, order_id: str, new_status: str | None) -> Dict[str, Any]:
        if not new_status:
            raise MissingFields("New status is required.")

        order = self.repo.get_order(parse_id(order_id, "orderId"))
        if not order:
            raise NotFound("Order not found.")

        if is_terminal(order.payment_status):
            raise InvalidTransition(
                f"Cannot change status of an order that is already {order.payment_status}."
            )

        status = self._parse_status(new_status)

        now = datetime.now(timezone.utc)
        previous = order.payment_status
        order.payment_status = status.value

        if status is OrderStatus.CANCELLED:
            order.cancelled_at = now

        # shippedAt is stamped once
        if status is OrderStatus.SHIPPED and order.shipped_at is None:
            order.shipped_at = now

        saved = self.repo.save(order)
        logger.info(f"Order {order.id} status {previous} -> {saved.payment_status}")

        self._notify(saved)
        return self._order_to_dict(saved)

    def list_history(self, user_id: str) -> List[Dict[str, Any]]:
        orders = self.repo.list_for_user(parse_id(user_id, "userId"))
        return self._with_fallbacks(orders)

    def list_all(self) -> List[Dict[str, Any]]:
        orders = self.repo.list_all()
        result = self._with_fallbacks(orders)
        for data, order in zip(result, orders):
            if order.user is not None:
                data["user"] = {"id": order.user.id, "name": order.user.name, "email": order.user.email}
        return result

    # helpers
    @staticmethod
    def _parse_status(value) -> OrderStatus:
        try:
            return OrderStatus(value)
        except ValueError:
            allowed = ", ".join(s.value for s in OrderStatus)
            raise InvalidInput(f"Unknown order status '{value}'. Allowed: {allowed}.")

    def _save_delivery_address(self, user_id: str, delivery_details: Dict[str, Any]):
        try:
            self.addresses.save_from_delivery(user_id, delivery_details)
        except Exception:
            # the order is already committed, a lost address is acceptable
            self.db.rollback()
            logger.exception(f"Saving delivery address for user {user_id} failed")

    def _notify(self, order: OrderModel):
        try:
            self.notification_service.send_order_notification(
                order.user_id, order.id, order.payment_status
            )
        except Exception as e:
            logger.warning(f"Failed to dispatch notification for order {order.id}: {e}")

    def _with_fallbacks(self, orders: List[OrderModel]) -> List[Dict[str, Any]]:
        """Fill name/photo from the live catalog only where an old snapshot lacks them."""
        missing_ids = [
            i.get("product_id")
            for o in orders
            for i in o.items
            if i.get("product_id") and (not i.get("name") or not i.get("photo"))
        ]
        live = self.products.get_products_by_ids(missing_ids)

        result = []
        for order in orders:
            data = self._order_to_dict(order)
            for item in data["items"]:
                product = live.get(item.get("product_id"))
                if not item.get("photo"):
                    item["photo"] = (product.photo if product else None) or PLACEHOLDER_PHOTO
                if not item.get("name"):
                    item["name"] = (product.name if product else None) or MISSING_PRODUCT_NAME
            result.append(data)
        return result

    @staticmethod
    def _order_to_dict(order: OrderModel) -> Dict[str, Any]:
        return {
            "id": order.id,
            "user_id": order.user_id,
            "items": [dict(i) for i in order.items],
            "delivery_details": dict(order.delivery_details),
            "total_amount": order.total_amount,
            "payment": {
                "txn_id": order.payment_txn_id,
                "utr_id": order.payment_utr_id,
                "status": order.payment_status,
            },
            "shipped_at": order.shipped_at,
            "cancelled_at": order.cancelled_at,
            "created_at": order.created_at,
            "updated_at": order.updated_at,
        }
