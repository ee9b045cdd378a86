# agrigrow/services/notification_service.py
from agrigrow.celery_worker import celery_app
from agrigrow.utils.logging import get_logger

logger = get_logger(__name__)


class NotificationService:
    """
    Customer notifications about orders.
    Dispatched through Celery so the request never waits on delivery.
    """

    @staticmethod
    def send_order_notification(user_id: str, order_id: str, status: str):
        send_order_notification_task.delay(user_id, order_id, status)


@celery_app.task(name="agrigrow.services.notification_service.send_order_notification_task")
def send_order_notification_task(user_id: str, order_id: str, status: str):
    """
    Celery task - a real deployment would send email/SMS/push here.
    For now it only logs.
    """
    logger.info(f"[NOTIFICATION] User {user_id}: order {order_id} is now '{status}'")

    return {"user_id": user_id, "order_id": order_id, "status": status, "sent": True}
