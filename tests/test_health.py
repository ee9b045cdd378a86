from agrigrow.services.notification_service import send_order_notification_task


def test_health_reports_database(client):
    resp = client.get("/health")

    assert resp.status_code == 200
    assert resp.json() == {"status": "ok", "database": "ok"}


def test_notification_task_runs_locally():
    result = send_order_notification_task("user-1", "order-1", "Shipped")

    assert result == {"user_id": "user-1", "order_id": "order-1", "status": "Shipped", "sent": True}
