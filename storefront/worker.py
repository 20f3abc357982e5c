"""Background task definitions for post-commit notifications.

Tasks are queued by the HTTP layer only after a unit of work has
committed, never from inside the commerce core.
"""

import logging
from decimal import Decimal

from celery import Task

from storefront.core.celery_app import celery_app
from storefront.core.config import get_settings
from storefront.services.mappers import format_money

logger = logging.getLogger(__name__)


@celery_app.task(name="send_purchase_receipt_email", bind=True)
def send_purchase_receipt_email(
    self: Task,
    email: str,
    game_titles: list[str],
    total: str,
) -> dict:
    """
    Send a receipt email for a completed purchase or checkout.

    In production, this would use an email service like SendGrid or AWS SES.

    Args:
        email: Recipient email address
        game_titles: Titles added to the user's library
        total: Amount charged as a decimal string (e.g., "69.98")

    Returns:
        dict: Result with success status and message
    """
    message = (
        f"Sending receipt to {email}: {len(game_titles)} games "
        f"({', '.join(game_titles)}) for {format_money(Decimal(total))} {get_settings().CURRENCY}"
    )
    logger.info("[EMAIL TASK %s] %s", self.request.id, message)

    return {
        "success": True,
        "message": message,
        "task_id": self.request.id,
    }


@celery_app.task(name="export_purchase_audit", bind=True)
def export_purchase_audit(
    self: Task,
    user_id: str,
    data: dict,
) -> dict:
    """
    Export a committed purchase to the external audit system.

    Args:
        user_id: UUID of the buyer
        data: Purchase data dictionary with keys:
            - purchase_ids: list of UUID strings
            - game_ids: list of UUID strings
            - total: Decimal string
            - purchased_at: ISO timestamp string

    Returns:
        dict: Result with success status and message
    """
    message = f"Audit export for user {user_id}: {data}"
    logger.info("[AUDIT TASK %s] %s", self.request.id, message)

    return {
        "success": True,
        "message": message,
        "task_id": self.request.id,
        "user_id": user_id,
    }
