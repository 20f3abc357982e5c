"""Unit tests for Celery task functions.

Tasks are called synchronously through ``.run()``, which bypasses the
broker.
"""

import logging

import pytest

from storefront.worker import export_purchase_audit, send_purchase_receipt_email


class TestReceiptEmailTask:

    def test_returns_success_structure(self) -> None:
        result = send_purchase_receipt_email.run(
            email="buyer@example.com",
            game_titles=["Hollow Peaks", "Night Shift"],
            total="69.98",
        )

        assert isinstance(result, dict)
        assert result["success"] is True
        assert set(result) == {"success", "message", "task_id"}
        assert "Hollow Peaks" in result["message"]
        assert "69.98" in result["message"]

    def test_logs_recipient(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.INFO, logger="storefront.worker"):
            send_purchase_receipt_email.run(
                email="logged@example.com", game_titles=["Solo"], total="5.00"
            )

        assert "logged@example.com" in caplog.text


class TestAuditExportTask:

    def test_returns_user_id(self) -> None:
        data = {
            "purchase_ids": ["p-1"],
            "game_ids": ["g-1"],
            "total": "29.99",
            "purchased_at": "2026-01-01T10:00:00+00:00",
        }

        result = export_purchase_audit.run(user_id="user-123", data=data)

        assert result["success"] is True
        assert result["user_id"] == "user-123"
        assert "29.99" in result["message"]
