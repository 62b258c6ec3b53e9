from __future__ import annotations

import logging

import click
from flask import Flask, jsonify

from ..core.enums import AttendanceStatus
from ..core.exceptions import RefreshInProgressError, ValidationError
from ..container import Container
from .model import PersistedId

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    service = container.attendance_service

    @app.route("/api/attendance", methods=["GET"], endpoint="attendance_refresh")
    def attendance_refresh():
        try:
            snapshot = service.refresh()
        except RefreshInProgressError as e:
            return jsonify({"error": str(e)}), 409

        return jsonify(
            {
                "today": snapshot.today.isoformat(),
                "backfilled": snapshot.backfilled,
                "summary": {status.value: snapshot.count(status) for status in AttendanceStatus},
                "records": [service.to_ui(r) for r in snapshot.records],
                "schedules": [service.schedule_to_ui(v) for v in snapshot.schedules],
            }
        )

    @app.route("/api/attendance/<int:attendance_id>/delete", methods=["POST"], endpoint="attendance_delete")
    def attendance_delete(attendance_id: int):
        try:
            service.delete_record(PersistedId(attendance_id))
        except ValidationError as e:
            return jsonify({"error": str(e)}), 400
        return jsonify({"deleted": attendance_id})

    @app.route("/api/schedules/<int:schedule_id>/tap-window", methods=["GET"], endpoint="schedule_tap_window")
    def schedule_tap_window(schedule_id: int):
        try:
            window = service.tap_window(schedule_id)
        except ValidationError as e:
            return jsonify({"error": str(e)}), 404
        return jsonify({"schedule_id": schedule_id, "status": window.status.value, "can_tap": window.can_tap})

    @app.cli.command("backfill-absences")
    def backfill_absences_command():
        """Insert today's automatic absences for users with no taps."""

        inserted = service.backfill_absences()
        click.echo(f"Inserted {len(inserted)} automatic absence(s)")

    @app.cli.command("backfill-class-absences")
    def backfill_class_absences_command():
        """Mark users absent for today's classes that ended without a tap."""

        inserted = service.backfill_class_absences()
        click.echo(f"Inserted {len(inserted)} class absence(s)")
