from __future__ import annotations

from dataclasses import asdict

from flask import Flask, jsonify, request

from ..common.auth import current_user_id, login_required, roles_required
from ..common.http import optional_date_arg, optional_int_arg
from ..core.enums import Role
from ..core.exceptions import ValidationError
from ..container import Container
from .model import DashboardSnapshot, HistoryPage, TimeEntry


def entry_to_dict(e: TimeEntry) -> dict:
    return {
        "id": e.entry_id,
        "user_id": e.user_id,
        "type": e.entry_type.value,
        "timestamp": e.timestamp.isoformat(),
    }


def dashboard_to_dict(d: DashboardSnapshot) -> dict:
    def _fmt(value):
        return value.isoformat() if value else None

    return {
        "date": d.date.isoformat(),
        "entries": {
            "check_in": _fmt(d.entries.check_in),
            "lunch_out": _fmt(d.entries.lunch_out),
            "lunch_in": _fmt(d.entries.lunch_in),
            "check_out": _fmt(d.entries.check_out),
        },
        "working_hours": asdict(d.working_hours),
        "status": d.status.value,
    }


def history_to_dict(h: HistoryPage) -> dict:
    return {
        "success": True,
        "data": [{"date": g.date.isoformat(), "entries": [entry_to_dict(e) for e in g.entries]} for g in h.groups],
        "pagination": asdict(h.pagination),
    }


def _history_args() -> dict:
    args = request.args
    page = optional_int_arg(args.get("page"), "page")
    return {
        "start_date": optional_date_arg(args.get("start_date"), "start_date"),
        "end_date": optional_date_arg(args.get("end_date"), "end_date"),
        "page": 1 if page is None else page,
        "page_size": optional_int_arg(args.get("page_size"), "page_size"),
    }


def register(app: Flask, container: Container) -> None:
    service = container.time_entry_service

    @app.route("/time-entries", methods=["POST"], endpoint="time_entries_create")
    @login_required
    def time_entries_create():
        payload = request.get_json(silent=True) or {}
        entry_type = payload.get("type")
        if not entry_type:
            raise ValidationError("type is required")

        # Any client-sent timestamp is ignored; the server clock stamps the punch.
        entry = service.record_punch(current_user_id(), entry_type)
        return jsonify({"success": True, "data": entry_to_dict(entry)}), 201

    @app.route("/time-entries/dashboard", methods=["GET"], endpoint="time_entries_dashboard")
    @login_required
    def time_entries_dashboard():
        snapshot = service.compute_dashboard(current_user_id())
        return jsonify({"success": True, "data": dashboard_to_dict(snapshot)})

    @app.route("/time-entries/history", methods=["GET"], endpoint="time_entries_history")
    @login_required
    def time_entries_history():
        page = service.list_history(current_user_id(), **_history_args())
        return jsonify(history_to_dict(page))

    @app.route("/time-entries/admin/history", methods=["GET"], endpoint="time_entries_admin_history")
    @roles_required(Role.ADMIN, Role.MANAGER)
    def time_entries_admin_history():
        page = service.list_admin_history(user_id=request.args.get("user_id") or None, **_history_args())
        return jsonify(history_to_dict(page))
