from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.auth import current_user_id, login_required, roles_required
from ..common.http import optional_date_arg
from ..core.enums import Role
from ..core.exceptions import ValidationError
from ..container import Container
from .model import BulkScheduleItem, Schedule


def schedule_to_dict(s: Schedule) -> dict:
    return {
        "id": s.schedule_id,
        "user_id": s.user_id,
        "date": s.work_date.isoformat(),
        "start_time": s.start_time,
        "end_time": s.end_time,
        "lunch_start": s.lunch_start,
        "lunch_end": s.lunch_end,
    }


def _required_date(payload: dict, field_name: str = "date"):
    value = optional_date_arg(payload.get(field_name), field_name)
    if value is None:
        raise ValidationError(f"{field_name} is required")
    return value


def register(app: Flask, container: Container) -> None:
    service = container.schedule_service

    @app.route("/schedules", methods=["POST"], endpoint="schedules_create")
    @login_required
    def schedules_create():
        payload = request.get_json(silent=True) or {}
        schedule = service.create(
            user_id=current_user_id(),
            work_date=_required_date(payload),
            start_time=payload.get("start_time"),
            end_time=payload.get("end_time"),
            lunch_start=payload.get("lunch_start"),
            lunch_end=payload.get("lunch_end"),
        )
        return jsonify({"success": True, "data": schedule_to_dict(schedule)}), 201

    @app.route("/schedules", methods=["GET"], endpoint="schedules_list")
    @login_required
    def schedules_list():
        schedules = service.list_for_user(
            current_user_id(),
            start=optional_date_arg(request.args.get("start_date"), "start_date"),
            end=optional_date_arg(request.args.get("end_date"), "end_date"),
        )
        return jsonify({"success": True, "data": [schedule_to_dict(s) for s in schedules]})

    @app.route("/schedules/default", methods=["GET"], endpoint="schedules_default")
    @login_required
    def schedules_default():
        return jsonify({"success": True, "data": service.default_schedule()})

    @app.route("/schedules/<schedule_id>", methods=["GET"], endpoint="schedules_get")
    @login_required
    def schedules_get(schedule_id: str):
        return jsonify({"success": True, "data": schedule_to_dict(service.get(schedule_id))})

    @app.route("/schedules/<schedule_id>", methods=["PUT"], endpoint="schedules_update")
    @login_required
    def schedules_update(schedule_id: str):
        payload = request.get_json(silent=True) or {}
        schedule = service.update(schedule_id, payload)
        return jsonify({"success": True, "data": schedule_to_dict(schedule)})

    @app.route("/schedules/<schedule_id>", methods=["DELETE"], endpoint="schedules_delete")
    @login_required
    def schedules_delete(schedule_id: str):
        service.remove(schedule_id)
        return "", 204

    @app.route("/schedules/admin/all", methods=["GET"], endpoint="schedules_admin_all")
    @roles_required(Role.ADMIN, Role.MANAGER)
    def schedules_admin_all():
        schedules = service.list_all(
            start=optional_date_arg(request.args.get("start_date"), "start_date"),
            end=optional_date_arg(request.args.get("end_date"), "end_date"),
        )
        return jsonify({"success": True, "data": [schedule_to_dict(s) for s in schedules]})

    @app.route("/schedules/admin/user/<user_id>", methods=["GET"], endpoint="schedules_admin_user")
    @roles_required(Role.ADMIN, Role.MANAGER)
    def schedules_admin_user(user_id: str):
        schedules = service.list_for_user(
            user_id,
            start=optional_date_arg(request.args.get("start_date"), "start_date"),
            end=optional_date_arg(request.args.get("end_date"), "end_date"),
        )
        return jsonify({"success": True, "data": [schedule_to_dict(s) for s in schedules]})

    @app.route("/schedules/admin/bulk", methods=["POST"], endpoint="schedules_admin_bulk")
    @roles_required(Role.ADMIN, Role.MANAGER)
    def schedules_admin_bulk():
        payload = request.get_json(silent=True) or {}
        raw_items = payload.get("schedules")
        if not isinstance(raw_items, list):
            raise ValidationError("schedules must be a list")
        if not all(isinstance(item, dict) for item in raw_items):
            raise ValidationError("each schedule must be an object")

        items = [
            BulkScheduleItem(
                user_id=str(item.get("user_id") or ""),
                work_date=_required_date(item),
                start_time=item.get("start_time"),
                end_time=item.get("end_time"),
                lunch_start=item.get("lunch_start"),
                lunch_end=item.get("lunch_end"),
            )
            for item in raw_items
        ]
        created = service.bulk_create(items)
        return jsonify({"success": True, "data": [schedule_to_dict(s) for s in created]}), 201
