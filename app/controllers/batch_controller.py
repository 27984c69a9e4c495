# app/controllers/batch_controller.py
from flask import Blueprint, current_app, jsonify

from app.errors import GatewayError
from app.tasks.scheduler import LATE_BORROWS_JOB_ID, RESERVATIONS_JOB_ID, make_jobs
from app.utils.auth import role_required

batch_bp = Blueprint("batch", __name__)


def _run(job_id: str):
    job, _cron = make_jobs(current_app._get_current_object())[job_id]
    try:
        report = job()
    except GatewayError as e:
        return jsonify({"success": False, "message": str(e)}), 503

    status = 409 if report.skipped else 200
    return jsonify({"success": not report.skipped, "data": report.to_dict()}), status


@batch_bp.post("/late-borrows/run")
@role_required("admin")
def run_late_borrows():
    return _run(LATE_BORROWS_JOB_ID)


@batch_bp.post("/reservations/run")
@role_required("admin")
def run_reservations():
    return _run(RESERVATIONS_JOB_ID)
