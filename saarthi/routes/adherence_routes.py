# saarthi/routes/adherence_routes.py
from flask import Blueprint
from saarthi.controllers import adherence_controller

adherence_bp = Blueprint("adherence", __name__, url_prefix="/api/v1/adherence-entries")

adherence_bp.route("/<int:patient_id>", methods=["POST"])(adherence_controller.add_adherence_entry)
adherence_bp.route("/<int:patient_id>", methods=["GET"])(adherence_controller.get_adherence_history)
adherence_bp.route("/<int:patient_id>/summary", methods=["GET"])(adherence_controller.get_adherence_summary)
