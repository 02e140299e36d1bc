# saarthi/routes/patient_routes.py
from flask import Blueprint
from saarthi.controllers import patient_controller

patient_bp = Blueprint("patients", __name__, url_prefix="/api/v1/patients")

patient_bp.route("", methods=["POST"])(patient_controller.add_patient)
patient_bp.route("/<int:patient_id>", methods=["GET"])(patient_controller.get_patient_details)
patient_bp.route("/<int:patient_id>", methods=["PATCH"])(patient_controller.update_patient_info)
patient_bp.route("/<int:patient_id>/files", methods=["POST"])(patient_controller.upload_patient_file)
patient_bp.route("/by-doctor/<int:doctor_id>", methods=["GET"])(patient_controller.get_patients_by_doctor)
