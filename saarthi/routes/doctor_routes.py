# saarthi/routes/doctor_routes.py
from flask import Blueprint
from saarthi.controllers import doctor_controller

doctor_bp = Blueprint("doctors", __name__, url_prefix="/api/v1/doctors")

doctor_bp.route("/<int:doctor_id>", methods=["GET"])(doctor_controller.get_doctor)
doctor_bp.route("/<int:doctor_id>", methods=["PATCH"])(doctor_controller.update_doctor_info)
doctor_bp.route("/<int:doctor_id>/avatar", methods=["POST"])(doctor_controller.upload_doctor_avatar)
