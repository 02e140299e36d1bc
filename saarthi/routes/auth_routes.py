# saarthi/routes/auth_routes.py
from flask import Blueprint
from saarthi.controllers import auth_controller

auth_bp = Blueprint("auth", __name__, url_prefix="/api/v1/auth")

auth_bp.route("/register", methods=["POST"])(auth_controller.register)
auth_bp.route("/login", methods=["POST"])(auth_controller.login)
auth_bp.route("/change-password", methods=["POST"])(auth_controller.change_password)
