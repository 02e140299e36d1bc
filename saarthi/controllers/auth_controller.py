from flask import current_app, jsonify, request
from sqlalchemy.exc import IntegrityError
from flask_jwt_extended import create_access_token
from saarthi.extensions import db
from saarthi.models import Doctor, User
from saarthi.models.user import ROLE_DOCTOR, ROLE_PATIENT

MIN_PASSWORD_LENGTH = 6


def _text(data, key):
    """String field from the JSON body; non-strings read as missing."""
    value = data.get(key)
    return value.strip() if isinstance(value, str) else ""


def register():
    """Doctor sign-up. Patients are created by their doctor."""
    data = request.get_json() or {}
    name = _text(data, "name")
    contact_number = _text(data, "contactNumber")
    password = data.get("password")
    if not isinstance(password, str):
        password = None

    if not all([name, contact_number, password]):
        return jsonify({"success": False, "message": "Name, contact number and password are required"}), 400
    if len(password) < MIN_PASSWORD_LENGTH:
        return jsonify({"success": False, "message": "Password too short"}), 400

    doctor = Doctor(name=name)
    user = User(contact_number=contact_number, role=ROLE_DOCTOR, doctor=doctor)
    user.set_password(password)
    try:
        db.session.add_all([doctor, user])
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        return jsonify({"success": False, "message": "User with this contact already exists"}), 409

    current_app.logger.info(f"Doctor {doctor.id} registered")
    return jsonify({"success": True, "message": "Doctor registered", "docid": doctor.id}), 201


def login():
    data = request.get_json() or {}
    contact_number = _text(data, "contactNumber")
    password = data.get("password")
    if not isinstance(password, str):
        password = None

    if not contact_number or not password:
        return jsonify({"message": "Contact number and password are required", "success": False}), 400

    user = User.query.filter_by(contact_number=contact_number).first()
    if not user or not user.check_password(password):
        return jsonify({"message": "Invalid credentials", "success": False}), 401

    access_token = create_access_token(identity=str(user.id), additional_claims={"role": user.role})

    return jsonify({
        "message": "Login successful",
        "success": True,
        "role": user.role,
        "docid": user.doctor_id if user.role == ROLE_DOCTOR else None,
        "patid": user.patient_id if user.role == ROLE_PATIENT else None,
        "access_token": access_token
    }), 200


def change_password():
    data = request.get_json() or {}
    contact_number = _text(data, "contactNumber")
    old_password = data.get("oldPassword")
    if not isinstance(old_password, str):
        old_password = None
    new_password = _text(data, "newPassword")

    if not contact_number or not old_password or not new_password:
        return jsonify({"success": False, "message": "All fields are required"}), 400
    if len(new_password) < MIN_PASSWORD_LENGTH:
        return jsonify({"success": False, "message": "Password too short"}), 400

    user = User.query.filter_by(contact_number=contact_number).first()
    if not user or not user.check_password(old_password):
        return jsonify({"success": False, "message": "Invalid credentials"}), 401

    user.set_password(new_password)
    db.session.commit()

    return jsonify({"success": True, "message": "Password changed successfully"}), 200
