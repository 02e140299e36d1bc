# saarthi/controllers/doctor_controller.py
from flask import current_app, jsonify, request
from saarthi.extensions import db
from saarthi.models import Doctor
from saarthi.services import storage_service

UPDATABLE_FIELDS = ("name", "avatar")


def get_doctor(doctor_id):
    doctor = db.session.get(Doctor, doctor_id)
    if not doctor:
        return jsonify({"success": False, "message": "Doctor not found"}), 404
    return jsonify({"success": True, "message": "Doctor details", "doctor": doctor.to_dict()}), 200


def update_doctor_info(doctor_id):
    doctor = db.session.get(Doctor, doctor_id)
    if not doctor:
        return jsonify({"success": False, "message": "Doctor not found"}), 404

    data = request.get_json() or {}
    updates = {key: data[key] for key in UPDATABLE_FIELDS if key in data}
    if not updates:
        return jsonify({"success": False, "message": "No updatable fields supplied"}), 400

    for key, value in updates.items():
        setattr(doctor, key, (str(value).strip() or None) if value is not None else None)
    db.session.commit()

    return jsonify({"success": True, "message": "Doctor updated", "doctor": doctor.to_dict()}), 200


def upload_doctor_avatar(doctor_id):
    upload = request.files.get("file")
    if not upload:
        return jsonify({"success": False, "message": "No file uploaded"}), 400

    doctor = db.session.get(Doctor, doctor_id)
    if not doctor:
        return jsonify({"success": False, "message": "Doctor not found"}), 404

    try:
        url = storage_service.upload_file(upload, folder="doctors")
    except storage_service.StorageError as e:
        current_app.logger.error(f"Avatar upload failed for doctor {doctor.id}: {str(e)}")
        return jsonify({"success": False, "message": "Upload failed", "error": str(e)}), 502

    doctor.avatar = url
    db.session.commit()
    return jsonify({"success": True, "message": "Avatar updated", "url": url}), 200
