# saarthi/controllers/patient_controller.py
from flask import current_app, jsonify, request
from sqlalchemy.exc import IntegrityError
from saarthi.extensions import db
from saarthi.helpers import parse_date, parse_datetime
from saarthi.models import Doctor, Patient, User
from saarthi.models.patient import PROFILE_FIELDS, UPLOAD_FIELDS
from saarthi.models.user import ROLE_PATIENT
from saarthi.services import storage_service
from saarthi.services.adherence_service import summarize_adherence

ADHERENCE_PHOTO_FIELD = "adherencePhoto"


def _convert(value, kind):
    if value is None or value == "":
        return None
    if kind == "int":
        if isinstance(value, bool):
            raise ValueError("boolean is not an integer")
        return int(value)
    if kind == "date":
        return parse_date(value)
    if kind == "datetime":
        return parse_datetime(value)
    return str(value).strip()


def add_patient():
    data = request.get_json() or {}
    name = (data.get("name") or "").strip()
    contact_number = (data.get("contactNumber") or "").strip()
    password = data.get("password")
    doctor_id = data.get("doctorId")

    if not all([name, contact_number, password, doctor_id]):
        return jsonify({"success": False, "message": "All fields are required"}), 400

    doctor = db.session.get(Doctor, doctor_id)
    if not doctor:
        return jsonify({"success": False, "message": "Doctor not found"}), 404

    if User.query.filter_by(contact_number=contact_number).first():
        return jsonify({"success": False, "message": "Patient with this contact already exists"}), 409

    patient = Patient(name=name, contact_number=contact_number, doctor=doctor)
    user = User(contact_number=contact_number, role=ROLE_PATIENT, patient=patient)
    user.set_password(password)
    try:
        db.session.add_all([patient, user])
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        return jsonify({"success": False, "message": "Patient with this contact already exists"}), 409

    current_app.logger.info(f"Patient {patient.id} added for doctor {doctor.id}")
    return jsonify({"success": True, "message": "Patient added", "patient": patient.to_dict()}), 201


def get_patient_details(patient_id):
    patient = db.session.get(Patient, patient_id)
    if not patient:
        return jsonify({"success": False, "message": "Patient not found"}), 404

    summary = summarize_adherence(
        patient.adherence_entries,
        window_days=current_app.config["ADHERENCE_WINDOW_DAYS"],
    )
    return jsonify({
        "success": True,
        "message": "Patient details",
        "name": patient.name,
        "details": patient.to_dict(include_history=True),
        "adherencePercent": summary.adherence_percent
    }), 200


def update_patient_info(patient_id):
    patient = db.session.get(Patient, patient_id)
    if not patient:
        return jsonify({"success": False, "message": "Patient not found"}), 404

    data = request.get_json() or {}
    updates = {key: value for key, value in data.items() if key in PROFILE_FIELDS}
    if not updates:
        return jsonify({"success": False, "message": "No updatable fields supplied"}), 400

    for key, value in updates.items():
        column, kind = PROFILE_FIELDS[key]
        try:
            converted = _convert(value, kind)
        except (TypeError, ValueError):
            return jsonify({"success": False, "message": f"Invalid value for {key}"}), 400
        if key in ("name", "contactNumber") and not converted:
            return jsonify({"success": False, "message": f"{key} cannot be empty"}), 400
        setattr(patient, column, converted)
        # the login shares the patient's contact number
        if key == "contactNumber" and patient.user:
            patient.user.contact_number = converted

    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        return jsonify({"success": False, "message": "Contact number already in use"}), 409

    return jsonify({"success": True, "message": "Patient updated", "patient": patient.to_dict()}), 200


def upload_patient_file(patient_id):
    upload = request.files.get("file")
    field = request.form.get("field")
    if not upload:
        return jsonify({"success": False, "message": "No file uploaded"}), 400
    if not field:
        return jsonify({"success": False, "message": "Missing field"}), 400
    if field not in UPLOAD_FIELDS and field != ADHERENCE_PHOTO_FIELD:
        return jsonify({"success": False, "message": f"Unknown upload field: {field}"}), 400

    patient = db.session.get(Patient, patient_id)
    if not patient:
        return jsonify({"success": False, "message": "Patient not found"}), 404

    try:
        url = storage_service.upload_file(upload, folder=f"patients/{patient.id}")
    except storage_service.StorageError as e:
        current_app.logger.error(f"Upload failed for patient {patient.id}: {str(e)}")
        return jsonify({"success": False, "message": "Upload failed", "error": str(e)}), 502

    # adherence photos are attached later through the entry's photoUrl
    if field in UPLOAD_FIELDS:
        setattr(patient, UPLOAD_FIELDS[field], url)
        db.session.commit()

    return jsonify({"success": True, "message": "File uploaded", "url": url}), 200


def get_patients_by_doctor(doctor_id):
    doctor = db.session.get(Doctor, doctor_id)
    if not doctor:
        return jsonify({"success": False, "message": "Doctor not found"}), 404

    window_days = current_app.config["ADHERENCE_WINDOW_DAYS"]
    patients = []
    for patient in doctor.patients:
        summary = summarize_adherence(patient.adherence_entries, window_days=window_days)
        patients.append({
            "id": patient.id,
            "name": patient.name,
            "contactNumber": patient.contact_number,
            "adherencePercent": summary.adherence_percent,
            "answeredToday": summary.answered_today,
            "latestScore": summary.latest_score,
        })

    return jsonify({"success": True, "message": "Patients", "patients": patients}), 200
