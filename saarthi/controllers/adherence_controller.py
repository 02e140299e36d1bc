# saarthi/controllers/adherence_controller.py
from datetime import datetime
from flask import current_app, jsonify, request
from sqlalchemy.orm.exc import StaleDataError
from saarthi.extensions import db
from saarthi.helpers import is_number, parse_datetime
from saarthi.models import Patient
from saarthi.services.adherence_service import (
    AdherencePayload,
    record_adherence_entry,
    summarize_adherence,
)


def _optional_str(data, key):
    value = data.get(key)
    if value is None:
        return None
    value = str(value).strip()
    return value or None


def _parse_payload(data):
    """Validate the request body. Returns (payload, error_message)."""
    adherence = data.get("adherence")
    if not isinstance(adherence, bool):
        return None, "Adherence must be a boolean"

    useful = data.get("useful")
    if useful is not None and not isinstance(useful, bool):
        return None, "Useful must be a boolean"

    notes = data.get("notes")
    if notes is not None and not isinstance(notes, str):
        return None, "Notes must be a string"

    score = data.get("score")
    if score is not None:
        if not is_number(score):
            return None, "Score must be a number"
        if not 0 <= score <= 100:
            return None, "Score must be between 0 and 100"

    raw_date = data.get("date")
    if raw_date is None:
        entry_date = datetime.now()
    else:
        try:
            entry_date = parse_datetime(raw_date)
        except ValueError:
            return None, "Date must be an ISO-8601 string"

    payload = AdherencePayload(
        adherent=adherence,
        date=entry_date,
        notes=notes or "",
        was_useful=useful,
        duration_label=_optional_str(data, "duration"),
        appliance_type=_optional_str(data, "applianceType"),
        photo_url=_optional_str(data, "photoUrl"),
        reason=_optional_str(data, "reason"),
        score_override=score,
    )
    return payload, None


def add_adherence_entry(patient_id):
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return jsonify({"success": False, "message": "JSON body required"}), 400

    payload, error = _parse_payload(data)
    if error:
        return jsonify({"success": False, "message": error}), 400

    patient = db.session.get(Patient, patient_id)
    if not patient:
        return jsonify({"success": False, "message": "Patient not found"}), 404

    try:
        entry = record_adherence_entry(patient, payload)
    except StaleDataError:
        db.session.rollback()
        current_app.logger.warning(f"Concurrent adherence submission for patient {patient_id}")
        return jsonify({
            "success": False,
            "message": "Patient record was modified concurrently, please retry"
        }), 409

    return jsonify({
        "success": True,
        "message": "Adherence entry added",
        "entry": entry.to_dict()
    }), 201


def get_adherence_history(patient_id):
    patient = db.session.get(Patient, patient_id)
    if not patient:
        return jsonify({"success": False, "message": "Patient not found"}), 404

    return jsonify({
        "success": True,
        "message": "Adherence history",
        "history": [entry.to_dict() for entry in patient.adherence_entries]
    }), 200


def get_adherence_summary(patient_id):
    patient = db.session.get(Patient, patient_id)
    if not patient:
        return jsonify({"success": False, "message": "Patient not found"}), 404

    summary = summarize_adherence(
        patient.adherence_entries,
        window_days=current_app.config["ADHERENCE_WINDOW_DAYS"],
    )
    return jsonify({
        "success": True,
        "message": "Adherence summary",
        "name": patient.name,
        "adherence": summary.to_dict(),
        "answeredToday": summary.answered_today
    }), 200
