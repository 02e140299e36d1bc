"""Tests for patient management endpoints."""
import io

import pytest

from saarthi.models.patient import PLACEHOLDER_IMAGE_URL
from saarthi.services import storage_service

BASE = "/api/v1/patients"


@pytest.fixture
def uploads(monkeypatch):
    """Record uploads instead of sending them to object storage."""
    calls = []

    def fake_upload(file_storage, folder):
        calls.append((file_storage.filename, folder, file_storage.read()))
        return f"https://storage.example/{folder}/{file_storage.filename}"

    monkeypatch.setattr(storage_service, "upload_file", fake_upload)
    return calls


class TestAddPatient:

    def test_creates_patient_and_login(self, client, doctor_id):
        response = client.post(BASE, json={
            "name": "Ravi",
            "contactNumber": "9111111111",
            "password": "secret1",
            "doctorId": doctor_id,
        })

        assert response.status_code == 201
        patient = response.get_json()["patient"]
        assert patient["name"] == "Ravi"
        assert patient["doctorId"] == doctor_id
        assert patient["opgUrl"] == PLACEHOLDER_IMAGE_URL

        login = client.post("/api/v1/auth/login", json={"contactNumber": "9111111111", "password": "secret1"})
        assert login.get_json()["patid"] == patient["id"]

    def test_missing_fields(self, client, doctor_id):
        response = client.post(BASE, json={"name": "Ravi", "doctorId": doctor_id})

        assert response.status_code == 400

    def test_unknown_doctor(self, client):
        response = client.post(BASE, json={
            "name": "Ravi", "contactNumber": "9111111111", "password": "secret1", "doctorId": 404,
        })

        assert response.status_code == 404

    def test_duplicate_contact(self, client, doctor_id, patient_id):
        response = client.post(BASE, json={
            "name": "Someone", "contactNumber": "9000000002", "password": "secret1", "doctorId": doctor_id,
        })

        assert response.status_code == 409


class TestPatientDetails:

    def test_details_include_history_and_percent(self, client, patient_id):
        client.post(f"/api/v1/adherence-entries/{patient_id}", json={"adherence": True})
        client.post(f"/api/v1/adherence-entries/{patient_id}", json={"adherence": False, "reason": "Pain"})

        response = client.get(f"{BASE}/{patient_id}")

        assert response.status_code == 200
        data = response.get_json()
        assert data["name"] == "Asha"
        assert data["adherencePercent"] == 50
        assert len(data["details"]["adherenceHistory"]) == 2

    def test_unknown_patient(self, client):
        assert client.get(f"{BASE}/9999").status_code == 404


class TestUpdatePatient:

    def test_updates_whitelisted_fields(self, client, patient_id):
        response = client.patch(f"{BASE}/{patient_id}", json={
            "typeOfAppliance": "Aligner",
            "age": "14",
            "nextAppointment": "2026-04-02T10:30:00",
            "dob": "2012-01-15",
            "adherenceHistory": [],
        })

        assert response.status_code == 200
        patient = response.get_json()["patient"]
        assert patient["typeOfAppliance"] == "Aligner"
        assert patient["age"] == 14
        assert patient["nextAppointment"] == "2026-04-02T10:30:00"
        assert patient["dob"] == "2012-01-15"

    def test_contact_change_moves_login(self, client, patient_id):
        response = client.patch(f"{BASE}/{patient_id}", json={"contactNumber": "9333333333"})

        assert response.status_code == 200
        login = client.post("/api/v1/auth/login", json={"contactNumber": "9333333333", "password": "patientpass"})
        assert login.get_json()["patid"] == patient_id

    def test_rejects_bad_value(self, client, patient_id):
        response = client.patch(f"{BASE}/{patient_id}", json={"age": "fourteen"})

        assert response.status_code == 400

    def test_rejects_empty_update(self, client, patient_id):
        response = client.patch(f"{BASE}/{patient_id}", json={"score": 100})

        assert response.status_code == 400


class TestUploadPatientFile:

    def test_investigation_upload_sets_url(self, client, patient_id, uploads):
        response = client.post(
            f"{BASE}/{patient_id}/files",
            data={"field": "opgUrl", "file": (io.BytesIO(b"xray"), "opg.png")},
            content_type="multipart/form-data",
        )

        assert response.status_code == 200
        url = response.get_json()["url"]
        assert url == f"https://storage.example/patients/{patient_id}/opg.png"
        assert uploads == [("opg.png", f"patients/{patient_id}", b"xray")]

        details = client.get(f"{BASE}/{patient_id}").get_json()["details"]
        assert details["opgUrl"] == url

    def test_adherence_photo_only_returns_url(self, client, patient_id, uploads):
        response = client.post(
            f"{BASE}/{patient_id}/files",
            data={"field": "adherencePhoto", "file": (io.BytesIO(b"selfie"), "wear.jpg")},
            content_type="multipart/form-data",
        )

        assert response.status_code == 200
        assert response.get_json()["url"].endswith("wear.jpg")

    def test_unknown_field(self, client, patient_id, uploads):
        response = client.post(
            f"{BASE}/{patient_id}/files",
            data={"field": "name", "file": (io.BytesIO(b"x"), "x.png")},
            content_type="multipart/form-data",
        )

        assert response.status_code == 400
        assert uploads == []

    def test_missing_file(self, client, patient_id, uploads):
        response = client.post(f"{BASE}/{patient_id}/files", data={"field": "opgUrl"})

        assert response.status_code == 400

    def test_storage_failure(self, client, patient_id, monkeypatch):
        def broken(file_storage, folder):
            raise storage_service.StorageError("bucket unavailable")

        monkeypatch.setattr(storage_service, "upload_file", broken)
        response = client.post(
            f"{BASE}/{patient_id}/files",
            data={"field": "cbctUrl", "file": (io.BytesIO(b"x"), "scan.png")},
            content_type="multipart/form-data",
        )

        assert response.status_code == 502


class TestPatientsByDoctor:

    def test_dashboard_list(self, client, doctor_id, patient_id):
        client.post(f"/api/v1/adherence-entries/{patient_id}", json={"adherence": True, "score": 65})

        response = client.get(f"{BASE}/by-doctor/{doctor_id}")

        assert response.status_code == 200
        patients = response.get_json()["patients"]
        assert patients == [{
            "id": patient_id,
            "name": "Asha",
            "contactNumber": "9000000002",
            "adherencePercent": 100,
            "answeredToday": True,
            "latestScore": 65,
        }]

    def test_unknown_doctor(self, client):
        assert client.get(f"{BASE}/by-doctor/9999").status_code == 404
