"""Tests for sign-up, login and password change."""
from flask_jwt_extended import decode_token

BASE = "/api/v1/auth"


class TestRegister:

    def test_registers_doctor(self, client):
        response = client.post(f"{BASE}/register", json={
            "name": "Dr. Iyer", "contactNumber": "9222222222", "password": "secret1",
        })

        assert response.status_code == 201
        docid = response.get_json()["docid"]

        doctor = client.get(f"/api/v1/doctors/{docid}").get_json()["doctor"]
        assert doctor["name"] == "Dr. Iyer"
        assert doctor["patientsCount"] == 0

    def test_missing_fields(self, client):
        response = client.post(f"{BASE}/register", json={"contactNumber": "9222222222"})

        assert response.status_code == 400

    def test_short_password(self, client):
        response = client.post(f"{BASE}/register", json={
            "name": "Dr. Iyer", "contactNumber": "9222222222", "password": "123",
        })

        assert response.status_code == 400

    def test_numeric_password(self, client):
        response = client.post(f"{BASE}/register", json={
            "name": "Dr. Iyer", "contactNumber": "9222222222", "password": 123456,
        })

        assert response.status_code == 400

    def test_duplicate_contact(self, client, doctor_id):
        response = client.post(f"{BASE}/register", json={
            "name": "Dr. Twin", "contactNumber": "9000000001", "password": "secret1",
        })

        assert response.status_code == 409


class TestLogin:

    def test_doctor_login(self, app, client, doctor_id):
        response = client.post(f"{BASE}/login", json={"contactNumber": "9000000001", "password": "doctorpass"})

        assert response.status_code == 200
        data = response.get_json()
        assert data["role"] == "doctor"
        assert data["docid"] == doctor_id
        assert data["patid"] is None

        with app.app_context():
            claims = decode_token(data["access_token"])
        assert claims["role"] == "doctor"

    def test_patient_login(self, client, patient_id):
        data = client.post(f"{BASE}/login", json={"contactNumber": "9000000002", "password": "patientpass"}).get_json()

        assert data["role"] == "patient"
        assert data["patid"] == patient_id
        assert data["docid"] is None

    def test_wrong_password(self, client, doctor_id):
        response = client.post(f"{BASE}/login", json={"contactNumber": "9000000001", "password": "nope"})

        assert response.status_code == 401

    def test_unknown_user(self, client):
        response = client.post(f"{BASE}/login", json={"contactNumber": "9999999999", "password": "whatever"})

        assert response.status_code == 401

    def test_non_string_credentials(self, client, doctor_id):
        response = client.post(f"{BASE}/login", json={"contactNumber": 9000000001, "password": 42})

        assert response.status_code == 400

    def test_missing_credentials(self, client):
        assert client.post(f"{BASE}/login", json={}).status_code == 400


class TestChangePassword:

    def test_non_string_new_password(self, client, doctor_id):
        response = client.post(f"{BASE}/change-password", json={
            "contactNumber": "9000000001", "oldPassword": "doctorpass", "newPassword": 1234567,
        })

        assert response.status_code == 400

    def test_change_then_login(self, client, doctor_id):
        response = client.post(f"{BASE}/change-password", json={
            "contactNumber": "9000000001", "oldPassword": "doctorpass", "newPassword": "newpass1",
        })

        assert response.status_code == 200
        assert client.post(f"{BASE}/login", json={
            "contactNumber": "9000000001", "password": "newpass1",
        }).status_code == 200
        assert client.post(f"{BASE}/login", json={
            "contactNumber": "9000000001", "password": "doctorpass",
        }).status_code == 401

    def test_wrong_old_password(self, client, doctor_id):
        response = client.post(f"{BASE}/change-password", json={
            "contactNumber": "9000000001", "oldPassword": "wrong", "newPassword": "newpass1",
        })

        assert response.status_code == 401

    def test_missing_fields(self, client):
        assert client.post(f"{BASE}/change-password", json={"contactNumber": "1"}).status_code == 400
