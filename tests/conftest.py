"""Shared fixtures: an app on in-memory SQLite and record factories."""
import pytest

from saarthi import create_app
from saarthi.extensions import db
from saarthi.models import Doctor, Patient, User
from saarthi.models.user import ROLE_DOCTOR, ROLE_PATIENT


@pytest.fixture
def app():
    app = create_app({
        "TESTING": True,
        "SQLALCHEMY_DATABASE_URI": "sqlite:///:memory:",
        "JWT_SECRET_KEY": "test-secret-key-that-is-long-enough-for-hs256",
        "FIREBASE_STORAGE_BUCKET": "test-bucket",
    })
    with app.app_context():
        db.create_all()
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    """Flask test client."""
    return app.test_client()


@pytest.fixture
def doctor_id(app):
    with app.app_context():
        doctor = Doctor(name="Dr. Mehta")
        user = User(contact_number="9000000001", role=ROLE_DOCTOR, doctor=doctor)
        user.set_password("doctorpass")
        db.session.add_all([doctor, user])
        db.session.commit()
        return doctor.id


@pytest.fixture
def patient_id(app, doctor_id):
    with app.app_context():
        patient = Patient(name="Asha", contact_number="9000000002", doctor_id=doctor_id)
        user = User(contact_number="9000000002", role=ROLE_PATIENT, patient=patient)
        user.set_password("patientpass")
        db.session.add_all([patient, user])
        db.session.commit()
        return patient.id
