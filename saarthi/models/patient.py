from saarthi.extensions import db
from sqlalchemy.sql import func

PLACEHOLDER_IMAGE_URL = "https://placehold.co/600x400?text=Not+Found"

# investigation uploads: request field -> column
UPLOAD_FIELDS = {
    "studyModelUrl": "study_model_url",
    "photographsUrl": "photographs_url",
    "opgUrl": "opg_url",
    "lateralCephalogramUrl": "lateral_cephalogram_url",
    "paCephalogramUrl": "pa_cephalogram_url",
    "cbctUrl": "cbct_url",
    "iopaUrl": "iopa_url",
    "anyOtherRecordUrl": "any_other_record_url",
}

# editable profile fields: request field -> (column, kind)
PROFILE_FIELDS = {
    "name": ("name", "str"),
    "age": ("age", "int"),
    "dob": ("dob", "date"),
    "gender": ("gender", "str"),
    "address": ("address", "str"),
    "contactNumber": ("contact_number", "str"),
    "chiefComplaint": ("chief_complaint", "str"),
    "pastMedicalHistory": ("past_medical_history", "str"),
    "pastDentalHistory": ("past_dental_history", "str"),
    "provisionalDiagnosis": ("provisional_diagnosis", "str"),
    "finalDiagnosis": ("final_diagnosis", "str"),
    "treatmentPlan": ("treatment_plan", "str"),
    "growthModulationOrCamouflage": ("growth_modulation_or_camouflage", "str"),
    "extractionOrNonExtraction": ("extraction_or_non_extraction", "str"),
    "phase": ("phase", "str"),  # one phase / multi phase
    "typeOfAppliance": ("type_of_appliance", "str"),
    "prescription": ("prescription", "str"),
    "startDate": ("start_date", "date"),
    "nextAppointment": ("next_appointment", "datetime"),
}
PROFILE_FIELDS.update({key: (column, "str") for key, column in UPLOAD_FIELDS.items()})


class Patient(db.Model):
    __tablename__ = "patients"
    id = db.Column(db.Integer, primary_key=True)
    doctor_id = db.Column(db.Integer, db.ForeignKey("doctors.id", ondelete="SET NULL"), nullable=True, index=True)

    name = db.Column(db.String(120), nullable=False)
    age = db.Column(db.Integer, nullable=True)
    dob = db.Column(db.Date, nullable=True)
    gender = db.Column(db.String(20), nullable=True)
    address = db.Column(db.Text, nullable=True)
    contact_number = db.Column(db.String(32), unique=True, nullable=True)

    chief_complaint = db.Column(db.Text, nullable=True)
    past_medical_history = db.Column(db.Text, nullable=True)
    past_dental_history = db.Column(db.Text, nullable=True)
    provisional_diagnosis = db.Column(db.Text, nullable=True)
    final_diagnosis = db.Column(db.Text, nullable=True)

    treatment_plan = db.Column(db.Text, nullable=True)
    growth_modulation_or_camouflage = db.Column(db.String(60), nullable=True)
    extraction_or_non_extraction = db.Column(db.String(60), nullable=True)
    phase = db.Column(db.String(30), nullable=True)
    type_of_appliance = db.Column(db.String(120), nullable=True)
    prescription = db.Column(db.Text, nullable=True)

    start_date = db.Column(db.Date, nullable=True)
    next_appointment = db.Column(db.DateTime, nullable=True)

    study_model_url = db.Column(db.String(512), nullable=False, default=PLACEHOLDER_IMAGE_URL)
    photographs_url = db.Column(db.String(512), nullable=False, default=PLACEHOLDER_IMAGE_URL)
    opg_url = db.Column(db.String(512), nullable=False, default=PLACEHOLDER_IMAGE_URL)
    lateral_cephalogram_url = db.Column(db.String(512), nullable=False, default=PLACEHOLDER_IMAGE_URL)
    pa_cephalogram_url = db.Column(db.String(512), nullable=False, default=PLACEHOLDER_IMAGE_URL)
    cbct_url = db.Column(db.String(512), nullable=False, default=PLACEHOLDER_IMAGE_URL)
    iopa_url = db.Column(db.String(512), nullable=False, default=PLACEHOLDER_IMAGE_URL)
    any_other_record_url = db.Column(db.String(512), nullable=False, default=PLACEHOLDER_IMAGE_URL)

    # bumped on every adherence append so concurrent writers collide on version_id
    last_adherence_at = db.Column(db.DateTime, nullable=True)
    version_id = db.Column(db.Integer, nullable=False)

    created_at = db.Column(db.DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = db.Column(db.DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    doctor = db.relationship("Doctor", backref=db.backref("patients", order_by="Patient.id"))
    adherence_entries = db.relationship(
        "AdherenceEntry",
        back_populates="patient",
        order_by="[AdherenceEntry.date, AdherenceEntry.id]",
        cascade="all,delete-orphan",
    )

    __mapper_args__ = {"version_id_col": version_id}

    def to_dict(self, include_history=False):
        data = {"id": self.id, "doctorId": self.doctor_id}
        for key, (column, kind) in PROFILE_FIELDS.items():
            value = getattr(self, column)
            if kind in ("date", "datetime") and value is not None:
                value = value.isoformat()
            data[key] = value
        data["lastAdherenceAt"] = self.last_adherence_at.isoformat() if self.last_adherence_at else None
        if include_history:
            data["adherenceHistory"] = [entry.to_dict() for entry in self.adherence_entries]
        return data
