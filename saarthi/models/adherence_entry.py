from datetime import datetime
from saarthi.extensions import db
from saarthi.scoring import ScoreBreakdown


class AdherenceEntry(db.Model):
    """One daily wear report. Written once, never updated."""
    __tablename__ = "adherence_entries"

    id = db.Column(db.Integer, primary_key=True)
    patient_id = db.Column(db.Integer, db.ForeignKey("patients.id", ondelete="CASCADE"), nullable=False, index=True)

    date = db.Column(db.DateTime, nullable=False, default=datetime.now, index=True)
    adherent = db.Column(db.Boolean, nullable=False)
    notes = db.Column(db.Text, nullable=False, default="")
    was_useful = db.Column(db.Boolean, nullable=True)
    duration_label = db.Column(db.String(60), nullable=True)   # "<6 hrs" .. ">18 hrs", or minutes
    appliance_type = db.Column(db.String(120), nullable=True)
    photo_url = db.Column(db.String(512), nullable=True)
    reason = db.Column(db.String(255), nullable=True)           # why the appliance was not worn

    score = db.Column(db.Integer, nullable=True)                # 0-100
    breakdown = db.Column(db.JSON, nullable=True)               # ScoreBreakdown.to_dict(); null for overrides
    score_source = db.Column(db.String(20), nullable=True)      # "computed" | "override"

    patient = db.relationship("Patient", back_populates="adherence_entries")

    def to_dict(self):
        return {
            "id": self.id,
            "date": self.date.isoformat() if self.date else None,
            "adherence": self.adherent,
            "notes": self.notes,
            "useful": self.was_useful,
            "duration": self.duration_label,
            "applianceType": self.appliance_type,
            "photoUrl": self.photo_url,
            "score": self.score,
            "breakdown": ScoreBreakdown.from_dict(self.breakdown).to_dict() if self.breakdown else None,
            "scoreSource": self.score_source,
            "reason": self.reason,
        }
