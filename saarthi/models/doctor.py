from saarthi.extensions import db
from sqlalchemy.sql import func


class Doctor(db.Model):
    __tablename__ = "doctors"
    id = db.Column(db.Integer, primary_key=True)

    name = db.Column(db.String(120), nullable=True)
    avatar = db.Column(db.String(512), nullable=True)

    created_at = db.Column(db.DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = db.Column(db.DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "patientsCount": len(self.patients),
            "avatar": self.avatar,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }
