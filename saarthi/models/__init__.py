# saarthi/models/__init__.py
from .user import User
from .doctor import Doctor
from .patient import Patient
from .adherence_entry import AdherenceEntry
