from match_core.db.base import Base

# Import all models here
from match_core.models.clinic import Clinic
from match_core.models.staff import ClinicMember, Profile
from match_core.models.treatment_condition import TreatmentCondition

__all__ = ["Base", "Clinic", "ClinicMember", "Profile", "TreatmentCondition"]
