"""Database models"""
from src.academy_admin.models.base import Base
from src.academy_admin.models.program import Program
from src.academy_admin.models.module import Module
from src.academy_admin.models.participant import Participant
from src.academy_admin.models.enrollment import Enrollment
from src.academy_admin.models.import_batch import ImportBatch

__all__ = ["Base", "Program", "Module", "Participant", "Enrollment", "ImportBatch"]
