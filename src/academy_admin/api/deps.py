"""API dependencies - database session"""
from typing import Annotated
from fastapi import Depends
from sqlalchemy.orm import Session

from src.academy_admin.database import get_db

DbSession = Annotated[Session, Depends(get_db)]
