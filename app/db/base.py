# /app/db/base.py

# This file acts as a central registry for all our SQLAlchemy models.
# By importing them all here, we ensure that the Base class knows about them
# when Alembic (or `init_db`) runs its metadata scan.

# Import the Base class that all models inherit from.
from .base_class import Base

# Import all of our model classes from their respective files.
from .models.user_model import User
from .models.academic_models import StudentAcademic, SemesterPerformance, ClassStatistics
