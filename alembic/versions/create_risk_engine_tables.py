"""Create the risk engine tables

Revision ID: 4c1e9a27d3b0
Revises:
Create Date: 2026-10-18 10:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '4c1e9a27d3b0'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create users, academic records, semester history and class statistics."""
    op.create_table(
        'users',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('email', sa.String(), nullable=False),
        sa.Column('role', sa.String(), nullable=False),
        sa.Column('department', sa.String(), nullable=False),
        sa.Column('studentId', sa.String(), nullable=True),
        sa.Column('batch', sa.String(), nullable=True),
        sa.Column('semester', sa.Integer(), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.CheckConstraint("role != 'student' OR batch IS NOT NULL", name='ck_users_student_batch'),
    )
    op.create_index('ix_users_id', 'users', ['id'])
    op.create_index('ix_users_email', 'users', ['email'], unique=True)
    op.create_index('ix_users_studentId', 'users', ['studentId'], unique=True)
    op.create_index('ix_users_department', 'users', ['department'])
    op.create_index('ix_users_batch', 'users', ['batch'])

    op.create_table(
        'student_academics',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('user_id', sa.String(), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('attendancePercentage', sa.Float(), nullable=False),
        sa.Column('periodicalTestMarks', sa.Float(), nullable=False),
        sa.Column('standingArrears', sa.Boolean(), nullable=False),
        sa.Column('skillLevel', sa.Integer(), nullable=False),
        sa.Column('cgpa', sa.Float(), nullable=False),
        sa.Column('disciplineComplaints', sa.Integer(), nullable=False),
        sa.Column('projectsCompleted', sa.Integer(), nullable=False),
        sa.Column('activityPoints', sa.Integer(), nullable=False),
        sa.Column('rewardPoints', sa.Integer(), nullable=False),
        sa.Column('certificationsCount', sa.Integer(), nullable=False),
        sa.Column('achievementsCount', sa.Integer(), nullable=False),
        sa.Column('currentRiskScore', sa.Integer(), nullable=False),
        sa.Column('currentWarningLevel', sa.String(), nullable=False),
        sa.Column('failedParameters', sa.JSON(), nullable=False),
        sa.Column('suggestedActions', sa.JSON(), nullable=False),
        sa.Column('continuousPoorSemesters', sa.Integer(), nullable=False),
        sa.Column('atRiskCohorts', sa.JSON(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index('ix_student_academics_id', 'student_academics', ['id'])
    op.create_index('ix_student_academics_user_id', 'student_academics', ['user_id'], unique=True)

    op.create_table(
        'semester_performances',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('academic_id', sa.String(), sa.ForeignKey('student_academics.id'), nullable=False),
        sa.Column('semester', sa.Integer(), nullable=False),
        sa.Column('riskScore', sa.Integer(), nullable=False),
        sa.Column('warningLevel', sa.String(), nullable=False),
        sa.Column('issues', sa.JSON(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index('ix_semester_performances_academic_id', 'semester_performances', ['academic_id'])

    op.create_table(
        'class_statistics',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('department', sa.String(), nullable=False),
        sa.Column('batch', sa.String(), nullable=False),
        sa.Column('semester', sa.Integer(), nullable=False),
        sa.Column('averageRewardPoints', sa.Float(), nullable=False),
        sa.Column('averageAttendance', sa.Float(), nullable=False),
        sa.Column('averageCGPA', sa.Float(), nullable=False),
        sa.Column('totalStudents', sa.Integer(), nullable=False),
        sa.Column('atRiskStudents', sa.Integer(), nullable=False),
        sa.Column('lastUpdated', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.UniqueConstraint('department', 'batch', 'semester', name='uq_class_statistics_cohort'),
    )


def downgrade() -> None:
    """Drop the risk engine tables."""
    op.drop_table('class_statistics')
    op.drop_index('ix_semester_performances_academic_id', table_name='semester_performances')
    op.drop_table('semester_performances')
    op.drop_index('ix_student_academics_user_id', table_name='student_academics')
    op.drop_index('ix_student_academics_id', table_name='student_academics')
    op.drop_table('student_academics')
    for index_name in ('ix_users_batch', 'ix_users_department', 'ix_users_studentId', 'ix_users_email', 'ix_users_id'):
        op.drop_index(index_name, table_name='users')
    op.drop_table('users')
