"""initial doctors, patients, users and adherence_entries

Revision ID: 5c1e8a2f9d40
Revises:
Create Date: 2026-10-19 10:12:44.118301
"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '5c1e8a2f9d40'
down_revision = None
branch_labels = None
depends_on = None

PLACEHOLDER = "https://placehold.co/600x400?text=Not+Found"
UPLOAD_COLUMNS = (
    'study_model_url', 'photographs_url', 'opg_url', 'lateral_cephalogram_url',
    'pa_cephalogram_url', 'cbct_url', 'iopa_url', 'any_other_record_url',
)


def upgrade():
    op.create_table(
        'doctors',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=120), nullable=True),
        sa.Column('avatar', sa.String(length=512), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )

    op.create_table(
        'patients',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('doctor_id', sa.Integer(), nullable=True),
        sa.Column('name', sa.String(length=120), nullable=False),
        sa.Column('age', sa.Integer(), nullable=True),
        sa.Column('dob', sa.Date(), nullable=True),
        sa.Column('gender', sa.String(length=20), nullable=True),
        sa.Column('address', sa.Text(), nullable=True),
        sa.Column('contact_number', sa.String(length=32), nullable=True),

        sa.Column('chief_complaint', sa.Text(), nullable=True),
        sa.Column('past_medical_history', sa.Text(), nullable=True),
        sa.Column('past_dental_history', sa.Text(), nullable=True),
        sa.Column('provisional_diagnosis', sa.Text(), nullable=True),
        sa.Column('final_diagnosis', sa.Text(), nullable=True),
        sa.Column('treatment_plan', sa.Text(), nullable=True),
        sa.Column('growth_modulation_or_camouflage', sa.String(length=60), nullable=True),
        sa.Column('extraction_or_non_extraction', sa.String(length=60), nullable=True),
        sa.Column('phase', sa.String(length=30), nullable=True),
        sa.Column('type_of_appliance', sa.String(length=120), nullable=True),
        sa.Column('prescription', sa.Text(), nullable=True),
        sa.Column('start_date', sa.Date(), nullable=True),
        sa.Column('next_appointment', sa.DateTime(), nullable=True),

        *[sa.Column(name, sa.String(length=512), server_default=PLACEHOLDER, nullable=False)
          for name in UPLOAD_COLUMNS],

        sa.Column('last_adherence_at', sa.DateTime(), nullable=True),
        sa.Column('version_id', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),

        sa.ForeignKeyConstraint(['doctor_id'], ['doctors.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('contact_number')
    )
    op.create_index('ix_patients_doctor_id', 'patients', ['doctor_id'])

    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('contact_number', sa.String(length=32), nullable=False),
        sa.Column('password_hash', sa.String(length=255), nullable=False),
        sa.Column('role', sa.String(length=20), nullable=False),
        sa.Column('patient_id', sa.Integer(), nullable=True),
        sa.Column('doctor_id', sa.Integer(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(['patient_id'], ['patients.id'], ondelete='SET NULL'),
        sa.ForeignKeyConstraint(['doctor_id'], ['doctors.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_users_contact_number', 'users', ['contact_number'], unique=True)

    op.create_table(
        'adherence_entries',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('patient_id', sa.Integer(), nullable=False),
        sa.Column('date', sa.DateTime(), nullable=False),
        sa.Column('adherent', sa.Boolean(), nullable=False),
        sa.Column('notes', sa.Text(), nullable=False),
        sa.Column('was_useful', sa.Boolean(), nullable=True),
        sa.Column('duration_label', sa.String(length=60), nullable=True),
        sa.Column('appliance_type', sa.String(length=120), nullable=True),
        sa.Column('photo_url', sa.String(length=512), nullable=True),
        sa.Column('reason', sa.String(length=255), nullable=True),
        sa.Column('score', sa.Integer(), nullable=True),             # 0-100
        sa.Column('breakdown', sa.JSON(), nullable=True),
        sa.Column('score_source', sa.String(length=20), nullable=True),  # computed | override
        sa.ForeignKeyConstraint(['patient_id'], ['patients.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_adherence_entries_patient_id', 'adherence_entries', ['patient_id'])
    op.create_index('ix_adherence_entries_date', 'adherence_entries', ['date'])


def downgrade():
    op.drop_index('ix_adherence_entries_date', table_name='adherence_entries')
    op.drop_index('ix_adherence_entries_patient_id', table_name='adherence_entries')
    op.drop_table('adherence_entries')
    op.drop_index('ix_users_contact_number', table_name='users')
    op.drop_table('users')
    op.drop_index('ix_patients_doctor_id', table_name='patients')
    op.drop_table('patients')
    op.drop_table('doctors')
