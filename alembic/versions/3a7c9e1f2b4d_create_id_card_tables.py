"""Create subject, template and ID card tables"""
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision = '3a7c9e1f2b4d'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    # Create users table
    op.create_table(
        'users',
        sa.Column('id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('full_name', sa.String(200), nullable=True),
        sa.Column('first_name', sa.String(100), nullable=True),
        sa.Column('middle_name', sa.String(100), nullable=True),
        sa.Column('last_name', sa.String(100), nullable=True),
        sa.Column('email', sa.String(255), nullable=True),
        sa.Column('phone', sa.String(30), nullable=True),
        sa.Column('address', sa.Text(), nullable=True),
        sa.Column('date_of_birth', sa.Date(), nullable=True),
        sa.Column('blood_group', sa.String(5), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('deleted_at', sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )

    # Create classes table
    op.create_table(
        'classes',
        sa.Column('id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('section', sa.String(20), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )

    # Create students table
    op.create_table(
        'students',
        sa.Column('id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('user_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('class_id', postgresql.UUID(as_uuid=True), nullable=True),
        sa.Column('student_id', sa.String(50), nullable=True),
        sa.Column('roll_number', sa.String(50), nullable=True),
        sa.Column('admission_number', sa.String(50), nullable=True),
        sa.Column('academic_status', sa.String(30), nullable=True),
        sa.Column('father_first_name', sa.String(100), nullable=True),
        sa.Column('father_last_name', sa.String(100), nullable=True),
        sa.Column('father_phone', sa.String(30), nullable=True),
        sa.Column('mother_first_name', sa.String(100), nullable=True),
        sa.Column('mother_last_name', sa.String(100), nullable=True),
        sa.Column('mother_phone', sa.String(30), nullable=True),
        sa.Column('profile_photo_url', sa.Text(), nullable=True),
        sa.Column('deleted_at', sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['class_id'], ['classes.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('user_id')
    )
    op.create_index(op.f('ix_students_student_id'), 'students', ['student_id'])
    op.create_index(op.f('ix_students_roll_number'), 'students', ['roll_number'])
    op.create_index(op.f('ix_students_admission_number'), 'students', ['admission_number'])

    # Create teachers table
    op.create_table(
        'teachers',
        sa.Column('id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('user_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('employee_id', sa.String(50), nullable=True),
        sa.Column('designation', sa.String(100), nullable=True),
        sa.Column('department', sa.String(100), nullable=True),
        sa.Column('subjects_taught', postgresql.ARRAY(sa.String()), nullable=False, server_default='{}'),
        sa.Column('qualification', sa.String(200), nullable=True),
        sa.Column('experience_years', sa.Integer(), nullable=True),
        sa.Column('date_of_joining', sa.Date(), nullable=True),
        sa.Column('profile_photo_url', sa.Text(), nullable=True),
        sa.Column('is_active', sa.Boolean(), server_default='true'),
        sa.Column('deleted_at', sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('user_id')
    )
    op.create_index(op.f('ix_teachers_employee_id'), 'teachers', ['employee_id'])

    # Create staff table
    op.create_table(
        'staff',
        sa.Column('id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('user_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('employee_id', sa.String(50), nullable=True),
        sa.Column('designation', sa.String(100), nullable=True),
        sa.Column('department', sa.String(100), nullable=True),
        sa.Column('position', sa.String(100), nullable=True),
        sa.Column('shift', sa.String(50), nullable=True),
        sa.Column('working_hours', sa.String(50), nullable=True),
        sa.Column('employment_date', sa.Date(), nullable=True),
        sa.Column('profile_photo_url', sa.Text(), nullable=True),
        sa.Column('is_active', sa.Boolean(), server_default='true'),
        sa.Column('deleted_at', sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('user_id')
    )
    op.create_index(op.f('ix_staff_employee_id'), 'staff', ['employee_id'])

    # Create school_information table
    op.create_table(
        'school_information',
        sa.Column('id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('school_name', sa.String(200), nullable=True),
        sa.Column('logo', sa.Text(), nullable=True),
        sa.Column('address', sa.Text(), nullable=True),
        sa.Column('school_code', sa.String(50), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.PrimaryKeyConstraint('id')
    )

    # Create id_card_templates table
    op.create_table(
        'id_card_templates',
        sa.Column('id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('type', sa.String(20), nullable=False),
        sa.Column('status', sa.String(20), nullable=False, server_default='DRAFT'),
        sa.Column('dimensions', sa.String(50), nullable=False, server_default='85.6x54'),
        sa.Column('orientation', sa.String(20), nullable=False, server_default='HORIZONTAL'),
        sa.Column('usage_count', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('name')
    )

    # Create id_card_template_fields table
    op.create_table(
        'id_card_template_fields',
        sa.Column('id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('template_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('field_type', sa.String(20), nullable=False),
        sa.Column('data_source', sa.String(20), nullable=False, server_default='static'),
        sa.Column('database_field', sa.String(100), nullable=True),
        sa.Column('static_text', sa.Text(), nullable=True),
        sa.Column('image_url', sa.Text(), nullable=True),
        sa.Column('placeholder', sa.String(200), nullable=True),
        sa.Column('label', sa.String(100), nullable=False, server_default=''),
        sa.Column('x', sa.Float(), nullable=False, server_default='0'),
        sa.Column('y', sa.Float(), nullable=False, server_default='0'),
        sa.Column('width', sa.Float(), nullable=False, server_default='0'),
        sa.Column('height', sa.Float(), nullable=False, server_default='0'),
        sa.Column('font_size', sa.Integer(), nullable=True),
        sa.Column('font_family', sa.String(100), nullable=True),
        sa.Column('font_weight', sa.String(20), nullable=True),
        sa.Column('text_align', sa.String(20), nullable=True),
        sa.Column('color', sa.String(20), nullable=True),
        sa.Column('background_color', sa.String(20), nullable=True),
        sa.Column('sort_order', sa.Integer(), nullable=False, server_default='0'),
        sa.ForeignKeyConstraint(['template_id'], ['id_card_templates.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_id_card_template_fields_template_id'), 'id_card_template_fields', ['template_id'])

    # Create id_cards table
    op.create_table(
        'id_cards',
        sa.Column('id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('type', sa.String(20), nullable=False),
        sa.Column('template_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('issued_for_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('expiry_date', sa.DateTime(timezone=True), nullable=True),
        sa.Column('batch_name', sa.String(100), nullable=True),
        sa.Column('issued_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.ForeignKeyConstraint(['template_id'], ['id_card_templates.id']),
        sa.ForeignKeyConstraint(['issued_for_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_id_cards_subject_type_issued', 'id_cards', ['issued_for_id', 'type', 'issued_at'])


def downgrade():
    op.drop_index('ix_id_cards_subject_type_issued', table_name='id_cards')
    op.drop_table('id_cards')
    op.drop_index(op.f('ix_id_card_template_fields_template_id'), table_name='id_card_template_fields')
    op.drop_table('id_card_template_fields')
    op.drop_table('id_card_templates')
    op.drop_table('school_information')
    op.drop_index(op.f('ix_staff_employee_id'), table_name='staff')
    op.drop_table('staff')
    op.drop_index(op.f('ix_teachers_employee_id'), table_name='teachers')
    op.drop_table('teachers')
    op.drop_index(op.f('ix_students_admission_number'), table_name='students')
    op.drop_index(op.f('ix_students_roll_number'), table_name='students')
    op.drop_index(op.f('ix_students_student_id'), table_name='students')
    op.drop_table('students')
    op.drop_table('classes')
    op.drop_table('users')
