# migrations/versions/0001_initial.py
"""students, classes, documents, last certificates

Revision ID: 0001_initial
Revises:
"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = "0001_initial"
down_revision = None
branch_labels = None
depends_on = None

coe_status = sa.Enum("pending", "applied", "received", "rejected", name="coestatus")

def upgrade():
    op.create_table(
        "classes",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(length=120), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("id", name="pk_classes"),
    )

    op.create_table(
        "students",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("first_name", sa.String(length=120), nullable=True),
        sa.Column("last_name", sa.String(length=120), nullable=True),
        sa.Column("phone", sa.String(length=40), nullable=True),
        sa.Column("sex", sa.String(length=20), nullable=True),
        sa.Column("dob", sa.Date(), nullable=True),
        sa.Column("pob", sa.String(length=160), nullable=True),
        sa.Column("email", sa.String(length=160), nullable=True),
        sa.Column("curr_add", sa.String(length=255), nullable=True),
        sa.Column("temp_add", sa.String(length=255), nullable=True),
        sa.Column("per_add", sa.String(length=255), nullable=True),
        sa.Column("pass_num", sa.String(length=40), nullable=True),
        sa.Column("pass_doi", sa.Date(), nullable=True),
        sa.Column("pass_doe", sa.Date(), nullable=True),
        sa.Column("coe_status", coe_status, nullable=False),
        sa.Column("remarks", sa.Text(), nullable=True),
        sa.Column("class_id", sa.Integer(), nullable=True),
        sa.Column("profile_image", sa.String(length=255), nullable=True),
        sa.Column("academic_records", sa.JSON(), nullable=False),
        sa.Column("family_members", sa.JSON(), nullable=False),
        sa.Column("work_experiences", sa.JSON(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.ForeignKeyConstraint(["class_id"], ["classes.id"], name="fk_students_class_id_classes", ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id", name="pk_students"),
    )
    op.create_index("ix_students_first_name", "students", ["first_name"])
    op.create_index("ix_students_last_name", "students", ["last_name"])
    op.create_index("ix_students_coe_status", "students", ["coe_status"])

    op.create_table(
        "class_students",
        sa.Column("class_id", sa.Integer(), nullable=False),
        sa.Column("student_id", sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(["class_id"], ["classes.id"], name="fk_class_students_class_id_classes", ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["student_id"], ["students.id"], name="fk_class_students_student_id_students", ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("class_id", "student_id", name="pk_class_students"),
        sa.UniqueConstraint("class_id", "student_id", name="uq_class_student"),
    )

    op.create_table(
        "student_documents",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("student_id", sa.Integer(), nullable=False),
        sa.Column("file_name", sa.String(length=255), nullable=False),
        sa.Column("file_path", sa.String(length=512), nullable=False),
        sa.Column("uploaded_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.ForeignKeyConstraint(["student_id"], ["students.id"], name="fk_student_documents_student_id_students", ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id", name="pk_student_documents"),
    )
    op.create_index("ix_student_documents_student_id", "student_documents", ["student_id"])

    op.create_table(
        "last_certificates",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("student_id", sa.Integer(), nullable=False),
        sa.Column("certificate_type", sa.String(length=32), nullable=False),
        sa.Column("generated_data", sa.JSON(), nullable=False),
        sa.Column("pdf_data", sa.LargeBinary(), nullable=True),
        sa.Column("pdf_mime_type", sa.String(length=80), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.ForeignKeyConstraint(["student_id"], ["students.id"], name="fk_last_certificates_student_id_students", ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id", name="pk_last_certificates"),
        sa.UniqueConstraint("student_id", "certificate_type", name="uq_last_certificate_student_type"),
    )
    op.create_index("ix_last_certificates_student_id", "last_certificates", ["student_id"])
    op.create_index("ix_last_certificates_certificate_type", "last_certificates", ["certificate_type"])


def downgrade():
    op.drop_table("last_certificates")
    op.drop_table("student_documents")
    op.drop_table("class_students")
    op.drop_table("students")
    op.drop_table("classes")
    coe_status.drop(op.get_bind(), checkfirst=True)
