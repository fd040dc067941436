"""create crtlo tables

Revision ID: 3c1f9a7e2b40
Revises:
Create Date: 2026-10-19 10:12:41.318204

"""

from typing import Sequence, Union

import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "3c1f9a7e2b40"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _created_at() -> sa.Column:
    return sa.Column(
        "created_at",
        sa.DateTime(timezone=True),
        nullable=False,
        server_default=sa.text("now()"),
        comment="Record creation timestamp",
    )


def _uuid_pk() -> sa.Column:
    return sa.Column(
        "id",
        postgresql.UUID(as_uuid=False),
        nullable=False,
        server_default=sa.text("gen_random_uuid()"),
    )


def upgrade() -> None:
    """Upgrade schema."""
    # Create users table
    op.create_table(
        "users",
        sa.Column(
            "id", sa.String(length=255), nullable=False, comment="OIDC subject (sub claim)"
        ),
        sa.Column(
            "email", sa.String(length=255), nullable=True, comment="User email address"
        ),
        sa.Column("first_name", sa.String(length=255), nullable=True),
        sa.Column("last_name", sa.String(length=255), nullable=True),
        sa.Column("profile_image_url", sa.String(length=1024), nullable=True),
        _created_at(),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("now()"),
            comment="Record last update timestamp",
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("email"),
    )

    # Create properties table
    op.create_table(
        "properties",
        _uuid_pk(),
        sa.Column(
            "user_id", sa.String(length=255), nullable=False, comment="Owning user id"
        ),
        sa.Column("address", sa.Text(), nullable=False),
        sa.Column("units", sa.Integer(), nullable=False, server_default="1"),
        sa.Column(
            "is_owner_occupied",
            sa.Boolean(),
            nullable=False,
            server_default=sa.text("false"),
        ),
        sa.Column(
            "is_rtlo_covered", sa.Boolean(), nullable=False, comment="Derived at creation"
        ),
        sa.Column("verification_date", sa.DateTime(timezone=True), nullable=False),
        _created_at(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        op.f("ix_properties_user_id"), "properties", ["user_id"], unique=False
    )
    op.create_index(
        "idx_properties_user_created", "properties", ["user_id", "created_at"]
    )

    # Create rtlo_questions table
    op.create_table(
        "rtlo_questions",
        _uuid_pk(),
        sa.Column("user_id", sa.String(length=255), nullable=False),
        sa.Column("question", sa.Text(), nullable=False),
        sa.Column("answer", sa.Text(), nullable=True),
        sa.Column(
            "rtlo_section",
            sa.Text(),
            nullable=True,
            comment="Cited section, e.g. 5-12-080",
        ),
        sa.Column(
            "confidence",
            sa.String(length=10),
            nullable=True,
            comment="high, medium, or low",
        ),
        _created_at(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        op.f("ix_rtlo_questions_user_id"), "rtlo_questions", ["user_id"], unique=False
    )
    op.create_index(
        "idx_rtlo_questions_user_created", "rtlo_questions", ["user_id", "created_at"]
    )

    # Create documents table
    op.create_table(
        "documents",
        _uuid_pk(),
        sa.Column("user_id", sa.String(length=255), nullable=False),
        sa.Column(
            "property_id",
            sa.String(length=64),
            nullable=True,
            comment="Related property, not enforced",
        ),
        sa.Column("document_type", sa.String(length=64), nullable=False),
        sa.Column("title", sa.Text(), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column(
            "metadata",
            postgresql.JSONB(astext_type=sa.Text()),
            nullable=False,
            server_default=sa.text("'{}'::jsonb"),
        ),
        _created_at(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        op.f("ix_documents_user_id"), "documents", ["user_id"], unique=False
    )
    op.create_index(
        "idx_documents_user_created", "documents", ["user_id", "created_at"]
    )

    # Create ai_analyses table
    op.create_table(
        "ai_analyses",
        _uuid_pk(),
        sa.Column("user_id", sa.String(length=255), nullable=False),
        sa.Column("document_id", sa.String(length=64), nullable=True),
        sa.Column("analysis_type", sa.String(length=32), nullable=False),
        sa.Column("original_text", sa.Text(), nullable=False),
        sa.Column(
            "analysis", sa.Text(), nullable=True, comment="Serialized review result"
        ),
        sa.Column(
            "recommendations",
            postgresql.JSONB(astext_type=sa.Text()),
            nullable=False,
            server_default=sa.text("'[]'::jsonb"),
        ),
        sa.Column("compliance_score", sa.Integer(), nullable=True, comment="0-100"),
        _created_at(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        op.f("ix_ai_analyses_user_id"), "ai_analyses", ["user_id"], unique=False
    )
    op.create_index(
        "idx_ai_analyses_user_created", "ai_analyses", ["user_id", "created_at"]
    )

    # Create sessions table
    op.create_table(
        "sessions",
        sa.Column("sid", sa.String(length=128), nullable=False),
        sa.Column(
            "sess",
            postgresql.JSONB(astext_type=sa.Text()),
            nullable=False,
            comment="Serialized session data",
        ),
        sa.Column("expire", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("sid"),
    )
    op.create_index("idx_session_expire", "sessions", ["expire"], unique=False)


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index("idx_session_expire", table_name="sessions")
    op.drop_table("sessions")

    op.drop_index("idx_ai_analyses_user_created", table_name="ai_analyses")
    op.drop_index(op.f("ix_ai_analyses_user_id"), table_name="ai_analyses")
    op.drop_table("ai_analyses")

    op.drop_index("idx_documents_user_created", table_name="documents")
    op.drop_index(op.f("ix_documents_user_id"), table_name="documents")
    op.drop_table("documents")

    op.drop_index("idx_rtlo_questions_user_created", table_name="rtlo_questions")
    op.drop_index(op.f("ix_rtlo_questions_user_id"), table_name="rtlo_questions")
    op.drop_table("rtlo_questions")

    op.drop_index("idx_properties_user_created", table_name="properties")
    op.drop_index(op.f("ix_properties_user_id"), table_name="properties")
    op.drop_table("properties")

    op.drop_table("users")
