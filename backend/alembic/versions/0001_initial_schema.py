"""Initial schema: users, token blacklist, stores, items, recipes, calendar.

Revision ID: 0001
Revises:
Create Date: 2026-10-19

"""

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision = "0001"
down_revision = None
branch_labels = None
depends_on = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False
        ),
        sa.Column(
            "updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False
        ),
    ]


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("email", sa.String(320), nullable=False),
        sa.Column("password_hash", sa.String(255), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column(
            "role",
            sa.Enum("user", "admin", name="user_role", create_constraint=True),
            nullable=False,
        ),
        *_timestamps(),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)

    op.create_table(
        "token_blacklist",
        sa.Column("token", sa.String(2048), primary_key=True),
        sa.Column("expires_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_token_blacklist_expires_at", "token_blacklist", ["expires_at"])

    op.create_table(
        "stores",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("location", sa.String(500), nullable=False),
        sa.Column("contact_number", sa.String(50), nullable=True),
        sa.Column("website", sa.String(500), nullable=True),
        *_timestamps(),
    )

    op.create_table(
        "items",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column(
            "category",
            sa.Enum(
                "Dairy",
                "Vegetables",
                "Fruits",
                "Meat",
                "Grains",
                "Snacks",
                "Drinks",
                "Other",
                name="item_category",
                create_constraint=True,
            ),
            nullable=False,
        ),
        sa.Column("quantity", sa.Integer(), nullable=False),
        sa.Column(
            "unit",
            sa.Enum(
                "pcs",
                "kg",
                "g",
                "liters",
                "ml",
                "pack",
                "bottle",
                "can",
                "box",
                "other",
                name="item_unit",
                create_constraint=True,
            ),
            nullable=False,
        ),
        sa.Column(
            "storage_location",
            sa.Enum("Fridge", "Pantry", "Freezer", name="storage_location", create_constraint=True),
            nullable=False,
        ),
        sa.Column("price", sa.Float(), nullable=False),
        sa.Column("expiry_date", sa.Date(), nullable=True),
        sa.Column("date_purchased", sa.Date(), nullable=True),
        sa.Column(
            "store_id",
            sa.Uuid(),
            sa.ForeignKey("stores.id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column("barcodes", sa.JSON(), nullable=False),
        *_timestamps(),
    )

    op.create_table(
        "recipes",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("servings", sa.Integer(), nullable=False),
        sa.Column("prep_time", sa.Integer(), nullable=False),
        sa.Column("cook_time", sa.Integer(), nullable=False),
        sa.Column("ingredients", sa.JSON(), nullable=False),
        sa.Column("steps", sa.JSON(), nullable=False),
        sa.Column("category", sa.JSON(), nullable=False),
        sa.Column(
            "difficulty",
            sa.Enum("Easy", "Medium", "Hard", name="recipe_difficulty", create_constraint=True),
            nullable=False,
        ),
        sa.Column("image_url", sa.String(1000), nullable=True),
        sa.Column("rating", sa.Integer(), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column(
            "created_by",
            sa.Uuid(),
            sa.ForeignKey("users.id", ondelete="SET NULL"),
            nullable=True,
        ),
        *_timestamps(),
    )

    op.create_table(
        "calendar_events",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("start_time", sa.Time(), nullable=True),
        sa.Column("end_time", sa.Time(), nullable=True),
        sa.Column("location", sa.String(500), nullable=True),
        sa.Column(
            "type",
            sa.Enum(
                "Birthday",
                "Event",
                "Task",
                "Work",
                "Other",
                name="calendar_event_type",
                create_constraint=True,
            ),
            nullable=False,
        ),
        sa.Column(
            "owner_id",
            sa.Uuid(),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        ),
        *_timestamps(),
    )
    op.create_index("ix_calendar_events_date", "calendar_events", ["date"])
    op.create_index("ix_calendar_events_owner_id", "calendar_events", ["owner_id"])


def downgrade() -> None:
    op.drop_table("calendar_events")
    op.drop_table("recipes")
    op.drop_table("items")
    op.drop_table("stores")
    op.drop_table("token_blacklist")
    op.drop_table("users")
    for enum_name in (
        "calendar_event_type",
        "recipe_difficulty",
        "storage_location",
        "item_unit",
        "item_category",
        "user_role",
    ):
        sa.Enum(name=enum_name).drop(op.get_bind(), checkfirst=True)
