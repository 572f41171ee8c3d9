"""
============================================================
TARJETA CRC (Class / Responsibilities / Collaborators)
============================================================
Class: 001_foundation (Alembic Migration)

Responsibilities:
  - Crear el esquema base: users + processes.
  - Constraints que la app asume: email único, estado dentro del catálogo,
    owner_id con FK RESTRICT (un usuario con procesos no se borra).

Collaborators:
  - PostgreSQL 14+
  - infrastructure/repositories/postgres (usa este esquema como contrato)

Policy:
  - Migración BASELINE. Downgrade NO soportado.
  - Convención de nombres:
      pk_<tabla>, uq_<tabla>_<col>, ix_<tabla>_<col>,
      fk_<tabla>_<col>__<ref_tabla>, ck_<tabla>_<regla>
============================================================
"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

revision: str = "001_foundation"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

PROCESS_STATES = (
    "Iniciado",
    "Vigente",
    "EnRevision",
    "Terminado",
    "Reparado",
    "Cancelado",
    "Pausado",
)


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
    ]


def upgrade() -> None:
    # =========================================================
    # 1) IDENTITY (users)
    # =========================================================
    op.create_table(
        "users",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("email", sa.String(320), nullable=False),
        sa.Column("password_hash", sa.Text, nullable=False),
        sa.Column("name", sa.String(120), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name="pk_users"),
        sa.UniqueConstraint("email", name="uq_users_email"),
    )

    # =========================================================
    # 2) PROCESSES (expedientes)
    # =========================================================
    states_sql = ", ".join(f"'{s}'" for s in PROCESS_STATES)
    op.create_table(
        "processes",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("repertorio", sa.String(50), nullable=False),
        sa.Column("caratula", sa.String(200), nullable=True),
        sa.Column("cliente", sa.String(200), nullable=True),
        sa.Column("email_cliente", sa.String(320), nullable=True),
        sa.Column(
            "estado",
            sa.String(20),
            nullable=False,
            server_default=sa.text("'Iniciado'"),
        ),
        sa.Column("owner_id", postgresql.UUID(as_uuid=True), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name="pk_processes"),
        sa.ForeignKeyConstraint(
            ["owner_id"],
            ["users.id"],
            name="fk_processes_owner_id__users",
            ondelete="RESTRICT",
        ),
        sa.CheckConstraint(
            f"estado IN ({states_sql})", name="ck_processes_estado_valid"
        ),
        sa.CheckConstraint(
            "length(btrim(repertorio)) > 0", name="ck_processes_repertorio_not_blank"
        ),
    )

    # Bandeja por dueño, más recientes primero.
    op.create_index(
        "ix_processes_owner_id_created_at",
        "processes",
        ["owner_id", sa.text("created_at DESC")],
    )


def downgrade() -> None:
    """Downgrade NO soportado para la migración fundacional."""
    raise NotImplementedError(
        "Baseline: downgrade no soportado. Para resetear, recrear la base."
    )
