"""create usuarios and inscricoes tables

Revision ID: 0001ab000001
Revises:
Create Date: 2026-10-19 00:00:00.000000

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "0001ab000001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "usuarios",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("nome_completo", sa.String(length=255), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("senha", sa.String(length=255), nullable=False),
        sa.UniqueConstraint("email", name="uq_usuarios_email"),
    )
    op.create_index("ix_usuarios_email", "usuarios", ["email"])

    op.create_table(
        "inscricoes",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("usuario_id", sa.Integer(), sa.ForeignKey("usuarios.id"), nullable=False),
        sa.Column("nome_completo", sa.String(length=255), nullable=False),
        sa.Column("cpf", sa.String(length=20), nullable=False),
        sa.Column("idade", sa.Integer(), nullable=True),
        sa.Column("genero", sa.String(length=50), nullable=True),
        sa.Column("endereco", sa.String(), nullable=True),
        sa.Column("renda_familiar", sa.Numeric(12, 2), nullable=True),
        sa.Column("numero_membros_familia", sa.Integer(), nullable=True),
        sa.Column("despesas_mensais", sa.Numeric(12, 2), nullable=True),
        sa.Column("nivel_escolaridade", sa.String(length=100), nullable=True),
        sa.Column("status_aprovacao", sa.String(length=50), nullable=True),
        sa.Column(
            "data_inscricao",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
        sa.UniqueConstraint("cpf", name="uq_inscricoes_cpf"),
    )
    op.create_index("ix_inscricoes_usuario_id", "inscricoes", ["usuario_id"])
    op.create_index("ix_inscricoes_status_aprovacao", "inscricoes", ["status_aprovacao"])
    op.create_index("ix_inscricoes_data_inscricao", "inscricoes", ["data_inscricao"])


def downgrade() -> None:
    op.drop_index("ix_inscricoes_data_inscricao", table_name="inscricoes")
    op.drop_index("ix_inscricoes_status_aprovacao", table_name="inscricoes")
    op.drop_index("ix_inscricoes_usuario_id", table_name="inscricoes")
    op.drop_table("inscricoes")
    op.drop_index("ix_usuarios_email", table_name="usuarios")
    op.drop_table("usuarios")
