# NG-HEADER: Nombre de archivo: 20261019_create_quotes.py
# NG-HEADER: Ubicación: db/migrations/versions/20261019_create_quotes.py
# NG-HEADER: Descripción: Crea la tabla append-only de observaciones de cotizaciones
# NG-HEADER: Lineamientos: Ver AGENTS.md
from alembic import op
import sqlalchemy as sa

from db.migrations.util import has_table, index_exists

# revision identifiers, used by Alembic.
revision = "20261019_create_quotes"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    bind = op.get_bind()
    # La app también crea la tabla al arrancar (create_all)
    if not has_table(bind, "quotes"):
        op.create_table(
            "quotes",
            sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
            sa.Column("source", sa.Text(), nullable=False),
            sa.Column("buy_price", sa.Float(), nullable=True),
            sa.Column("sell_price", sa.Float(), nullable=True),
            sa.Column("region", sa.String(length=2), nullable=False),
            sa.Column("retrieved_at", sa.BigInteger(), nullable=False),
        )
    if not index_exists(bind, "quotes", "ix_quotes_region"):
        op.create_index("ix_quotes_region", "quotes", ["region"])
    if not index_exists(bind, "quotes", "ix_quotes_retrieved_at"):
        op.create_index("ix_quotes_retrieved_at", "quotes", ["retrieved_at"])


def downgrade() -> None:
    bind = op.get_bind()
    if has_table(bind, "quotes"):
        op.drop_index("ix_quotes_retrieved_at", table_name="quotes")
        op.drop_index("ix_quotes_region", table_name="quotes")
        op.drop_table("quotes")
