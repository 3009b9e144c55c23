"""Create catalogo (produtos, complementos_disponiveis) and pedidos tables

Revision ID: 20261019_create_catalogo_and_pedidos_tables
Revises: 
Create Date: 2026-10-19 00:00:00.000000
"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = "20261019_create_catalogo_and_pedidos_tables"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    # produtos
    op.create_table(
        "produtos",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("nome", sa.String(120), nullable=False),
        sa.Column("descricao", sa.Text, nullable=True),
        sa.Column("preco", sa.Numeric(10, 2), nullable=False),
        sa.Column("categoria", sa.String(80), nullable=False, index=True),
        sa.Column("imagem_url", sa.String(255), nullable=True),
        sa.Column("num_complementos_gratis", sa.Integer, nullable=False, server_default="0"),
    )

    # complementos_disponiveis
    op.create_table(
        "complementos_disponiveis",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("nome", sa.String(120), nullable=False),
        sa.Column("preco", sa.Numeric(10, 2), nullable=False, server_default="0"),
        sa.Column("categoria", sa.String(80), nullable=False),
    )

    # pedidos (id_pedido vem do PWA)
    op.create_table(
        "pedidos",
        sa.Column("id_pedido", sa.String(64), primary_key=True),
        sa.Column("nome_cliente", sa.String(120), nullable=False),
        sa.Column("email_cliente", sa.String(255), nullable=True),
        sa.Column("tipo_entrega", sa.String(40), nullable=False),
        sa.Column("endereco_entrega", sa.Text, nullable=True),
        sa.Column("numero_mesa", sa.String(20), nullable=True),
        sa.Column("observacoes", sa.Text, nullable=False, server_default=""),
        sa.Column("metodo_pagamento", sa.String(40), nullable=False),
        sa.Column("troco_para", sa.Numeric(10, 2), nullable=True),
        sa.Column("valor_total", sa.Numeric(10, 2), nullable=False),
        sa.Column("status", sa.String(40), nullable=False, server_default="pendente"),
        sa.Column("data_hora_envio", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
    )
    op.create_index("idx_pedidos_data_hora_envio", "pedidos", ["data_hora_envio"])

    # itens_do_pedido
    op.create_table(
        "itens_do_pedido",
        sa.Column("id_item_pedido", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("id_pedido", sa.String(64), sa.ForeignKey("pedidos.id_pedido"), nullable=False),
        sa.Column("id_produto", sa.Integer, nullable=False),
        sa.Column("nome_produto", sa.String(120), nullable=False),
        sa.Column("quantidade", sa.Integer, nullable=False),
        sa.Column("preco_base_produto", sa.Numeric(10, 2), nullable=False),
        sa.Column("preco_unitario_com_complementos", sa.Numeric(10, 2), nullable=False),
        sa.Column("total_item_preco", sa.Numeric(10, 2), nullable=False),
    )
    op.create_index("idx_itens_do_pedido_pedido", "itens_do_pedido", ["id_pedido"])

    # complementos_do_item: snapshots de nome/preço
    op.create_table(
        "complementos_do_item",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("id_item_pedido", sa.Integer, sa.ForeignKey("itens_do_pedido.id_item_pedido"), nullable=False),
        sa.Column("id_complemento_disponivel", sa.Integer, nullable=False),
        sa.Column("nome_complemento", sa.String(120), nullable=False),
        sa.Column("preco_complemento", sa.Numeric(10, 2), nullable=False),
    )
    op.create_index("idx_complementos_do_item_item", "complementos_do_item", ["id_item_pedido"])


def downgrade() -> None:
    op.drop_index("idx_complementos_do_item_item", table_name="complementos_do_item")
    op.drop_table("complementos_do_item")
    op.drop_index("idx_itens_do_pedido_pedido", table_name="itens_do_pedido")
    op.drop_table("itens_do_pedido")
    op.drop_index("idx_pedidos_data_hora_envio", table_name="pedidos")
    op.drop_table("pedidos")
    op.drop_table("complementos_disponiveis")
    op.drop_table("produtos")
