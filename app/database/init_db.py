from sqlalchemy import inspect
from sqlalchemy.exc import SQLAlchemyError

from app.utils.logger import logger
from .db_connection import Base, DatabaseProvider

TABELAS_ESSENCIAIS = (
    "produtos",
    "complementos_disponiveis",
    "pedidos",
    "itens_do_pedido",
    "complementos_do_item",
)


def importar_models():
    # ─── Models Catálogo ───────────────────────────────────────────
    from app.api.catalogo.models.model_produto import ProdutoModel
    from app.api.catalogo.models.model_complemento import ComplementoDisponivelModel
    # ─── Models Pedidos ────────────────────────────────────────────
    from app.api.pedidos.models.model_pedido import PedidoModel
    from app.api.pedidos.models.model_pedido_item import PedidoItemModel
    from app.api.pedidos.models.model_pedido_item_complemento import PedidoItemComplementoModel
    logger.info("📦 Models importados com sucesso.")


def criar_tabelas(provider: DatabaseProvider):
    """Cria as tabelas que ainda não existem (checkfirst, nunca altera as existentes)."""
    try:
        Base.metadata.create_all(bind=provider.engine, checkfirst=True)
        logger.info("✅ Tabelas criadas/verificadas.")
    except SQLAlchemyError as e:
        logger.error(f"❌ Erro ao criar tabelas: {e}")
        raise


def verificar_banco_inicializado(provider: DatabaseProvider) -> bool:
    """Confere se todas as tabelas essenciais existem."""
    existentes = set(inspect(provider.engine).get_table_names())
    faltando = [t for t in TABELAS_ESSENCIAIS if t not in existentes]
    if faltando:
        logger.error(f"❌ Tabelas ausentes: {', '.join(faltando)}")
        return False
    return True


def inicializar_banco(provider: DatabaseProvider):
    logger.info("🚀 Iniciando processo de inicialização do banco de dados...")

    logger.info("📦 Passo 1/3: Registrando models...")
    importar_models()

    logger.info("📋 Passo 2/3: Criando/verificando tabelas...")
    criar_tabelas(provider)

    logger.info("🔎 Passo 3/3: Verificando estrutura...")
    if not verificar_banco_inicializado(provider):
        raise RuntimeError("Banco não inicializado: tabelas essenciais ausentes.")

    logger.info("✅ Banco inicializado com sucesso.")
