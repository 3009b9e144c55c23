from __future__ import annotations

from typing import List

from fastapi import HTTPException, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.api.pedidos.models.model_pedido import STATUS_PENDENTE
from app.api.pedidos.repositories.repo_pedidos import PedidoRepository
from app.api.pedidos.schemas.schema_pedido import (
    AtualizarStatusRequest,
    AtualizarStatusResponse,
    PedidoCreateRequest,
    PedidoCriadoResponse,
    PedidoResponse,
)
from app.api.pedidos.utils.montar_pedidos import montar_pedidos
from app.utils.database_utils import now_trimmed
from app.utils.logger import logger
from app.utils.prometheus_metrics import pedidos_criados_total


class PedidoService:
    """Gravação, leitura e atualização de status de pedidos."""

    def __init__(self, db: Session):
        self.db = db
        self.repo = PedidoRepository(db)

    # ---------------- Commands ---------------
    def criar_pedido(self, payload: PedidoCreateRequest) -> PedidoCriadoResponse:
        """
        Grava cabeçalho, itens e complementos numa única transação.

        Um reenvio com `orderId` já existente não altera nada e não é erro.
        Qualquer falha desfaz o pedido inteiro.
        """
        entrega = payload.opcao_entrega
        try:
            inserido = self.repo.inserir_pedido_ignorando_conflito(
                id_pedido=payload.id_pedido,
                nome_cliente=payload.nome_cliente,
                email_cliente=payload.email_cliente or None,
                tipo_entrega=entrega.tipo,
                endereco_entrega=entrega.endereco or None,
                numero_mesa=str(entrega.numero_mesa) if entrega.numero_mesa is not None else None,
                observacoes=payload.observacoes or "",
                metodo_pagamento=payload.metodo_pagamento,
                troco_para=payload.troco_para or None,
                valor_total=payload.valor_total,
                status=payload.status or STATUS_PENDENTE,
                data_hora_envio=payload.data_hora_envio or now_trimmed(),
            )

            if inserido:
                for item in payload.itens:
                    item_db = self.repo.inserir_item(
                        id_pedido=payload.id_pedido,
                        id_produto=item.id_produto,
                        nome_produto=item.nome,
                        quantidade=item.quantidade,
                        preco_base_produto=item.preco_base,
                        preco_unitario_com_complementos=item.preco_unitario_com_complementos,
                        total_item_preco=item.total_item,
                    )
                    for comp in item.complementos:
                        self.repo.inserir_complemento(
                            id_item_pedido=item_db.id_item_pedido,
                            id_complemento_disponivel=comp.id_complemento,
                            nome_complemento=comp.nome,
                            preco_complemento=comp.preco,
                        )

            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"[Pedidos] Erro ao salvar pedido {payload.id_pedido}: {e}")
            raise HTTPException(
                status.HTTP_500_INTERNAL_SERVER_ERROR,
                {"message": "Erro ao salvar pedido.", "error": str(e)},
            )
        except Exception:
            self.db.rollback()
            raise

        if inserido:
            pedidos_criados_total.inc()
            logger.info(
                f"[Pedidos] Pedido salvo - id={payload.id_pedido} itens={len(payload.itens)} "
                f"total={payload.valor_total}"
            )
        else:
            # TODO: devolver um status distinto (ex.: 200) para reenvio quando o PWA souber tratar
            logger.warning(f"[Pedidos] Pedido {payload.id_pedido} já existia; reenvio ignorado")

        return PedidoCriadoResponse(message="Pedido salvo com sucesso!", order_id=payload.id_pedido)

    def atualizar_status_lote(self, atualizacoes: List[AtualizarStatusRequest]) -> AtualizarStatusResponse:
        """
        Aplica um lote de mudanças de status numa única transação.

        Entradas sem `orderId` ou sem `status` são ignoradas (com aviso no log);
        uma falha do banco desfaz o lote inteiro.
        """
        atualizados = 0
        ignorados = 0
        try:
            for posicao, atualizacao in enumerate(atualizacoes):
                if not atualizacao.id_pedido or not atualizacao.status:
                    ignorados += 1
                    logger.warning(
                        f"[Pedidos] Atualização de status ignorada na posição {posicao}: "
                        f"orderId={atualizacao.id_pedido!r} status={atualizacao.status!r}"
                    )
                    continue
                atualizados += self.repo.atualizar_status(atualizacao.id_pedido, atualizacao.status)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"[Pedidos] Erro ao atualizar status em lote: {e}")
            raise HTTPException(
                status.HTTP_500_INTERNAL_SERVER_ERROR,
                {"message": "Erro ao atualizar status dos pedidos.", "error": str(e)},
            )

        logger.info(f"[Pedidos] Status atualizados={atualizados} ignorados={ignorados}")
        return AtualizarStatusResponse(
            message="Status dos pedidos atualizados.",
            atualizados=atualizados,
            ignorados=ignorados,
        )

    # ---------------- Queries ----------------
    def listar_pedidos(self) -> List[PedidoResponse]:
        try:
            linhas = self.repo.listar_linhas_pedidos()
        except SQLAlchemyError as e:
            logger.error(f"[Pedidos] Erro ao buscar pedidos: {e}")
            raise HTTPException(
                status.HTTP_500_INTERNAL_SERVER_ERROR,
                {"message": "Erro ao buscar pedidos.", "error": str(e)},
            )
        return montar_pedidos(linhas)
