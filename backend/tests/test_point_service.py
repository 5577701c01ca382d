"""
Testes do serviço de ponto : invariante saldo == soma dos pontos,
histórico, usuário inexistente e batidas simultâneas.
"""

from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timedelta
from unittest.mock import MagicMock

import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import OperationalError

from ponto.exceptions import NotFoundError
from ponto.models.point import PointEvent
from ponto.models.user import User
from ponto.services.point_service import get_balance, get_history, register_point

from conftest import make_user


def count_points(db, user_id):
    return db.execute(
        select(func.count()).select_from(PointEvent).where(PointEvent.usuario_id == user_id)
    ).scalar()


# ============================================================
# register_point
# ============================================================

class TestRegisterPoint:
    def test_primeiro_ponto_credita_cinco_moedas(self, db):
        user = make_user(db)

        balance, credited = register_point(db, user.id)

        assert credited == 5
        assert balance == 5
        assert count_points(db, user.id) == 1

    @pytest.mark.parametrize("n", [1, 3, 10])
    def test_n_pontos_saldo_igual_n_vezes_constante(self, db, n):
        user = make_user(db)

        for _ in range(n):
            register_point(db, user.id)

        assert get_balance(db, user.id) == n * 5
        assert len(get_history(db, user.id)) == n

    def test_valor_creditado_fica_gravado_no_ponto(self, db):
        """Se a constante mudar, o histórico continua mostrando o valor realmente creditado."""
        user = make_user(db)

        register_point(db, user.id, amount=10)
        register_point(db, user.id)

        history = get_history(db, user.id)
        assert sorted(item.moedas for item in history) == [5, 10]
        total = db.execute(
            select(func.sum(PointEvent.moedas)).where(PointEvent.usuario_id == user.id)
        ).scalar()
        assert get_balance(db, user.id) == total == 15

    def test_usuario_inexistente_leve_erro_sem_inserir_ponto(self, db):
        with pytest.raises(NotFoundError, match="não encontrado"):
            register_point(db, "inexistente")

        assert db.execute(select(func.count()).select_from(PointEvent)).scalar() == 0

    def test_falha_no_insert_desfaz_o_credito(self, db):
        """Falha na metade da transação : nem o ponto nem o crédito ficam gravados."""
        user = make_user(db)
        db.flush = MagicMock(side_effect=OperationalError("INSERT", {}, Exception("disk I/O error")))

        with pytest.raises(OperationalError):
            register_point(db, user.id)

        del db.flush
        db.expire_all()
        assert get_balance(db, user.id) == 0
        assert count_points(db, user.id) == 0

    def test_batidas_simultaneas_nao_perdem_credito(self, db, session_factory):
        """50 batidas em paralelo para o mesmo usuário → exatamente 50 × 5 moedas."""
        user = make_user(db)
        user_id = user.id

        def clock_in(_):
            session = session_factory()
            try:
                return register_point(session, user_id)
            finally:
                session.close()

        with ThreadPoolExecutor(max_workers=10) as pool:
            results = list(pool.map(clock_in, range(50)))

        db.expire_all()
        assert get_balance(db, user_id) == 250
        assert count_points(db, user_id) == 50
        # Cada batida viu um saldo diferente : nenhuma leitura-escrita intercalada.
        assert sorted(balance for balance, _ in results) == list(range(5, 255, 5))


# ============================================================
# get_balance / get_history
# ============================================================

class TestBalanceAndHistory:
    def test_saldo_inicial_zero(self, db):
        user = make_user(db)
        assert get_balance(db, user.id) == 0

    def test_saldo_usuario_inexistente(self, db):
        with pytest.raises(NotFoundError):
            get_balance(db, "inexistente")

    def test_historico_usuario_inexistente(self, db):
        with pytest.raises(NotFoundError):
            get_history(db, "inexistente")

    def test_historico_vazio(self, db):
        user = make_user(db)
        assert get_history(db, user.id) == []

    def test_historico_do_mais_recente_ao_mais_antigo(self, db):
        user = make_user(db)
        base = datetime(2026, 3, 2, 8, 0, 0)
        register_point(db, user.id, now=base)
        register_point(db, user.id, now=base + timedelta(hours=9))
        register_point(db, user.id, now=base + timedelta(days=1))

        history = get_history(db, user.id)

        assert [(p.data, p.hora) for p in history] == [
            ("03/03/2026", "08:00:00"),
            ("02/03/2026", "17:00:00"),
            ("02/03/2026", "08:00:00"),
        ]

    def test_mesmo_horario_desempata_pelo_id(self, db):
        user = make_user(db)
        same_time = datetime(2026, 3, 2, 8, 0, 0)
        register_point(db, user.id, now=same_time)
        register_point(db, user.id, now=same_time)

        history = get_history(db, user.id)

        assert history[0].id > history[1].id

    def test_historico_nao_mistura_usuarios(self, db):
        ana = make_user(db, nome="Ana")
        bruno = make_user(db, nome="Bruno")
        register_point(db, ana.id)
        register_point(db, bruno.id)
        register_point(db, bruno.id)

        assert len(get_history(db, ana.id)) == 1
        assert len(get_history(db, bruno.id)) == 2
        assert db.get(User, bruno.id).moedas == 10
