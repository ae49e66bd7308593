"""Auditoria periódica dos contadores dos jogadores"""
from app.tasks.celery_app import celery_app
from app.core.database import SessionLocal
from app.core.data_integrity import DataIntegrityChecker
import logging

logger = logging.getLogger(__name__)


@celery_app.task
def audit_player_statistics(repair: bool = False):
    """Recalcula os contadores e registra divergências (sem corrigir por padrão)"""
    db = SessionLocal()
    try:
        report = DataIntegrityChecker(db).check_player_counters(repair=repair)
        if repair:
            db.commit()
        if report["issues_found"]:
            logger.warning(
                f"Auditoria: {report['issues_found']} contadores divergentes "
                f"em {report['players_checked']} jogadores"
            )
        else:
            logger.info(f"Auditoria OK: {report['players_checked']} jogadores verificados")
        return report
    except Exception as e:
        db.rollback()
        logger.error(f"Erro na auditoria dos contadores: {e}", exc_info=True)
        raise
    finally:
        db.close()
