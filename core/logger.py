# core/logger.py
from sqlalchemy.exc import SQLAlchemyError
from core.db import SessionLocal
from models.audit_log import AuditLog

def log_action(actor: str, action: str, db=None):
    """Record a staff action in the audit log.

    Uses `db` when given so the entry lands in the same database as the change
    it describes; otherwise opens its own session.
    """
    session = db or SessionLocal()
    try:
        session.add(AuditLog(actor=actor, action=action))
        session.commit()
    except SQLAlchemyError as e:
        print("Audit log error:", e)
        session.rollback()
    finally:
        if db is None:
            session.close()


def recent_actions(db, limit: int = 20):
    """Latest audit entries, newest first."""
    return db.query(AuditLog).order_by(AuditLog.timestamp.desc(), AuditLog.id.desc()).limit(limit).all()
