"""Season rule repository - Database operations for season rules"""

from typing import Optional

from sqlalchemy.orm import Session

from ...models import SeasonRule


class SeasonRuleRepository:
    """Repository for season rule database operations"""

    @staticmethod
    def get_active_rules(db: Session) -> list[SeasonRule]:
        """Active rules, lowest priority value first"""
        return (
            db.query(SeasonRule)
            .filter(SeasonRule.is_active.is_(True))
            .order_by(SeasonRule.priority.asc(), SeasonRule.name.asc())
            .all()
        )

    @staticmethod
    def get_rule_by_id(db: Session, rule_id: str) -> Optional[SeasonRule]:
        return db.query(SeasonRule).filter(SeasonRule.id == rule_id).first()

    @staticmethod
    def create_rule(db: Session, **rule_data) -> SeasonRule:
        rule = SeasonRule(**rule_data)
        db.add(rule)
        db.commit()
        db.refresh(rule)
        return rule

    @staticmethod
    def delete_rule(db: Session, rule: SeasonRule) -> None:
        db.delete(rule)
        db.commit()

    @staticmethod
    def save_rules(db: Session, rows: list[tuple[Optional[SeasonRule], dict]]) -> list[SeasonRule]:
        """
        Apply a batch of creates and updates in one transaction.

        Each row is (existing rule or None, column values).
        """
        saved = []
        try:
            for existing, data in rows:
                if existing is None:
                    rule = SeasonRule(**data)
                    db.add(rule)
                else:
                    rule = existing
                    for key, value in data.items():
                        setattr(rule, key, value)
                saved.append(rule)
            db.commit()
        except Exception:
            db.rollback()
            raise

        for rule in saved:
            db.refresh(rule)
        return saved
