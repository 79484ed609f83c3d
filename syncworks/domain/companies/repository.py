"""Company repository - Database operations for companies and referrers"""

from typing import Optional

from sqlalchemy.orm import Session, joinedload

from ...models import MovingCompany, Referrer, User


class CompanyRepository:
    """Repository for company database operations"""

    @staticmethod
    def get_company_by_id(db: Session, company_id: str) -> Optional[MovingCompany]:
        return (
            db.query(MovingCompany)
            .options(joinedload(MovingCompany.user))
            .filter(MovingCompany.id == company_id)
            .first()
        )

    @staticmethod
    def get_companies_for_user(db: Session, user_id: str) -> list[MovingCompany]:
        return (
            db.query(MovingCompany)
            .options(joinedload(MovingCompany.user))
            .filter(MovingCompany.user_id == user_id)
            .order_by(MovingCompany.created_at.asc())
            .all()
        )

    @staticmethod
    def get_user_by_email(db: Session, email: str) -> Optional[User]:
        return db.query(User).filter(User.email == email.strip().lower()).first()

    @staticmethod
    def register_account(
        db: Session,
        user_data: dict,
        company_data: Optional[dict] = None,
        referrer_data: Optional[dict] = None,
    ) -> User:
        """Create a user and its company or referrer row in one transaction"""
        try:
            user = User(**user_data)
            db.add(user)
            db.flush()

            if company_data is not None:
                db.add(MovingCompany(user_id=user.id, **company_data))
            if referrer_data is not None:
                db.add(Referrer(user_id=user.id, **referrer_data))

            db.commit()
        except Exception:
            db.rollback()
            raise

        db.refresh(user)
        return user

    @staticmethod
    def update_company(
        db: Session,
        company: MovingCompany,
        company_updates: dict,
        user_updates: Optional[dict] = None,
    ) -> MovingCompany:
        """Update a company and, optionally, its owner in one transaction"""
        try:
            for key, value in company_updates.items():
                setattr(company, key, value)
            if user_updates and company.user:
                for key, value in user_updates.items():
                    setattr(company.user, key, value)
            db.commit()
        except Exception:
            db.rollback()
            raise

        db.refresh(company)
        return company
