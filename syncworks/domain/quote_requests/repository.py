"""Quote request repository - Database operations for quote requests"""

from typing import Optional

from sqlalchemy.orm import Session

from ...models import QuoteRequest


class QuoteRequestRepository:
    """Repository for quote request database operations"""

    @staticmethod
    def get_quote_requests(
        db: Session,
        status: Optional[str] = None,
        customer_email: Optional[str] = None,
        referrer_agent_id: Optional[str] = None,
    ) -> list[QuoteRequest]:
        query = db.query(QuoteRequest)
        if status:
            query = query.filter(QuoteRequest.status == status)
        if customer_email:
            query = query.filter(QuoteRequest.customer_email == customer_email.strip().lower())
        if referrer_agent_id:
            query = query.filter(QuoteRequest.referrer_agent_id == referrer_agent_id)
        return query.order_by(QuoteRequest.created_at.desc()).all()

    @staticmethod
    def get_quote_request_by_id(db: Session, quote_id: str) -> Optional[QuoteRequest]:
        return db.query(QuoteRequest).filter(QuoteRequest.id == quote_id).first()

    @staticmethod
    def create_quote_request(db: Session, **quote_data) -> QuoteRequest:
        quote = QuoteRequest(**quote_data)
        db.add(quote)
        db.commit()
        db.refresh(quote)
        return quote

    @staticmethod
    def update_quote_request(db: Session, quote: QuoteRequest, **updates) -> QuoteRequest:
        for key, value in updates.items():
            setattr(quote, key, value)
        db.commit()
        db.refresh(quote)
        return quote
