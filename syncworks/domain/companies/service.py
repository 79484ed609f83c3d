"""Company service - Registration and company profile logic"""

import logging

from fastapi import HTTPException
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ...models import MovingCompany, User
from ...security_utils import hash_password, mask_email
from .repository import CompanyRepository
from .schemas import CompanyUpdate, RegistrationRequest, parse_staff_count

logger = logging.getLogger(__name__)


class CompanyService:
    """Service layer for companies"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = CompanyRepository()

    def register(self, data: RegistrationRequest) -> User:
        """Create the login account plus the mover or referrer profile"""
        basic = data.basicInfo
        email = basic.emailData.businessEmail if basic and basic.emailData else None
        if not email or not basic.password:
            raise HTTPException(status_code=400, detail="Missing required fields")

        if self.repo.get_user_by_email(self.db, email):
            raise HTTPException(status_code=409, detail="User already exists")

        company_data = referrer_data = None
        if data.userType == "mover":
            mover = data.moverInfo
            if not mover or not mover.companyName or not mover.companyName.strip():
                raise HTTPException(status_code=400, detail="Missing required field: companyName")
            role = "company_admin"
            display_name = mover.companyName.strip()
            company_data = {
                "company_name": display_name,
                "description": mover.description,
                "staff_count": parse_staff_count(mover.staffCount) or 0,
                "address_line": basic.address,
                "postal_code": basic.postalCode,
                "phone_number": basic.phone,
            }
        else:
            referrer = data.referrerInfo
            if not referrer:
                raise HTTPException(status_code=400, detail="Missing required field: referrerInfo")
            role = "referrer"
            display_name = referrer.displayName or referrer.fullName or referrer.companyName
            referrer_data = {
                "referrer_type": referrer.referrerType,
                "company_name": referrer.companyName,
                "department": referrer.department,
                "full_name": referrer.fullName,
                "full_name_kana": referrer.kana,
                "bank_code": referrer.bankCode,
                "branch_name": referrer.branchName,
                "account_number": referrer.accountNumber,
                "account_holder": referrer.accountHolder,
                "address": basic.address,
                "phone": basic.phone,
                "email": email,
            }

        user_data = {
            "email": email,
            "password_hash": hash_password(basic.password),
            "role": role,
            "display_name": display_name,
            "phone_number": basic.phone,
            "is_active": True,
            "email_verified": False,
        }

        try:
            user = self.repo.register_account(self.db, user_data, company_data, referrer_data)
        except IntegrityError as e:
            logger.warning(f"Registration conflict for {mask_email(email)}: {e}")
            raise HTTPException(status_code=409, detail="User already exists") from e

        logger.info(f"Registered {data.userType} account {user.id} ({mask_email(email)})")
        return user

    def get_company(self, company_id: str) -> MovingCompany:
        company = self.repo.get_company_by_id(self.db, company_id)
        if not company:
            raise HTTPException(status_code=404, detail="Company not found")
        return company

    def update_company(self, company_id: str, data: CompanyUpdate) -> MovingCompany:
        company = self.get_company(company_id)
        sent = data.model_fields_set

        company_updates = {}
        if "companyName" in sent:
            if not data.companyName or not data.companyName.strip():
                raise HTTPException(status_code=400, detail="Company name must not be empty")
            company_updates["company_name"] = data.companyName.strip()
        if "description" in sent:
            company_updates["description"] = data.description
        staff_count = parse_staff_count(data.staffCount)
        if staff_count is not None:
            company_updates["staff_count"] = staff_count
        if "phone" in sent:
            company_updates["phone_number"] = data.phone
        if "address" in sent:
            company_updates["address_line"] = data.address
        if "postalCode" in sent:
            company_updates["postal_code"] = data.postalCode

        user_updates = None
        if data.emailData is not None:
            user_updates = {}
            new_email = data.emailData.businessEmail
            if new_email and new_email != company.user.email:
                if self.repo.get_user_by_email(self.db, new_email):
                    raise HTTPException(status_code=409, detail="Email already exists")
                user_updates["email"] = new_email
            if data.phone:
                user_updates["phone_number"] = data.phone
            if data.companyName:
                user_updates["display_name"] = data.companyName.strip()

        company = self.repo.update_company(self.db, company, company_updates, user_updates)
        logger.info(f"Updated company {company_id}: {sorted(company_updates)}")
        return company

    def get_company_by_email(self, email: str) -> MovingCompany:
        if not email:
            raise HTTPException(status_code=400, detail="Email parameter is required")

        user = self.repo.get_user_by_email(self.db, email)
        if not user:
            raise HTTPException(status_code=404, detail="User not found")

        companies = self.repo.get_companies_for_user(self.db, user.id)
        if not companies:
            raise HTTPException(status_code=404, detail="No company found for this user")
        return companies[0]
