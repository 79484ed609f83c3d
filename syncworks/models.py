import uuid

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    Date,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    String,
    Text,
    Time,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from .database import Base


def generate_id():
    """Generate a UUID primary key"""
    return str(uuid.uuid4())


class User(Base):
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=generate_id)
    email = Column(String(255), unique=True, index=True, nullable=False)
    password_hash = Column(String(255), nullable=False)
    role = Column(String(50), nullable=False)  # system_admin, company_admin, referrer, employee
    display_name = Column(String(255), nullable=True)
    phone_number = Column(String(50), nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)
    email_verified = Column(Boolean, default=False, nullable=False)
    email_verified_at = Column(DateTime, nullable=True)
    last_login_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    # The database enforces these foreign keys; deleting a referenced user must fail
    companies = relationship("MovingCompany", back_populates="user", passive_deletes="all")
    referrer = relationship("Referrer", back_populates="user", uselist=False, passive_deletes="all")
    employees = relationship("Employee", back_populates="user", passive_deletes="all")


class MovingCompany(Base):
    __tablename__ = "moving_companies"

    id = Column(String(36), primary_key=True, default=generate_id)
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    company_name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    staff_count = Column(Integer, default=0, nullable=False)
    postal_code = Column(String(20), nullable=True)
    address_line = Column(String(500), nullable=True)
    phone_number = Column(String(50), nullable=True)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    user = relationship("User", back_populates="companies")
    employees = relationship("Employee", back_populates="company", passive_deletes="all")
    trucks = relationship("Truck", back_populates="company", passive_deletes="all")


class Referrer(Base):
    __tablename__ = "referrers"

    id = Column(String(36), primary_key=True, default=generate_id)
    user_id = Column(String(36), ForeignKey("users.id"), unique=True, nullable=False)
    referrer_type = Column(String(50), nullable=True)  # individual, corporate
    company_name = Column(String(255), nullable=True)
    department = Column(String(255), nullable=True)
    full_name = Column(String(255), nullable=True)
    full_name_kana = Column(String(255), nullable=True)
    # Payout account
    bank_code = Column(String(10), nullable=True)
    branch_name = Column(String(255), nullable=True)
    account_number = Column(String(20), nullable=True)
    account_holder = Column(String(255), nullable=True)
    address = Column(String(500), nullable=True)
    phone = Column(String(50), nullable=True)
    email = Column(String(255), nullable=True)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    user = relationship("User", back_populates="referrer")


class Employee(Base):
    __tablename__ = "employees"
    __table_args__ = (
        UniqueConstraint("company_id", "employee_number", name="uq_employee_company_number"),
    )

    id = Column(String(36), primary_key=True, default=generate_id)
    company_id = Column(String(36), ForeignKey("moving_companies.id"), nullable=False, index=True)
    user_id = Column(String(36), ForeignKey("users.id"), nullable=True)
    employee_number = Column(String(50), nullable=False)
    last_name = Column(String(100), nullable=False)
    first_name = Column(String(100), nullable=False)
    last_name_kana = Column(String(100), nullable=True)
    first_name_kana = Column(String(100), nullable=True)
    email = Column(String(255), nullable=True)
    role = Column(String(50), nullable=False)  # driver, staff, leader
    employment_type = Column(String(50), default="full_time", nullable=False)
    qualifications = Column(JSON, default=list, nullable=True)
    hire_date = Column(Date, nullable=False)
    termination_date = Column(Date, nullable=True)
    birth_date = Column(Date, nullable=True)
    postal_code = Column(String(20), nullable=True)
    prefecture = Column(String(50), nullable=True)
    city = Column(String(100), nullable=True)
    address_line = Column(String(500), nullable=True)
    phone_number = Column(String(50), nullable=False)
    emergency_contact_name = Column(String(255), nullable=True)
    emergency_contact_phone = Column(String(50), nullable=True)
    hourly_rate = Column(Integer, nullable=True)
    max_work_hours_per_day = Column(Integer, default=8, nullable=False)
    max_work_days_per_month = Column(Integer, default=25, nullable=False)
    points_balance = Column(Integer, default=0, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    company = relationship("MovingCompany", back_populates="employees")
    user = relationship("User", back_populates="employees")
    shifts = relationship("Shift", back_populates="employee", passive_deletes="all")


class TruckType(Base):
    __tablename__ = "truck_types"

    id = Column(String(36), primary_key=True, default=generate_id)
    name = Column(String(100), unique=True, nullable=False)
    display_name = Column(String(100), nullable=True)
    base_price = Column(Integer, default=0, nullable=False)  # yen
    capacity_kg = Column(Integer, default=0, nullable=False)
    max_points = Column(Integer, default=0, nullable=False)
    coefficient = Column(Float, default=1.0, nullable=False)
    sort_order = Column(Integer, default=0, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())


class Truck(Base):
    __tablename__ = "trucks"
    __table_args__ = (
        UniqueConstraint("company_id", "truck_number", name="uq_truck_company_number"),
    )

    id = Column(String(36), primary_key=True, default=generate_id)
    company_id = Column(String(36), ForeignKey("moving_companies.id"), nullable=False, index=True)
    truck_number = Column(String(50), nullable=False)
    license_plate = Column(String(50), unique=True, nullable=False)
    truck_type = Column(String(100), nullable=False)
    capacity_cbm = Column(Float, nullable=False)
    max_load_kg = Column(Integer, nullable=False)
    has_lift_gate = Column(Boolean, default=False, nullable=False)
    has_air_conditioning = Column(Boolean, default=False, nullable=False)
    manufacture_year = Column(Integer, nullable=True)
    manufacturer = Column(String(100), nullable=True)
    model_name = Column(String(100), nullable=True)
    last_inspection_date = Column(Date, nullable=True)
    next_inspection_date = Column(Date, nullable=False)
    fuel_type = Column(String(50), nullable=True)
    fuel_efficiency_kmpl = Column(Float, nullable=True)
    insurance_expiry_date = Column(Date, nullable=False)
    status = Column(String(50), default="available", nullable=False)  # available, maintenance, inactive, retired
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    company = relationship("MovingCompany", back_populates="trucks")


class Shift(Base):
    __tablename__ = "shifts"

    id = Column(String(36), primary_key=True, default=generate_id)
    employee_id = Column(String(36), ForeignKey("employees.id"), nullable=False, index=True)
    shift_date = Column(Date, nullable=False, index=True)
    shift_type = Column(String(50), default="regular", nullable=False)
    start_time = Column(Time, nullable=False)
    end_time = Column(Time, nullable=False)
    break_minutes = Column(Integer, default=60, nullable=False)
    status = Column(String(50), default="scheduled", nullable=False)  # scheduled, working, unavailable, cancelled
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    employee = relationship("Employee", back_populates="shifts")


class SeasonRule(Base):
    __tablename__ = "season_rules"

    id = Column(String(36), primary_key=True, default=generate_id)
    name = Column(String(255), nullable=False)
    season_type = Column(String(50), default="custom", nullable=False)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)
    rate_multiplier = Column(Float, default=1.0, nullable=False)
    price_type = Column(String(20), default="percentage", nullable=False)  # percentage, fixed
    price = Column(Float, default=0, nullable=False)
    description = Column(Text, nullable=True)
    is_recurring = Column(Boolean, default=False, nullable=False)
    recurring_type = Column(String(20), default="none", nullable=False)  # none, weekly, monthly, yearly, specific
    # {"weekdays": [0, 6], "monthlyPattern": "date", "specificDates": ["2025-01-01"]}
    recurring_pattern = Column(JSON, nullable=True)
    recurring_end_year = Column(Integer, nullable=True)
    priority = Column(Integer, default=0, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())


class QuoteRequest(Base):
    __tablename__ = "quote_requests"

    id = Column(String(36), primary_key=True, default=generate_id)
    # Customer
    customer_last_name = Column(String(100), nullable=False)
    customer_first_name = Column(String(100), nullable=False)
    customer_last_name_kana = Column(String(100), nullable=True)
    customer_first_name_kana = Column(String(100), nullable=True)
    customer_email = Column(String(255), nullable=False, index=True)
    customer_phone = Column(String(50), nullable=False)
    # Origin
    from_postal_code = Column(String(20), nullable=True)
    from_prefecture = Column(String(50), nullable=False)
    from_city = Column(String(100), nullable=False)
    from_address_line = Column(String(500), nullable=False)
    from_building_type = Column(String(50), nullable=True)
    from_floor = Column(Integer, nullable=True)
    from_has_elevator = Column(Boolean, nullable=True)
    # Destination
    to_postal_code = Column(String(20), nullable=True)
    to_prefecture = Column(String(50), nullable=False)
    to_city = Column(String(100), nullable=False)
    to_address_line = Column(String(500), nullable=False)
    to_building_type = Column(String(50), nullable=True)
    to_floor = Column(Integer, nullable=True)
    to_has_elevator = Column(Boolean, nullable=True)
    # Preferred schedule
    preferred_date_1 = Column(Date, nullable=True)
    preferred_time_slot_1 = Column(String(50), nullable=True)
    preferred_date_2 = Column(Date, nullable=True)
    preferred_time_slot_2 = Column(String(50), nullable=True)
    preferred_date_3 = Column(Date, nullable=True)
    preferred_time_slot_3 = Column(String(50), nullable=True)
    # Move details
    household_size = Column(Integer, nullable=True)
    estimated_volume_cbm = Column(Float, nullable=True)
    packing_required = Column(Boolean, default=False, nullable=False)
    has_fragile_items = Column(Boolean, default=False, nullable=False)
    has_large_furniture = Column(Boolean, default=False, nullable=False)
    special_requirements = Column(Text, nullable=True)
    access_restrictions = Column(Text, nullable=True)
    distance_km = Column(Float, nullable=True)
    estimated_duration_hours = Column(Float, nullable=True)
    request_source = Column(String(50), nullable=False)  # web_form, referral, phone
    referrer_agent_id = Column(String(36), nullable=True, index=True)
    status = Column(String(50), default="pending", nullable=False)  # pending, quoted, accepted, declined
    # Attached estimate
    estimate_truck_type = Column(String(100), nullable=True)
    estimate_breakdown = Column(JSON, nullable=True)
    estimated_price = Column(Integer, nullable=True)  # tax included
    estimated_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())
