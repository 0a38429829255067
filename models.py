from sqlalchemy import (
    Column,
    String,
    Integer,
    Float,
    Date,
    DateTime,
    ForeignKey,
    func,
    text,
)
from sqlalchemy.orm import relationship

from database import Base

# ----------------------------------------------------------------------------
# DB Models
# ----------------------------------------------------------------------------
_owned = dict(cascade="all, delete-orphan", passive_deletes=True)


class UserModel(Base):
    __tablename__ = "users"
    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    password_hash = Column(String(255), nullable=False)
    created_at = Column(DateTime, nullable=False, server_default=text("CURRENT_TIMESTAMP"))
    updated_at = Column(DateTime, nullable=False, server_default=text("CURRENT_TIMESTAMP"), onupdate=func.now())

    incomes = relationship("IncomeModel", back_populates="user", **_owned)
    categories = relationship("CategoryModel", back_populates="user", **_owned)
    allocations = relationship("AllocationModel", back_populates="user", **_owned)
    goals = relationship("GoalModel", back_populates="user", **_owned)


class CategoryModel(Base):
    __tablename__ = "categories"
    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(255), nullable=False)  # unique per user, checked in the API
    type = Column(String(20), nullable=False)  # spending | savings | debt_repayment
    created_at = Column(DateTime, nullable=False, server_default=text("CURRENT_TIMESTAMP"))
    updated_at = Column(DateTime, nullable=False, server_default=text("CURRENT_TIMESTAMP"), onupdate=func.now())

    user = relationship("UserModel", back_populates="categories")
    allocations = relationship("AllocationModel", back_populates="category", **_owned)


class IncomeModel(Base):
    __tablename__ = "incomes"
    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    amount = Column(Float, nullable=False)
    frequency = Column(String(20), nullable=False)  # monthly | bi-weekly | weekly | one-time
    created_at = Column(DateTime, nullable=False, server_default=text("CURRENT_TIMESTAMP"))
    updated_at = Column(DateTime, nullable=False, server_default=text("CURRENT_TIMESTAMP"), onupdate=func.now())

    user = relationship("UserModel", back_populates="incomes")
    allocations = relationship("AllocationModel", back_populates="income", **_owned)


class AllocationModel(Base):
    __tablename__ = "allocations"
    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    income_id = Column(Integer, ForeignKey("incomes.id", ondelete="CASCADE"), nullable=False, index=True)
    category_id = Column(Integer, ForeignKey("categories.id", ondelete="CASCADE"), nullable=False, index=True)
    # Either percentage or a fixed amount, never both
    percentage_allocated = Column(Float, nullable=True)
    amount_allocated = Column(Float, nullable=True)
    created_at = Column(DateTime, nullable=False, server_default=text("CURRENT_TIMESTAMP"))
    updated_at = Column(DateTime, nullable=False, server_default=text("CURRENT_TIMESTAMP"), onupdate=func.now())

    user = relationship("UserModel", back_populates="allocations")
    income = relationship("IncomeModel", back_populates="allocations")
    category = relationship("CategoryModel", back_populates="allocations")


class GoalModel(Base):
    __tablename__ = "goals"
    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    target_amount = Column(Float, nullable=False)
    current_amount = Column(Float, nullable=False, default=0.0)
    target_date = Column(Date, nullable=True)
    created_at = Column(DateTime, nullable=False, server_default=text("CURRENT_TIMESTAMP"))
    updated_at = Column(DateTime, nullable=False, server_default=text("CURRENT_TIMESTAMP"), onupdate=func.now())

    user = relationship("UserModel", back_populates="goals")
