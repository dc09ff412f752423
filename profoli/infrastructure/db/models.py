"""
SQLAlchemy ORM models
"""
from decimal import Decimal
from datetime import date as date_type
from sqlalchemy import (
    String, DateTime, Integer, Text, TIMESTAMP, Date, func, Boolean, Numeric,
    UniqueConstraint, Index, ForeignKey, CheckConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import JSONB

from profoli.domain.attendee import ATTENDEE_STATUS_ACTIVE, PAYMENT_STATUS_PENDING
from profoli.infrastructure.db.session import Base


class User(Base):
    """
    Operador do painel administrativo (role: admin | standard)
    """
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(primary_key=True)
    username: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[str] = mapped_column(String(20), nullable=False, default="standard", server_default="standard")

    created_at: Mapped[DateTime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False
    )


class Attendee(Base):
    """
    Inscrito no programa de formação
    """
    __tablename__ = "attendees"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    # CPF normalizado: apenas os 11 dígitos
    cpf: Mapped[str] = mapped_column(String(11), unique=True, nullable=False)
    # Lista de cargos, ex.: ["Pastor", "Regente"]
    roles: Mapped[list] = mapped_column(JSONB, nullable=False, default=list)
    church: Mapped[str | None] = mapped_column(String(255), nullable=True)
    phone: Mapped[str | None] = mapped_column(String(30), nullable=True)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default=ATTENDEE_STATUS_ACTIVE, server_default=ATTENDEE_STATUS_ACTIVE)
    payment_status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=PAYMENT_STATUS_PENDING, server_default=PAYMENT_STATUS_PENDING, index=True
    )

    created_at: Mapped[DateTime] = mapped_column(
        TIMESTAMP(timezone=True), server_default=func.now(), nullable=False
    )


class Theme(Base):
    """
    Tema / apostila: material de estudo com arquivo hospedado no storage
    """
    __tablename__ = "themes"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    speaker: Mapped[str | None] = mapped_column(String(255), nullable=True)
    event_date: Mapped[date_type | None] = mapped_column(Date, nullable=True)
    file_url: Mapped[str] = mapped_column(String(512), nullable=False)
    file_type: Mapped[str] = mapped_column(String(128), nullable=False)
    cover_image_url: Mapped[str | None] = mapped_column(String(512), nullable=True)

    created_at: Mapped[DateTime] = mapped_column(
        TIMESTAMP(timezone=True), server_default=func.now(), nullable=False
    )


class AttendanceRecord(Base):
    """
    Presença de um inscrito numa chamada (date + theme_id)

    finalized é replicado em todos os registros da mesma chamada.
    """
    __tablename__ = "attendance"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    attendee_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("attendees.id", ondelete="CASCADE"), nullable=False
    )
    date: Mapped[date_type] = mapped_column(Date, nullable=False)
    theme_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("themes.id", ondelete="CASCADE"), nullable=False
    )
    present: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False, server_default="false")
    finalized: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False, server_default="false")

    __table_args__ = (
        UniqueConstraint("attendee_id", "date", "theme_id", name="uq_attendance_attendee_session"),
        Index("ix_attendance_session", "date", "theme_id"),
    )


class Justification(Base):
    """Justificativa de ausência (não depende de um AttendanceRecord)"""
    __tablename__ = "justifications"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    attendee_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("attendees.id", ondelete="CASCADE"), nullable=False, index=True
    )
    theme_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("themes.id", ondelete="CASCADE"), nullable=False
    )
    date: Mapped[date_type] = mapped_column(Date, nullable=False)
    reason: Mapped[str] = mapped_column(Text, nullable=False)

    created_at: Mapped[DateTime] = mapped_column(
        TIMESTAMP(timezone=True), server_default=func.now(), nullable=False
    )


class FinancialTransaction(Base):
    """
    Lançamento financeiro (income | expense), opcionalmente ligado a um inscrito
    """
    __tablename__ = "financial_transactions"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    type: Mapped[str] = mapped_column(String(10), nullable=False, index=True)
    category: Mapped[str] = mapped_column(String(128), nullable=False)
    amount: Mapped[Decimal] = mapped_column(
        Numeric(precision=12, scale=2), nullable=False, default=Decimal("0"), server_default="0"
    )
    date: Mapped[date_type] = mapped_column(Date, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    attendee_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("attendees.id", ondelete="SET NULL"), nullable=True, index=True
    )

    created_at: Mapped[DateTime] = mapped_column(
        TIMESTAMP(timezone=True), server_default=func.now(), nullable=False
    )

    __table_args__ = (
        CheckConstraint("amount >= 0", name="ck_financial_transactions_amount_non_negative"),
    )
