from __future__ import annotations

import enum
from datetime import datetime, timezone

from sqlalchemy import DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .db import Base
from .errors import ValidationError

PATIENT_CREATED_NOTE = "Patient record created."


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AppointmentStatus(str, enum.Enum):
    SCHEDULED = "Scheduled"
    COMPLETED = "Completed"
    CANCELLED = "Cancelled"

    @classmethod
    def normalize(cls, value: "AppointmentStatus | str") -> str:
        """
        Known statuses come back in their canonical spelling ("completed" -> "Completed").
        Any other non-empty text is kept as entered.
        """
        if isinstance(value, cls):
            return value.value
        text = "" if value is None else str(value)
        if not text.strip():
            raise ValidationError("status must not be empty")
        key = text.strip().lower()
        for status in cls:
            if key == status.value.lower():
                return status.value
        return text


class Patient(Base):
    __tablename__ = "patients"

    id: Mapped[str] = mapped_column(String(16), primary_key=True)
    seq: Mapped[int] = mapped_column(Integer, nullable=False, unique=True)
    name: Mapped[str] = mapped_column(String(120), nullable=False)
    age: Mapped[int] = mapped_column(Integer, nullable=False)
    gender: Mapped[str] = mapped_column(String(30), nullable=False)
    contact: Mapped[str] = mapped_column(String(120), nullable=False)

    # append-only: notes are never edited or removed
    notes: Mapped[list["HistoryNote"]] = relationship(
        back_populates="patient", cascade="all, delete-orphan", order_by="HistoryNote.id"
    )
    appointments: Mapped[list["Appointment"]] = relationship(
        back_populates="patient", order_by="Appointment.seq"
    )

    @property
    def history(self) -> list[str]:
        return [n.text for n in self.notes]

    def add_note(self, text: str) -> "HistoryNote":
        # stored as given; whitespace-only text counts as empty
        if not (text or "").strip():
            raise ValidationError("note text must not be empty")
        note = HistoryNote(text=text)
        self.notes.append(note)
        return note

    def __repr__(self) -> str:
        return f"Patient({self.id}, {self.name}, {self.age}, {self.gender})"


class HistoryNote(Base):
    __tablename__ = "history_notes"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    patient_id: Mapped[str] = mapped_column(ForeignKey("patients.id"), nullable=False)
    text: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)

    patient: Mapped["Patient"] = relationship(back_populates="notes")

    def __repr__(self) -> str:
        return f"HistoryNote({self.patient_id}, {self.text!r})"


class Doctor(Base):
    __tablename__ = "doctors"

    id: Mapped[str] = mapped_column(String(16), primary_key=True)
    seq: Mapped[int] = mapped_column(Integer, nullable=False, unique=True)
    name: Mapped[str] = mapped_column(String(120), nullable=False)
    specialization: Mapped[str] = mapped_column(String(120), nullable=False)
    contact: Mapped[str] = mapped_column(String(120), nullable=False)

    appointments: Mapped[list["Appointment"]] = relationship(
        back_populates="doctor", order_by="Appointment.seq"
    )

    def __repr__(self) -> str:
        return f"Doctor({self.id}, {self.name}, {self.specialization})"


class Appointment(Base):
    __tablename__ = "appointments"

    id: Mapped[str] = mapped_column(String(16), primary_key=True)
    seq: Mapped[int] = mapped_column(Integer, nullable=False, unique=True)

    patient_id: Mapped[str] = mapped_column(ForeignKey("patients.id"), nullable=False)
    doctor_id: Mapped[str] = mapped_column(ForeignKey("doctors.id"), nullable=False)

    # free-form strings as entered at the console
    date: Mapped[str] = mapped_column(String(40), nullable=False)
    time: Mapped[str] = mapped_column(String(40), nullable=False)

    # one of AppointmentStatus or any other free text
    status: Mapped[str] = mapped_column(Text, default=AppointmentStatus.SCHEDULED.value, nullable=False)

    patient: Mapped["Patient"] = relationship(back_populates="appointments")
    doctor: Mapped["Doctor"] = relationship(back_populates="appointments")

    def set_status(self, new_status: AppointmentStatus | str) -> str:
        self.status = AppointmentStatus.normalize(new_status)
        return self.status

    def __repr__(self) -> str:
        return f"Appointment({self.id}, {self.patient_id} -> {self.doctor_id}, {self.date} {self.time}, {self.status})"
