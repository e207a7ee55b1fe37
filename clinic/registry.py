from __future__ import annotations

import logging
from typing import Any, TypeVar

from sqlalchemy import func, select

from . import config
from .db import Base, make_engine, make_session_factory, unit_of_work
from .errors import UnresolvedReferenceError, ValidationError
from .models import (
    PATIENT_CREATED_NOTE,
    Appointment,
    AppointmentStatus,
    Doctor,
    Patient,
)

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", Patient, Doctor, Appointment)

# prefix -> counter seed (the first generated number is seed + 1)
ID_SEEDS: dict[type, tuple[str, int]] = {
    Patient: ("P", 1000),
    Doctor: ("D", 500),
    Appointment: ("A", 2000),
}


# =========================
# Input helpers
# =========================
def _require_text(value: Any, field: str) -> str:
    text = "" if value is None else str(value).strip()
    if not text:
        raise ValidationError(f"{field} must not be empty")
    return text


def _require_int(value: Any, field: str) -> int:
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    try:
        return int(str(value).strip())
    except (TypeError, ValueError):
        raise ValidationError(f"{field} must be an integer, got {value!r}") from None


def _normalize_id(entity_id: str | None) -> str:
    # exact match apart from case: no trimming
    return (entity_id or "").upper()


class Registry:
    """
    Owns patients, doctors and appointments for one session.

    Every registry has its own engine and ORM session on a private in-memory
    SQLite database, so two registries never share state and nothing outlives
    the registry. Lookups return None when nothing matches; mutations raise
    ValidationError / UnresolvedReferenceError and roll back, leaving no
    partial records behind.
    """

    def __init__(self, echo: bool | None = None) -> None:
        self._engine = make_engine(echo=config.SQL_ECHO if echo is None else echo)
        Base.metadata.create_all(bind=self._engine)
        self._session = make_session_factory(self._engine)()
        self._counters = {model: seed for model, (_, seed) in ID_SEEDS.items()}

    # =========================
    # Lifecycle
    # =========================
    def close(self) -> None:
        self._session.close()
        self._engine.dispose()

    def __enter__(self) -> "Registry":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    # =========================
    # ID generation
    # =========================
    def _next_id(self, model: type[ModelT]) -> tuple[str, int]:
        prefix, _ = ID_SEEDS[model]
        self._counters[model] += 1
        seq = self._counters[model]
        return f"{prefix}{seq}", seq

    def _find(self, model: type[ModelT], entity_id: str | None) -> ModelT | None:
        key = _normalize_id(entity_id)
        if not key:
            return None
        q = select(model).where(func.upper(model.id) == key)
        return self._session.execute(q).scalar_one_or_none()

    # =========================
    # Patients
    # =========================
    def create_patient(self, name: str, age: int | str, gender: str, contact: str) -> Patient:
        with unit_of_work(self._session) as s:
            name = _require_text(name, "name")
            age = _require_int(age, "age")
            gender = _require_text(gender, "gender")
            contact = _require_text(contact, "contact")

            patient_id, seq = self._next_id(Patient)
            p = Patient(id=patient_id, seq=seq, name=name, age=age, gender=gender, contact=contact)
            p.add_note(PATIENT_CREATED_NOTE)
            s.add(p)

        logger.info("Patient created: %s (%s)", p.id, p.name)
        return p

    def list_patients(self) -> list[Patient]:
        return list(self._session.scalars(select(Patient).order_by(Patient.seq)))

    def find_patient_by_id(self, patient_id: str | None) -> Patient | None:
        return self._find(Patient, patient_id)

    def add_note(self, patient_id: str, text: str) -> Patient:
        with unit_of_work(self._session):
            p = self.find_patient_by_id(patient_id)
            if p is None:
                logger.warning("Note rejected: patient %r not found", patient_id)
                raise UnresolvedReferenceError("patient not found")
            p.add_note(text)
        return p

    def patient_history(self, patient_id: str) -> list[str]:
        p = self.find_patient_by_id(patient_id)
        if p is None:
            raise UnresolvedReferenceError("patient not found")
        return p.history

    # =========================
    # Doctors
    # =========================
    def create_doctor(self, name: str, specialization: str, contact: str) -> Doctor:
        with unit_of_work(self._session) as s:
            name = _require_text(name, "name")
            specialization = _require_text(specialization, "specialization")
            contact = _require_text(contact, "contact")

            doctor_id, seq = self._next_id(Doctor)
            d = Doctor(id=doctor_id, seq=seq, name=name, specialization=specialization, contact=contact)
            s.add(d)

        logger.info("Doctor created: %s (%s, %s)", d.id, d.name, d.specialization)
        return d

    def list_doctors(self) -> list[Doctor]:
        return list(self._session.scalars(select(Doctor).order_by(Doctor.seq)))

    def find_doctor_by_id(self, doctor_id: str | None) -> Doctor | None:
        return self._find(Doctor, doctor_id)

    # =========================
    # Appointments
    # =========================
    def schedule_appointment(self, patient_id: str, doctor_id: str, date: str, time: str) -> Appointment:
        """
        Book a visit between an existing patient and an existing doctor.
        - both references must resolve, otherwise nothing is stored
        - the appointment starts as Scheduled
        - a note describing the visit is appended to the patient's history
        """
        with unit_of_work(self._session) as s:
            patient = self.find_patient_by_id(patient_id)
            doctor = self.find_doctor_by_id(doctor_id)
            if patient is None:
                logger.warning("Scheduling rejected: patient %r not found", patient_id)
                raise UnresolvedReferenceError("patient not found")
            if doctor is None:
                logger.warning("Scheduling rejected: doctor %r not found", doctor_id)
                raise UnresolvedReferenceError("doctor not found")

            date = _require_text(date, "date")
            time = _require_text(time, "time")

            appointment_id, seq = self._next_id(Appointment)
            app = Appointment(
                id=appointment_id,
                seq=seq,
                patient=patient,
                doctor=doctor,
                date=date,
                time=time,
                status=AppointmentStatus.SCHEDULED.value,
            )
            s.add(app)
            patient.add_note(
                f"Appointment {app.id} scheduled with {doctor.name} ({doctor.specialization}) on {date} at {time}."
            )

        logger.info("Appointment %s scheduled: %s with %s on %s %s", app.id, patient.id, doctor.id, date, time)
        return app

    def find_appointment_by_id(self, appointment_id: str | None) -> Appointment | None:
        return self._find(Appointment, appointment_id)

    def list_appointments(self) -> list[Appointment]:
        return list(self._session.scalars(select(Appointment).order_by(Appointment.seq)))

    def list_appointments_by_doctor(self, doctor_id: str | None) -> list[Appointment]:
        q = (
            select(Appointment)
            .where(func.upper(Appointment.doctor_id) == _normalize_id(doctor_id))
            .order_by(Appointment.seq)
        )
        return list(self._session.scalars(q))

    def list_appointments_by_patient(self, patient_id: str | None) -> list[Appointment]:
        q = (
            select(Appointment)
            .where(func.upper(Appointment.patient_id) == _normalize_id(patient_id))
            .order_by(Appointment.seq)
        )
        return list(self._session.scalars(q))

    def update_appointment_status(self, appointment_id: str, new_status: AppointmentStatus | str) -> Appointment:
        """
        Replace the status of an appointment.
        Scheduled / Completed / Cancelled are matched in any case; other text
        is stored as entered.
        Every update to Completed appends a note to the patient's history,
        so repeating it appends again.
        """
        with unit_of_work(self._session):
            app = self.find_appointment_by_id(appointment_id)
            if app is None:
                logger.warning("Status update rejected: appointment %r not found", appointment_id)
                raise UnresolvedReferenceError("appointment not found")

            previous = app.status
            status = app.set_status(new_status)
            if status.lower() == AppointmentStatus.COMPLETED.value.lower():
                app.patient.add_note(f"Appointment {app.id} with {app.doctor.name} completed.")

        logger.info("Appointment %s: %s -> %s", app.id, previous, status)
        return app
