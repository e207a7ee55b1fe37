from __future__ import annotations

import argparse
import logging
from typing import Callable

from clinic import config
from clinic.errors import ClinicError
from clinic.models import Appointment, AppointmentStatus, Doctor, Patient
from clinic.registry import Registry
from clinic.seed import seed_demo

Action = Callable[[Registry], None]


# =========================
# Prompts (retry until the input is usable)
# =========================
def prompt_text(label: str) -> str:
    while True:
        value = input(f"{label}: ").strip()
        if value:
            return value
        print("A value is required.")


def prompt_int(label: str) -> int:
    while True:
        raw = input(f"{label}: ").strip()
        try:
            return int(raw)
        except ValueError:
            print("Please enter a whole number.")


# =========================
# Output
# =========================
def _fmt_patient(p: Patient) -> str:
    return f"{p.id} | {p.name} | {p.age} | {p.gender} | {p.contact}"


def _fmt_doctor(d: Doctor) -> str:
    return f"{d.id} | {d.name} | {d.specialization} | {d.contact}"


def _fmt_appointment(a: Appointment) -> str:
    return f"{a.id} | {a.patient.name} ({a.patient_id}) | {a.doctor.name} ({a.doctor_id}) | {a.date} {a.time} | {a.status}"


def _print_all(rows: list, fmt: Callable, empty: str) -> None:
    if not rows:
        print(empty)
        return
    for row in rows:
        print(fmt(row))


# =========================
# Patients
# =========================
def cmd_add_patient(registry: Registry) -> None:
    p = registry.create_patient(
        prompt_text("Name"),
        prompt_int("Age"),
        prompt_text("Gender"),
        prompt_text("Contact"),
    )
    print(f"Patient created: {p.id}")


def cmd_list_patients(registry: Registry) -> None:
    _print_all(registry.list_patients(), _fmt_patient, "No patients registered.")


def cmd_find_patient(registry: Registry) -> None:
    p = registry.find_patient_by_id(prompt_text("Patient ID"))
    print(_fmt_patient(p) if p else "Patient not found.")


# =========================
# Doctors
# =========================
def cmd_add_doctor(registry: Registry) -> None:
    d = registry.create_doctor(prompt_text("Name"), prompt_text("Specialization"), prompt_text("Contact"))
    print(f"Doctor created: {d.id}")


def cmd_list_doctors(registry: Registry) -> None:
    _print_all(registry.list_doctors(), _fmt_doctor, "No doctors registered.")


def cmd_find_doctor(registry: Registry) -> None:
    d = registry.find_doctor_by_id(prompt_text("Doctor ID"))
    print(_fmt_doctor(d) if d else "Doctor not found.")


# =========================
# Appointments
# =========================
def cmd_schedule(registry: Registry) -> None:
    app = registry.schedule_appointment(
        prompt_text("Patient ID"),
        prompt_text("Doctor ID"),
        prompt_text("Date (YYYY-MM-DD)"),
        prompt_text("Time"),
    )
    print(f"Appointment scheduled: {app.id}")


def cmd_list_appointments(registry: Registry) -> None:
    _print_all(registry.list_appointments(), _fmt_appointment, "No appointments.")


def cmd_appointments_by_doctor(registry: Registry) -> None:
    rows = registry.list_appointments_by_doctor(prompt_text("Doctor ID"))
    _print_all(rows, _fmt_appointment, "No appointments for this doctor.")


def cmd_appointments_by_patient(registry: Registry) -> None:
    rows = registry.list_appointments_by_patient(prompt_text("Patient ID"))
    _print_all(rows, _fmt_appointment, "No appointments for this patient.")


def cmd_update_status(registry: Registry) -> None:
    appointment_id = prompt_text("Appointment ID")
    choices = " / ".join(s.value for s in AppointmentStatus)
    app = registry.update_appointment_status(appointment_id, prompt_text(f"New status ({choices})"))
    print(f"Appointment {app.id} is now {app.status}.")


# =========================
# Medical record
# =========================
def cmd_view_history(registry: Registry) -> None:
    patient_id = prompt_text("Patient ID")
    for i, note in enumerate(registry.patient_history(patient_id), start=1):
        print(f"{i}. {note}")


def cmd_add_note(registry: Registry) -> None:
    p = registry.add_note(prompt_text("Patient ID"), prompt_text("Note"))
    print(f"Note added to {p.id}.")


MENUS: dict[str, list[tuple[str, Action]]] = {
    "Patients": [
        ("Add patient", cmd_add_patient),
        ("List patients", cmd_list_patients),
        ("Find patient by ID", cmd_find_patient),
    ],
    "Doctors": [
        ("Add doctor", cmd_add_doctor),
        ("List doctors", cmd_list_doctors),
        ("Find doctor by ID", cmd_find_doctor),
    ],
    "Appointments": [
        ("Schedule appointment", cmd_schedule),
        ("List all appointments", cmd_list_appointments),
        ("List appointments by doctor", cmd_appointments_by_doctor),
        ("List appointments by patient", cmd_appointments_by_patient),
        ("Update appointment status", cmd_update_status),
    ],
    "Medical Record": [
        ("View patient history", cmd_view_history),
        ("Add note", cmd_add_note),
    ],
}


def _choose(title: str, labels: list[str], back_label: str) -> int:
    print(f"\n=== {title} ===")
    for i, label in enumerate(labels, start=1):
        print(f"{i}. {label}")
    print(f"0. {back_label}")
    return prompt_int("Choice")


def run_submenu(registry: Registry, title: str) -> None:
    entries = MENUS[title]
    while True:
        choice = _choose(title, [label for label, _ in entries], "Back")
        if choice == 0:
            return
        if not 1 <= choice <= len(entries):
            print("Invalid choice.")
            continue
        _, action = entries[choice - 1]
        try:
            action(registry)
        except ClinicError as e:
            print(f"Error: {e}")


def run_menu(registry: Registry) -> None:
    """Main loop. Ends on "Exit" or when the input stream is closed."""
    titles = list(MENUS)
    try:
        while True:
            choice = _choose("Clinic Records", titles, "Exit")
            if choice == 0:
                break
            if not 1 <= choice <= len(titles):
                print("Invalid choice.")
                continue
            run_submenu(registry, titles[choice - 1])
    except EOFError:
        print()
    print("Goodbye.")


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="clinic-records", description="In-memory clinic records console")
    p.add_argument("--no-seed", action="store_true", help="Start with an empty registry (no demo data)")
    p.add_argument("--log-level", default=None, help="Logging level (default: CLINIC_LOG_LEVEL or WARNING)")
    return p


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=(args.log_level or config.LOG_LEVEL).upper())

    with Registry() as registry:
        if config.SEED_DEMO and not args.no_seed:
            seed_demo(registry)
        run_menu(registry)


if __name__ == "__main__":
    main()
