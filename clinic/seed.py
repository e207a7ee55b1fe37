from __future__ import annotations

from .registry import Registry

DEMO_PATIENTS = [
    ("John Doe", 45, "Male", "555-0101"),
    ("Jane Smith", 32, "Female", "555-0102"),
]

DEMO_DOCTORS = [
    ("Dr. Alice Brown", "Cardiology", "555-0201"),
    ("Dr. Bob White", "Dermatology", "555-0202"),
]


def seed_demo(registry: Registry) -> None:
    """
    Load minimal demo data into a fresh registry:
    - patients (P1001, P1002)
    - doctors (D501, D502)
    """
    for name, age, gender, contact in DEMO_PATIENTS:
        registry.create_patient(name, age, gender, contact)

    for name, spec, contact in DEMO_DOCTORS:
        registry.create_doctor(name, spec, contact)
