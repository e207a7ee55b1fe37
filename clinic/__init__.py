"""
Clinic Records: in-memory patients, doctors and appointments.

Layout:
- config.py   : settings from environment / .env
- errors.py   : exception hierarchy
- db.py       : engine, declarative base, unit of work (SQLAlchemy)
- models.py   : ORM models and the known appointment statuses
- registry.py : domain operations (patients, doctors, scheduling, history)
- seed.py     : demo data
- cli.py      : interactive console menu
"""
