"""
Test suite for Clinic Records.

Unit tests for the models and the registry, plus console-level scenarios.
"""
