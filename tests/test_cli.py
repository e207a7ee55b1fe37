from clinic import cli, config
from clinic.models import AppointmentStatus


class TestPrompts:

    def test_prompt_text_retries_on_empty(self, feed_input, capsys):
        feed_input("", "   ", "John")
        assert cli.prompt_text("Name") == "John"
        assert capsys.readouterr().out.count("A value is required.") == 2

    def test_prompt_int_retries_on_garbage(self, feed_input, capsys):
        feed_input("abc", "", "42")
        assert cli.prompt_int("Age") == 42
        assert capsys.readouterr().out.count("Please enter a whole number.") == 2


class TestMenu:

    def test_exit_immediately(self, registry, feed_input, capsys):
        feed_input("0")
        cli.run_menu(registry)
        assert "Goodbye." in capsys.readouterr().out

    def test_eof_ends_session(self, registry, feed_input, capsys):
        feed_input("1")
        cli.run_menu(registry)
        assert "Goodbye." in capsys.readouterr().out

    def test_add_and_list_patient(self, registry, feed_input, capsys):
        feed_input(
            "1", "1", "John Doe", "forty", "45", "Male", "555-0101",
            "2",
            "0", "0",
        )
        cli.run_menu(registry)
        out = capsys.readouterr().out
        assert "Patient created: P1001" in out
        assert "P1001 | John Doe | 45 | Male | 555-0101" in out

    def test_schedule_and_complete(self, seeded_registry, feed_input, capsys):
        feed_input(
            "3", "1", "p1001", "d501", "2025-12-25", "10:30 AM",
            "5", "A2001", "completed",
            "4", "P1001",
            "0", "0",
        )
        cli.run_menu(seeded_registry)
        out = capsys.readouterr().out
        assert "Appointment scheduled: A2001" in out
        assert "Appointment A2001 is now Completed." in out
        assert "A2001 | John Doe (P1001) | Dr. Alice Brown (D501) | 2025-12-25 10:30 AM | Completed" in out
        assert seeded_registry.find_appointment_by_id("A2001").status == AppointmentStatus.COMPLETED.value

    def test_registry_error_is_reported(self, seeded_registry, feed_input, capsys):
        feed_input(
            "3", "1", "P1001", "D999", "2025-12-25", "10:30 AM",
            "0", "0",
        )
        cli.run_menu(seeded_registry)
        assert "Error: doctor not found" in capsys.readouterr().out
        assert seeded_registry.list_appointments() == []

    def test_medical_record(self, seeded_registry, feed_input, capsys):
        feed_input(
            "4", "2", "P1002", "Follow-up in two weeks.",
            "1", "P1002",
            "0", "0",
        )
        cli.run_menu(seeded_registry)
        out = capsys.readouterr().out
        assert "Note added to P1002." in out
        assert "1. Patient record created." in out
        assert "2. Follow-up in two weeks." in out

    def test_find_missing_doctor(self, registry, feed_input, capsys):
        feed_input("2", "3", "D777", "0", "0")
        cli.run_menu(registry)
        assert "Doctor not found." in capsys.readouterr().out

    def test_invalid_choice(self, registry, feed_input, capsys):
        feed_input("9", "0")
        cli.run_menu(registry)
        assert "Invalid choice." in capsys.readouterr().out


class TestFreeTextStatus:

    def test_free_text_status_from_console(self, seeded_registry, feed_input, capsys):
        feed_input(
            "3", "1", "P1001", "D501", "2025-12-25", "10:30 AM",
            "5", "a2001", "Rescheduled",
            "0", "0",
        )
        cli.run_menu(seeded_registry)
        assert "Appointment A2001 is now Rescheduled." in capsys.readouterr().out
        assert seeded_registry.find_appointment_by_id("A2001").status == "Rescheduled"


class TestMain:

    def test_main_seeds_by_default(self, monkeypatch, feed_input, capsys):
        monkeypatch.setattr(config, "SEED_DEMO", True)
        feed_input("1", "2", "0", "0")
        cli.main([])
        out = capsys.readouterr().out
        assert "P1001 | John Doe" in out
        assert "P1002 | Jane Smith" in out

    def test_main_no_seed(self, monkeypatch, feed_input, capsys):
        monkeypatch.setattr(config, "SEED_DEMO", True)
        feed_input("1", "2", "0", "0")
        cli.main(["--no-seed"])
        assert "No patients registered." in capsys.readouterr().out

    def test_seed_disabled_by_setting(self, monkeypatch, feed_input, capsys):
        monkeypatch.setattr(config, "SEED_DEMO", False)
        feed_input("1", "2", "0", "0")
        cli.main([])
        assert "No patients registered." in capsys.readouterr().out
