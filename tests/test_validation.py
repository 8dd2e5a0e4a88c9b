"""Tests für Pydantic-Validierung (Task-Schemas, Settings)"""
import pytest
from datetime import datetime
from pydantic import ValidationError

from app.config import Settings
from app.schemas import TaskCreate, TaskUpdate


@pytest.mark.unit
class TestTaskCreateValidation:
    """Tests für TaskCreate"""

    def test_valid_task(self):
        schema = TaskCreate(title="  Rasen mähen ", deadline=datetime(2025, 5, 1))

        assert schema.title == "Rasen mähen"
        assert schema.description == ""
        assert schema.files == []

    def test_blank_title(self):
        """Test: Titel nur aus Leerzeichen"""
        with pytest.raises(ValidationError) as exc_info:
            TaskCreate(title="   ", deadline=datetime(2025, 5, 1))
        assert "Titel darf nicht leer sein" in str(exc_info.value)

    def test_title_too_long(self):
        with pytest.raises(ValidationError):
            TaskCreate(title="x" * 201, deadline=datetime(2025, 5, 1))

    def test_deadline_required(self):
        with pytest.raises(ValidationError):
            TaskCreate(title="Rasen mähen")


@pytest.mark.unit
class TestTaskUpdateValidation:
    """Tests für TaskUpdate"""

    def test_only_set_fields(self):
        """Test: Nicht gesetzte Felder landen nicht im Update"""
        assert TaskUpdate(title="neu").to_update() == {"title": "neu"}

    def test_requester_passed_through(self):
        """Test: requester wird nicht verworfen (der Service lehnt ihn ab)"""
        assert TaskUpdate(requester="bob").to_update() == {"requester": "bob"}

    def test_explicit_none_kept(self):
        assert TaskUpdate(completer=None).to_update() == {"completer": None}


@pytest.mark.unit
class TestSettingsValidation:
    """Tests für Settings"""

    def test_invalid_database_url(self):
        with pytest.raises(ValidationError) as exc_info:
            Settings(database_url="mysql://localhost/db")
        assert "DATABASE_URL muss mit" in str(exc_info.value)

    def test_short_secret_key(self):
        with pytest.raises(ValidationError):
            Settings(secret_key="zu-kurz")

    def test_invalid_rate_limit(self):
        with pytest.raises(ValidationError):
            Settings(rate_limit="viele")

    def test_port_range(self):
        with pytest.raises(ValidationError):
            Settings(port=70000)
