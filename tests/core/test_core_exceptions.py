"""Tests pour les exceptions personnalisées de grub-acpi-osi."""

import pytest

from grub_acpi.core_exceptions import (
    GrubAcpiError,
    GrubBackupError,
    GrubCommandError,
    GrubCommandNotFoundError,
    GrubConfigError,
    GrubFileNotFoundError,
    GrubPermissionError,
)


class TestHierarchy:
    """Toutes les exceptions héritent de GrubAcpiError."""

    @pytest.mark.parametrize(
        "exc",
        [
            GrubConfigError("config"),
            GrubFileNotFoundError("missing"),
            GrubPermissionError("denied"),
            GrubBackupError("backup"),
            GrubCommandError("command"),
            GrubCommandNotFoundError("not found"),
        ],
    )
    def test_inherits_base(self, exc):
        assert isinstance(exc, GrubAcpiError)

    def test_command_not_found_is_command_error(self):
        assert issubclass(GrubCommandNotFoundError, GrubCommandError)


class TestGrubFileNotFoundError:
    """Tests pour GrubFileNotFoundError."""

    def test_path_attribute(self):
        error = GrubFileNotFoundError("Fichier introuvable", path="/etc/default/grub")
        assert str(error) == "Fichier introuvable"
        assert error.path == "/etc/default/grub"

    def test_path_defaults_to_none(self):
        assert GrubFileNotFoundError("x").path is None


class TestGrubCommandError:
    """Tests pour GrubCommandError."""

    def test_message_only(self):
        assert str(GrubCommandError("update-grub a échoué")) == "update-grub a échoué"

    def test_full_context(self):
        error = GrubCommandError("échec", command="update-grub", returncode=1, stderr="boom")
        assert str(error) == "échec | Commande: update-grub | Code retour: 1 | Stderr: boom"

    def test_stderr_truncated(self):
        error = GrubCommandError("échec", stderr="x" * 500)
        assert str(error).endswith("Stderr: " + "x" * 200)
