"""Tests pour AcpiOsiManager (workflow add / restore)."""

import os
from unittest.mock import patch

import pytest

from grub_acpi.core_exceptions import (
    GrubBackupError,
    GrubCommandError,
    GrubCommandNotFoundError,
    GrubFileNotFoundError,
)
from grub_acpi.managers.core_acpi_osi_manager import (
    AcpiOsiManager,
    Action,
    OriginalBackupMissingError,
    UpdateStatus,
)
from grub_acpi.system.core_grub_system_commands import CommandResult

ORIGINAL = 'GRUB_DEFAULT=0\nGRUB_CMDLINE_LINUX_DEFAULT="quiet splash"\nGRUB_CMDLINE_LINUX=""\n'
PATCHED = (
    'GRUB_DEFAULT=0\nGRUB_CMDLINE_LINUX_DEFAULT="quiet splash acpi_osi=! acpi_osi=\\"Windows 2009\\""\n'
    'GRUB_CMDLINE_LINUX=""\n'
)

RUN_UPDATE_GRUB = "grub_acpi.managers.core_acpi_osi_manager.run_update_grub"


@pytest.fixture
def manager_for(tmp_path):
    def _make(path, *, update_grub=False):
        return AcpiOsiManager(str(path), str(tmp_path / "backups"), update_grub=update_grub)

    return _make


class TestAdd:
    """Tests pour AcpiOsiManager.add."""

    def test_add_patches_and_backs_up(self, grub_file, manager_for, tmp_path):
        path = grub_file(ORIGINAL)
        result = manager_for(path).add()

        assert result.action is Action.ADD
        assert result.changed is True
        assert result.orig_created is True
        assert result.update_status is UpdateStatus.SKIPPED
        assert path.read_text() == PATCHED
        with open(result.backup_path, encoding="utf-8") as f:
            assert f.read() == ORIGINAL
        assert (tmp_path / "grub.orig").read_text() == ORIGINAL

    def test_add_twice_is_idempotent(self, grub_file, manager_for, tmp_path):
        path = grub_file(ORIGINAL)
        manager = manager_for(path)
        manager.add()
        second = manager.add()

        assert second.changed is False
        assert second.orig_created is False
        assert path.read_text() == PATCHED
        # .orig garde le contenu d'avant la première modification
        assert (tmp_path / "grub.orig").read_text() == ORIGINAL

    def test_add_missing_file(self, tmp_path, manager_for):
        with pytest.raises(GrubFileNotFoundError):
            manager_for(tmp_path / "grub").add()

    def test_backup_failure_prevents_write(self, grub_file, manager_for):
        path = grub_file(ORIGINAL)
        with patch(
            "grub_acpi.managers.core_acpi_osi_manager.create_timestamped_backup",
            side_effect=GrubBackupError("disk full"),
        ):
            with pytest.raises(GrubBackupError):
                manager_for(path).add()
        assert path.read_text() == ORIGINAL

    def test_add_runs_update_grub(self, grub_file, manager_for):
        path = grub_file(ORIGINAL)
        with patch(RUN_UPDATE_GRUB, return_value=CommandResult(0, "", "")) as mock_update:
            result = manager_for(path, update_grub=True).add()
        mock_update.assert_called_once_with()
        assert result.update_status is UpdateStatus.RAN

    def test_add_update_grub_missing_is_not_fatal(self, grub_file, manager_for):
        path = grub_file(ORIGINAL)
        with patch(RUN_UPDATE_GRUB, side_effect=GrubCommandNotFoundError("update-grub not found")):
            result = manager_for(path, update_grub=True).add()
        assert result.update_status is UpdateStatus.MISSING
        assert path.read_text() == PATCHED

    def test_add_update_grub_failure_propagates(self, grub_file, manager_for):
        path = grub_file(ORIGINAL)
        with patch(RUN_UPDATE_GRUB, side_effect=GrubCommandError("failed", returncode=1)):
            with pytest.raises(GrubCommandError):
                manager_for(path, update_grub=True).add()


class TestRestore:
    """Tests pour restore_original / restore_file."""

    def test_restore_original_after_add(self, grub_file, manager_for):
        path = grub_file(ORIGINAL)
        manager = manager_for(path)
        manager.add()

        result = manager.restore_original()

        assert result.action is Action.RESTORE
        assert path.read_text() == ORIGINAL
        with open(result.backup_path, encoding="utf-8") as f:
            assert f.read() == PATCHED

    def test_restore_original_missing_lists_backups(self, grub_file, manager_for, tmp_path):
        path = grub_file(ORIGINAL)
        backups = tmp_path / "backups"
        backups.mkdir()
        (backups / "grub.20240101000000").write_text(ORIGINAL)

        with pytest.raises(OriginalBackupMissingError) as excinfo:
            manager_for(path).restore_original()

        assert excinfo.value.path == str(path) + ".orig"
        assert excinfo.value.available_backups == [str(backups / "grub.20240101000000")]
        assert path.read_text() == ORIGINAL

    def test_restore_file(self, grub_file, manager_for, tmp_path):
        path = grub_file(PATCHED)
        saved = tmp_path / "saved"
        saved.write_text(ORIGINAL)

        with patch(RUN_UPDATE_GRUB, return_value=CommandResult(0, "", "")):
            result = manager_for(path, update_grub=True).restore_file(str(saved))

        assert result.action is Action.RESTORE_FILE
        assert result.update_status is UpdateStatus.RAN
        assert path.read_text() == ORIGINAL
        assert os.path.isfile(result.backup_path)

    def test_restore_file_missing(self, grub_file, manager_for, tmp_path):
        path = grub_file(PATCHED)
        with pytest.raises(GrubFileNotFoundError) as excinfo:
            manager_for(path).restore_file(str(tmp_path / "absent"))
        assert not isinstance(excinfo.value, OriginalBackupMissingError)
