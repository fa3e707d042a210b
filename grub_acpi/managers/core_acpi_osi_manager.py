"""Gestionnaire des opérations add / restore.

Compose les étapes dans l'ordre imposé: lecture -> sauvegarde horodatée ->
copie d'origine -> transformation -> réécriture atomique -> update-grub.
La transformation elle-même est la fonction pure `patch_cmdline_lines`.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto

from loguru import logger

from ..config.core_paths import GRUB_DEFAULT_PATH, get_default_backup_dir
from ..core_exceptions import GrubCommandNotFoundError, GrubFileNotFoundError
from ..io.core_backup_io import (
    create_timestamped_backup,
    ensure_original_backup,
    list_backups,
    original_backup_path,
    restore_from_backup,
)
from ..io.core_cmdline_patch import patch_cmdline_lines
from ..io.core_grub_default_io import read_grub_default_lines, write_grub_default_lines
from ..system.core_grub_system_commands import run_update_grub


class Action(Enum):
    """Opérations disponibles."""

    ADD = "add"
    RESTORE = "restore"
    RESTORE_FILE = "restore-file"


class UpdateStatus(Enum):
    """Issue de l'étape update-grub."""

    RAN = auto()
    SKIPPED = auto()
    MISSING = auto()


@dataclass
class OperationResult:
    """Résultat d'une opération."""

    action: Action
    changed: bool
    backup_path: str | None = None
    orig_created: bool = False
    update_status: UpdateStatus = UpdateStatus.SKIPPED


class OriginalBackupMissingError(GrubFileNotFoundError):
    """La copie `<path>.orig` n'existe pas (aucun --add préalable).

    Attributes:
        available_backups: Sauvegardes horodatées disponibles
    """

    def __init__(self, message: str, path: str, available_backups: list[str]):
        """Initialise l'erreur avec la liste des sauvegardes disponibles."""
        super().__init__(message, path=path)
        self.available_backups = available_backups


class AcpiOsiManager:
    """Applique ou annule l'injection `acpi_osi` sur un fichier GRUB."""

    def __init__(
        self,
        grub_default_path: str = GRUB_DEFAULT_PATH,
        backup_dir: str | None = None,
        *,
        update_grub: bool = True,
    ):
        """Initialise le gestionnaire.

        Args:
            grub_default_path: Fichier cible (défaut /etc/default/grub)
            backup_dir: Répertoire des sauvegardes horodatées
            update_grub: Lancer update-grub après modification/restauration
        """
        self.grub_default_path = grub_default_path
        self.backup_dir = backup_dir or get_default_backup_dir()
        self.update_grub = update_grub

    def add(self) -> OperationResult:
        """Ajoute les jetons manquants (idempotent)."""
        logger.debug(f"[add] Cible: {self.grub_default_path}, sauvegardes: {self.backup_dir}")
        lines = read_grub_default_lines(self.grub_default_path)

        # La sauvegarde doit exister avant toute modification.
        backup_path = create_timestamped_backup(self.grub_default_path, self.backup_dir)
        _orig, orig_created = ensure_original_backup(self.grub_default_path)

        patch = patch_cmdline_lines(lines)
        if patch.changed:
            write_grub_default_lines(patch.lines, self.grub_default_path)
            logger.success(f"Modification applied to {self.grub_default_path}")
        else:
            logger.info(f"[add] {self.grub_default_path} déjà à jour, aucune écriture")

        update_status = self._maybe_update_grub()
        return OperationResult(
            Action.ADD,
            changed=patch.changed,
            backup_path=backup_path,
            orig_created=orig_created,
            update_status=update_status,
        )

    def restore_original(self) -> OperationResult:
        """Restaure la copie d'origine `<path>.orig`."""
        orig = original_backup_path(self.grub_default_path)
        try:
            return self._restore(orig, Action.RESTORE)
        except GrubFileNotFoundError as e:
            if e.path != orig:
                raise
            available = list_backups(self.backup_dir)
            logger.error(f"[restore_original] Original backup not found at {orig}")
            raise OriginalBackupMissingError(
                f"Original backup not found at {orig}", path=orig, available_backups=available
            ) from e

    def restore_file(self, source: str) -> OperationResult:
        """Restaure une sauvegarde précise."""
        return self._restore(source, Action.RESTORE_FILE)

    def _restore(self, source: str, action: Action) -> OperationResult:
        pre_backup = restore_from_backup(source, self.grub_default_path, self.backup_dir)
        update_status = self._maybe_update_grub()
        return OperationResult(action, changed=True, backup_path=pre_backup, update_status=update_status)

    def _maybe_update_grub(self) -> UpdateStatus:
        if not self.update_grub:
            logger.info("Skipped update-grub (--no-update-grub).")
            return UpdateStatus.SKIPPED
        try:
            run_update_grub()
        except GrubCommandNotFoundError:
            logger.warning("update-grub not found - please run 'sudo update-grub' manually to apply the change.")
            return UpdateStatus.MISSING
        return UpdateStatus.RAN
