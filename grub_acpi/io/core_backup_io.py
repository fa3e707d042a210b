"""Sauvegardes de /etc/default/grub.

Deux types de sauvegardes:
- horodatées: `<backup_dir>/grub.<YYYYmmddHHMMSS>`, une avant chaque modification;
- d'origine: `<path>.orig`, créée une seule fois et jamais écrasée.

Aucune modification du fichier cible ne doit avoir lieu tant que la
sauvegarde horodatée n'est pas présente sur disque.
"""

from __future__ import annotations

import os
import shutil
from datetime import datetime

from loguru import logger

from ..config.core_paths import (
    BACKUP_PREFIX,
    BACKUP_TIMESTAMP_FORMAT,
    GRUB_DEFAULT_PATH,
    ORIG_SUFFIX,
    get_default_backup_dir,
)
from ..core_exceptions import GrubBackupError, GrubFileNotFoundError, GrubPermissionError


def original_backup_path(path: str = GRUB_DEFAULT_PATH) -> str:
    """Chemin de la copie d'origine (`<path>.orig`)."""
    return path + ORIG_SUFFIX


def _copy_preserving(source: str, dest: str) -> None:
    """Copie équivalente à `cp -a` pour un fichier simple (contenu + métadonnées)."""
    shutil.copy2(source, dest)
    try:
        st = os.stat(source)
        os.chown(dest, st.st_uid, st.st_gid)
    except (OSError, AttributeError):
        # Best-effort: hors root, chown échoue.
        pass


def create_timestamped_backup(path: str = GRUB_DEFAULT_PATH, backup_dir: str | None = None) -> str:
    """Copie `path` vers `<backup_dir>/grub.<timestamp>` et vérifie sa présence.

    Returns:
        Le chemin de la sauvegarde créée.

    Raises:
        GrubFileNotFoundError: si `path` n'existe pas.
        GrubBackupError: si la copie échoue ou si la sauvegarde est absente ensuite.
    """
    backup_dir = backup_dir or get_default_backup_dir()
    logger.debug(f"[create_timestamped_backup] Sauvegarde de {path} dans {backup_dir}")

    if not os.path.isfile(path):
        logger.error(f"[create_timestamped_backup] ERREUR: {path} introuvable")
        raise GrubFileNotFoundError(f"Fichier à sauvegarder introuvable: {path}", path=path)

    try:
        os.makedirs(backup_dir, exist_ok=True)
    except OSError as e:
        logger.error(f"[create_timestamped_backup] ERREUR: Impossible de créer {backup_dir} - {e}")
        raise GrubBackupError(f"Impossible de créer le répertoire de sauvegarde {backup_dir}: {e}") from e

    ts = datetime.now().strftime(BACKUP_TIMESTAMP_FORMAT)
    base_backup_path = os.path.join(backup_dir, f"{BACKUP_PREFIX}{ts}")
    backup_path = base_backup_path

    # Assure un nom unique (plusieurs lancements dans la même seconde).
    suffix = 1
    while os.path.exists(backup_path):
        backup_path = f"{base_backup_path}.{suffix}"
        suffix += 1

    try:
        _copy_preserving(path, backup_path)
    except OSError as e:
        logger.error(f"[create_timestamped_backup] ERREUR: {e}")
        raise GrubBackupError(f"Impossible de créer la sauvegarde {backup_path}: {e}") from e

    if not os.path.isfile(backup_path):
        raise GrubBackupError(f"Sauvegarde absente après copie: {backup_path}")

    logger.success(f"[create_timestamped_backup] Backup created: {backup_path}")
    return backup_path


def ensure_original_backup(path: str = GRUB_DEFAULT_PATH) -> tuple[str, bool]:
    """Crée `<path>.orig` si absent. La copie d'origine n'est jamais écrasée.

    Returns:
        (chemin de la copie d'origine, True si elle vient d'être créée)

    Raises:
        GrubBackupError: si la copie échoue.
    """
    orig = original_backup_path(path)
    if os.path.isfile(orig):
        logger.debug(f"[ensure_original_backup] Copie d'origine déjà présente: {orig}")
        return orig, False

    try:
        _copy_preserving(path, orig)
    except OSError as e:
        logger.error(f"[ensure_original_backup] ERREUR: {e}")
        raise GrubBackupError(f"Impossible de créer la copie d'origine {orig}: {e}") from e

    logger.success(f"[ensure_original_backup] Saved original copy: {orig}")
    return orig, True


def list_backups(backup_dir: str | None = None) -> list[str]:
    """Liste les sauvegardes horodatées, plus récente d'abord.

    Retourne une liste vide si le répertoire n'existe pas.
    """
    backup_dir = backup_dir or get_default_backup_dir()
    try:
        names = os.listdir(backup_dir)
    except OSError:
        return []
    paths = [os.path.join(backup_dir, n) for n in names if n.startswith(BACKUP_PREFIX)]
    paths = [p for p in paths if os.path.isfile(p)]
    # Tri stable: plus récent d'abord, puis par nom.
    paths.sort(key=lambda p: (-os.path.getmtime(p), p))
    return paths


def restore_from_backup(source: str, path: str = GRUB_DEFAULT_PATH, backup_dir: str | None = None) -> str:
    """Restaure `source` vers `path` après avoir sauvegardé l'état courant.

    Returns:
        Le chemin de la sauvegarde de l'état courant (prise avant restauration).

    Raises:
        GrubFileNotFoundError: si `source` n'existe pas.
        GrubBackupError: si la sauvegarde préalable échoue.
        GrubPermissionError: si la copie vers `path` est refusée.
    """
    logger.info(f"[restore_from_backup] Restauration depuis {source}")
    if not os.path.isfile(source):
        logger.error(f"[restore_from_backup] ERREUR: {source} introuvable")
        raise GrubFileNotFoundError(f"Restore file not found: {source}", path=source)

    pre_backup = create_timestamped_backup(path, backup_dir)
    logger.info(f"Saved current {path} to: {pre_backup}")

    try:
        _copy_preserving(source, path)
    except PermissionError as e:
        logger.error(f"[restore_from_backup] ERREUR: Accès refusé - {e}")
        raise GrubPermissionError(f"Écriture refusée: {path}") from e
    except OSError as e:
        logger.error(f"[restore_from_backup] ERREUR: {e}")
        raise GrubBackupError(f"Échec de la restauration de {path} depuis {source}: {e}") from e

    logger.success(f"[restore_from_backup] Restored {path} from {source}")
    return pre_backup
