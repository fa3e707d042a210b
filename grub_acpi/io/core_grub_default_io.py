"""Lecture/écriture brute de /etc/default/grub, ligne par ligne.

Les fins de ligne sont conservées telles quelles: le fichier est relu et
réécrit à l'identique hormis la ligne modifiée.
"""

from __future__ import annotations

import errno
import os
import shutil
import tempfile

from loguru import logger

from ..config.core_paths import GRUB_DEFAULT_PATH
from ..core_exceptions import GrubConfigError, GrubFileNotFoundError, GrubPermissionError

_PERMISSION_ERRNOS = (errno.EACCES, errno.EPERM, errno.EROFS)


def read_grub_default_lines(path: str = GRUB_DEFAULT_PATH) -> list[str]:
    """Lit le fichier et renvoie ses lignes, fins de ligne incluses.

    Raises:
        GrubFileNotFoundError: si le fichier n'existe pas.
        GrubPermissionError: si le fichier n'est pas lisible.
        GrubConfigError: pour toute autre erreur de lecture.
    """
    logger.debug(f"[read_grub_default_lines] Lecture {path}")
    try:
        # newline="" conserve les fins de ligne d'origine (\n, \r\n, \r).
        with open(path, encoding="utf-8", newline="") as f:
            lines = f.readlines()
    except FileNotFoundError as e:
        logger.error(f"[read_grub_default_lines] ERREUR: {path} introuvable")
        raise GrubFileNotFoundError(f"Fichier de configuration introuvable: {path}", path=path) from e
    except PermissionError as e:
        logger.error(f"[read_grub_default_lines] ERREUR: Accès refusé - {e}")
        raise GrubPermissionError(f"Lecture refusée: {path}") from e
    except (OSError, UnicodeDecodeError) as e:
        logger.error(f"[read_grub_default_lines] ERREUR: {e}")
        raise GrubConfigError(f"Lecture échouée ({path}): {e}") from e
    logger.debug(f"[read_grub_default_lines] Succès - {len(lines)} lignes lues")
    return lines


def write_grub_default_lines(lines: list[str], path: str = GRUB_DEFAULT_PATH) -> None:
    """Réécrit le fichier de façon atomique (fichier temporaire + os.replace).

    Le fichier temporaire est créé dans le même répertoire que la cible et
    reprend ses permissions. En cas d'échec la cible reste intacte.

    Raises:
        GrubPermissionError: si l'écriture est refusée.
        GrubConfigError: pour toute autre erreur d'écriture.
    """
    logger.info(f"Écriture configuration GRUB: {path}")
    directory = os.path.dirname(os.path.abspath(path))
    tmp_path: str | None = None
    try:
        fd, tmp_path = tempfile.mkstemp(prefix=".grub-acpi-osi.", dir=directory)
        try:
            f = os.fdopen(fd, "w", encoding="utf-8", newline="")
        except BaseException:
            os.close(fd)
            raise
        with f:
            f.writelines(lines)
            f.flush()
            os.fsync(f.fileno())
        if os.path.exists(path):
            shutil.copymode(path, tmp_path)
        os.replace(tmp_path, path)
        tmp_path = None
    except OSError as e:
        logger.error(f"[write_grub_default_lines] ERREUR: Écriture échouée - {e}")
        if e.errno in _PERMISSION_ERRNOS:
            raise GrubPermissionError(f"Écriture refusée: {path}") from e
        raise GrubConfigError(f"Écriture échouée ({path}): {e}") from e
    finally:
        if tmp_path is not None:
            try:
                os.remove(tmp_path)
            except OSError:
                # Best-effort: un temporaire orphelin ne doit pas masquer l'erreur d'origine.
                pass
    logger.success(f"[write_grub_default_lines] Succès - {len(lines)} lignes écrites")
