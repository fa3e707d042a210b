"""Commandes système: vérification root et exécution de `update-grub`."""

from __future__ import annotations

import os
import shutil
import subprocess
from dataclasses import dataclass

from loguru import logger

from ..config.core_paths import EXTRA_COMMAND_PATHS, UPDATE_GRUB_COMMAND
from ..core_exceptions import GrubCommandError, GrubCommandNotFoundError, GrubPermissionError


@dataclass(frozen=True)
class CommandResult:
    """Résultat d'une commande système."""

    returncode: int
    stdout: str
    stderr: str


def is_root() -> bool:
    """True si le processus tourne avec l'uid effectif 0."""
    return os.geteuid() == 0


def require_root() -> None:
    """Lève GrubPermissionError si le processus n'est pas root."""
    if not is_root():
        logger.error("[require_root] ERREUR: droits root requis")
        raise GrubPermissionError("This script must be run as root (use sudo).")
    logger.debug("[require_root] Exécution en root")


def find_update_grub() -> str | None:
    """Cherche `update-grub` dans le PATH étendu.

    Note: Sous sudo/pkexec, le PATH peut ne pas contenir /usr/sbin.
    """
    base_path = os.environ.get("PATH", "")
    search_path = f"{base_path}:{EXTRA_COMMAND_PATHS}" if base_path else EXTRA_COMMAND_PATHS
    cmd = shutil.which(UPDATE_GRUB_COMMAND, path=search_path)
    logger.debug(f"[find_update_grub] Commande trouvée: {cmd}")
    return cmd


def run_update_grub() -> CommandResult:
    """Exécute `update-grub`.

    Raises:
        GrubCommandNotFoundError: si la commande est introuvable.
        GrubCommandError: si la commande retourne un code non nul.
    """
    cmd = find_update_grub()
    if cmd is None:
        logger.warning(f"[run_update_grub] '{UPDATE_GRUB_COMMAND}' introuvable")
        raise GrubCommandNotFoundError(
            f"{UPDATE_GRUB_COMMAND} not found",
            command=UPDATE_GRUB_COMMAND,
            returncode=127,
        )

    logger.info("Running update-grub...")
    try:
        res = subprocess.run([cmd], capture_output=True, text=True, check=False)
    except FileNotFoundError as e:
        logger.error(f"[run_update_grub] ERREUR: Commande introuvable - {e}")
        raise GrubCommandNotFoundError(f"{UPDATE_GRUB_COMMAND} not found", command=cmd, returncode=127) from e

    logger.debug(
        f"[run_update_grub] Résultat: returncode={res.returncode}, "
        f"stdout_len={len(res.stdout)}, stderr_len={len(res.stderr)}"
    )
    if res.returncode != 0:
        logger.error(f"[run_update_grub] ERREUR: returncode={res.returncode}")
        raise GrubCommandError(
            f"{UPDATE_GRUB_COMMAND} a échoué",
            command=cmd,
            returncode=res.returncode,
            stderr=res.stderr,
        )

    logger.success("update-grub finished.")
    return CommandResult(res.returncode, res.stdout, res.stderr)
