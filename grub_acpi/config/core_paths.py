"""Chemins système et constantes.

Module séparé pour éviter les dépendances circulaires.
"""

from __future__ import annotations

import os
from typing import Final

GRUB_DEFAULT_PATH: Final[str] = "/etc/default/grub"

DEFAULT_BACKUP_DIR: Final[str] = "/var/backups/grub-acpi-osi"
BACKUP_DIR_ENV: Final[str] = "GRUB_ACPI_OSI_BACKUP_DIR"

# Copie "d'origine" créée au tout premier --add, jamais écrasée.
ORIG_SUFFIX: Final[str] = ".orig"

# Préfixe des sauvegardes horodatées: <backup_dir>/grub.<YYYYmmddHHMMSS>
BACKUP_PREFIX: Final[str] = "grub."
BACKUP_TIMESTAMP_FORMAT: Final[str] = "%Y%m%d%H%M%S"

UPDATE_GRUB_COMMAND: Final[str] = "update-grub"
# Sous sudo/pkexec le PATH peut ne pas contenir /usr/sbin.
EXTRA_COMMAND_PATHS: Final[str] = "/usr/sbin:/sbin:/usr/bin:/bin"


def get_default_backup_dir() -> str:
    """Retourne le répertoire de sauvegarde (variable d'environnement ou défaut)."""
    return os.environ.get(BACKUP_DIR_ENV) or DEFAULT_BACKUP_DIR
