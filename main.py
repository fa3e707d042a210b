"""Point d'entrée principal (CLI).

Ajoute `acpi_osi=!` et `acpi_osi="Windows 2009"` à GRUB_CMDLINE_LINUX_DEFAULT
dans /etc/default/grub, ou restaure une sauvegarde, puis lance update-grub.

Usage:
    sudo python main.py --add [--no-update-grub] [--backup-dir DIR]
    sudo python main.py --restore
    sudo python main.py --restore-file /path/to/backup
"""

from __future__ import annotations

import argparse
import sys

from loguru import logger

from grub_acpi.config.core_config_runtime import configure_logging
from grub_acpi.config.core_paths import DEFAULT_BACKUP_DIR, GRUB_DEFAULT_PATH
from grub_acpi.core_exceptions import GrubAcpiError, GrubPermissionError
from grub_acpi.managers.core_acpi_osi_manager import (
    AcpiOsiManager,
    Action,
    OperationResult,
    OriginalBackupMissingError,
)
from grub_acpi.system.core_grub_system_commands import require_root

# Loguru installe un handler par défaut (niveau DEBUG) dès l'import.
# On le retire ici, avant l'appel explicite à configure_logging().
try:
    logger.remove()
except (TypeError, ValueError):
    pass

_EPILOG = f"""\
Notes:
 - A timestamped backup is created before modifying: <backup-dir>/grub.<timestamp>
 - On the very first --add an <file>.orig copy is also created, restorable with --restore.
 - Default backup dir: {DEFAULT_BACKUP_DIR} (env: GRUB_ACPI_OSI_BACKUP_DIR).
"""


class _RestoreFileAction(argparse.Action):
    """`--restore-file PATH`: sélectionne l'action et mémorise le chemin."""

    def __call__(self, parser, namespace, values, option_string=None):
        namespace.action = Action.RESTORE_FILE
        setattr(namespace, self.dest, values)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="grub-acpi-osi",
        description="Add acpi_osi=! and acpi_osi=\"Windows 2009\" to GRUB_CMDLINE_LINUX_DEFAULT (idempotent).",
        epilog=_EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    # La dernière action donnée l'emporte.
    parser.add_argument(
        "--add",
        dest="action",
        action="store_const",
        const=Action.ADD,
        help="Add acpi_osi=! and acpi_osi=\"Windows 2009\" to GRUB_CMDLINE_LINUX_DEFAULT (idempotent).",
    )
    parser.add_argument(
        "--restore",
        dest="action",
        action="store_const",
        const=Action.RESTORE,
        help="Restore the original grub file saved as <file>.orig.",
    )
    parser.add_argument(
        "--restore-file",
        metavar="PATH",
        action=_RestoreFileAction,
        help="Restore a specific backup file (provide full path).",
    )
    parser.add_argument(
        "--no-update-grub",
        dest="update_grub",
        action="store_false",
        help="Don't run update-grub after making changes/restoring.",
    )
    parser.add_argument("--backup-dir", metavar="DIR", help="Store backups under DIR.")
    parser.add_argument("--file", metavar="PATH", default=GRUB_DEFAULT_PATH, help="GRUB defaults file to edit.")
    parser.add_argument("--verbose", action="store_true", help="Timestamped log output.")
    parser.add_argument("--debug", action="store_true", help="Debug log output.")
    parser.set_defaults(action=None)
    return parser


def _dispatch(manager: AcpiOsiManager, args: argparse.Namespace) -> OperationResult:
    if args.action is Action.ADD:
        return manager.add()
    if args.action is Action.RESTORE:
        return manager.restore_original()
    return manager.restore_file(args.restore_file)


def _print_available_backups(error: OriginalBackupMissingError, backup_dir: str) -> None:
    print(f"Available backups in {backup_dir}:")
    for path in error.available_backups:
        print(path)


def _run_main(argv: list[str]) -> int:
    """Exécute la CLI et retourne un code de sortie."""
    parser = build_parser()
    if not argv:
        parser.print_help()
        return 1

    args = parser.parse_args(argv)
    configure_logging(debug=args.debug, verbose=args.verbose)
    logger.debug(f"[main] Arguments: {vars(args)}")

    try:
        require_root()
    except GrubPermissionError as exc:
        logger.error(str(exc))
        return 1

    if args.action is None:
        logger.error("No action specified. Use --help for usage.")
        return 1

    manager = AcpiOsiManager(args.file, args.backup_dir, update_grub=args.update_grub)
    try:
        result = _dispatch(manager, args)
    except OriginalBackupMissingError as exc:
        logger.error(str(exc))
        _print_available_backups(exc, manager.backup_dir)
        return 2
    except GrubAcpiError as exc:
        logger.error(str(exc))
        return 1

    logger.debug(f"[main] Résultat: {result}")
    return 0


def main() -> None:
    """Point d'entrée Python (console script)."""
    raise SystemExit(_run_main(sys.argv[1:]))


if __name__ == "__main__":
    main()
