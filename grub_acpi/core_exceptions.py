"""Module d'exceptions personnalisées pour grub-acpi-osi.

Fournit une hiérarchie d'exceptions pour les erreurs de l'appelant
(fichiers, privilèges, commandes externes). La transformation des lignes
elle-même ne lève jamais.
"""

from __future__ import annotations


class GrubAcpiError(Exception):
    """Exception de base pour toutes les erreurs de grub-acpi-osi.

    Permet de capturer toutes les erreurs métier avec `except GrubAcpiError`.

    Example:
        try:
            manager.add()
        except GrubAcpiError as e:
            logger.error(f"Erreur: {e}")
    """


class GrubConfigError(GrubAcpiError):
    """Erreur d'écriture ou de lecture de /etc/default/grub."""


class GrubFileNotFoundError(GrubAcpiError):
    """Fichier requis introuvable (configuration ou sauvegarde à restaurer).

    Attributes:
        path: Le chemin manquant
    """

    def __init__(self, message: str, path: str | None = None):
        """Initialise l'erreur avec le chemin introuvable."""
        super().__init__(message)
        self.path = path


class GrubPermissionError(GrubAcpiError):
    """Permissions insuffisantes (droits root requis ou fichier non accessible).

    Example:
        if os.geteuid() != 0:
            raise GrubPermissionError("Cette opération nécessite les privilèges root")
    """


class GrubBackupError(GrubAcpiError):
    """Erreur lors de la création d'une sauvegarde.

    Levée lorsque la copie échoue ou que la sauvegarde n'est pas présente
    après la copie. Aucune modification n'est faite dans ce cas.
    """


class GrubCommandError(GrubAcpiError):
    """Erreur lors de l'exécution d'une commande système (update-grub).

    Attributes:
        command: La commande qui a échoué
        returncode: Code de retour
        stderr: Sortie d'erreur
    """

    def __init__(
        self,
        message: str,
        command: str | None = None,
        returncode: int | None = None,
        stderr: str | None = None,
    ):
        """Initialise GrubCommandError avec le contexte de la commande.

        Args:
            message: Message d'erreur descriptif
            command: Commande qui a échoué (optionnel)
            returncode: Code de retour de la commande (optionnel)
            stderr: Sortie d'erreur (optionnel)
        """
        super().__init__(message)
        self.command = command
        self.returncode = returncode
        self.stderr = stderr

    def __str__(self) -> str:
        """Représentation textuelle enrichie de l'erreur."""
        parts = [super().__str__()]
        if self.command:
            parts.append(f"Commande: {self.command}")
        if self.returncode is not None:
            parts.append(f"Code retour: {self.returncode}")
        if self.stderr:
            parts.append(f"Stderr: {self.stderr[:200]}")  # Limiter la taille
        return " | ".join(parts)


class GrubCommandNotFoundError(GrubCommandError):
    """Commande externe introuvable dans le PATH (ex: update-grub absent)."""
