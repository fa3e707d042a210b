"""Injection idempotente de `acpi_osi` dans GRUB_CMDLINE_LINUX_DEFAULT."""

from grub_acpi.io.core_cmdline_patch import apply_tokens

__all__ = ["apply_tokens"]

__version__ = "1.0.0"
