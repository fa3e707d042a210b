"""Interactions avec le système (privilèges, update-grub)."""
