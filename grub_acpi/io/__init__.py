"""Lecture/écriture de fichiers et sauvegardes."""
