"""Constantes et configuration runtime."""
