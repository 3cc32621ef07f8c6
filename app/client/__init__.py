"""Côté client : SDK HTTP et panier persistant."""
