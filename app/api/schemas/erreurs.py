from __future__ import annotations

from pydantic import BaseModel


class ReponseErreur(BaseModel):
    """Corps des 400 : un seul message lisible."""

    error: str
