"""Seed du catalogue de démonstration.

Usage:
    python -m scripts.seed_plats

N’insère rien si au moins un plat existe déjà.
"""

from __future__ import annotations

import asyncio
import logging

from sqlalchemy import func, select

from app.core.base_donnees import creer_fabrique_session, creer_moteur_async
from app.core.logging_config import configurer_logging
from app.domaine.modeles.catalogue import Plat
from app.domaine.normalisation import PlatCanonique
from app.domaine.services.catalogue_plats import ServiceCataloguePlats


logger = logging.getLogger(__name__)

PLATS_DEMO: list[PlatCanonique] = [
    PlatCanonique(
        nom="Dolcelatte and spinach frittata",
        description="Each frittata is made fresh with eggs, spinach and gorgonzola dolcelatte.",
        image_url="https://images.pexels.com/photos/1437267/pexels-photo-1437267.jpeg",
        prix=19,
    ),
    PlatCanonique(
        nom="Falafel and tahini bagel",
        description="A warm bagel filled with falafel and tahini.",
        image_url="https://images.pexels.com/photos/4560606/pexels-photo-4560606.jpeg",
        prix=6,
    ),
    PlatCanonique(
        nom="Tacos al pastor",
        description="Three corn tortillas with marinated pork and pineapple.",
        image_url="https://images.pexels.com/photos/4958641/pexels-photo-4958641.jpeg",
        prix=3,
    ),
]


async def seed_plats() -> int:
    """Retourne le nombre de plats insérés."""

    moteur = creer_moteur_async()
    fabrique = creer_fabrique_session(moteur)
    try:
        async with fabrique() as session:
            nb = (await session.execute(select(func.count(Plat.id)))).scalar_one()
            if nb:
                logger.info("seed_plats_ignore plats_existants=%s", nb)
                return 0

            service = ServiceCataloguePlats(session)
            for plat in PLATS_DEMO:
                await service.creer(plat)
            return len(PLATS_DEMO)
    finally:
        await moteur.dispose()


def main() -> int:
    configurer_logging()
    nb = asyncio.run(seed_plats())
    print(f"[seed-plats][OK] plats inseres = {nb}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
