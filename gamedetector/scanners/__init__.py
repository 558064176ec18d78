"""Source adapters for the supported launchers.

Modules:
    base: SourceAdapter interface
    steam: Steam libraries
    steam_shortcuts: Non-Steam games added to Steam
    heroic: Heroic (Epic, GOG, Amazon, sideloaded)
    lutris: Lutris database
    bottles: Bottles library
    itch: itch app database
    minecraft: Prism Launcher and ATLauncher instances

The set of adapters is closed: ADAPTERS maps every SupportedSource to the
class reading it.
"""

from typing import Iterable, Optional

from ..config import DetectorConfig
from ..discovery.hints import SourceHints
from ..models import SupportedSource
from .base import SourceAdapter
from .bottles import Bottles
from .heroic import HeroicAmazon, HeroicEpic, HeroicGOG, HeroicSideload
from .itch import Itch
from .lutris import Lutris
from .minecraft import MinecraftATLauncher, MinecraftPrism
from .steam import Steam
from .steam_shortcuts import SteamShortcuts

ADAPTERS: dict[SupportedSource, type[SourceAdapter]] = {
    SupportedSource.STEAM: Steam,
    SupportedSource.STEAM_SHORTCUTS: SteamShortcuts,
    SupportedSource.HEROIC_EPIC: HeroicEpic,
    SupportedSource.HEROIC_GOG: HeroicGOG,
    SupportedSource.HEROIC_AMAZON: HeroicAmazon,
    SupportedSource.HEROIC_SIDELOAD: HeroicSideload,
    SupportedSource.LUTRIS: Lutris,
    SupportedSource.BOTTLES: Bottles,
    SupportedSource.ITCH: Itch,
    SupportedSource.MINECRAFT_PRISM: MinecraftPrism,
    SupportedSource.MINECRAFT_ATLAUNCHER: MinecraftATLauncher,
}


def build_adapters(
    config: DetectorConfig,
    hints: SourceHints,
    sources: Optional[Iterable[SupportedSource]] = None,
) -> list[SourceAdapter]:
    """Instantiate adapters in SupportedSource order.

    Args:
        config: Detector configuration
        hints: Source hints database
        sources: Restrict to these sources (all if None)
    """
    wanted = set(sources) if sources is not None else set(ADAPTERS)
    return [
        adapter_class(config, hints)
        for source, adapter_class in ADAPTERS.items()
        if source in wanted
    ]


__all__ = [
    # Interface
    'SourceAdapter',
    'ADAPTERS',
    'build_adapters',
    # Adapters
    'Steam',
    'SteamShortcuts',
    'HeroicEpic',
    'HeroicGOG',
    'HeroicAmazon',
    'HeroicSideload',
    'Lutris',
    'Bottles',
    'Itch',
    'MinecraftPrism',
    'MinecraftATLauncher',
]
