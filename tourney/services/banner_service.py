from pathlib import Path
from typing import Optional, Sequence

BANNER_FILES = (
    "banner-inferno.svg",
    "banner-storm.svg",
    "banner-jungle.svg",
    "banner-neon.svg",
)


def select_banner(tournament_id: str, banners: Sequence[str] = BANNER_FILES) -> str:
    """Pick a banner for a tournament: sum of the id's character codes modulo the banner count."""
    return banners[sum(ord(ch) for ch in tournament_id) % len(banners)]


def resolve_banner_path(banner_dir: Path, tournament_id: str) -> Optional[Path]:
    path = Path(banner_dir) / select_banner(tournament_id)
    return path if path.is_file() else None
