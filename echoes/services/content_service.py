"""Content service - loads leaders and their levels from YAML files.

One leader per file; files are read in name order, so prefixes such as
`01_` control the order leaders are played in.
"""

import logging
import random
from pathlib import Path

import yaml
from pydantic import ValidationError

from echoes.config import settings
from echoes.core.exceptions import MalformedLevelError
from echoes.schemas.content import Leader

logger = logging.getLogger(__name__)


class ContentService:
    def __init__(self, content_dir: Path | None = None):
        self.content_dir = content_dir
        self._cache: dict[Path, list[Leader]] = {}

    def load_leaders(self, source: Path | None = None) -> list[Leader]:
        """Load every leader file in a directory (or a single leader file)."""
        source = Path(source or self.content_dir or settings.CONTENT_DIR)
        if source in self._cache:
            return self._cache[source]

        if not source.exists():
            raise FileNotFoundError(f"Content not found: {source}")

        files = [source] if source.is_file() else sorted(source.glob("*.yaml"))
        leaders = [self.load_leader(path) for path in files]
        self._cache[source] = leaders
        return leaders

    def load_leader(self, path: Path) -> Leader:
        try:
            with open(path, "r", encoding="utf-8") as f:
                raw = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise MalformedLevelError(str(path), f"invalid YAML: {e}") from e

        if not isinstance(raw, dict):
            raise MalformedLevelError(str(path), "expected a mapping describing one leader")

        try:
            leader = Leader(**raw)
        except ValidationError as e:
            raise MalformedLevelError(str(path), str(e)) from e

        for level in leader.levels:
            if not level.is_well_formed:
                logger.warning(
                    "Level %s of %s does not flag exactly one historical choice",
                    level.number, leader.name,
                )
        return leader

    @staticmethod
    def randomized(leaders: list[Leader], rng: random.Random | None = None) -> list[Leader]:
        """Copies of the leaders with level order and choice order shuffled."""
        rng = rng or random.Random()
        shuffled = []
        for leader in leaders:
            levels = [
                level.model_copy(update={"choices": rng.sample(level.choices, len(level.choices))})
                for level in leader.levels
            ]
            rng.shuffle(levels)
            shuffled.append(leader.model_copy(update={"levels": levels}))
        return shuffled


content_service = ContentService()
