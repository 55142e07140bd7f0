from dataclasses import dataclass
from pathlib import Path
from typing import Optional

@dataclass(frozen=True)
class RunConfig:
    """
    Settings for a single run. Built once in main() and never mutated.
    """
    source_root: Path
    destination_root: Optional[Path] = None   # None = in-place mode
    dry_run: bool = False
    progress: bool = False

    @property
    def in_place(self) -> bool:
        return self.destination_root is None


@dataclass
class RunStats:
    examined: int = 0
    created: int = 0
    already_present: int = 0
    no_metadata: int = 0
