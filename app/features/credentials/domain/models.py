from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class StagedCredential:
    """
    A cookies.txt written for one request.
    Owned by that request; the stager never deletes it.
    """
    path: Path
