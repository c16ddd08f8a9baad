from typing import Literal, Optional
from pathlib import Path

import yaml
from pydantic import BaseModel, model_validator
from stream import Source

from .paths import files, directories, directories_and_files

class WalkConfig(BaseModel):
    """ Saved description of a directory walk.

    `prune` chooses between the two filtering behaviours:
    True applies the glob to directories too (a rejected
    directory hides its whole subtree), False descends into
    every directory and only filters what is reported.
    `prune=False` only applies to kind 'all': 'files' always
    descends and 'directories' always prunes.
    """
    root: Path
    glob: Optional[str] = None
    prune: bool = True
    follow_symlinks: bool = True
    kind: Literal['all', 'files', 'directories'] = 'all'

    @model_validator(mode='after')
    def check_prune(self) -> "WalkConfig":
        if not self.prune and self.kind != 'all':
            raise ValueError(f"prune=False needs kind 'all', not {self.kind!r}")
        return self

    def source(self) -> Source:
        if self.kind == 'files':
            return files(self.root, self.glob,
                         follow_symlinks=self.follow_symlinks)
        if self.kind == 'directories':
            return directories(self.root, self.glob,
                               follow_symlinks=self.follow_symlinks)
        return directories_and_files(self.root, self.glob,
                                     prune=self.prune,
                                     follow_symlinks=self.follow_symlinks)

    @classmethod
    def load(cls, fname):
        with open(fname, "r", encoding="utf-8") as f:
            cfg = yaml.safe_load(f)
        return cls.model_validate(cfg)

    def save(cfg, fname, overwrite=False) -> None:
        if not overwrite and Path(fname).exists():
            raise FileExistsError(f"won't overwrite {fname}")
        with open(fname, "w", encoding="utf-8") as f:
            yaml.dump(cfg.model_dump(mode='json'), f, indent=2)
