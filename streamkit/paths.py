""" Convenience sources for files and/or directories under a root.
"""

from typing import Optional
from collections.abc import Iterable
import os

from stream import Source, source

from .walker import (
    DirectoryWalker, walk, make_predicate,
    PathType, Predicate,
)

def _is_dir(path, follow_symlinks: bool = True) -> bool:
    # agrees with DirEntry.is_dir(follow_symlinks=...)
    if not follow_symlinks and os.path.islink(path):
        return False
    return os.path.isdir(path)

@source
def files(root: PathType,
          glob: Optional[str] = None,
          predicate: Optional[Predicate] = None,
          follow_symlinks: bool = True) -> Iterable:
    """ Every file below root whose name matches `glob`
    (and `predicate`, if given).

    Directories are always descended into -- the glob
    is applied to files only.  Closing the source closes
    the walk.
    """
    accept = make_predicate(glob, predicate)
    is_dir = lambda p: _is_dir(p, follow_symlinks)
    with DirectoryWalker(root, lambda p: is_dir(p) or accept(p),
                         prune=True,
                         follow_symlinks=follow_symlinks) as walker:
        for path in walker:
            if not is_dir(path):
                yield path

def directories(root: PathType,
                glob: Optional[str] = None,
                predicate: Optional[Predicate] = None,
                follow_symlinks: bool = True) -> Source:
    """ Directories below root, deepest first.

    A directory rejected by `glob` or `predicate` is pruned,
    so nothing beneath it is reported either.
    """
    accept = make_predicate(glob, predicate)
    return walk(root,
                predicate=lambda p: _is_dir(p, follow_symlinks) and accept(p),
                prune=True,
                follow_symlinks=follow_symlinks)

def directories_and_files(root: PathType,
                          glob: Optional[str] = None,
                          predicate: Optional[Predicate] = None,
                          prune: bool = True,
                          follow_symlinks: bool = True) -> Source:
    """ The walker's raw output: files and post-order directories.
    """
    return walk(root, glob=glob, predicate=predicate, prune=prune,
                follow_symlinks=follow_symlinks)
