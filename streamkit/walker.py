""" Lazy, non-recursive directory-tree walker.

The walker keeps an explicit stack of PendingDirectory nodes in
place of recursion and holds at most one open directory listing
(an `os.scandir` iterator by default) at any time.

Emission order inside one directory: its files as the listing
produces them, then each subdirectory's subtree, most recently
discovered first, with the subdirectory's own path emitted right
after its subtree (post-order).  The root itself is never emitted.
"""

from typing import Any, Optional, Union
from collections.abc import Callable, Iterable
import os
import fnmatch
import logging
from pathlib import Path, PurePath

from stream import source

from .lazy import LazySequence

logger = logging.getLogger(__name__)

PathType   = Union[str, bytes, os.PathLike]
Predicate  = Callable[[Any], bool]
# path -> closeable iterator of os.DirEntry-like objects
Opener     = Callable[[Any], Any]

def accept_all(path) -> bool:
    return True

def glob_predicate(pattern: str) -> Predicate:
    """ Compile a glob into a predicate matching against
    the final path component only.

    >>> glob_predicate('*.txt')(Path('a/b/notes.txt'))
    True
    """
    def matches(path) -> bool:
        if isinstance(path, PurePath):
            name = path.name
        else:
            name = os.path.basename(os.fsdecode(path))
        return fnmatch.fnmatchcase(name, pattern)
    return matches

def make_predicate(glob: Optional[str] = None,
                   predicate: Optional[Predicate] = None) -> Predicate:
    """ Combine an optional glob with an optional predicate.
    Both must accept when both are given.
    """
    if glob is None:
        return predicate or accept_all
    matches = glob_predicate(glob)
    if predicate is None:
        return matches
    return lambda path: matches(path) and predicate(path)

class PendingDirectory:
    """ A directory that was discovered but not yet fully processed.

    `next` links to the node pushed before this one, so the chain
    is a LIFO stack.  `opened` flips to True once, after this
    directory's own listing has been exhausted and closed.
    `emit` is False for directories that are descended into but
    rejected by the predicate (only when not pruning).
    """
    __slots__ = ('path', 'next', 'opened', 'emit')

    def __init__(self, path,
                 next: Optional["PendingDirectory"] = None,
                 emit: bool = True) -> None:
        self.path = path
        self.next = next
        self.opened = False
        self.emit = emit

    def __repr__(self) -> str:
        return 'PendingDirectory(%r, opened=%s)' % (self.path, self.opened)

class DirectoryWalker(LazySequence):
    """ Depth-first walk of `root` producing files and directories
    accepted by `predicate`.

    With `prune=True` a rejected directory is skipped together with
    its whole subtree.  With `prune=False` every directory is
    descended into and the predicate only decides what is emitted.

    Use as a context manager (or call `close()`) when the walk may
    be abandoned before it is exhausted:

        with DirectoryWalker(root) as w:
            first = w >> take(1) >> list
    """
    def __init__(self,
                 root: PathType,
                 predicate: Predicate = accept_all,
                 prune: bool = True,
                 follow_symlinks: bool = True,
                 opener: Opener = os.scandir) -> None:
        super().__init__(self._advance)
        self.root = root
        self.predicate = predicate
        self.prune = prune
        self.follow_symlinks = follow_symlinks
        self.opener = opener

        if isinstance(root, os.PathLike):
            self._wrap = Path
        else:
            self._wrap = lambda p: p

        self._handle = None
        self._entries = None
        # the root is scanned but never pushed, so never emitted
        self._top = PendingDirectory(root)
        self._stack: Optional[PendingDirectory] = None
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def _open(self, node: PendingDirectory) -> None:
        assert self._handle is None, "a listing is already open"
        self._handle = self.opener(node.path)
        self._entries = iter(self._handle)
        logger.debug("opened %s", node.path)

    def _close_handle(self) -> None:
        # drop our reference first so a failing close() is never retried
        handle, self._handle, self._entries = self._handle, None, None
        if handle is not None:
            handle.close()
            logger.debug("closed %s", self._top.path)

    def _advance(self):
        if self._closed:
            return self.sentinel
        try:
            return self._step()
        except BaseException as e:
            logger.debug("walk of %s aborted: %r", self.root, e)
            self._abort()
            raise

    def _step(self):
        while True:
            if self._handle is None and not self._top.opened:
                self._open(self._top)

            if self._handle is not None:
                entry = next(self._entries, None)
                if entry is not None:
                    path = self._wrap(entry.path)
                    if entry.is_dir(follow_symlinks=self.follow_symlinks):
                        accepted = bool(self.predicate(path))
                        if accepted or not self.prune:
                            self._stack = PendingDirectory(path, self._stack,
                                                           emit=accepted)
                    elif self.predicate(path):
                        return path
                    continue

                # this level is exhausted
                self._top.opened = True
                self._close_handle()

            top = self._stack
            if top is None:
                logger.debug("walk of %s complete", self.root)
                self._closed = True
                return self.sentinel
            if top.opened:
                # whole subtree done, emit in post-order
                self._stack = top.next
                if top.emit:
                    return top.path
                continue
            # descend, leaving `top` on the stack until its subtree is done
            self._top = top

    def _abort(self) -> None:
        self._closed = True
        self._stack = None
        self._current = self.sentinel
        self._close_handle()

    def close(self) -> None:
        """ Release the open listing (if any) and end the walk.

        Directories that were discovered but never descended into
        were never opened, so there is nothing else to release.
        Safe to call more than once.
        """
        if self._closed and self._handle is None:
            self._current = self.sentinel
            return
        logger.debug("closing walk of %s", self.root)
        self._abort()

    def __enter__(self) -> "DirectoryWalker":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

@source
def walk(root: PathType,
         glob: Optional[str] = None,
         predicate: Optional[Predicate] = None,
         prune: bool = True,
         follow_symlinks: bool = True,
         opener: Opener = os.scandir) -> Iterable:
    """ Source over a DirectoryWalker.  The listing is closed when
    the generator finishes, is closed, or is garbage collected.
    """
    with DirectoryWalker(root, make_predicate(glob, predicate),
                         prune, follow_symlinks, opener) as walker:
        yield from walker
