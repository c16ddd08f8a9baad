from typing import Optional
from typing_extensions import Annotated

from enum import Enum
from pathlib import Path
import sys
import logging

import typer
from pydantic import ValidationError
from stream import take

from ..Config import WalkConfig

app = typer.Typer(pretty_exceptions_enable=False)

class Kind(str, Enum):
    all = "all"
    files = "files"
    directories = "directories"

@app.command()
def walk(root: Annotated[Optional[Path],
                         typer.Argument(help="directory to walk")] = None,
         glob: Annotated[Optional[str],
                         typer.Option("--glob", "-g",
                                      help="match entry names against this glob")] = None,
         kind: Annotated[Optional[Kind],
                         typer.Option("--kind", "-k",
                                      help="which entries to print")] = None,
         prune: Annotated[Optional[bool],
                          typer.Option("--prune/--no-prune",
                                       help="skip subtrees of directories the glob rejects (kind all only)")] = None,
         follow: Annotated[Optional[bool],
                           typer.Option("--follow/--no-follow",
                                        help="descend into symlinked directories")] = None,
         limit: Annotated[Optional[int],
                          typer.Option("--limit", "-n",
                                       help="stop after this many paths")] = None,
         config: Annotated[Optional[Path],
                           typer.Option("--config", "-c",
                                        help="WalkConfig yaml file")] = None,
         verbose: Annotated[bool, typer.Option("--verbose", "-v")] = False,
        ) -> None:
    """ Print paths below ROOT, files first and each directory
    after its contents.
    """
    if verbose:
        logging.basicConfig(level=logging.DEBUG, stream=sys.stderr)

    params = {}
    if config is not None:
        params = WalkConfig.load(config).model_dump()
    overrides = dict(root=root, glob=glob,
                     kind=None if kind is None else kind.value,
                     prune=prune, follow_symlinks=follow)
    params.update({k: v for k, v in overrides.items() if v is not None})
    if params.get('root') is None:
        raise typer.BadParameter("give a ROOT directory or --config")
    try:
        cfg = WalkConfig.model_validate(params)
    except ValidationError as e:
        raise typer.BadParameter(str(e))

    src = cfg.source()
    out = src
    if limit is not None:
        out = src >> take(limit)
    try:
        for path in out:
            print(path)
    except OSError as e:
        typer.echo(f"streamkit-walk: {e}", err=True)
        raise typer.Exit(code=1)
    finally:
        # ends the walk and releases its open listing
        src.iterator.close()

def run():
    app()
