import os
from pathlib import Path
from typing import Optional, Union

def to_abs_path(p: Optional[Union[str, os.PathLike]], base: Optional[Path] = None) -> Optional[Path]:
    """Convert p to an absolute path.
    Sequence:
      1) Absolute: expanduser+resolve
      2) Relative to `base` (the directory of the config file that named it)
      3) Relative to CWD
    """
    if not p:
        return None
    pp = Path(p).expanduser()
    if pp.is_absolute():
        return pp.resolve()
    if base is not None:
        return (Path(base) / pp).resolve()
    return (Path.cwd() / pp).resolve()
