# valid_path.py
from __future__ import annotations

from os import fspath
from pathlib import Path
from typing import Callable, Optional, Union

Predicate = Callable[[Path], bool]


class ValidPath:
    """Path checks for CLI arguments: compose the common ones with flags."""

    @staticmethod
    def _to_path(pathlike: Union[str, Path]) -> Optional[Path]:
        try:
            return pathlike if isinstance(pathlike, Path) else Path(fspath(pathlike))
        except TypeError:
            return None

    @staticmethod
    def normalize(p: Path) -> Path:
        """Expand '~' and resolve to absolute path (non-strict)."""
        return p.expanduser().resolve()

    @staticmethod
    def has_ext(ext: str) -> Predicate:
        """Match the last suffix, e.g. '.pdf' or 'pdf'."""
        want = (ext if ext.startswith(".") else "." + ext).lower()
        return lambda p: p.suffix.lower() == want

    @classmethod
    def check(
        cls,
        pathlike: Union[str, Path],
        *,
        must_exist: bool = False,
        require_file: bool = False,
        parent_must_exist: bool = False,
        has_ext: Optional[str] = None,
        normalize: bool = True,
    ) -> Optional[Path]:
        """
        Validate a path-like input; returns the (normalized) Path or None.

        - must_exist / require_file: the path itself must exist (as a file)
        - parent_must_exist: the containing directory must exist, for outputs
        - has_ext: required last suffix
        """
        p = cls._to_path(pathlike)
        if p is None or not str(p):
            return None
        if normalize:
            p = cls.normalize(p)

        preds: list[Predicate] = []
        if must_exist:
            preds.append(lambda q: q.exists())
        if require_file:
            preds.append(lambda q: q.is_file())
        if parent_must_exist:
            preds.append(lambda q: q.parent.is_dir())
        if has_ext is not None:
            preds.append(cls.has_ext(has_ext))

        return p if all(pred(p) for pred in preds) else None
