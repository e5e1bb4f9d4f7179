# src/targeter/dotenv_loader.py

import os
from collections.abc import MutableMapping, Sequence
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import dotenv_values
from dotenv.variables import Variable, parse_variables

from .logs import getAppLogger


@dataclass
class DotEnvResult:
    loaded: bool
    variables: dict[str, str] = field(default_factory=dict)


class DotEnvLoader:
    """Load `.env`-style files relative to a project root and inject them
    into an environment mapping (``os.environ`` by default).
    """

    def __init__(
        self,
        root: Path,
        environ: MutableMapping[str, str] | None = None,
    ) -> None:
        self.root = root
        self.environ = os.environ if environ is None else environ

    def load(self, files: Sequence[str], extend: bool = True) -> DotEnvResult:  # noqa: FBT001, FBT002
        """Parse the existing files among ``files``.

        Earlier files take precedence over later ones. When ``extend`` is
        false only the first existing file is used. ``${VAR}`` references are
        expanded across every parsed file.
        """
        logger = getAppLogger()
        existing = [(name, self.root / name) for name in files]
        existing = [(name, path) for name, path in existing if path.is_file()]
        if not existing:
            logger.trace(f"[dotenv.load] None of {list(files)} exist")
            return DotEnvResult(loaded=False)

        use_files = existing if extend else existing[:1]
        variables = self._parse_files(use_files)
        return DotEnvResult(loaded=bool(variables), variables=variables)

    def inject(
        self,
        variables: dict[str, str],
        overwrite: bool = True,  # noqa: FBT001, FBT002
    ) -> None:
        for name, value in variables.items():
            if not overwrite and name in self.environ:
                continue
            self.environ[name] = value

    def _parse_files(self, files: list[tuple[str, Path]]) -> dict[str, str]:
        logger = getAppLogger()
        merged: dict[str, str] = {}
        # lowest precedence first so the first file's values win
        for name, path in reversed(files):
            try:
                parsed = dotenv_values(path, interpolate=False, encoding="utf-8")
            except OSError:
                logger.error("The environment file couldn't be read: %s", name)
                raise
            logger.info("Environment file successfully loaded: %s", name)
            merged.update(
                {key: value for key, value in parsed.items() if value is not None}
            )

        return self._expand(merged)

    def _expand(self, variables: dict[str, str]) -> dict[str, str]:
        """Expand ``${VAR}`` references against the merged variables.

        File values take precedence over the environment. A reference that
        loops back on itself falls back to the environment.
        """
        logger = getAppLogger()
        atoms = {name: list(parse_variables(value)) for name, value in variables.items()}
        env: dict[str, str | None] = dict(self.environ)
        expanded: dict[str, str] = {}
        pending: set[str] = set()

        def resolve(name: str) -> None:
            if name in expanded or name in pending:
                return
            pending.add(name)
            for atom in atoms[name]:
                if isinstance(atom, Variable) and atom.name in atoms:
                    resolve(atom.name)
            pending.discard(name)
            expanded[name] = "".join(atom.resolve(env) for atom in atoms[name])
            env[name] = expanded[name]

        for name in variables:
            resolve(name)

        logger.trace(f"[dotenv.expand] Expanded {len(expanded)} variable(s)")
        return expanded
