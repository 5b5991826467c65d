"""
Read package manager configuration values.

The value is read with ``<package manager> config get <key>``, using
whichever package manager :func:`resolve_package_manager` finds for the
working directory. pnpm needs extra care:

* ``pnpm version`` runs ``npm version`` internally, so npm's own
  configuration is the one that matters and is tried first. Corepack
  may refuse to run npm in a pnpm project; that refusal is not an
  error here.
* ``pnpm config get`` prints an empty line both for a key set to the
  empty string and for an unset key that npm would default. ``config
  list`` only shows keys that are actually set, so it tells the two
  apart.
"""

from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Dict, Mapping, Optional, Tuple, Union

from pkgtag.package_manager.resolver import resolve_package_manager
from pkgtag.package_manager.types import PackageManagerIdentity, PackageManagerKind
from pkgtag.runner import CommandResult, ProcessError, run_command


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())


# npm defaults that pnpm does not report.
NPM_BUILTIN_CONFIG: Dict[str, str] = {
    "tag-version-prefix": "v",
    "message": "%s",
}

DIFFERENT_PACKAGE_MANAGER_RE = re.compile(
    r"\bThis project is configured to use \w+\b", re.IGNORECASE
)

Runner = Callable[..., CommandResult]
Resolver = Callable[..., PackageManagerIdentity]


@dataclass(frozen=True)
class ConfigKeyMapping:
    """Config key names per package manager.

    ``npm`` is used by npm and pnpm; ``yarn`` overrides it for yarn.
    """

    npm: str
    yarn: Optional[str] = None

    def key_for(self, kind: Optional[PackageManagerKind]) -> str:
        if kind is PackageManagerKind.YARN and self.yarn:
            return self.yarn
        return self.npm


TAG_VERSION_PREFIX = ConfigKeyMapping(npm="tag-version-prefix", yarn="version-tag-prefix")


def is_different_package_manager_error(error: ProcessError) -> bool:
    """Return True if Corepack refused to run a foreign package manager."""
    return bool(
        DIFFERENT_PACKAGE_MANAGER_RE.search(error.stdout)
        or DIFFERENT_PACKAGE_MANAGER_RE.search(error.stderr)
    )


def strip_trailing_newline(text: str) -> str:
    return text[:-1] if text.endswith("\n") else text


def config_key_pattern(key: str) -> "re.Pattern[str]":
    """Match ``key`` as the name of an entry in ``config list`` output.

    The key may be indented, wrapped in matching quotes, and followed by
    whitespace and ``=`` or the end of the line.
    """
    return re.compile(
        r"(?:\A|(?<=[\r\n]))[^\S\r\n]*"
        r"(['\"]?)" + re.escape(key) + r"\1"
        r"[^\S\r\n]*(?=[=\r\n]|\Z)"
    )


class ConfigListCache:
    """``config list`` output per package manager command.

    Keyed by the executable and its prefix arguments. Entries are never
    invalidated, so one cache should not outlive the command it serves.
    """

    def __init__(self) -> None:
        self._entries: Dict[Tuple[str, Tuple[str, ...]], str] = {}

    @staticmethod
    def key(identity: PackageManagerIdentity) -> Tuple[str, Tuple[str, ...]]:
        return identity.executable, tuple(identity.prefix_args)

    def get(self, identity: PackageManagerIdentity) -> Optional[str]:
        return self._entries.get(self.key(identity))

    def set(self, identity: PackageManagerIdentity, output: str) -> None:
        self._entries[self.key(identity)] = output

    def __len__(self) -> int:
        return len(self._entries)


class ConfigReader:
    """Read config values through the package manager in ``cwd``.

    Parameters
    ----------
    cwd : str or Path
        Project directory.
    environ : Mapping[str, str], optional
        Environment used for detection and passed to child processes;
        defaults to ``os.environ``.
    cache : ConfigListCache, optional
        Shared ``config list`` cache; a new one is created by default.
    runner, resolver : callable, optional
        Replacements for :func:`run_command` and
        :func:`resolve_package_manager`.
    """

    def __init__(
        self,
        cwd: Union[str, Path],
        environ: Optional[Mapping[str, str]] = None,
        cache: Optional[ConfigListCache] = None,
        runner: Runner = run_command,
        resolver: Resolver = resolve_package_manager,
    ) -> None:
        self.cwd = Path(cwd)
        self.environ: Mapping[str, str] = os.environ if environ is None else environ
        self.cache = cache if cache is not None else ConfigListCache()
        self._run = runner
        self._resolve = resolver

    def resolve(self) -> PackageManagerIdentity:
        return self._resolve(self.cwd, environ=self.environ)

    def get(self, key_map: ConfigKeyMapping) -> str:
        """Return the configured value for ``key_map`` (may be empty).

        Raises
        ------
        ProcessError
            If a ``config`` command fails for any reason other than
            Corepack refusing npm in a pnpm project.
        """
        identity = self.resolve()
        key = key_map.key_for(identity.kind)

        if identity.kind is PackageManagerKind.PNPM:
            value = self._try_npm_config_get(key_map.npm)
            if value:
                return value

        result = self._run(
            identity.executable,
            [*identity.prefix_args, "config", "get", key],
            cwd=self.cwd,
            env=self.environ,
        )
        value = strip_trailing_newline(result.stdout)

        default = NPM_BUILTIN_CONFIG.get(key)
        if (
            identity.kind is PackageManagerKind.PNPM
            and value == ""
            and default is not None
            and not self.is_config_defined(identity, key)
        ):
            logger.debug("%s is not set for pnpm, using npm default %r", key, default)
            return default
        return value

    def _try_npm_config_get(self, key: str) -> Optional[str]:
        """Run ``npm config get`` directly; None if Corepack refuses."""
        env = dict(self.environ)
        # Corepack 0.14+ lets npm run in projects pinned to another manager.
        env["COREPACK_ENABLE_STRICT"] = "0"
        try:
            result = self._run("npm", ["config", "get", key], cwd=self.cwd, env=env)
        except ProcessError as exc:
            # Older Corepack ignores COREPACK_ENABLE_STRICT.
            if is_different_package_manager_error(exc):
                logger.debug("Corepack refused npm: %s", exc)
                return None
            raise
        return strip_trailing_newline(result.stdout)

    def is_config_defined(self, identity: PackageManagerIdentity, key: str) -> bool:
        """Return True if ``key`` is explicitly set for ``identity``."""
        listing = self.cache.get(identity)
        if listing is None:
            logger.debug("config list cache miss for %s", identity.executable)
            # Plain text output: --json would include npm's builtin config.
            listing = self._run(
                identity.executable,
                [*identity.prefix_args, "config", "list"],
                cwd=self.cwd,
                env=self.environ,
            ).stdout
            self.cache.set(identity, listing)
        return config_key_pattern(key).search(listing) is not None


def get_config(
    cwd: Union[str, Path],
    key_map: ConfigKeyMapping,
    environ: Optional[Mapping[str, str]] = None,
) -> str:
    """Read one config value with a fresh :class:`ConfigReader`."""
    return ConfigReader(cwd, environ=environ).get(key_map)
