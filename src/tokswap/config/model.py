# topmark:header:start
#
#   project      : TokSwap
#   file         : model.py
#   file_relpath : src/tokswap/config/model.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Configuration model and merge policy.

This module defines:
    - `Config`: an immutable runtime snapshot passed into the orchestrator.
    - `MutableConfig`: a mutable builder used during discovery/merge; it
      can be frozen into `Config` and thawed back for edits.

Layering (last wins):
    runtime defaults → discovered config file(s) in the working directory →
    explicit ``--config`` files → CLI/API overrides.

Path semantics:
    - Paths declared in a config file are normalized against that config
      file's directory.
    - CLI/API paths are normalized against the invocation CWD.
    - A symlinked source resolves to its target, so the rename replaces the real
      document rather than the link.
    - An unset staging path derives to a hidden sibling of the source; an unset
      log path derives to ``result.txt`` next to the source.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any

from tokswap.config.io import (
    get_int_value_or_none,
    get_string_value_or_none,
    get_table_value,
    load_defaults_dict,
    load_toml_dict,
    to_toml,
)
from tokswap.config.keys import ArgKey, Toml
from tokswap.config.logging import get_logger
from tokswap.constants import (
    DEFAULT_HIGH_WATER_MARK,
    DEFAULT_LOG_NAME,
    DEFAULT_MATCH_TOKEN,
    DEFAULT_REPLACEMENT_TOKEN,
    DEFAULT_SOURCE_NAME,
    PYPROJECT_TOML_NAME,
    PYPROJECT_TOOL_SECTION,
    STAGING_SUFFIX,
    TOKSWAP_TOML_NAME,
)
from tokswap.core.errors import ConfigError

if TYPE_CHECKING:
    from collections.abc import Iterable

    from tokswap.config.io import TomlTable
    from tokswap.config.logging import TokswapLogger

# ArgsLike: generic mapping accepted by config loaders (works for CLI namespaces and API dicts).
ArgsLike = Mapping[str, Any]

logger: TokswapLogger = get_logger(__name__)


def _abs_path_from(raw: str | Path, base: Path) -> Path:
    """Return ``raw`` as an absolute path, interpreting relative paths against ``base``."""
    p = Path(raw).expanduser()
    return p if p.is_absolute() else (base / p).absolute()


# ------------------ Immutable runtime config ------------------


@dataclass(frozen=True, slots=True)
class Config:
    """Immutable runtime configuration for one TokSwap run.

    All paths are absolute. ``staging_path`` always lives in the same directory
    as ``source_path`` so the final rename stays on one volume.

    Attributes:
        source_path (Path): The document to transform in place.
        staging_path (Path): Temporary write target promoted over the source on success.
        log_path (Path): Where the audit record is written.
        match_token (str): Literal token to replace. Empty means "match nothing".
        replacement_token (str): Literal replacement.
        high_water_mark (int): Buffered bytes at which the staged sink reports saturation.
        config_files (tuple[Path, ...]): Config files that contributed to this snapshot.
    """

    source_path: Path
    staging_path: Path
    log_path: Path
    match_token: str = DEFAULT_MATCH_TOKEN
    replacement_token: str = DEFAULT_REPLACEMENT_TOKEN
    high_water_mark: int = DEFAULT_HIGH_WATER_MARK
    config_files: tuple[Path, ...] = ()

    def thaw(self) -> MutableConfig:
        """Return a mutable copy of this frozen config.

        The staging and log paths are carried over explicitly.
        """
        return MutableConfig(
            source_path=self.source_path,
            staging_path=self.staging_path,
            log_path=self.log_path,
            match_token=self.match_token,
            replacement_token=self.replacement_token,
            high_water_mark=self.high_water_mark,
            config_files=list(self.config_files),
        )

    @classmethod
    def from_defaults(cls) -> Config:
        """Return the runtime defaults resolved against the current directory."""
        return MutableConfig.from_defaults().freeze()

    def to_toml_dict(self) -> TomlTable:
        """Return this config in the TOML schema (as accepted by `MutableConfig.from_toml_dict`)."""
        return {
            Toml.SECTION_FILES: {
                Toml.KEY_SOURCE: str(self.source_path),
                Toml.KEY_STAGING: str(self.staging_path),
                Toml.KEY_LOG: str(self.log_path),
            },
            Toml.SECTION_TOKENS: {
                Toml.KEY_MATCH: self.match_token,
                Toml.KEY_REPLACEMENT: self.replacement_token,
            },
            Toml.SECTION_WRITER: {
                Toml.KEY_HIGH_WATER_MARK: self.high_water_mark,
            },
        }

    def to_toml(self) -> str:
        """Render this config as a TOML document."""
        return to_toml(self.to_toml_dict())


# -------------------------- Mutable builder --------------------------
@dataclass
class MutableConfig:
    """Mutable configuration used during discovery and merging.

    ``None`` means "not set by this layer"; `merge_with` only overrides fields
    the other layer set. `freeze` applies defaults, derives paths and validates.

    Attributes:
        source_path (Path | None): Absolute source path, if set.
        staging_path (Path | None): Absolute staging path, if set.
        log_path (Path | None): Absolute audit log path, if set.
        match_token (str | None): Literal token to replace.
        replacement_token (str | None): Literal replacement.
        high_water_mark (int | None): Sink saturation threshold in bytes.
        config_files (list[Path]): Config files merged into this builder, in order.
    """

    source_path: Path | None = None
    staging_path: Path | None = None
    log_path: Path | None = None
    match_token: str | None = None
    replacement_token: str | None = None
    high_water_mark: int | None = None
    config_files: list[Path] = field(default_factory=lambda: [])

    # ---------------------------- Build/freeze ----------------------------
    def freeze(self, *, cwd: Path | None = None) -> Config:
        """Freeze this mutable builder into an immutable `Config`.

        Args:
            cwd (Path | None): Directory used to resolve the default source path
                (defaults to the current working directory).

        Returns:
            Config: The validated runtime snapshot.

        Raises:
            ConfigError: If the resulting configuration is inconsistent.
        """
        base: Path = (cwd or Path.cwd()).absolute()
        source: Path = self.source_path or (base / DEFAULT_SOURCE_NAME)
        if source.is_symlink():
            source = source.resolve()
        staging: Path = self.staging_path or source.with_name(f".{source.name}{STAGING_SUFFIX}")
        log: Path = self.log_path or source.with_name(DEFAULT_LOG_NAME)

        match_token: str = (
            self.match_token if self.match_token is not None else DEFAULT_MATCH_TOKEN
        )
        replacement: str = (
            self.replacement_token
            if self.replacement_token is not None
            else DEFAULT_REPLACEMENT_TOKEN
        )
        hwm: int = (
            self.high_water_mark if self.high_water_mark is not None else DEFAULT_HIGH_WATER_MARK
        )

        if hwm <= 0:
            raise ConfigError(f"high_water_mark must be a positive integer, got {hwm}")
        if staging.parent != source.parent:
            raise ConfigError(
                f"Staging file {staging} must be in the same directory as the source {source}"
            )
        if staging == source:
            raise ConfigError(f"Staging file must differ from the source document ({source})")
        if log in (source, staging):
            raise ConfigError(f"Audit log {log} must differ from the source and staging files")
        if "\n" in match_token or "\r" in match_token:
            logger.warning(
                "Match token %r contains a line terminator and can never match a single line",
                match_token,
            )

        return Config(
            source_path=source,
            staging_path=staging,
            log_path=log,
            match_token=match_token,
            replacement_token=replacement,
            high_water_mark=hwm,
            config_files=tuple(self.config_files),
        )

    # --------------------------- Loaders/parsers --------------------------
    @classmethod
    def from_defaults(cls) -> MutableConfig:
        """Build a builder from the runtime defaults (no I/O).

        The default source name is kept relative: it resolves against the
        working directory at `freeze` time.
        """
        draft = cls.from_toml_dict(load_defaults_dict(), config_file=None)
        draft.source_path = None
        return draft

    @classmethod
    def from_toml_dict(
        cls,
        data: TomlTable,
        *,
        config_file: Path | None = None,
    ) -> MutableConfig:
        """Parse a TOML table (``tokswap.toml`` shape) into a builder.

        Args:
            data (TomlTable): Parsed TOML data.
            config_file (Path | None): File the data came from; relative paths
                resolve against its directory (or the CWD when None).

        Returns:
            MutableConfig: The parsed layer.

        Raises:
            ConfigError: If a section or value has the wrong type.
        """
        base: Path = config_file.parent.absolute() if config_file else Path.cwd().absolute()

        files_tbl: TomlTable = get_table_value(data, Toml.SECTION_FILES)
        tokens_tbl: TomlTable = get_table_value(data, Toml.SECTION_TOKENS)
        writer_tbl: TomlTable = get_table_value(data, Toml.SECTION_WRITER)

        def _path(key: str) -> Path | None:
            raw = get_string_value_or_none(files_tbl, key, section=Toml.SECTION_FILES)
            # Empty string means "unset / derive"
            return _abs_path_from(raw, base) if raw else None

        draft = cls(
            source_path=_path(Toml.KEY_SOURCE),
            staging_path=_path(Toml.KEY_STAGING),
            log_path=_path(Toml.KEY_LOG),
            match_token=get_string_value_or_none(
                tokens_tbl, Toml.KEY_MATCH, section=Toml.SECTION_TOKENS
            ),
            replacement_token=get_string_value_or_none(
                tokens_tbl, Toml.KEY_REPLACEMENT, section=Toml.SECTION_TOKENS
            ),
            high_water_mark=get_int_value_or_none(
                writer_tbl, Toml.KEY_HIGH_WATER_MARK, section=Toml.SECTION_WRITER
            ),
        )
        if config_file is not None:
            draft.config_files = [config_file]
        return draft

    @classmethod
    def from_toml_file(cls, path: Path) -> MutableConfig | None:
        """Load configuration from a single TOML file.

        Supports both ``tokswap.toml`` and ``pyproject.toml`` files, extracting
        the ``[tool.tokswap]`` section from the latter.

        Args:
            path (Path): Path to the TOML file.

        Returns:
            MutableConfig | None: The parsed layer, or None when a ``pyproject.toml``
                has no ``[tool.tokswap]`` section.

        Raises:
            ConfigError: If the file is unreadable or malformed.
        """
        logger.debug("Creating MutableConfig from TOML config: %s", path)
        toml_data: TomlTable = load_toml_dict(path)

        if path.name == PYPROJECT_TOML_NAME:
            tool: Any = toml_data.get("tool", {})
            section: Any = tool.get(PYPROJECT_TOOL_SECTION) if isinstance(tool, dict) else None
            if not section:
                logger.debug("[tool.%s] section missing in %s", PYPROJECT_TOOL_SECTION, path)
                return None
            if not isinstance(section, dict):
                raise ConfigError(f"[tool.{PYPROJECT_TOOL_SECTION}] must be a table in {path}")
            toml_data = section

        draft: MutableConfig = cls.from_toml_dict(toml_data, config_file=path.absolute())
        logger.debug("Generated MutableConfig: %s", draft)
        return draft

    @classmethod
    def discover_local_config_files(cls, start: Path) -> list[Path]:
        """Return config files found in ``start``, in merge order.

        ``pyproject.toml`` comes first and ``tokswap.toml`` second so that a
        later merge gives same-directory precedence to ``tokswap.toml``.
        """
        found: list[Path] = []
        for name in (PYPROJECT_TOML_NAME, TOKSWAP_TOML_NAME):
            candidate: Path = start / name
            if candidate.is_file():
                found.append(candidate)
        return found

    @classmethod
    def load_merged(
        cls,
        *,
        extra_config_files: Iterable[Path] = (),
        discover: bool = True,
        cwd: Path | None = None,
    ) -> MutableConfig:
        """Return defaults merged with discovered and explicit config files.

        Args:
            extra_config_files (Iterable[Path]): Explicit config files, merged in order.
            discover (bool): Whether to look for config files in ``cwd``.
            cwd (Path | None): Discovery directory (defaults to the CWD).

        Returns:
            MutableConfig: The merged builder; CLI overrides are applied separately
                via `apply_args`.
        """
        merged: MutableConfig = cls.from_defaults()
        candidates: list[Path] = []
        if discover:
            candidates.extend(cls.discover_local_config_files(cwd or Path.cwd()))
        candidates.extend(extra_config_files)

        for path in candidates:
            layer: MutableConfig | None = cls.from_toml_file(path)
            if layer is None:
                continue
            merged = merged.merge_with(layer)
            logger.info("Merged config layer from %s", path)
        return merged

    # ------------------------------- Merging -------------------------------
    def merge_with(self, other: MutableConfig) -> MutableConfig:
        """Return a new builder where fields set in ``other`` override this one.

        Args:
            other (MutableConfig): The higher-precedence layer.

        Returns:
            MutableConfig: The merged builder (neither input is mutated).
        """

        def _pick(mine: Any, theirs: Any) -> Any:
            return theirs if theirs is not None else mine

        return MutableConfig(
            source_path=_pick(self.source_path, other.source_path),
            staging_path=_pick(self.staging_path, other.staging_path),
            log_path=_pick(self.log_path, other.log_path),
            match_token=_pick(self.match_token, other.match_token),
            replacement_token=_pick(self.replacement_token, other.replacement_token),
            high_water_mark=_pick(self.high_water_mark, other.high_water_mark),
            config_files=[*self.config_files, *other.config_files],
        )

    def apply_args(self, args: ArgsLike, *, cwd: Path | None = None) -> MutableConfig:
        """Apply CLI/API overrides in place and return ``self``.

        Keys are listed in `ArgKey`; ``None`` values are ignored. Paths resolve
        against ``cwd`` (defaults to the current working directory).
        """
        base: Path = (cwd or Path.cwd()).absolute()

        source = args.get(ArgKey.SOURCE)
        if source is not None:
            self.source_path = _abs_path_from(source, base)
        staging = args.get(ArgKey.STAGING)
        if staging is not None:
            self.staging_path = _abs_path_from(staging, base)
        log = args.get(ArgKey.LOG)
        if log is not None:
            self.log_path = _abs_path_from(log, base)

        token = args.get(ArgKey.MATCH_TOKEN)
        if token is not None:
            self.match_token = str(token)
        replacement = args.get(ArgKey.REPLACEMENT_TOKEN)
        if replacement is not None:
            self.replacement_token = str(replacement)
        hwm = args.get(ArgKey.HIGH_WATER_MARK)
        if hwm is not None:
            self.high_water_mark = int(hwm)
        return self
