# topmark:header:start
#
#   project      : CQFormat
#   file         : model.py
#   file_relpath : src/cqformat/config/model.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Configuration model and merge policy.

This module defines:
    - `Config`: an immutable runtime snapshot used by the `format` command.
    - `MutableConfig`: a mutable builder used during discovery and merging; it
      can be frozen into `Config` and thawed back for edits.

Layers (lowest to highest precedence):
    1) Runtime defaults (`cqformat.config.io.load_defaults_dict`)
    2) Project configs discovered upward from the anchor directory,
       root-most first; within a directory ``pyproject.toml`` then ``cqformat.toml``
    3) Extra config files passed via ``--config``, in the given order
    4) CLI arguments (`MutableConfig.apply_cli_args`)

Unset fields are ``None`` in the builder and mean "inherit". Invalid values are
recorded in the builder's `DiagnosticLog` and otherwise ignored; only an unknown
output format is fatal, when the builder is frozen.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any, cast

from cqformat.config.io import (
    check_unknown_keys,
    get_bool_value_or_none_checked,
    get_int_value_or_none_checked,
    get_string_list_value_or_none_checked,
    get_string_value_or_none_checked,
    get_table_value,
    get_table_value_checked,
    load_defaults_dict,
    load_toml_dict,
)
from cqformat.config.keys import Toml
from cqformat.config.logging import get_logger
from cqformat.constants import ALL_RULE_ATTRIBUTES, CONFIG_FILE_NAME, PYPROJECT_FILE_NAME
from cqformat.core.diagnostics import Diagnostic, DiagnosticLog
from cqformat.core.formats import OutputFormat, parse_output_format
from cqformat.core.keys import ArgKey

if TYPE_CHECKING:
    from cqformat.config.io import TomlTable
    from cqformat.config.logging import CQFormatLogger

# ArgsLike: generic mapping accepted by config loaders (CLI namespaces and API dicts).
ArgsLike = Mapping[str, Any]

logger: CQFormatLogger = get_logger(__name__)

CLI_OVERRIDE_STR = "<CLI overrides>"


def _normalize_rule_attributes(names: Iterable[str] | None) -> frozenset[str] | None:
    """Return the attribute names to keep, or None for all of them.

    An empty selection, or one containing ``"all"``, selects every attribute.
    """
    if names is None:
        return None
    selected: frozenset[str] = frozenset(n.strip() for n in names if n.strip())
    if not selected or ALL_RULE_ATTRIBUTES in selected:
        return None
    return selected


# ------------------ Immutable runtime config ------------------


@dataclass(frozen=True, slots=True)
class Config:
    """Immutable runtime configuration for CQFormat.

    Attributes:
        output_format: Wire format of the encoded result.
        include_configurations: Emit configuration checksums (full result shape).
        include_default_values: Emit attributes that were not explicitly specified.
        rule_attributes: Attribute names to emit, or None for all.
        sort_by_label: Sort records by target label before encoding.
        jobs: Number of producer threads.
        config_files: Config sources that contributed, in merge order.
        diagnostics: Warnings or errors collected while loading and merging.
    """

    output_format: OutputFormat
    include_configurations: bool
    include_default_values: bool
    rule_attributes: frozenset[str] | None
    sort_by_label: bool
    jobs: int
    config_files: tuple[str, ...] = ()
    diagnostics: tuple[Diagnostic, ...] = ()

    @property
    def has_errors(self) -> bool:
        """Return True if an error diagnostic was recorded."""
        return DiagnosticLog.from_iterable(self.diagnostics).has_error()

    def to_toml_dict(self) -> TomlTable:
        """Return this config as a TOML-compatible dict (``None`` entries omitted)."""
        rule_attributes: list[str] = (
            sorted(self.rule_attributes)
            if self.rule_attributes is not None
            else [ALL_RULE_ATTRIBUTES]
        )
        return {
            Toml.SECTION_OUTPUT: {
                Toml.KEY_FORMAT: self.output_format.value,
                Toml.KEY_INCLUDE_CONFIGURATIONS: self.include_configurations,
                Toml.KEY_INCLUDE_DEFAULT_VALUES: self.include_default_values,
                Toml.KEY_RULE_ATTRIBUTES: rule_attributes,
                Toml.KEY_SORT_BY_LABEL: self.sort_by_label,
            },
            Toml.SECTION_RUN: {
                Toml.KEY_JOBS: self.jobs,
            },
        }

    def thaw(self) -> MutableConfig:
        """Return a mutable copy of this frozen config.

        Mirrors `MutableConfig.freeze`. Prefer thaw -> edit -> freeze rather than
        rebuilding a runtime `Config` by hand.
        """
        return MutableConfig(
            output_format=self.output_format.value,
            include_configurations=self.include_configurations,
            include_default_values=self.include_default_values,
            rule_attributes=(
                sorted(self.rule_attributes) if self.rule_attributes is not None else None
            ),
            sort_by_label=self.sort_by_label,
            jobs=self.jobs,
            config_files=list(self.config_files),
            diagnostics=DiagnosticLog(items=list(self.diagnostics)),
        )


# -------------------------- Mutable builder --------------------------
@dataclass
class MutableConfig:
    """Mutable configuration used during discovery and merging.

    Attributes:
        output_format: Raw format name; validated by `freeze`.
        include_configurations: None = inherit.
        include_default_values: None = inherit.
        rule_attributes: Attribute names (``["all"]`` or empty = all); None = inherit.
        sort_by_label: None = inherit.
        jobs: None = inherit.
        config_files: Paths or identifiers of the sources merged so far.
        diagnostics: Warnings or errors encountered while loading or merging.
    """

    output_format: str | None = None
    include_configurations: bool | None = None
    include_default_values: bool | None = None
    rule_attributes: list[str] | None = None
    sort_by_label: bool | None = None
    jobs: int | None = None

    # Provenance
    config_files: list[str] = field(default_factory=lambda: [])

    diagnostics: DiagnosticLog = field(default_factory=DiagnosticLog)

    # ---------------------------- Build/freeze ----------------------------
    def freeze(self) -> Config:
        """Freeze this builder into an immutable `Config`.

        Unset fields take the runtime defaults.

        Raises:
            UnknownFormatError: If ``output_format`` names no supported format.
        """
        defaults: MutableConfig = MutableConfig.from_toml_dict(load_defaults_dict())
        resolved: MutableConfig = defaults.merge_with(self)

        return Config(
            output_format=parse_output_format(resolved.output_format or OutputFormat.JSON),
            include_configurations=bool(resolved.include_configurations),
            include_default_values=bool(resolved.include_default_values),
            rule_attributes=_normalize_rule_attributes(resolved.rule_attributes),
            sort_by_label=bool(resolved.sort_by_label),
            jobs=resolved.jobs or 1,
            config_files=tuple(self.config_files),
            diagnostics=tuple(self.diagnostics),
        )

    # --------------------------- Loaders/parsers --------------------------
    @classmethod
    def from_defaults(cls) -> MutableConfig:
        """Return a builder populated with the runtime defaults."""
        return cls.from_toml_dict(load_defaults_dict())

    @classmethod
    def from_toml_dict(
        cls,
        data: TomlTable,
        config_file: Path | None = None,
    ) -> MutableConfig:
        """Create a draft config from a parsed TOML dict.

        Args:
            data: The parsed TOML data (already unwrapped from ``[tool.cqformat]``).
            config_file: Optional path of the source file, for provenance and messages.

        Returns:
            The resulting draft; invalid values are left unset and reported in
            its diagnostics.
        """
        draft: MutableConfig = cls()
        source: str = str(config_file) if config_file else "<defaults>"
        if config_file is not None:
            draft.config_files = [str(config_file)]

        diags: DiagnosticLog = draft.diagnostics
        check_unknown_keys(
            {k: v for k, v in data.items() if k != Toml.KEY_ROOT},
            frozenset(Toml.KNOWN_KEYS),
            where=source,
            diagnostics=diags,
        )

        output_tbl: TomlTable = get_table_value_checked(
            data, Toml.SECTION_OUTPUT, diagnostics=diags
        )
        logger.trace("TOML [output]: %s", output_tbl)
        run_tbl: TomlTable = get_table_value_checked(data, Toml.SECTION_RUN, diagnostics=diags)
        logger.trace("TOML [run]: %s", run_tbl)

        for section, tbl in ((Toml.SECTION_OUTPUT, output_tbl), (Toml.SECTION_RUN, run_tbl)):
            check_unknown_keys(
                tbl, Toml.KNOWN_KEYS[section], where=f"{source} [{section}]", diagnostics=diags
            )

        out_where: str = f"[{Toml.SECTION_OUTPUT}]"
        draft.output_format = get_string_value_or_none_checked(
            output_tbl, Toml.KEY_FORMAT, where=out_where, diagnostics=diags
        )
        draft.include_configurations = get_bool_value_or_none_checked(
            output_tbl, Toml.KEY_INCLUDE_CONFIGURATIONS, where=out_where, diagnostics=diags
        )
        draft.include_default_values = get_bool_value_or_none_checked(
            output_tbl, Toml.KEY_INCLUDE_DEFAULT_VALUES, where=out_where, diagnostics=diags
        )
        draft.rule_attributes = get_string_list_value_or_none_checked(
            output_tbl, Toml.KEY_RULE_ATTRIBUTES, where=out_where, diagnostics=diags
        )
        draft.sort_by_label = get_bool_value_or_none_checked(
            output_tbl, Toml.KEY_SORT_BY_LABEL, where=out_where, diagnostics=diags
        )

        jobs: int | None = get_int_value_or_none_checked(
            run_tbl, Toml.KEY_JOBS, where=f"[{Toml.SECTION_RUN}]", diagnostics=diags
        )
        if jobs is not None and jobs < 1:
            diags.add_warning(f"[{Toml.SECTION_RUN}].{Toml.KEY_JOBS} must be >= 1, got {jobs}")
            jobs = None
        draft.jobs = jobs

        return draft

    @classmethod
    def from_toml_file(cls, path: Path) -> MutableConfig | None:
        """Load configuration from a single TOML file.

        Supports ``cqformat.toml`` and ``pyproject.toml`` (``[tool.cqformat]``).

        Returns:
            The draft, or None when a ``pyproject.toml`` has no ``[tool.cqformat]``.
            Unreadable files yield an empty draft carrying an error diagnostic.
        """
        logger.debug("Creating MutableConfig from TOML config: %s", path)

        diagnostics = DiagnosticLog()
        toml_data: TomlTable = load_toml_dict(path, diagnostics)

        if path.name == PYPROJECT_FILE_NAME and not diagnostics.has_error():
            tool_section: TomlTable = get_table_value(
                get_table_value(toml_data, "tool"), "cqformat"
            )
            if not tool_section:
                logger.debug("[tool.cqformat] section missing in %s", path)
                return None
            toml_data = tool_section

        draft: MutableConfig = cls.from_toml_dict(toml_data, config_file=path)
        diagnostics.extend(draft.diagnostics)
        draft.diagnostics = diagnostics
        logger.debug("Generated MutableConfig: %s", draft)
        return draft

    @classmethod
    def discover_local_config_files(cls, start: Path) -> list[Path]:
        """Return config files discovered by walking upward from ``start``.

        Files are returned root-most first, nearest last. Within a directory
        ``pyproject.toml`` comes before ``cqformat.toml`` so the latter wins a
        last-wins merge. A config setting ``root = true`` stops the walk after
        its directory.
        """
        per_dir: list[list[Path]] = []
        cur: Path = start.resolve()
        if cur.is_file():
            cur = cur.parent

        while True:
            root_stop_here = False
            dir_entries: list[Path] = []
            for name in (PYPROJECT_FILE_NAME, CONFIG_FILE_NAME):
                p: Path = cur / name
                if not p.is_file():
                    continue
                data: TomlTable = load_toml_dict(p)
                if name == PYPROJECT_FILE_NAME:
                    data = get_table_value(get_table_value(data, "tool"), "cqformat")
                    if not data:
                        continue
                dir_entries.append(p)
                logger.debug("Discovered config file: %s", p)
                if data.get(Toml.KEY_ROOT) is True:
                    root_stop_here = True

            if dir_entries:
                per_dir.append(dir_entries)

            parent: Path = cur.parent
            if parent == cur:
                break
            if root_stop_here:
                logger.debug("Stopping upward config discovery at %s due to root=true", cur)
                break
            cur = parent

        ordered: list[Path] = []
        for dir_list in reversed(per_dir):
            ordered.extend(dir_list)
        return ordered

    @classmethod
    def load_merged(
        cls,
        *,
        anchor: Path | None = None,
        extra_config_files: Iterable[Path] | None = None,
        no_config: bool = False,
    ) -> MutableConfig:
        """Discover and merge configuration layers into a draft.

        Args:
            anchor: Directory (or file) where upward discovery starts; CWD if None.
            extra_config_files: Files merged after discovery, in the given order.
            no_config: Skip discovery (extra files are still merged).

        Returns:
            A draft ready to receive CLI overrides and be frozen.
        """
        draft: MutableConfig = cls.from_defaults()

        if not no_config:
            for cfg_path in cls.discover_local_config_files(anchor or Path.cwd()):
                mc: MutableConfig | None = cls.from_toml_file(cfg_path)
                if mc is not None:
                    draft = draft.merge_with(mc)

        for extra in extra_config_files or ():
            mc = cls.from_toml_file(Path(extra))
            if mc is None:
                draft.diagnostics.add_error(f"[tool.cqformat] section missing in {extra}")
                continue
            draft = draft.merge_with(mc)

        return draft

    # ------------------------------- Merging -------------------------------
    def merge_with(self, other: MutableConfig) -> MutableConfig:
        """Return a new draft where values set in ``other`` override this draft."""

        def pick(mine: Any, theirs: Any) -> Any:
            return theirs if theirs is not None else mine

        return MutableConfig(
            output_format=pick(self.output_format, other.output_format),
            include_configurations=pick(
                self.include_configurations, other.include_configurations
            ),
            include_default_values=pick(
                self.include_default_values, other.include_default_values
            ),
            rule_attributes=pick(self.rule_attributes, other.rule_attributes),
            sort_by_label=pick(self.sort_by_label, other.sort_by_label),
            jobs=pick(self.jobs, other.jobs),
            config_files=self.config_files + other.config_files,
            diagnostics=DiagnosticLog(items=[*self.diagnostics, *other.diagnostics]),
        )

    def apply_cli_args(self, args: ArgsLike) -> MutableConfig:
        """Apply overrides from a parsed arguments mapping (CLI or API).

        Keys are `cqformat.core.keys.ArgKey` names; missing keys or ``None``
        values leave the field untouched. Discovery flags (``--config``,
        ``--no-config``) are handled by `load_merged`.

        Returns:
            This builder, for chaining.
        """
        logger.debug("Applying CLI arguments to MutableConfig: %s", args)
        self.config_files.append(CLI_OVERRIDE_STR)

        output_format: object = args.get(ArgKey.OUTPUT_FORMAT)
        if output_format is not None:
            self.output_format = (
                output_format.value
                if isinstance(output_format, OutputFormat)
                else str(output_format)
            )
        for key in (
            ArgKey.INCLUDE_CONFIGURATIONS,
            ArgKey.INCLUDE_DEFAULT_VALUES,
            ArgKey.SORT_BY_LABEL,
        ):
            if args.get(key) is not None:
                setattr(self, key, bool(args[key]))

        rule_attributes: object = args.get(ArgKey.RULE_ATTRIBUTES)
        if rule_attributes:
            self.rule_attributes = [str(n) for n in cast("Iterable[object]", rule_attributes)]

        jobs: object = args.get(ArgKey.JOBS)
        if jobs is not None:
            if isinstance(jobs, int) and jobs >= 1:
                self.jobs = jobs
            else:
                self.diagnostics.add_warning(f"--jobs must be >= 1, got {jobs!r}; ignored")
        return self
