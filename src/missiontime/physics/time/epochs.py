"""Defines the named :class:`.EpochCatalog` and the symbolic :class:`.EpochRelativeTime` instant.

An epoch-relative time such as ``LAUNCH+00:05:00`` carries an epoch name and a
:class:`.Duration` offset while staying numerically identical to its absolute equivalent: its tic
count is resolved against the catalog when it is constructed and never re-resolved afterwards.

Catalogs are persisted in the context variable file (CVF) text format:

.. code-block:: text

    CCSD3ZF0000100000001NJPL3KS0L015$$MARK$$;
    DATA_SET_ID = CONTEXT_VARIABLE_FILE;
    CCSD3RE00000$$MARK$$NJPL3IF0M02300000001;
    $$EOH

    /LAUNCH
    "const" 2020-001T00:00:00.000000

    $$EOF
"""

from __future__ import annotations

# Standard Library Imports
import re
from pathlib import Path
from typing import TYPE_CHECKING

# Local Imports
from ...common.exceptions import EpochCatalogFormatError, TimeFormatError, UnknownEpochError
from ...common.logger import missiontimeLogDebug, missiontimeLogError, missiontimeLogInfo
from .calendar import parseCalendarString
from .context import resolveContext
from .duration import DURATION_REGEX, Duration
from .instant import Instant, Time

# Type Checking Imports
if TYPE_CHECKING:
    # Standard Library Imports
    from collections.abc import Iterable, Iterator, Mapping
    from typing import Final

    # Local Imports
    from .context import TimeContext


EPOCH_NAME_PATTERN: Final[re.Pattern] = re.compile(r"^\w+$")

EPOCH_RELATIVE_PATTERN: Final[re.Pattern] = re.compile(
    rf"^\s*(?P<epoch>\w+)\s*(?P<relative_sign>[+-])\s*(?P<offset>{DURATION_REGEX})\s*$",
)
"""``re.Pattern``: ``<epoch name> [+-] <duration>``; the sign composes with the duration's own sign."""

EPOCH_RELATIVE_GRAMMAR: Final[str] = "epoch-relative form EPOCHNAME[+-][DDD'T']HH:MM:SS[.f]"

CVF_PREAMBLE: Final[str] = "CCSD3ZF0000100000001NJPL3KS0L015$$MARK$$;\n"
CVF_HEADER_END: Final[str] = "CCSD3RE00000$$MARK$$NJPL3IF0M02300000001;\n$$EOH\n\n"
CVF_FOOTER: Final[str] = "$$EOF\n\n"
CVF_VALUE_TOKEN: Final[str] = '"const" '

DEFAULT_CVF_HEADER: Final[str] = "DATA_SET_ID = CONTEXT_VARIABLE_FILE;\n"
"""``str``: free-text header block written when none is supplied."""

CVF_PRECISION: Final[int] = 6
"""``int``: fractional second digits of every value written to a CVF."""


class EpochCatalog:
    """Mutable mapping of epoch names to instants.

    Values may themselves be :class:`.EpochRelativeTime` instances, so epochs can be chained. A
    catalog is owned by a :class:`.TimeContext`; the default context's catalog is the process-wide
    one.
    """

    def __init__(self, epochs: Mapping[str, Instant] | None = None):
        """Initialize the catalog.

        Args:
            epochs (``Mapping[str, Instant]``, optional): initial entries
        """
        self._epochs: dict[str, Instant] = {}
        if epochs:
            self.replace(epochs)

    @staticmethod
    def _validateName(name: str):
        if not isinstance(name, str) or EPOCH_NAME_PATTERN.match(name) is None:
            missiontimeLogError(f"Invalid epoch name: {name!r}")
            raise TimeFormatError(name, "epoch name of word characters [A-Za-z0-9_]")

    def add(self, name: str, instant: Instant):
        """Define (or silently redefine) the epoch `name`.

        Raises:
            TimeFormatError: `name` isn't made of word characters
        """
        self._validateName(name)
        self._epochs[name] = instant

    def remove(self, name: str):
        """Remove the epoch `name`; removing an undefined name does nothing.

        Entries defined relative to `name`, like any existing :class:`.EpochRelativeTime`, keep
        their resolved tics. Only new constructions that reference the removed name fail.
        """
        if self._epochs.pop(name, None) is not None:
            missiontimeLogDebug(f"Removed epoch {name!r}")

    def lookup(self, name: str) -> Instant:
        """Return the instant of the epoch `name`.

        Raises:
            UnknownEpochError: `name` isn't defined; the message lists every defined name
        """
        try:
            return self._epochs[name]
        except KeyError:
            err = UnknownEpochError(name, self.names())
            missiontimeLogError(str(err))
            raise err from None

    def isDefined(self, name: str) -> bool:
        """Return whether the epoch `name` is defined."""
        return name in self._epochs

    def replace(self, epochs: Mapping[str, Instant]):
        """Replace the whole catalog; nothing changes if any name is invalid."""
        for name in epochs:
            self._validateName(name)
        self._epochs = dict(epochs)

    def names(self) -> tuple[str, ...]:
        """Return the defined epoch names, sorted."""
        return tuple(sorted(self._epochs))

    def items(self) -> list[tuple[str, Instant]]:
        """Return ``(name, instant)`` pairs, sorted by name."""
        return sorted(self._epochs.items())

    def __contains__(self, name: object) -> bool:
        """Alias of :meth:`.isDefined`."""
        return name in self._epochs

    def __iter__(self) -> Iterator[str]:
        """Iterate over the defined epoch names, sorted."""
        return iter(self.names())

    def __len__(self) -> int:
        """Return the number of defined epochs."""
        return len(self._epochs)

    def toCVF(
        self,
        names: Iterable[str] | None = None,
        header: str = DEFAULT_CVF_HEADER,
        sort_by_time: bool = True,
    ) -> str:
        """Render epochs in the CVF text format.

        Every value, epoch-relative ones included, is written in day-of-year form with six
        fractional second digits.

        Args:
            names (``Iterable[str]``, optional): epochs to write. Defaults to every defined epoch.
            header (``str``, optional): free-text header block, written verbatim
            sort_by_time (``bool``, optional): order entries by instant, or by name when ``False``

        Raises:
            UnknownEpochError: a requested name isn't defined

        Returns:
            ``str``: CVF text
        """
        if names is None:
            names = self._epochs
        entries = []
        for name in names:
            if name not in self._epochs:
                err = UnknownEpochError(name, self.names())
                missiontimeLogError(f"Cannot write epoch to CVF: {err}")
                raise err
            entries.append((name, self._epochs[name]))
        entries.sort(key=(lambda entry: entry[1]) if sort_by_time else (lambda entry: entry[0]))

        blocks = [CVF_PREAMBLE, header, CVF_HEADER_END]
        for name, instant in entries:
            blocks.append(f"/{name}\n{CVF_VALUE_TOKEN}{instant.toUTC(CVF_PRECISION)}\n\n")
        blocks.append(CVF_FOOTER)
        return "".join(blocks)

    def write(
        self,
        file_name: str | Path,
        names: Iterable[str] | None = None,
        header: str = DEFAULT_CVF_HEADER,
        sort_by_time: bool = True,
    ):
        """Write epochs to a CVF file; see :meth:`.toCVF` for the arguments."""
        text = self.toCVF(names=names, header=header, sort_by_time=sort_by_time)
        with open(file_name, "w", encoding="utf-8") as cvf_file:
            cvf_file.write(text)
        missiontimeLogInfo(f"Wrote epoch catalog to {file_name}")

    def read(self, file_name: str | Path):
        """Add every epoch defined in a CVF file; see :meth:`.loadCVF`."""
        text = Path(file_name).read_text(encoding="utf-8")
        self.loadCVF(text, source=str(file_name))
        missiontimeLogInfo(f"Read epoch catalog from {file_name}")

    def loadCVF(self, text: str, source: str = "<string>"):
        """Add every epoch defined in CVF text, overwriting existing names.

        A line starting with ``/`` opens an epoch name and the following ``"const" <value>`` line
        closes it. Values are normally absolute; epoch-relative values are also accepted and are
        resolved against this catalog once every absolute value is known, so their order in the
        file doesn't matter. The catalog is left untouched if any entry fails.

        Args:
            text (``str``): CVF text
            source (``str``, optional): name of the text's origin, used in error messages

        Raises:
            EpochCatalogFormatError: the structure is malformed, or a value can't be resolved
        """
        pending_name = None
        definitions: list[tuple[str, str]] = []
        for number, line in enumerate(text.splitlines(), start=1):
            clean_line = line.strip()
            if not clean_line:
                continue
            if clean_line.startswith("/"):
                if pending_name is not None:
                    raise _formatError(source, number, f"epoch {pending_name!r} has no value line")
                pending_name = clean_line[1:].strip()
            elif clean_line.startswith(CVF_VALUE_TOKEN):
                if pending_name is None:
                    raise _formatError(source, number, "value line is not preceded by a /<epoch name> line")
                definitions.append((pending_name, clean_line[len(CVF_VALUE_TOKEN) :].strip()))
                pending_name = None
        if pending_name is not None:
            raise _formatError(source, "end", f"epoch {pending_name!r} has no value line")

        previous = dict(self._epochs)
        try:
            self._loadDefinitions(definitions, source)
        except (EpochCatalogFormatError, TimeFormatError):
            self._epochs = previous
            raise
        missiontimeLogDebug(f"Loaded {len(definitions)} epochs from {source}")

    def _loadDefinitions(self, definitions: list[tuple[str, str]], source: str):
        relative = []
        for name, value in definitions:
            try:
                self.add(name, Time.fromTics(*parseCalendarString(value)))
            except TimeFormatError:
                if EPOCH_RELATIVE_PATTERN.match(value) is None:
                    raise _formatError(source, name, f"value {value!r} is neither absolute nor relative") from None
                relative.append((name, value))

        # Resolve chains in dependency order, whatever the file order.
        while relative:
            unresolved = []
            for name, value in relative:
                if EPOCH_RELATIVE_PATTERN.match(value).group("epoch") in self:
                    self.add(name, EpochRelativeTime(value, catalog=self))
                else:
                    unresolved.append((name, value))
            if len(unresolved) == len(relative):
                names = ", ".join(name for name, _ in unresolved)
                raise _formatError(source, names, "epoch-relative values reference undefined epochs")
            relative = unresolved


def _formatError(source: str, where, detail: str) -> EpochCatalogFormatError:
    msg = (
        f"Input CVF {source} is not formatted correctly ({where}): {detail}. Epoch names must be "
        f'prefaced by / with a following line containing the epoch value prefaced by "const"'
    )
    missiontimeLogError(msg)
    return EpochCatalogFormatError(msg)


def _resolveCatalog(context: TimeContext | None, catalog: EpochCatalog | None) -> EpochCatalog:
    return resolveContext(context).epochs if catalog is None else catalog


class EpochRelativeTime(Instant):
    """Instant expressed as a named epoch plus a :class:`.Duration` offset.

    Arithmetic with a :class:`.Duration` keeps the epoch name; use ``Time(relative)`` to obtain a
    plain absolute instant.

    .. code-block:: python

        catalog.add("LAUNCH", Time("2020-001T00:00:00"))
        burn = EpochRelativeTime("LAUNCH + 00:05:00")
        assert burn == Time("2020-001T00:05:00")
        assert str(burn + Duration("00:01:00")).startswith("LAUNCH+00:06:00")
    """

    __slots__ = ("_epoch_name", "_offset", "_catalog")

    def __init__(self, text: str, context: TimeContext | None = None, catalog: EpochCatalog | None = None):
        """Parse ``<epoch name> [+-] <duration>``, e.g. ``LAUNCH+00:05:00`` or ``TEST - 1T00:00:00``.

        Args:
            text (``str``): epoch-relative string
            context (:class:`.TimeContext`, optional): context whose catalog defines the epoch
            catalog (:class:`.EpochCatalog`, optional): catalog overriding the context's

        Raises:
            TimeFormatError: `text` doesn't match the epoch-relative grammar
            UnknownEpochError: the epoch isn't defined
        """
        match = EPOCH_RELATIVE_PATTERN.match(text)
        if match is None:
            missiontimeLogError(f"Could not parse epoch-relative time string: {text!r}")
            raise TimeFormatError(text, EPOCH_RELATIVE_GRAMMAR)

        offset = Duration(match.group("offset"))
        if match.group("relative_sign") == "-":
            offset = -offset
        self._resolve(match.group("epoch"), offset, _resolveCatalog(context, catalog))

    def _resolve(self, epoch_name: str, offset: Duration, catalog: EpochCatalog):
        epoch = catalog.lookup(epoch_name)
        self._epoch_name = epoch_name
        self._offset = offset
        self._catalog = catalog
        self._tics = epoch.tics + offset.tics
        self._leap = False

    @classmethod
    def fromEpoch(
        cls,
        epoch_name: str,
        offset: Duration,
        context: TimeContext | None = None,
        catalog: EpochCatalog | None = None,
    ) -> EpochRelativeTime:
        """Create an epoch-relative time from an epoch name and an offset.

        Raises:
            UnknownEpochError: the epoch isn't defined
        """
        relative = cls.__new__(cls)
        relative._resolve(epoch_name, offset, _resolveCatalog(context, catalog))  # noqa: SLF001
        return relative

    @classmethod
    def fromAbsolute(
        cls,
        instant: Instant,
        epoch_name: str,
        context: TimeContext | None = None,
        catalog: EpochCatalog | None = None,
    ) -> EpochRelativeTime:
        """Express `instant` relative to the epoch `epoch_name`.

        Raises:
            UnknownEpochError: the epoch isn't defined
        """
        catalog = _resolveCatalog(context, catalog)
        offset = Duration.fromTics(instant.tics - catalog.lookup(epoch_name).tics)
        return cls.fromEpoch(epoch_name, offset, catalog=catalog)

    @property
    def epoch_name(self) -> str:
        """``str``: name of the epoch this instant is relative to."""
        return self._epoch_name

    @property
    def offset(self) -> Duration:
        """:class:`.Duration`: signed offset from the epoch."""
        return self._offset

    def add(self, duration: Duration, context: TimeContext | None = None) -> EpochRelativeTime:
        """Return the epoch-relative time with the same epoch and the offset shifted by `duration`.

        Without a `context` the epoch is looked up in the catalog this instance was resolved
        against; with one, in that context's catalog. When the context enables
        ``use_service_math`` the shift is applied on the service's atomic (TAI) scale like
        :meth:`.Time.add`, and the offset follows the resulting leap-free tic count.

        Raises:
            UnknownEpochError: the epoch has been removed since this instance was created
        """
        catalog = self._catalog if context is None else None
        if not resolveContext(context).defaults.use_service_math:
            return EpochRelativeTime.fromEpoch(
                self._epoch_name,
                self._offset + duration,
                context=context,
                catalog=catalog,
            )

        atomic = Time(self).add(duration, context=context)
        shifted = EpochRelativeTime.fromEpoch(
            self._epoch_name,
            self._offset + Duration.fromTics(atomic.tics - self._tics),
            context=context,
            catalog=catalog,
        )
        shifted._leap = atomic.leap  # noqa: SLF001
        return shifted

    def toString(self, precision: int | None = None, context: TimeContext | None = None) -> str:
        """Render ``name+offset`` or ``name-offset``, the offset magnitude at `precision` digits."""
        sign = "+" if self._offset.tics >= 0 else "-"
        return f"{self._epoch_name}{sign}{abs(self._offset).toString(precision, context=context)}"

    def __str__(self) -> str:
        """Render the symbolic form with the default output precision."""
        return self.toString()

    def __repr__(self) -> str:
        """Render the symbolic form at full precision."""
        return f"EpochRelativeTime({self.toString(8)!r})"


def parseTime(text: str, context: TimeContext | None = None, catalog: EpochCatalog | None = None) -> Instant:
    """Parse an absolute :class:`.Time` when possible, otherwise an :class:`.EpochRelativeTime`.

    Raises:
        TimeFormatError: `text` is neither an absolute nor an epoch-relative time
        UnknownEpochError: `text` is epoch-relative but its epoch isn't defined
    """
    try:
        return Time.fromTics(*parseCalendarString(text))
    except TimeFormatError:
        pass

    try:
        return EpochRelativeTime(text, context=context, catalog=catalog)
    except TimeFormatError as err:
        raise TimeFormatError(
            text,
            "calendar or epoch-relative form",
            "could not be parsed into either an absolute or relative time",
        ) from err
