"""
Exception hierarchy for autoeq-camilladsp.

Parse and build errors are structural: they abort the current configuration
and are reported verbatim. Directory lookups that merely find suggestions or
nothing are *not* errors; see directory.py.
"""


class AutoEqCamillaError(Exception):
    """Base class for all errors raised by this package."""
    pass


class EqParseError(AutoEqCamillaError):
    """Raised when correction text cannot be parsed."""
    pass


class MalformedHeaderError(EqParseError):
    """Raised when the preamp header line has no numeric gain."""

    def __init__(self, line: str, detail: str = "expected '<label> <gain> ...'"):
        self.line = line
        self.detail = detail
        super().__init__(f"Malformed header line {line!r}: {detail}")


class MalformedBandLineError(EqParseError):
    """Raised when a filter line does not match the band grammar."""

    def __init__(self, line_number: int, line: str, detail: str):
        self.line_number = line_number
        self.line = line
        self.detail = detail
        super().__init__(f"Malformed band line {line_number} ({line!r}): {detail}")


class ConfigurationError(AutoEqCamillaError):
    """Raised when a configuration cannot be assembled."""
    pass


class NameCollisionError(ConfigurationError):
    """Raised when two filters (or two mixers) would share a name."""

    def __init__(self, name: str, kind: str = "filter"):
        self.name = name
        self.kind = kind
        super().__init__(f"Duplicate {kind} name: {name!r}")


class UnresolvedReferenceError(ConfigurationError):
    """Raised when a pipeline step names a filter or mixer that does not exist."""

    def __init__(self, name: str, kind: str = "filter"):
        self.name = name
        self.kind = kind
        super().__init__(f"Pipeline references unknown {kind}: {name!r}")


class DirectoryNotFoundError(AutoEqCamillaError):
    """Raised when a required catalog entry could not be found."""

    def __init__(self, query: str):
        self.query = query
        super().__init__(f"No entry matching {query!r} found in the AutoEq database")


class DocumentIOError(AutoEqCamillaError):
    """Raised when a configuration document cannot be read or written."""
    pass


class FetchError(AutoEqCamillaError):
    """Raised when an HTTP request fails."""

    def __init__(self, url: str, cause: Exception):
        self.url = url
        self.cause = cause
        super().__init__(f"Failed to fetch {url}: {cause}")


class PresetDataError(AutoEqCamillaError):
    """Raised when bundled preset data is missing or malformed."""
    pass


class SettingsError(AutoEqCamillaError, ValueError):
    """Raised when an environment override has an unusable value."""
    pass
