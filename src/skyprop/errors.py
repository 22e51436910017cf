"""Exception hierarchy for query parsing, resolution and evaluation."""

from __future__ import annotations


class SkyQueryError(Exception):
    """Base class for every failure that terminates a query."""


class ParseError(SkyQueryError, ValueError):
    """A date, angle, location or ephemeris token could not be parsed."""

    def __init__(self, token: str, reason: str) -> None:
        self.token = token
        self.reason = reason
        super().__init__(f'{reason}: {token!r}')


class ResolutionError(SkyQueryError, LookupError):
    """An object name or property alias is not known."""


class UnknownObjectError(ResolutionError):
    """Object name not in the catalog."""

    def __init__(
        self, name: str, suggestions: list[str], valid_names: list[str]
    ) -> None:
        self.name = name
        self.suggestions = suggestions
        self.valid_names = valid_names
        message = f'Unknown object {name!r}'
        if suggestions:
            message += f'; did you mean one of: {", ".join(suggestions)}?'
        super().__init__(message)


class UnknownPropertyError(ResolutionError):
    """Property alias not in the registry."""

    def __init__(self, alias: str, suggestions: list[str]) -> None:
        self.alias = alias
        self.suggestions = suggestions
        message = f'Unknown property {alias!r}'
        if suggestions:
            message += f'; did you mean one of: {", ".join(suggestions)}?'
        super().__init__(message)


class RequirementError(SkyQueryError):
    """A property needs something the query does not supply."""


class UnsupportedPropertyError(RequirementError):
    """A property is undefined for the kind of object queried."""

    def __init__(self, prop: str, kind: str, object_name: str) -> None:
        self.prop = prop
        self.kind = kind
        self.object_name = object_name
        super().__init__(
            f'{prop} is unsupported for this object kind ({object_name} is a {kind})'
        )


class EvaluationError(SkyQueryError):
    """The astronomy backend reported an out-of-domain condition."""


class ConfigurationError(SkyQueryError):
    """Invalid run configuration (degenerate ephemeris step, missing kernels)."""
