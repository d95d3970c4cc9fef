"""
Launcher Data Model

Application definitions as persisted by the config store, and the ordered
collection they live in.
"""

import uuid
from dataclasses import asdict, dataclass, field, fields, replace
from typing import Any, Dict, List, Mapping

from applauncher.utils.errors import ValidationError

# camelCase spellings accepted on load
_FIELD_ALIASES = {
    'preventDuplicate': 'prevent_duplicate',
    'autoStart': 'auto_start',
}

_REQUIRED_FIELDS = ('id', 'name', 'path')

# Fields update() may replace; id is immutable
MUTABLE_FIELDS = (
    'name',
    'path',
    'arguments',
    'description',
    'enabled',
    'delay',
    'prevent_duplicate',
    'auto_start',
)


def new_app_id() -> str:
    """Generate a fresh application id."""
    return str(uuid.uuid4())


def name_tracking_key(app_id: str) -> str:
    """Key for name-tracked registry entries."""
    return f"{app_id}:name"


def split_arguments(arguments: str) -> List[str]:
    """Split an argument string on whitespace; blank strings give no tokens."""
    if not arguments or not arguments.strip():
        return []
    return arguments.split()


@dataclass(frozen=True)
class ApplicationDefinition:
    """A launchable program registered with the launcher."""

    id: str
    name: str
    path: str
    arguments: str = ""
    description: str = ""
    enabled: bool = True
    delay: int = 0
    prevent_duplicate: bool = False
    # Reserved; startup iteration only looks at `enabled`
    auto_start: bool = False

    def __post_init__(self):
        for name in ('id', 'name', 'path', 'arguments', 'description'):
            if not isinstance(getattr(self, name), str):
                raise ValidationError(
                    f"Field '{name}' must be a string",
                    details={'field': name, 'value_type': type(getattr(self, name)).__name__}
                )

        for name in ('enabled', 'prevent_duplicate', 'auto_start'):
            if not isinstance(getattr(self, name), bool):
                raise ValidationError(
                    f"Field '{name}' must be a boolean",
                    details={'field': name, 'value_type': type(getattr(self, name)).__name__}
                )

        if isinstance(self.delay, bool) or not isinstance(self.delay, int) or self.delay < 0:
            raise ValidationError(
                "Delay must be a non-negative whole number of seconds",
                details={'field': 'delay', 'value': self.delay}
            )

    @property
    def name_key(self) -> str:
        """Registry key used when the app is tracked by process name."""
        return name_tracking_key(self.id)

    def argv(self) -> List[str]:
        """Argument tokens passed to the launched process."""
        return split_arguments(self.arguments)

    def with_fields(self, **changes: Any) -> "ApplicationDefinition":
        """Return a copy with mutable fields replaced."""
        unknown = set(changes) - set(MUTABLE_FIELDS)
        if unknown:
            raise ValidationError(
                f"Cannot update fields: {', '.join(sorted(unknown))}",
                details={'fields': sorted(unknown)}
            )
        return replace(self, **changes)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def create(cls, **values: Any) -> "ApplicationDefinition":
        """Build a new definition with a freshly generated id."""
        if 'id' in values:
            raise ValidationError("Application ids are assigned on creation")
        return cls(id=new_app_id(), **values)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ApplicationDefinition":
        """
        Build a definition from a persisted record.

        Accepts camelCase aliases for the duplicate-prevention and
        auto-start flags; unknown keys are ignored.

        Raises:
            ValidationError: If required fields are missing or mistyped
        """
        if not isinstance(data, Mapping):
            raise ValidationError(
                "Application record must be an object",
                details={'value_type': type(data).__name__}
            )

        known = {f.name for f in fields(cls)}
        values: Dict[str, Any] = {}
        for key, value in data.items():
            key = _FIELD_ALIASES.get(key, key)
            if key in known:
                values[key] = value

        missing = [name for name in _REQUIRED_FIELDS if name not in values]
        if missing:
            raise ValidationError(
                f"Application record is missing: {', '.join(missing)}",
                details={'missing': missing}
            )

        return cls(**values)


@dataclass
class ApplicationConfig:
    """Ordered collection of application definitions."""

    registered_apps: List[ApplicationDefinition] = field(default_factory=list)

    def find(self, app_id: str):
        for app in self.registered_apps:
            if app.id == app_id:
                return app
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {'registered_apps': [app.to_dict() for app in self.registered_apps]}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ApplicationConfig":
        """
        Build a config from its persisted form.

        Raises:
            ValidationError: If the record or any definition is malformed
        """
        if not isinstance(data, Mapping):
            raise ValidationError(
                "Configuration must be an object",
                details={'value_type': type(data).__name__}
            )

        apps = data.get('registered_apps', [])
        if not isinstance(apps, list):
            raise ValidationError(
                "'registered_apps' must be a list",
                details={'value_type': type(apps).__name__}
            )

        return cls(registered_apps=[ApplicationDefinition.from_dict(item) for item in apps])
