"""Validation of dataclass fields declared as required."""

import dataclasses


@dataclasses.dataclass(frozen=True)
class FieldError:
    """A validation failure on one named field."""

    field: str
    error: str


class FieldErrors(ValueError):
    """A collection of field validation failures."""

    def __init__(self, errors):
        self.errors = list(errors)
        super().__init__(self.errors)

    def __str__(self):
        return "; ".join(f"{item.field}: {item.error}" for item in self.errors)

    def __iter__(self):
        return iter(self.errors)

    def __len__(self):
        return len(self.errors)

    def fields(self):
        """Map each failing field name to its error message."""
        return {item.field: item.error for item in self.errors}


def _display_name(field):
    name = field.metadata.get("json", "").split(",", 1)[0]
    if name == "-":
        name = ""
    return name or field.name


def _is_zero(value):
    if value is None:
        return True
    if isinstance(value, (str, bytes, list, tuple, dict, set, frozenset)):
        return len(value) == 0
    if isinstance(value, (bool, int, float, complex)):
        return value == 0
    return False


def check(value):
    """Validate a dataclass instance against the rules in its field metadata.

    Fields carry rules under the ``"validate"`` metadata key; the only rule
    is ``"required"``. Raises FieldErrors listing every failing field.
    """
    if not dataclasses.is_dataclass(value) or isinstance(value, type):
        raise TypeError(f"check expects a dataclass instance, got {type(value).__name__}")
    failures = []
    for field in dataclasses.fields(value):
        rules = [rule for rule in field.metadata.get("validate", "").split(",") if rule]
        name = _display_name(field)
        for rule in rules:
            if rule != "required":
                raise ValueError(f"undefined validation rule {rule!r} on field {field.name}")
            if _is_zero(getattr(value, field.name)):
                failures.append(FieldError(name, f"{name} is a required field"))
    if failures:
        raise FieldErrors(failures)


def _chain(err):
    seen = set()
    while err is not None and id(err) not in seen:
        seen.add(id(err))
        yield err
        err = err.__cause__


def get_field_errors(err):
    """Return the FieldErrors in the cause chain of ``err``, or None."""
    return next((item for item in _chain(err) if isinstance(item, FieldErrors)), None)


def is_field_errors(err):
    """Return whether the cause chain of ``err`` holds a FieldErrors."""
    return get_field_errors(err) is not None